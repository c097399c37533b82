import os
import threading


class PathSingletonMeta(type):
    # Metaclass that keeps ONE instance per class and file path
    _instances = {}
    _instances_lock = threading.Lock()

    def __call__(cls, path, *args, **kwargs):
        # Symlinked paths to one file share an instance
        key = (cls, os.path.realpath(os.fspath(path)))
        # Thread-safe creation of the per-path instance
        with PathSingletonMeta._instances_lock:
            if key not in PathSingletonMeta._instances:
                PathSingletonMeta._instances[key] = super().__call__(path, *args, **kwargs)
            return PathSingletonMeta._instances[key]


def reset_instances() -> None:
    # Forget every instance (used between tests)
    with PathSingletonMeta._instances_lock:
        PathSingletonMeta._instances.clear()
