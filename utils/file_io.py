"""
Durable file helpers for the catalog document.

- write_text_atomic: temp file in the same directory, fsync, then os.replace
- exclusive_lock: advisory lock on a sidecar file (fcntl.flock on POSIX,
  msvcrt.locking on Windows) held for a whole read-modify-write cycle
"""

import logging
import os
import platform
import tempfile
from contextlib import contextmanager
from pathlib import Path

if platform.system() == 'Windows':
    import msvcrt
else:
    import fcntl

logger = logging.getLogger(__name__)


def write_text_atomic(path, text: str) -> None:
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=path.parent)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except Exception:
        # Don't leave half-written temp files next to the catalog
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


@contextmanager
def exclusive_lock(lock_path):
    """Hold an exclusive lock on ``lock_path`` for the duration of the block.

    Blocks until the lock is available. The lock file is created if needed
    and left in place afterwards.
    """
    handle = open(lock_path, 'a+', encoding='utf-8')
    try:
        _acquire(handle)
        logger.debug('Acquired lock on %s', lock_path)
        try:
            yield
        finally:
            _release(handle)
    finally:
        handle.close()


def _acquire(handle) -> None:
    if platform.system() == 'Windows':
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_LOCK, 1)
    else:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)


def _release(handle) -> None:
    if platform.system() == 'Windows':
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
