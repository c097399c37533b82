from .singleton import PathSingletonMeta, reset_instances
from .chain_of_responsibility import validate_draft

__all__ = ['PathSingletonMeta', 'reset_instances', 'validate_draft']
