from .vault_item import VaultItem, ItemDraft
from .errors import VaultError, StorageError, NotFoundError, ValidationError, ImageReadError

__all__ = [
    'VaultItem', 'ItemDraft',
    'VaultError', 'StorageError', 'NotFoundError', 'ValidationError', 'ImageReadError'
]
