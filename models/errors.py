from typing import Optional


class VaultError(Exception):
    # Base class for every failure the vault core reports

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(VaultError):
    """The catalog file could not be read, written or parsed."""


class NotFoundError(VaultError):
    def __init__(self, item_id: int):
        super().__init__('Item not found')
        self.item_id = item_id


class ValidationError(VaultError):
    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f'{field} is required')
        self.field = field


class ImageReadError(VaultError):
    """An image candidate exists but could not be read."""

    def __init__(self, path, message: str):
        super().__init__(message)
        self.path = path
