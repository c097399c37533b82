from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from models.errors import ValidationError


def _normalize(value: Any) -> str:
    # Trim surrounding whitespace for the emptiness check
    return value.strip() if isinstance(value, str) else ''


class DraftHandler(ABC):
    # Base class for checking one field of an item draft

    def __init__(self, field: str, next_handler: Optional["DraftHandler"] = None) -> None:
        self.field = field
        # Points to the next checker in the chain
        self._next = next_handler

    def set_next(self, next_handler: "DraftHandler") -> "DraftHandler":
        # Set who comes next in the chain
        self._next = next_handler
        return next_handler

    def handle(self, draft) -> None:
        # First check this field, then hand over to the next handler
        self._check(getattr(draft, self.field, None))
        if self._next:
            self._next.handle(draft)

    @abstractmethod
    def _check(self, value: Any) -> None:
        # Each child class raises ValidationError when the value is rejected
        ...


def _check_storable(field: str, value: str) -> None:
    # Lone surrogates are valid in JSON strings but cannot be written as UTF-8
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        raise ValidationError(field, f'{field} contains characters that cannot be stored') from None


class RequiredTextHandler(DraftHandler):
    def _check(self, value: Any) -> None:
        if value is not None and not isinstance(value, str):
            raise ValidationError(self.field, f'{self.field} must be a string')
        if not _normalize(value):
            raise ValidationError(self.field, f'{self.field} is required')
        _check_storable(self.field, value)


class OptionalTextHandler(DraftHandler):
    def _check(self, value: Any) -> None:
        if value is None:
            return
        if not isinstance(value, str):
            raise ValidationError(self.field, f'{self.field} must be a string')
        _check_storable(self.field, value)


def build_draft_chain() -> DraftHandler:
    # Build the chain: name → artist → description
    first = RequiredTextHandler('name')
    second = first.set_next(RequiredTextHandler('artist'))
    second.set_next(OptionalTextHandler('description'))
    return first


def validate_draft(draft) -> None:
    # Run the full chain of field checks, raising on the first failure
    build_draft_chain().handle(draft)
