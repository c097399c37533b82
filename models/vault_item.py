from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass
class VaultItem:
    id: int
    name: str
    artist: str
    description: str = ''

    def to_dict(self) -> Dict[str, Any]:
        # Key order is the on-disk field order
        return {
            'id': self.id,
            'name': self.name,
            'artist': self.artist,
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'VaultItem':
        """Rebuild an item from a parsed catalog entry.

        Only the known keys are read, so anything else stored in the entry
        is dropped the next time the catalog is written.
        """
        if not isinstance(data, Mapping):
            raise ValueError('catalog entry is not an object')

        item_id = data.get('id')
        # bool is an int subclass, but true/false are not ids
        if isinstance(item_id, bool) or not isinstance(item_id, int):
            raise ValueError(f'invalid id: {item_id!r}')

        description = data.get('description', '')
        if description is None:
            description = ''
        for key, value in (('name', data.get('name')), ('artist', data.get('artist')),
                           ('description', description)):
            if not isinstance(value, str):
                raise ValueError(f'item {item_id}: {key} must be a string')

        return cls(id=item_id, name=data['name'], artist=data['artist'], description=description)


@dataclass
class ItemDraft:
    # Values stay as received; patterns.chain_of_responsibility checks them
    name: Any
    artist: Any
    description: Any = ''

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'ItemDraft':
        # Anything that isn't an object fails validation on the name field
        if not isinstance(payload, Mapping):
            payload = {}
        description = payload.get('description')
        return cls(
            name=payload.get('name'),
            artist=payload.get('artist'),
            description='' if description is None else description,
        )
