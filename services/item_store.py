import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import List

from models.errors import NotFoundError, StorageError
from models.vault_item import ItemDraft, VaultItem
from patterns.chain_of_responsibility import validate_draft
from patterns.singleton import PathSingletonMeta
from utils.file_io import exclusive_lock, write_text_atomic

logger = logging.getLogger(__name__)


class ItemStore(metaclass=PathSingletonMeta):
    """
    The vault catalog, kept as one JSON document: ``{"items": [...]}``.

    One instance exists per catalog path, so every caller in the process
    goes through the same lock. Each operation reads the whole document,
    changes the item list and writes the whole document back, while holding
    both the in-process lock and an exclusive lock on ``<catalog>.lock``.

    Unknown keys inside stored items are accepted when reading and dropped
    on the next write.
    """

    def __init__(self, catalog_path):
        self.catalog_path = Path(catalog_path)
        self.lock_path = self.catalog_path.with_name(self.catalog_path.name + '.lock')
        self._lock = threading.RLock()

    def list(self) -> List[VaultItem]:
        # Full ordered sequence, creating an empty catalog on first access
        with self._locked():
            return self._load()

    def create(self, draft: ItemDraft) -> VaultItem:
        validate_draft(draft)
        with self._locked():
            items = self._load()
            # max + 1 over what is on disk, never a reused slot
            new_id = max((it.id for it in items), default=0) + 1
            item = VaultItem(id=new_id, name=draft.name, artist=draft.artist,
                             description=draft.description)
            items.append(item)
            self._save(items)
        logger.info('Created item %s (%s - %s)', item.id, item.name, item.artist)
        return item

    def update(self, item_id: int, draft: ItemDraft) -> VaultItem:
        validate_draft(draft)
        with self._locked():
            items = self._load()
            for index, existing in enumerate(items):
                if existing.id == item_id:
                    break
            else:
                logger.info('Update rejected, no item with id %s', item_id)
                raise NotFoundError(item_id)

            # Replace every field but the id
            item = VaultItem(id=item_id, name=draft.name, artist=draft.artist,
                             description=draft.description)
            items[index] = item
            self._save(items)
        logger.info('Updated item %s', item_id)
        return item

    @contextmanager
    def _locked(self):
        # Directory has to exist before the lock file can be opened
        try:
            self.catalog_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error('Cannot create catalog directory %s: %s', self.catalog_path.parent, e)
            raise StorageError(f'Cannot create catalog directory: {e}') from e

        # _load and _save turn their own OSErrors into StorageError,
        # so one escaping here comes from the lock file itself
        with self._lock:
            try:
                with exclusive_lock(self.lock_path):
                    yield
            except OSError as e:
                logger.error('Cannot lock catalog %s: %s', self.lock_path, e)
                raise StorageError(f'Cannot lock catalog: {e}') from e

    def _load(self) -> List[VaultItem]:
        try:
            content = self.catalog_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            logger.info('No catalog at %s, creating an empty one', self.catalog_path)
            self._save([])
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error('Cannot read catalog %s: %s', self.catalog_path, e)
            raise StorageError(f'Cannot read catalog: {e}') from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error('Catalog %s is not valid JSON: %s', self.catalog_path, e)
            raise StorageError(f'Catalog is not valid JSON: {e}') from e

        if not isinstance(data, dict) or not isinstance(data.get('items'), list):
            raise StorageError('Catalog document must be an object with an "items" list')

        items = []
        seen = set()
        for entry in data['items']:
            try:
                item = VaultItem.from_dict(entry)
            except ValueError as e:
                raise StorageError(f'Malformed catalog entry: {e}') from e
            if item.id in seen:
                raise StorageError(f'Duplicate item id {item.id} in catalog')
            seen.add(item.id)
            items.append(item)
        return items

    def _save(self, items: List[VaultItem]) -> None:
        document = {'items': [it.to_dict() for it in items]}
        text = json.dumps(document, indent=2, ensure_ascii=False) + '\n'
        try:
            write_text_atomic(self.catalog_path, text)
        except (OSError, UnicodeError) as e:
            logger.error('Cannot write catalog %s: %s', self.catalog_path, e)
            raise StorageError(f'Cannot write catalog: {e}') from e
