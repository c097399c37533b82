"""
Pytest fixtures for the vault test suite.

Every test gets its own catalog file and images directory under tmp_path.
"""

import errno
from pathlib import Path

import pytest

from app import app as flask_app
from models import ItemDraft
from patterns.singleton import reset_instances
from services.image_resolver import ImageResolver
from services.item_store import ItemStore


@pytest.fixture(autouse=True)
def fresh_stores():
    # Stores are cached per path; start every test from an empty registry
    reset_instances()
    yield
    reset_instances()


@pytest.fixture
def catalog_path(tmp_path):
    return tmp_path / 'data' / 'vault-items.json'


@pytest.fixture
def images_dir(tmp_path):
    path = tmp_path / 'data' / 'images'
    path.mkdir(parents=True)
    return path


@pytest.fixture
def store(catalog_path):
    return ItemStore(catalog_path)


@pytest.fixture
def resolver(images_dir):
    return ImageResolver(images_dir)


@pytest.fixture
def make_draft():
    def _make(name='Starry Night', artist='Vincent van Gogh', description=''):
        return ItemDraft(name=name, artist=artist, description=description)
    return _make


@pytest.fixture
def client(catalog_path, images_dir):
    flask_app.config.update(
        TESTING=True,
        VAULT_CATALOG_PATH=str(catalog_path),
        VAULT_IMAGES_DIR=str(images_dir),
    )
    with flask_app.test_client() as c:
        yield c


@pytest.fixture
def deny_reads(monkeypatch):
    """Make reads of the given paths fail with PermissionError.

    Works regardless of the user running the tests (chmod has no effect
    for root).
    """
    denied = set()
    real_read_bytes = Path.read_bytes
    real_read_text = Path.read_text

    def read_bytes(self):
        if self in denied:
            raise PermissionError(errno.EACCES, 'Permission denied', str(self))
        return real_read_bytes(self)

    def read_text(self, *args, **kwargs):
        if self in denied:
            raise PermissionError(errno.EACCES, 'Permission denied', str(self))
        return real_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, 'read_bytes', read_bytes)
    monkeypatch.setattr(Path, 'read_text', read_text)

    def deny(*paths):
        denied.update(Path(p) for p in paths)
    return deny
