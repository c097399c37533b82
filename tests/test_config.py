import os
import sys
from pathlib import Path

import config
from config import VaultPaths, is_development, log_level, resolve_paths


def test_development_flag():
    assert is_development({'VAULT_ENV': 'development'})
    assert is_development({'VAULT_ENV': ' Development '})
    assert not is_development({'VAULT_ENV': 'production'})
    assert not is_development({})


def test_development_layout():
    paths = resolve_paths({'VAULT_ENV': 'development'})
    assert paths == VaultPaths(
        catalog_path=config.basedir / 'data' / 'vault-items.json',
        images_dir=config.basedir / 'data' / 'images',
    )


def test_installed_layout_sits_next_to_executable():
    root = Path(os.path.abspath(os.path.dirname(sys.executable)))
    paths = resolve_paths({})
    assert paths.catalog_path == root / 'data' / 'vault-items.json'
    assert paths.images_dir == root / 'data' / 'images'


def test_data_dir_override(tmp_path):
    paths = resolve_paths({'VAULT_ENV': 'development', 'VAULT_DATA_DIR': str(tmp_path)})
    assert paths.catalog_path == tmp_path / 'vault-items.json'
    assert paths.images_dir == tmp_path / 'images'


def test_single_path_overrides(tmp_path):
    paths = resolve_paths({
        'VAULT_DATA_DIR': str(tmp_path),
        'VAULT_CATALOG_PATH': str(tmp_path / 'elsewhere' / 'catalog.json'),
        'VAULT_IMAGES_DIR': str(tmp_path / 'art'),
    })
    assert paths.catalog_path == tmp_path / 'elsewhere' / 'catalog.json'
    assert paths.images_dir == tmp_path / 'art'


def test_log_level():
    assert log_level({}) == 'INFO'
    assert log_level({'VAULT_LOG_LEVEL': 'debug'}) == 'DEBUG'
