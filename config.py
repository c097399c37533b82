import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

APP_VERSION = '0.1.0'

CATALOG_FILENAME = 'vault-items.json'
IMAGES_DIRNAME = 'images'
DATA_DIRNAME = 'data'

basedir = Path(os.path.abspath(os.path.dirname(__file__)))


@dataclass(frozen=True)
class VaultPaths:
    catalog_path: Path
    images_dir: Path


def is_development(environ: Optional[Mapping[str, str]] = None) -> bool:
    # Build-mode flag: anything other than "development" means installed
    environ = os.environ if environ is None else environ
    return environ.get('VAULT_ENV', '').strip().lower() == 'development'


def app_root(development: bool) -> Path:
    # Project checkout while developing, next to the executable once installed
    if development:
        return basedir
    return Path(os.path.abspath(os.path.dirname(sys.executable)))


def resolve_paths(environ: Optional[Mapping[str, str]] = None) -> VaultPaths:
    """Work out where the catalog file and the images directory live.

    Both deployment modes use ``<root>/data/vault-items.json`` and
    ``<root>/data/images``. ``VAULT_DATA_DIR`` replaces the data directory;
    ``VAULT_CATALOG_PATH`` and ``VAULT_IMAGES_DIR`` replace single paths.
    """
    environ = os.environ if environ is None else environ

    data_dir = environ.get('VAULT_DATA_DIR')
    if data_dir:
        data_dir = Path(data_dir).expanduser()
    else:
        data_dir = app_root(is_development(environ)) / DATA_DIRNAME

    catalog_path = environ.get('VAULT_CATALOG_PATH')
    images_dir = environ.get('VAULT_IMAGES_DIR')
    return VaultPaths(
        catalog_path=Path(catalog_path).expanduser() if catalog_path else data_dir / CATALOG_FILENAME,
        images_dir=Path(images_dir).expanduser() if images_dir else data_dir / IMAGES_DIRNAME,
    )


def log_level(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return environ.get('VAULT_LOG_LEVEL', 'INFO').upper()
