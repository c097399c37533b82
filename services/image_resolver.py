import base64
import errno
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models.errors import ImageReadError

logger = logging.getLogger(__name__)

# Probed in this order, first hit wins
IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.webp', '.svg')

MIME_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.webp': 'image/webp',
    '.svg': 'image/svg+xml',
}

_UNSAFE_STEM_RE = re.compile(r'[^A-Za-z0-9-]')


def _replacement(match) -> str:
    # One "_" per UTF-16 code unit, so astral characters such as emoji give "__"
    return '__' if ord(match.group()) > 0xFFFF else '_'


def image_stem(name: str, artist: str) -> str:
    """Filename base for an item's artwork: ``name-artist`` with every
    character outside ``[A-Za-z0-9-]`` replaced by ``_``.

    Characters outside the Basic Multilingual Plane are replaced by ``__``,
    which keeps the names of artwork files already on disk.

    Different pairs can map to the same stem ("A B" and "A_B" both give
    ``A_B``); they then share one image.
    """
    return _UNSAFE_STEM_RE.sub(_replacement, f'{name}-{artist}')


@dataclass
class ImageResult:
    found: bool
    data_uri: Optional[str] = None
    filename: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def missing(cls, error: Optional[str] = None) -> 'ImageResult':
        return cls(found=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.found:
            return {'found': True, 'data_uri': self.data_uri, 'filename': self.filename}
        out = {'found': False, 'data_uri': None}
        if self.error:
            out['error'] = self.error
        return out


class ImageResolver:
    """
    Finds the artwork for an item by naming convention.

    A candidate that does not exist (or a missing images directory) is just
    a miss. A candidate that exists but cannot be read raises
    ImageReadError instead of being skipped, so permission problems show up.
    """

    def __init__(self, images_dir, max_workers: int = 8):
        self.images_dir = Path(images_dir)
        self.max_workers = max_workers

    def resolve(self, name: str, artist: str) -> ImageResult:
        stem = image_stem(name, artist)
        for ext in IMAGE_EXTENSIONS:
            filename = stem + ext
            path = self.images_dir / filename
            try:
                payload = path.read_bytes()
            except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
                # Continue to next extension
                continue
            except OSError as e:
                if e.errno == errno.ENAMETOOLONG:
                    # No file can have this name
                    continue
                logger.error('Cannot read image %s: %s', path, e)
                raise ImageReadError(path, f'Cannot read image {filename}: {e}') from e

            encoded = base64.b64encode(payload).decode('ascii')
            logger.debug('Resolved image %s for %r / %r', filename, name, artist)
            return ImageResult(
                found=True,
                data_uri=f'data:{MIME_TYPES[ext]};base64,{encoded}',
                filename=filename,
            )

        return ImageResult.missing()

    def resolve_many(self, pairs: Iterable[Tuple[str, str]]) -> List[ImageResult]:
        # Read-only probing, safe to fan out; results keep the input order
        pairs = list(pairs)
        if not pairs:
            return []
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(pairs))) as pool:
            return list(pool.map(lambda pair: self._resolve_quietly(*pair), pairs))

    def _resolve_quietly(self, name: str, artist: str) -> ImageResult:
        # Read errors go into this pair's result instead of being raised
        try:
            return self.resolve(name, artist)
        except ImageReadError as e:
            return ImageResult.missing(error=e.message)
