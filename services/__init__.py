from .item_store import ItemStore
from .image_resolver import ImageResolver, ImageResult, image_stem

__all__ = ['ItemStore', 'ImageResolver', 'ImageResult', 'image_stem']
