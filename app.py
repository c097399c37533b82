import logging

from flask import Flask, current_app, jsonify, request

from config import APP_VERSION, log_level, resolve_paths
from models import ImageReadError, ItemDraft, NotFoundError, StorageError, ValidationError
from services.image_resolver import ImageResolver
from services.item_store import ItemStore

logger = logging.getLogger(__name__)


app = Flask(__name__)

paths = resolve_paths()
app.config['VAULT_CATALOG_PATH'] = str(paths.catalog_path)
app.config['VAULT_IMAGES_DIR'] = str(paths.images_dir)


def get_store() -> ItemStore:
    # Same path gives the same store instance, and so the same lock
    return ItemStore(current_app.config['VAULT_CATALOG_PATH'])


def get_resolver() -> ImageResolver:
    return ImageResolver(current_app.config['VAULT_IMAGES_DIR'])


def _failure(message, status, **extra):
    body = {'success': False, 'error': message}
    body.update(extra)
    return jsonify(body), status


def _image_for(item):
    # Look up artwork right after a store operation returns an item
    try:
        return get_resolver().resolve(item.name, item.artist).to_dict()
    except ImageReadError as e:
        return {'found': False, 'data_uri': None, 'error': e.message}


@app.route('/api/version')
def version():
    return jsonify({'success': True, 'version': APP_VERSION})


@app.route('/api/items', methods=['GET'])
def list_items():
    try:
        items = get_store().list()
    except StorageError as e:
        return _failure(e.message, 500, items=[])

    payload = [it.to_dict() for it in items]
    with_images = request.args.get('with_images', '0') in ('1', 'true', 'True')
    if with_images:
        results = get_resolver().resolve_many((it.name, it.artist) for it in items)
        for entry, result in zip(payload, results):
            entry['image'] = result.to_dict()
    return jsonify({'success': True, 'items': payload})


@app.route('/api/items', methods=['POST'])
def create_item():
    draft = ItemDraft.from_dict(request.get_json(silent=True))
    try:
        item = get_store().create(draft)
    except ValidationError as e:
        return _failure(e.message, 400, field=e.field)
    except StorageError as e:
        return _failure(e.message, 500)
    return jsonify({'success': True, 'item': item.to_dict(), 'image': _image_for(item)}), 201


@app.route('/api/items/<int(signed=True):item_id>', methods=['PUT'])
def update_item(item_id):
    draft = ItemDraft.from_dict(request.get_json(silent=True))
    try:
        item = get_store().update(item_id, draft)
    except ValidationError as e:
        return _failure(e.message, 400, field=e.field)
    except NotFoundError as e:
        return _failure(e.message, 404)
    except StorageError as e:
        return _failure(e.message, 500)
    return jsonify({'success': True, 'item': item.to_dict(), 'image': _image_for(item)})


@app.route('/api/images')
def resolve_image():
    name = request.args.get('name')
    artist = request.args.get('artist')
    if name is None or artist is None:
        return _failure('name and artist are required', 400, found=False)
    try:
        result = get_resolver().resolve(name, artist)
    except ImageReadError as e:
        return _failure(e.message, 500, found=False)
    body = {'success': True}
    body.update(result.to_dict())
    return jsonify(body)


if __name__ == '__main__':
    logging.basicConfig(
        level=log_level(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    logger.info('Catalog: %s', app.config['VAULT_CATALOG_PATH'])
    logger.info('Images: %s', app.config['VAULT_IMAGES_DIR'])
    app.run(debug=True)
