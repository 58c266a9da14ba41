"""Content API routes: a public read surface and an admin write surface per resource kind.

    GET    /api/<kind>            public, equality filters from the query string
    GET    /api/<kind>/<id>       public
    POST   /api/<kind>            bearer token, JSON or multipart (image in ``image_url``)
    PUT    /api/<kind>/<id>       bearer token, same body as POST
    DELETE /api/<kind>/<id>       bearer token
"""
import logging

from flask import jsonify, request

from . import content_bp
from .resources import RESOURCE_KINDS
from core.container import get_container
from core.utils.api_helpers import token_required, get_payload, get_upload, handle_error

logger = logging.getLogger('dealersite.content.routes')


def _service(kind):
    return get_container().resources[kind.name]


def _payload(kind):
    """Request body, with repeated multipart list fields collected into lists.

    A single form value that looks like a JSON array is left for the
    service to decode.
    """
    data = get_payload()
    if not request.is_json:
        for column in kind.list_fields:
            values = request.form.getlist(column)
            if len(values) > 1 or (values and not values[0].lstrip().startswith('[')):
                data[column] = values
    return data


def _register(kind):
    base = f'/api/{kind.name}'

    def list_records():
        # Reads degrade to an empty list when the store fails
        try:
            return jsonify(_service(kind).list(request.args))
        except Exception:
            logger.exception(f'Error fetching {kind.name}')
            return jsonify([]), 500

    def get_record(record_id):
        try:
            return jsonify(_service(kind).get(record_id))
        except Exception as e:
            return handle_error(e, f'fetching {kind.name} {record_id}')

    @token_required
    def create_record():
        try:
            row = _service(kind).create(_payload(kind), image=get_upload())
            return jsonify(row), 201
        except Exception as e:
            return handle_error(e, f'creating {kind.name}')

    @token_required
    def update_record(record_id):
        try:
            return jsonify(_service(kind).update(record_id, _payload(kind), image=get_upload()))
        except Exception as e:
            return handle_error(e, f'updating {kind.name} {record_id}')

    @token_required
    def delete_record(record_id):
        try:
            return jsonify(_service(kind).delete(record_id))
        except Exception as e:
            return handle_error(e, f'deleting {kind.name} {record_id}')

    content_bp.add_url_rule(base, f'{kind.name}_list', list_records, methods=['GET'])
    content_bp.add_url_rule(base, f'{kind.name}_create', create_record, methods=['POST'])
    content_bp.add_url_rule(f'{base}/<int:record_id>', f'{kind.name}_get', get_record, methods=['GET'])
    content_bp.add_url_rule(f'{base}/<int:record_id>', f'{kind.name}_update', update_record, methods=['PUT'])
    content_bp.add_url_rule(f'{base}/<int:record_id>', f'{kind.name}_delete', delete_record, methods=['DELETE'])


for _kind in RESOURCE_KINDS:
    _register(_kind)
