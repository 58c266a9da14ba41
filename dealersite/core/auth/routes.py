"""Admin login and admin account routes."""
import logging

from flask import jsonify

from . import auth_bp
from core.container import get_container
from core.errors import NotFound
from core.utils.api_helpers import token_required, get_payload, error_response, handle_error

logger = logging.getLogger('dealersite.auth.routes')


# ============== LOGIN ==============

@auth_bp.route('/api/admin/login', methods=['POST'])
def api_login():
    """Exchange ``{username, password}`` for ``{token}``."""
    data = get_payload()
    if not data:
        return error_response('Body permintaan kosong', 400)

    username = data.get('username')
    password = data.get('password')
    if not username or not password:
        return error_response('Username dan password diperlukan', 400)

    try:
        token = get_container().auth.authenticate(username, password)
        return jsonify({'token': token})
    except NotFound as e:
        # unknown usernames answer 401 like a wrong password
        return error_response(e.message, 401)
    except Exception as e:
        return handle_error(e, 'during login')


# ============== ADMIN MANAGEMENT ==============

@auth_bp.route('/api/admins', methods=['GET'])
@token_required
def api_list_admins():
    """List admins without password hashes."""
    try:
        return jsonify(get_container().admins.list())
    except Exception:
        logger.exception('Error fetching admins')
        return jsonify([]), 500


@auth_bp.route('/api/admins', methods=['POST'])
@token_required
def api_create_admin():
    try:
        return jsonify(get_container().admins.create(get_payload())), 201
    except Exception as e:
        return handle_error(e, 'creating admin')


@auth_bp.route('/api/admins/<int:admin_id>', methods=['PUT'])
@token_required
def api_update_admin(admin_id):
    try:
        return jsonify(get_container().admins.update(admin_id, get_payload()))
    except Exception as e:
        return handle_error(e, 'updating admin')


@auth_bp.route('/api/admins/<int:admin_id>', methods=['DELETE'])
@token_required
def api_delete_admin(admin_id):
    try:
        return jsonify(get_container().admins.delete(admin_id))
    except Exception as e:
        return handle_error(e, 'deleting admin')
