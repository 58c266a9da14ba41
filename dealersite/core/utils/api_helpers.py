"""Shared API helpers: the token decorator, payload parsing and error responses."""
import logging
from functools import wraps

from flask import g, jsonify, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from core.container import get_container
from core.errors import DealerSiteError, PayloadTooLarge

logger = logging.getLogger('dealersite.api')


# ============== Decorators ==============

def token_required(f):
    """Require a valid ``Authorization: Bearer <token>`` header.

    On success the token claims are bound to ``g.admin``. On failure the
    view is never called, so no store access happens.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            g.admin = get_container().auth.verify(request.headers.get('Authorization'))
        except DealerSiteError as e:
            return error_response(e.message, e.status_code)
        return f(*args, **kwargs)
    return decorated


# ============== Request Parsing ==============

def get_payload():
    """Return the request body as a dict (JSON or form fields)."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()


def get_upload(field='image_url'):
    """Return the uploaded file in ``field`` or None when nothing was sent."""
    file = request.files.get(field)
    if file is None or not file.filename:
        return None
    return file


# ============== Error Handling ==============

def error_response(message, status_code=400):
    return jsonify({'error': message}), status_code


def handle_error(e, context):
    """Map an exception to a JSON error response.

    DealerSiteError subclasses use their own status and message. Store
    failures and anything unexpected are logged with a traceback and
    returned as 500 with the underlying message appended. A request body
    over MAX_CONTENT_LENGTH surfaces while the form is parsed and answers
    413; other HTTP exceptions go to the app-level handlers.
    """
    if isinstance(e, RequestEntityTooLarge):
        e = PayloadTooLarge()
    elif isinstance(e, HTTPException):
        raise e

    if isinstance(e, DealerSiteError) and e.status_code < 500:
        return error_response(e.message, e.status_code)

    logger.exception(f'Error {context}')
    return error_response(f'Error server: {e}', 500)
