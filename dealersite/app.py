import sys
import os
import atexit
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask, jsonify, send_from_directory
from flask_compress import Compress

from config import load_config
from core.utils.logging_config import setup_logging, get_logger
from core.container import Container, EXTENSION_KEY
from core.errors import PayloadTooLarge
from core.uploads import UploadStorage, MAX_IMAGE_SIZE
from core.auth.repositories import AdminRepository
from core.auth.services import AuthService, AdminService
from content.resources import RESOURCE_KINDS
from content.repositories import ResourceRepository
from content.services import ResourceService
from database import Database, init_db

app_logger = get_logger('dealersite.app')

# Multipart overhead on top of the single image the API accepts
MAX_REQUEST_SIZE = MAX_IMAGE_SIZE + 1024 * 1024


def build_container(config, db):
    """Wire repositories and services around an open ``Database``."""
    admin_repo = AdminRepository(db)
    uploads = UploadStorage(config.upload_dir)
    uploads.ensure_dir()
    return Container(
        db=db,
        auth=AuthService(admin_repo, config.secret_key),
        admins=AdminService(admin_repo),
        uploads=uploads,
        resources={
            kind.name: ResourceService(ResourceRepository(db, kind), uploads)
            for kind in RESOURCE_KINDS
        },
    )


def create_app(config=None, db=None, container=None):
    """Application factory.

    Opens the connection pool (unless a ready ``container`` is supplied) and
    registers its shutdown. Run under gunicorn with ``'app:create_app()'``.
    """
    config = config or load_config()
    setup_logging(level=config.log_level)

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = MAX_REQUEST_SIZE

    # Flask-Compress for gzip/brotli compression of JSON listings
    compress = Compress()
    compress.init_app(app)

    if container is None:
        db = db or Database.from_config(config)
        db.open()
        atexit.register(db.close)
        if config.init_db:
            init_db(db)
        container = build_container(config, db)
    app.extensions[EXTENSION_KEY] = container

    # ============== Blueprint Registrations ==============

    from core.auth import auth_bp
    app.register_blueprint(auth_bp)

    from content import content_bp
    app.register_blueprint(content_bp)

    # ============== Uploaded Images ==============

    @app.route('/api/uploads/<path:filename>')
    def uploaded_file(filename):
        return send_from_directory(container.uploads.upload_dir, filename)

    # ============== Global Error Handlers ==============

    @app.errorhandler(404)
    def handle_404(e):
        return jsonify({'error': 'Tidak ditemukan'}), 404

    @app.errorhandler(405)
    def handle_405(e):
        return jsonify({'error': 'Metode tidak diizinkan'}), 405

    @app.errorhandler(413)
    def handle_413(e):
        return jsonify({'error': PayloadTooLarge.default_message}), 413

    @app.errorhandler(500)
    def handle_500(e):
        app_logger.exception('Unhandled 500 error')
        return jsonify({'error': 'Error server'}), 500

    # ============== After-Request Hook ==============

    @app.after_request
    def add_cors_headers(response):
        """Allow the configured microsite admin frontend to call the API."""
        response.headers['Access-Control-Allow-Origin'] = config.frontend_url
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
        response.headers['Access-Control-Expose-Headers'] = 'Content-Disposition'
        response.headers.add('Vary', 'Origin')
        return response

    # ============== Health Check ==============

    @app.route('/health')
    def health_check():
        """Lightweight probe: only checks DB connectivity."""
        db_ok = container.db.ping()
        return jsonify({
            'status': 'healthy' if db_ok else 'unhealthy',
            'checks': {'database': db_ok},
            'service': 'dealersite',
        }), 200 if db_ok else 503

    app_logger.info(f'DealerSite startup complete: {len(app.url_map._rules)} routes registered')
    return app


if __name__ == '__main__':
    config = load_config()
    app = create_app(config)
    app_logger.info(f'Server berjalan di port {config.port}')
    app.run(debug=config.debug, host='0.0.0.0', port=config.port)
