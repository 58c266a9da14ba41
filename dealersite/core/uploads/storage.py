"""Local disk sink for single-image uploads."""
import os
import time
import secrets
import logging

from werkzeug.utils import secure_filename

from core.errors import UnsupportedMedia, PayloadTooLarge

logger = logging.getLogger('dealersite.uploads')

MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5 MB
PUBLIC_PREFIX = '/uploads'


class UploadStorage:
    """Writes validated images under ``upload_dir`` and returns public paths.

    Paths are ``/uploads/<millis>-<random>-<original name>``; the HTTP layer
    serves them from ``/api/uploads/<name>``.
    """

    def __init__(self, upload_dir, max_size=MAX_IMAGE_SIZE):
        self.upload_dir = upload_dir
        self.max_size = max_size

    def ensure_dir(self):
        os.makedirs(self.upload_dir, exist_ok=True)

    def validate(self, file):
        """Reject non-image content types and oversized payloads."""
        mimetype = (file.mimetype or '').lower()
        if not mimetype.startswith('image/'):
            raise UnsupportedMedia()

        # Pre-check content length before writing anything to disk
        file.stream.seek(0, os.SEEK_END)
        size = file.stream.tell()
        file.stream.seek(0)
        if size > self.max_size:
            raise PayloadTooLarge()
        return size

    def generate_name(self, original):
        base = secure_filename(original or '') or 'image'
        return f'{int(time.time() * 1000)}-{secrets.token_hex(4)}-{base}'

    def save(self, file):
        """Validate and persist ``file``; return its public path."""
        size = self.validate(file)
        self.ensure_dir()
        name = self.generate_name(file.filename)
        file.save(os.path.join(self.upload_dir, name))
        logger.info(f'Stored upload {name} ({size} bytes)')
        return f'{PUBLIC_PREFIX}/{name}'
