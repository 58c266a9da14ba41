"""Error taxonomy shared by services, repositories and routes.

Each error carries the HTTP status it maps to and the message shown to the
client. Messages stay in Indonesian; the microsite frontends match on them.
"""


class DealerSiteError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code = 500
    default_message = 'Error server'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DealerSiteError):
    """Missing or malformed required input."""
    status_code = 400
    default_message = 'Data tidak valid'


class AuthMissing(DealerSiteError):
    """No bearer credential on an admin-only request."""
    status_code = 401
    default_message = 'Token diperlukan'


class AuthInvalid(DealerSiteError):
    """Bad signature, malformed or expired token."""
    status_code = 403
    default_message = 'Token tidak valid'


class InvalidCredential(DealerSiteError):
    """Password does not match the stored hash."""
    status_code = 401
    default_message = 'Password salah'


class NotFound(DealerSiteError):
    status_code = 404
    default_message = 'Data tidak ditemukan'


class UnsupportedMedia(DealerSiteError):
    status_code = 400
    default_message = 'Hanya file gambar yang diizinkan!'


class PayloadTooLarge(DealerSiteError):
    status_code = 413
    default_message = 'Ukuran file melebihi batas 5MB'


class StoreError(DealerSiteError):
    """Any failure raised by the backing PostgreSQL store."""
    status_code = 500
