"""DealerSite Content Module.

Websites, sales contacts, car listings, testimonials and FAQs for the
dealership microsites.
"""
from flask import Blueprint

content_bp = Blueprint('content', __name__)

from . import routes  # noqa: E402, F401
