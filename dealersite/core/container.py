"""Per-app service wiring, stored in ``app.extensions['dealersite']``."""
from dataclasses import dataclass, field
from typing import Any, Dict

from flask import current_app

EXTENSION_KEY = 'dealersite'


@dataclass
class Container:
    db: Any
    auth: Any
    admins: Any
    uploads: Any
    resources: Dict[str, Any] = field(default_factory=dict)


def get_container() -> Container:
    return current_app.extensions[EXTENSION_KEY]
