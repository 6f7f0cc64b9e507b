"""EA Auth - Multi-account session keeper for the EA connect/auth endpoint."""

import importlib as _importlib
from typing import TYPE_CHECKING, Any

__version__ = "1.0.0"
__license__ = "MIT"

if TYPE_CHECKING:
    from .core.logger import setup_structured_logging as setup_structured_logging
    from .repositories.account_repository import (
        AccountFileRepository as AccountFileRepository,
    )
    from .services.ea.client import EASessionClient as EASessionClient
    from .services.ea.models import Account as Account
    from .services.ea.registry import AccountRegistry as AccountRegistry

# Explicit lazy-loading map: name -> (module_path, attribute_name)
_LAZY_MODULE_MAP = {
    "setup_structured_logging": ("ea_auth.core.logger", "setup_structured_logging"),
    "AccountFileRepository": (
        "ea_auth.repositories.account_repository",
        "AccountFileRepository",
    ),
    "EASessionClient": ("ea_auth.services.ea.client", "EASessionClient"),
    "Account": ("ea_auth.services.ea.models", "Account"),
    "AccountRegistry": ("ea_auth.services.ea.registry", "AccountRegistry"),
}

__all__ = list(_LAZY_MODULE_MAP.keys())


def __getattr__(name: str) -> Any:
    """Lazy import with explicit mapping - importlib based."""
    if name in _LAZY_MODULE_MAP:
        module_path, attr_name = _LAZY_MODULE_MAP[name]
        module = _importlib.import_module(module_path)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
