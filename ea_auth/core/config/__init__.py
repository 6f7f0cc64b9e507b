"""Configuration management module."""

from .config_models import AccountConfig, AccountsConfig
from .settings import EASettings, get_settings, reset_settings

__all__ = [
    "AccountConfig",
    "AccountsConfig",
    "EASettings",
    "get_settings",
    "reset_settings",
]
