"""Core infrastructure module."""

from .exceptions import (
    AccountNotFoundError,
    AccountRef,
    ConfigurationError,
    DuplicateAccountError,
    EAAuthError,
    EANetworkError,
    InvalidCookieError,
    MalformedResponseError,
    NoAccountConfiguredError,
    PersistenceError,
    UnknownStatusError,
)
from .logger import setup_structured_logging

__all__ = [
    "EAAuthError",
    "AccountRef",
    "ConfigurationError",
    "DuplicateAccountError",
    "NoAccountConfiguredError",
    "PersistenceError",
    "AccountNotFoundError",
    "InvalidCookieError",
    "UnknownStatusError",
    "MalformedResponseError",
    "EANetworkError",
    "setup_structured_logging",
]
