"""Account storage repositories."""

from .account_repository import AccountFileRepository

__all__ = ["AccountFileRepository"]
