"""Custom exception classes for EA Auth."""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AccountRef:
    """Identity of the account an error belongs to."""

    name: str = ""
    persona_id: str = ""

    def __str__(self) -> str:
        return f"{self.name or '<unresolved>'} ({self.persona_id or '-'})"


class EAAuthError(Exception):
    """Base exception for EA Auth."""

    def __init__(
        self,
        message: str,
        recoverable: bool = True,
        details: Optional[Dict[str, Any]] = None,
        account: Optional[AccountRef] = None,
    ):
        """
        Initialize EA Auth error.

        Args:
            message: Error message
            recoverable: Whether the caller may succeed by retrying
            details: Additional error details
            account: Account the failing operation was performed for
        """
        self.message = message
        self.recoverable = recoverable
        self.details = details or {}
        self.account = account
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.account is not None:
            return f"{self.message} [account: {self.account}]"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
            "account": asdict(self.account) if self.account is not None else None,
            "timestamp": self.timestamp,
        }


# Configuration Errors
class ConfigurationError(EAAuthError):
    """Configuration error occurred."""

    def __init__(
        self,
        message: str = "Configuration error",
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


class DuplicateAccountError(ConfigurationError):
    """Two configured accounts decode to the same remid identity."""

    def __init__(self, remid_id: str):
        self.remid_id = remid_id
        super().__init__(f"Duplicate account {remid_id}", details={"remid_id": remid_id})


# Account lookup errors
class NoAccountConfiguredError(EAAuthError):
    """No account is configured at all."""

    def __init__(self, message: str = "No account"):
        super().__init__(message, recoverable=False)


class AccountNotFoundError(EAAuthError):
    """No configured account matches the requested persona id."""

    def __init__(self, persona_id: Any):
        self.persona_id = "" if persona_id is None else str(persona_id)
        super().__init__(
            "Account not found",
            recoverable=False,
            details={"persona_id": self.persona_id},
        )


# Remote protocol errors
class InvalidCookieError(EAAuthError):
    """The remote rejected the session cookies; the account needs a fresh remid."""

    def __init__(self, message: str = "Invalid Cookie", account: Optional[AccountRef] = None):
        super().__init__(message, recoverable=False, account=account)


class UnknownStatusError(EAAuthError):
    """The auth endpoint answered with a status other than 200 or 302."""

    def __init__(self, status: int, account: Optional[AccountRef] = None):
        self.status = status
        super().__init__(
            f"Unknown Status {status}",
            recoverable=True,
            details={"status": status},
            account=account,
        )


class MalformedResponseError(EAAuthError):
    """A token or persona response did not have the expected shape."""

    def __init__(
        self,
        message: str = "Malformed response",
        details: Optional[Dict[str, Any]] = None,
        account: Optional[AccountRef] = None,
    ):
        super().__init__(message, recoverable=False, details=details, account=account)


class PersistenceError(EAAuthError):
    """The host hook failed to store the account list after a credential change."""

    def __init__(
        self,
        message: str = "Persisting accounts failed",
        account: Optional[AccountRef] = None,
    ):
        super().__init__(message, recoverable=True, account=account)


class EANetworkError(EAAuthError):
    """Transport-level failure while talking to an EA endpoint."""

    def __init__(
        self, message: str = "Network error occurred", account: Optional[AccountRef] = None
    ):
        super().__init__(message, recoverable=True, account=account)
