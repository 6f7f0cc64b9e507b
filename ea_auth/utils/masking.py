"""Utility functions for masking sensitive data in logs and outputs."""

from typing import Any, Dict, Mapping

SENSITIVE_PARAM_KEYS = frozenset({"remid", "sid", "access_token", "token", "code"})


def mask_secret(value: str, visible: int = 4) -> str:
    """
    Mask a cookie or token value for logging purposes.

    Example: TUU6Mjo5OTk.abc -> TUU6***

    Args:
        value: Secret value to mask
        visible: Number of leading characters to keep

    Returns:
        Masked value, or '<empty>' for blank input
    """
    if not value:
        return "<empty>"
    if len(value) <= visible * 2:
        return "***"
    return f"{value[:visible]}***"


def mask_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Mask sensitive query parameters before logging a request.

    Args:
        params: Query parameters

    Returns:
        Copy of params with sensitive values replaced
    """
    return {
        key: ("***" if key.lower() in SENSITIVE_PARAM_KEYS else value)
        for key, value in params.items()
    }
