"""Cookie header helpers for the connect/auth endpoint."""

from typing import Dict, Iterable

from ...constants import REMID_COOKIE, SID_COOKIE


def build_cookie_header(remid: str, sid: str) -> str:
    """
    Build the Cookie header for an auth request.

    Empty values are left out, so two empty values give an anonymous request.

    Examples:
        >>> build_cookie_header("r", "s")
        'remid=r; sid=s'
        >>> build_cookie_header("", "s")
        'sid=s'
        >>> build_cookie_header("", "")
        ''
    """
    pairs = [(REMID_COOKIE, remid), (SID_COOKIE, sid)]
    return "; ".join(f"{name}={value}" for name, value in pairs if value)


def parse_set_cookie(headers: Iterable[str]) -> Dict[str, str]:
    """
    Parse Set-Cookie header values into a name -> value mapping.

    Only the leading ``name=value`` pair of each header is kept; attributes
    such as Path or HttpOnly are ignored. Later headers win.

    Args:
        headers: Raw Set-Cookie header values

    Returns:
        Cookie values by name
    """
    cookies: Dict[str, str] = {}
    for header in headers:
        pair = header.split(";", 1)[0].strip()
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            continue
        cookies[name.strip()] = value.strip()
    return cookies
