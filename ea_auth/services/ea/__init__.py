"""EA session package - account registry, connect/auth protocol and session client."""

from .client import EASessionClient
from .cookies import build_cookie_header, parse_set_cookie
from .identity import EAIdentityApi, parse_access_token
from .locks import KeyedLock
from .models import Account, AuthParams, AuthResult, PersistCallback, Persona
from .protocol import EAAuthProtocol
from .registry import AccountRegistry, decode_identity_key

__all__ = [
    "EASessionClient",
    "EAAuthProtocol",
    "EAIdentityApi",
    "AccountRegistry",
    "KeyedLock",
    "Account",
    "AuthParams",
    "AuthResult",
    "Persona",
    "PersistCallback",
    "build_cookie_header",
    "parse_set_cookie",
    "parse_access_token",
    "decode_identity_key",
]
