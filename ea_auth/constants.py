"""Remote endpoints and fixed protocol values for the EA connect service."""

from typing import Dict, Final

AUTH_URL: Final[str] = "https://accounts.ea.com/connect/auth"
PERSONAS_URL: Final[str] = "https://gateway.ea.com/proxy/identity/pids/me/personas"

REMID_COOKIE: Final[str] = "remid"
SID_COOKIE: Final[str] = "sid"

# Location marker the provider adds when the cookie login was rejected
FAILED_AUTH_MARKER: Final[str] = "fid="


class BootstrapParams:
    """Query used to exchange a remid cookie for a native-SDK access token."""

    CLIENT_ID: Final[str] = "ORIGIN_JS_SDK"
    RESPONSE_TYPE: Final[str] = "token"
    REDIRECT_URI: Final[str] = "nucleus:rest"

    @classmethod
    def as_query(cls) -> Dict[str, str]:
        """Return the bootstrap query parameters as a fresh dict."""
        return {
            "client_id": cls.CLIENT_ID,
            "response_type": cls.RESPONSE_TYPE,
            "redirect_uri": cls.REDIRECT_URI,
        }


class HttpConfig:
    """HTTP transport defaults."""

    DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
    CONNECT_TIMEOUT_SECONDS: Final[int] = 10
    CONNECTION_LIMIT: Final[int] = 20
