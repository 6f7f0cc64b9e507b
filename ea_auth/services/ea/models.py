"""EA session models - dataclass and TypedDict definitions."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, TypedDict

from ...core.config.config_models import AccountConfig
from ...core.exceptions import AccountRef


class AuthParams(TypedDict, total=False):
    """Known query parameters of the connect/auth endpoint."""

    client_id: str
    response_type: str
    redirect_uri: str
    persona_namespace: str
    persona_display_name: str
    release_type: str


@dataclass
class Account:
    """One managed EA credential set, mutated in place by the session client."""

    remid: str = ""
    sid: str = ""
    name: str = ""
    persona_id: str = ""
    remid_id: str = ""

    @property
    def is_resolved(self) -> bool:
        """Whether the account is bound to a persona."""
        return bool(self.persona_id)

    @property
    def ref(self) -> AccountRef:
        """Identity payload attached to errors raised for this account."""
        return AccountRef(name=self.name, persona_id=self.persona_id)

    def clear_profile(self) -> None:
        """Forget everything resolved from the previous remid."""
        self.name = ""
        self.persona_id = ""
        self.sid = ""

    def clear_cookies(self) -> None:
        """Drop both session cookies, keeping the persona binding."""
        self.remid = ""
        self.sid = ""

    @classmethod
    def from_config(cls, config: AccountConfig) -> "Account":
        """Create Account from a validated config entry."""
        return cls(
            remid=config.remid,
            sid=config.sid,
            name=config.name,
            persona_id=config.persona_id,
            remid_id=config.remid_id,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        """Create Account from the configuration shape {name, personaId, remid, sid, remidid}."""
        return cls.from_config(AccountConfig.model_validate(data))

    def to_dict(self) -> Dict[str, str]:
        """Convert to the configuration shape, omitting empty fields."""
        data = {
            "name": self.name,
            "personaId": self.persona_id,
            "remid": self.remid,
            "sid": self.sid,
            "remidid": self.remid_id,
        }
        return {key: value for key, value in data.items() if value}


@dataclass
class AuthResult:
    """Outcome of one connect/auth round trip, with the cookies to keep."""

    remid: str
    sid: str
    result: str


@dataclass(frozen=True)
class Persona:
    """First persona of an EA identity."""

    persona_id: str
    display_name: str


# Host hook: durably store the account list without reconfiguring anything
PersistCallback = Callable[[List[Account]], Awaitable[None]]
