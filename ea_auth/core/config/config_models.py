"""Pydantic configuration models for the account list.

Only ``remid`` is supplied by an operator. Every other field is written back
by the session client and is exposed as read-only in the JSON schema.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

_READ_ONLY: Dict[str, Any] = {"readOnly": True}
_SECRET: Dict[str, Any] = {"writeOnly": True, "format": "password"}


class AccountConfig(BaseModel):
    """One configured EA account."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(
        default="",
        description="Display name (resolved automatically)",
        json_schema_extra=_READ_ONLY,
    )
    persona_id: str = Field(
        default="",
        alias="personaId",
        description="Persona id (resolved automatically)",
        json_schema_extra=_READ_ONLY,
    )
    remid: str = Field(
        default="",
        description="remid cookie from a remembered login",
        json_schema_extra=_SECRET,
    )
    sid: str = Field(
        default="",
        description="sid cookie (managed automatically)",
        json_schema_extra={**_READ_ONLY, **_SECRET},
    )
    remid_id: str = Field(
        default="",
        alias="remidid",
        description="Identity decoded from remid (derived)",
        json_schema_extra=_READ_ONLY,
    )

    @field_validator("persona_id", mode="before")
    @classmethod
    def coerce_persona_id(cls, v: Any) -> Any:
        """Accept numeric persona ids written by hand or by older tools."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if v is None:
            return ""
        return v

    @field_validator("name", "remid", "sid", "remid_id", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """YAML writes missing values as null."""
        return "" if v is None else v

    @field_validator("remid")
    @classmethod
    def strip_remid(cls, v: str) -> str:
        """Drop whitespace pasted around the cookie value."""
        return v.strip()


class AccountsConfig(BaseModel):
    """Ordered account list; the first entry is the default account."""

    accounts: List[AccountConfig] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountsConfig":
        """Create from a parsed YAML mapping."""
        return cls.model_validate(data or {})
