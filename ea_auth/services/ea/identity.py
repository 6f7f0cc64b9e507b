"""EA identity gateway - resolves the persona behind an access token."""

import asyncio
import json
from typing import Any, Callable, List, Optional

import aiohttp
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...constants import PERSONAS_URL
from ...core.exceptions import AccountRef, EANetworkError, MalformedResponseError
from .models import Persona


class _PersonaEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    persona_id: int = Field(alias="personaId")
    display_name: str = Field(alias="displayName")


class _PersonaList(BaseModel):
    persona: List[_PersonaEntry] = Field(min_length=1)


class _PersonasResponse(BaseModel):
    personas: _PersonaList


def parse_access_token(raw: str, account: Optional[AccountRef] = None) -> str:
    """
    Extract access_token from the JSON body returned by the token flow.

    Raises:
        MalformedResponseError: If raw is not JSON or has no access_token
    """
    try:
        data: Any = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(
            "Token response is not JSON", details={"body": raw[:200]}, account=account
        ) from e
    token = data.get("access_token") if isinstance(data, dict) else None
    if not token or not isinstance(token, str):
        raise MalformedResponseError("Token response has no access_token", account=account)
    return token


class EAIdentityApi:
    """Client for the personas endpoint of the EA identity gateway."""

    def __init__(
        self,
        http_session_getter: Callable[[], aiohttp.ClientSession],
        personas_url: str = PERSONAS_URL,
    ):
        """
        Initialize the identity API.

        Args:
            http_session_getter: Callable that returns the HTTP session
            personas_url: Personas endpoint
        """
        self._http_session_getter = http_session_getter
        self.personas_url = personas_url

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Get HTTP session from parent client."""
        return self._http_session_getter()

    async def get_primary_persona(
        self, access_token: str, account: Optional[AccountRef] = None
    ) -> Persona:
        """
        Fetch the caller's personas and return the first one.

        Args:
            access_token: Bearer token from the native token flow
            account: Account being resolved, attached to errors

        Returns:
            First persona of the identity

        Raises:
            MalformedResponseError: If the response is not a non-empty persona list
            EANetworkError: If the request could not be completed
        """
        headers = {
            "Authorization": f"Bearer {access_token}",
            "X-Expand-Results": "true",
        }
        try:
            async with self._session.get(self.personas_url, headers=headers) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.debug(f"Personas error details: {error_text[:200]}")
                    raise MalformedResponseError(
                        f"Personas request failed with status {response.status}",
                        details={"status": response.status},
                        account=account,
                    )
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise EANetworkError(f"Personas request failed: {e!r}", account=account) from e
        except ValueError as e:
            raise MalformedResponseError(
                "Personas response is not JSON", account=account
            ) from e

        try:
            parsed = _PersonasResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                "Unexpected personas response shape",
                details={"errors": e.errors(include_url=False, include_input=False)},
                account=account,
            ) from e

        first = parsed.personas.persona[0]
        return Persona(persona_id=str(first.persona_id), display_name=first.display_name)
