"""Pytest configuration and common fixtures."""

import base64
from typing import Callable, List, Optional, Sequence, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
from multidict import CIMultiDict, CIMultiDictProxy

from ea_auth.core.config import reset_settings
from ea_auth.services.ea import Account, AccountRegistry, EASessionClient


def make_remid(identity: str, prefix: str = "TUU") -> str:
    """Build a remid cookie whose decoded first segment is '<prefix>:<n>:<identity>'."""
    head = base64.b64encode(f"{prefix}:1:{identity}".encode()).decode().rstrip("=")
    return f"{head}.signature"


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from the developer's EA_* environment and cached settings."""
    for name in ("EA_ACCOUNTS_FILE", "EA_REQUEST_TIMEOUT", "EA_ENV", "EA_LOG_LEVEL", "EA_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_response() -> Callable[..., AsyncMock]:
    """Factory for aiohttp-like responses usable as 'async with session.get(...)'."""

    def _make(
        status: int,
        headers: Optional[Sequence[Tuple[str, str]]] = None,
        body: str = "",
        json_data=None,
    ) -> AsyncMock:
        response = AsyncMock()
        response.status = status
        response.headers = CIMultiDictProxy(CIMultiDict(headers or []))
        response.text = AsyncMock(return_value=body)
        response.json = AsyncMock(return_value=json_data)
        response.__aenter__ = AsyncMock(return_value=response)
        response.__aexit__ = AsyncMock(return_value=None)
        return response

    return _make


@pytest.fixture
def persist() -> AsyncMock:
    """Host persistence hook."""
    return AsyncMock()


@pytest.fixture
def accounts() -> List[Account]:
    """Two resolved accounts."""
    return [
        Account(
            name="Alpha",
            persona_id="1001",
            remid=make_remid("alpha"),
            sid="sid-alpha",
            remid_id="alpha",
        ),
        Account(
            name="Bravo",
            persona_id="1002",
            remid=make_remid("bravo"),
            sid="sid-bravo",
            remid_id="bravo",
        ),
    ]


@pytest.fixture
def client(accounts, persist) -> EASessionClient:
    """Session client with a mocked HTTP session."""
    session_client = EASessionClient(AccountRegistry(accounts), persist=persist)
    session_client._http_session = MagicMock()
    return session_client
