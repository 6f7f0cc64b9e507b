"""EA session client - bootstraps accounts and serializes authorization per persona."""

from typing import Mapping, Optional, Union

import aiohttp
from loguru import logger

from ...constants import BootstrapParams, HttpConfig
from ...core.exceptions import (
    EAAuthError,
    InvalidCookieError,
    NoAccountConfiguredError,
    PersistenceError,
)
from .identity import EAIdentityApi, parse_access_token
from .locks import KeyedLock
from .models import Account, PersistCallback
from .protocol import EAAuthProtocol
from .registry import AccountRegistry


class EASessionClient:
    """
    Keeps persona-bound EA sessions alive for every registered account.

    Usage:
        async with EASessionClient(registry, persist=repo.save) as client:
            await client.start()
            url = await client.authorize({"client_id": "...", "response_type": "code"})

    ``authorize`` calls for the same persona run strictly one after another;
    calls for different personas run concurrently.
    """

    def __init__(
        self,
        registry: AccountRegistry,
        persist: PersistCallback,
        timeout: int = HttpConfig.DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the session client.

        Args:
            registry: Validated account registry (owns the host's account list)
            persist: Host hook that durably stores the account list
            timeout: Total timeout per request in seconds
        """
        self.registry = registry
        self._persist_callback = persist
        self.timeout = timeout

        self._http_session: Optional[aiohttp.ClientSession] = None
        self._locks = KeyedLock()

        self._protocol = EAAuthProtocol(http_session_getter=lambda: self._session)
        self._identity = EAIdentityApi(http_session_getter=lambda: self._session)

    async def __aenter__(self) -> "EASessionClient":
        """Async context manager entry."""
        await self._init_http_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _init_http_session(self) -> None:
        """Initialize the HTTP session."""
        if self._http_session is None:
            connector = aiohttp.TCPConnector(
                limit=HttpConfig.CONNECTION_LIMIT,
                enable_cleanup_closed=True,
            )
            timeout = aiohttp.ClientTimeout(
                total=self.timeout,
                connect=HttpConfig.CONNECT_TIMEOUT_SECONDS,
            )
            # Cookies come only from account state, never from a shared jar
            self._http_session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                cookie_jar=aiohttp.DummyCookieJar(),
            )
            logger.debug("HTTP session initialized")

    async def close(self) -> None:
        """Close HTTP session."""
        if self._http_session:
            await self._http_session.close()
            self._http_session = None

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Get HTTP session, raising error if not initialized."""
        if self._http_session is None:
            raise RuntimeError("HTTP session not initialized. Use 'async with' or call start().")
        return self._http_session

    async def _persist(self, account: Account) -> None:
        """Store the account list after account changed; hook failures carry the account."""
        try:
            await self._persist_callback(self.registry.accounts)
        except EAAuthError:
            raise
        except Exception as e:
            logger.warning(f"Persisting accounts after a change to {account.ref} failed: {e!r}")
            raise PersistenceError(
                f"Persisting accounts failed: {e!r}", account=account.ref
            ) from e

    async def start(self) -> None:
        """
        Startup hook: resolve every account that has no persona yet.

        Accounts are bootstrapped one by one in list order. Any failure
        aborts startup.
        """
        await self._init_http_session()
        pending = self.registry.unresolved()
        for account in pending:
            await self.bootstrap(account)
        logger.info(
            f"EA session client ready ({len(self.registry)} accounts, "
            f"{len(pending)} newly resolved)"
        )

    async def bootstrap(self, account: Account) -> None:
        """
        Bind an unresolved account to its primary persona.

        Args:
            account: Account with a remid and no persona id

        Raises:
            MalformedResponseError: If the token or persona response is unusable
            EAAuthError: Any protocol failure of the token exchange
            PersistenceError: If storing the resolved account failed
        """
        auth = await self._protocol.core_auth(
            account.remid, "", BootstrapParams.as_query(), account=account.ref
        )
        access_token = parse_access_token(auth.result, account=account.ref)
        persona = await self._identity.get_primary_persona(access_token, account=account.ref)

        account.persona_id = persona.persona_id
        account.name = persona.display_name
        account.remid = auth.remid
        account.sid = auth.sid
        logger.info(f"Account {persona.display_name} added")
        await self._persist(account)

    async def authorize(
        self,
        params: Mapping[str, str],
        persona_id: Optional[Union[int, str]] = None,
    ) -> str:
        """
        Authorize against connect/auth with the cookies of one account.

        Args:
            params: Query parameters (client_id, response_type, ...)
            persona_id: Persona to act as; defaults to the first account

        Returns:
            Redirect target URL (302) or response body (200)

        Raises:
            NoAccountConfiguredError: If no account is configured
            AccountNotFoundError: If no account has that persona id
            InvalidCookieError: If the cookies were rejected; they are cleared first
            UnknownStatusError: If the endpoint answered with another status
            PersistenceError: If storing rotated or cleared cookies failed
        """
        default = self.registry.default
        if default is None:
            raise NoAccountConfiguredError()
        if persona_id is None or persona_id == "":
            persona_id = default.persona_id

        async with self._locks.acquire(_lock_key(persona_id)):
            account = self.registry.find(persona_id)
            try:
                auth = await self._protocol.core_auth(
                    account.remid, account.sid, params, account=account.ref
                )
            except InvalidCookieError:
                logger.warning(
                    f"Cookies of account {account.ref} were rejected, clearing them"
                )
                account.clear_cookies()
                await self._persist(account)
                raise
            except EAAuthError as e:
                logger.debug(f"Authorization failed for {account.ref}: {e.message}")
                raise

            if auth.remid != account.remid:
                account.remid = auth.remid
                account.sid = auth.sid
                await self._persist(account)
            return auth.result


def _lock_key(persona_id: Union[int, str]) -> str:
    """Normalize a persona id so "0123", "123" and 123 share one lock."""
    text = str(persona_id).strip()
    try:
        return str(int(text))
    except ValueError:
        return text
