"""EA connect/auth protocol - one cookie-authenticated authorization round trip."""

import asyncio
from typing import Callable, Mapping, Optional

import aiohttp
from loguru import logger

from ...constants import AUTH_URL, FAILED_AUTH_MARKER, REMID_COOKIE, SID_COOKIE
from ...core.exceptions import AccountRef, EANetworkError, InvalidCookieError, UnknownStatusError
from ...utils.masking import mask_params, mask_secret
from .cookies import build_cookie_header, parse_set_cookie
from .models import AuthResult


class EAAuthProtocol:
    """Performs GET connect/auth with the account cookies and interprets the reply."""

    def __init__(
        self,
        http_session_getter: Callable[[], aiohttp.ClientSession],
        auth_url: str = AUTH_URL,
    ):
        """
        Initialize the protocol handler.

        Args:
            http_session_getter: Callable that returns the HTTP session
            auth_url: Authorization endpoint
        """
        self._http_session_getter = http_session_getter
        self.auth_url = auth_url

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Get HTTP session from parent client."""
        return self._http_session_getter()

    async def core_auth(
        self,
        remid: str,
        sid: str,
        params: Mapping[str, str],
        account: Optional[AccountRef] = None,
    ) -> AuthResult:
        """
        Run one authorization request.

        Redirects are not followed and no status raises inside the
        transport; the status is inspected here.

        Args:
            remid: Current remid cookie (may be empty)
            sid: Current sid cookie (may be empty)
            params: Query parameters for connect/auth
            account: Account the request is made for, attached to errors

        Returns:
            AuthResult with the redirect target (302) or body (200), and the
            cookies to keep, rotated where the response set new ones

        Raises:
            InvalidCookieError: If the redirect marks a failed cookie login
            UnknownStatusError: For any status other than 200 or 302
            EANetworkError: If the request could not be completed
        """
        headers = {"Cookie": build_cookie_header(remid, sid)}
        logger.debug(
            f"GET {self.auth_url} params={mask_params(params)} "
            f"remid={mask_secret(remid)} sid={mask_secret(sid)}"
        )

        try:
            async with self._session.get(
                self.auth_url,
                params=dict(params),
                headers=headers,
                allow_redirects=False,
            ) as response:
                status = response.status
                cookies = parse_set_cookie(response.headers.getall("Set-Cookie", []))
                location = response.headers.get("Location", "")
                body = await response.text() if status == 200 else ""
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise EANetworkError(f"Auth request failed: {e!r}", account=account) from e

        new_remid = cookies.get(REMID_COOKIE, remid)
        new_sid = cookies.get(SID_COOKIE, sid)
        if new_remid != remid:
            logger.debug(f"remid rotated to {mask_secret(new_remid)}")

        if status == 302:
            if FAILED_AUTH_MARKER in location:
                raise InvalidCookieError(account=account)
            return AuthResult(remid=new_remid, sid=new_sid, result=location)
        if status == 200:
            return AuthResult(remid=new_remid, sid=new_sid, result=body)

        logger.debug(f"connect/auth answered with unexpected status {status}")
        raise UnknownStatusError(status, account=account)
