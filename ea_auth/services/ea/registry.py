"""Account registry - validates and normalizes the configured account list."""

import base64
from collections import Counter
from typing import Iterator, List, Optional, Union

from loguru import logger

from ...core.exceptions import AccountNotFoundError, DuplicateAccountError
from .models import Account


def decode_identity_key(remid: str) -> str:
    """
    Extract the stable account identity from a remid cookie.

    The remid is a dot-separated token whose first segment is base64 text of
    colon-delimited fields; the third field identifies the EA account.
    Both the standard and the URL-safe alphabet are accepted, with or
    without padding, and undecodable bytes become U+FFFD.

    Args:
        remid: remid cookie value

    Returns:
        Identity key, or an empty string when the segment does not decode to
        at least three fields
    """
    head = remid.split(".")[0].strip().rstrip("=").replace("-", "+").replace("_", "/")
    # A lone trailing sextet carries no full byte
    if len(head) % 4 == 1:
        head = head[:-1]
    try:
        raw = base64.b64decode(head + "=" * (-len(head) % 4))
    except ValueError as e:
        logger.warning(f"remid head is not base64, no identity key derived: {e}")
        return ""
    fields = raw.decode("utf-8", errors="replace").split(":")
    return fields[2] if len(fields) > 2 else ""


class AccountRegistry:
    """
    Owns the host-supplied account list.

    The list is normalized in place exactly once, at construction:
    identity keys are recomputed from each remid, accounts whose identity
    changed lose their resolved profile, and duplicate identities abort
    construction.
    """

    def __init__(self, accounts: List[Account]):
        """
        Initialize and validate the registry.

        Args:
            accounts: Mutable, host-owned account list (first entry is the default)

        Raises:
            DuplicateAccountError: If two accounts decode to the same identity
        """
        self.accounts = accounts
        self.normalize()

    def normalize(self) -> None:
        """Recompute identity keys and reject duplicates."""
        for account in self.accounts:
            if not account.remid:
                continue
            remid_id = decode_identity_key(account.remid)
            if account.remid_id != remid_id:
                if account.remid_id:
                    logger.info(
                        f"remid of account {account.name or '<unresolved>'} now belongs to "
                        "another identity, it will be resolved again"
                    )
                account.remid_id = remid_id
                account.clear_profile()

        counts = Counter(account.remid_id for account in self.accounts if account.remid)
        for remid_id, count in counts.items():
            if remid_id and count > 1:
                raise DuplicateAccountError(remid_id)

        logger.debug(f"Account registry normalized ({len(self.accounts)} accounts)")

    def __len__(self) -> int:
        return len(self.accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts)

    @property
    def default(self) -> Optional[Account]:
        """First configured account, if any."""
        return self.accounts[0] if self.accounts else None

    def unresolved(self) -> List[Account]:
        """Accounts that still need a persona binding and can get one."""
        return [a for a in self.accounts if not a.is_resolved and a.remid]

    def find(self, persona_id: Union[int, str]) -> Account:
        """
        Look up an account by numeric persona id.

        Args:
            persona_id: Persona id as int or numeric string

        Returns:
            Matching account

        Raises:
            AccountNotFoundError: If no resolved account has that persona id
        """
        wanted = _as_persona_number(persona_id)
        if wanted is not None:
            for account in self.accounts:
                if _as_persona_number(account.persona_id) == wanted:
                    return account
        raise AccountNotFoundError(persona_id)


def _as_persona_number(value: Union[int, str, None]) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None
