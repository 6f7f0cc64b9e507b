"""YAML-backed account storage used as the host persistence hook."""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from loguru import logger
from pydantic import ValidationError

from ..core.config.config_models import AccountsConfig
from ..core.exceptions import ConfigurationError
from ..services.ea.models import Account


class AccountFileRepository:
    """
    Loads and saves the ordered account list from a YAML file.

    File layout::

        accounts:
          - remid: <cookie>
          - name: Player
            personaId: "1000123"
            remid: <cookie>
            sid: <cookie>
            remidid: "2000456"
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize repository.

        Args:
            path: Location of the accounts YAML file
        """
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    def load(self) -> List[Account]:
        """
        Read and validate the account list.

        Returns:
            Accounts in file order (empty if the file does not exist)

        Raises:
            ConfigurationError: If the file is not valid YAML or has the wrong shape
        """
        if not self.path.exists():
            logger.warning(f"Accounts file {self.path} not found, starting with no accounts")
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            config = AccountsConfig.from_dict(raw)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.path}: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid accounts file {self.path}",
                details={"errors": e.errors(include_url=False, include_input=False)},
            ) from e

        accounts = [Account.from_config(entry) for entry in config.accounts]
        logger.info(f"Loaded {len(accounts)} accounts from {self.path}")
        return accounts

    def save_sync(self, accounts: List[Account]) -> None:
        """Write the account list atomically (temp file + rename)."""
        self._write({"accounts": [account.to_dict() for account in accounts]})

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def save(self, accounts: List[Account]) -> None:
        """
        Persist the account list without blocking the event loop.

        Matches PersistCallback, so it can be handed to EASessionClient directly.

        Args:
            accounts: Accounts to store, in order
        """
        async with self._write_lock:
            # Snapshot on the loop thread; accounts may change while the file is written
            data = {"accounts": [account.to_dict() for account in accounts]}
            await asyncio.to_thread(self._write, data)
        logger.debug(f"Saved {len(accounts)} accounts to {self.path}")
