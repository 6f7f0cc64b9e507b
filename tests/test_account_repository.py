"""Tests for the YAML account repository."""

import asyncio

import pytest
import yaml

from ea_auth.core.exceptions import ConfigurationError
from ea_auth.repositories import AccountFileRepository
from ea_auth.services.ea import Account
from tests.conftest import make_remid


@pytest.fixture
def accounts_file(tmp_path):
    """Path of an accounts file inside a not yet existing directory."""
    return tmp_path / "config" / "accounts.yaml"


class TestLoad:
    """Test AccountFileRepository.load."""

    def test_missing_file(self, accounts_file):
        """A missing file means no accounts."""
        assert AccountFileRepository(accounts_file).load() == []

    def test_loads_in_order(self, accounts_file):
        """Entries keep file order and map file keys to fields."""
        accounts_file.parent.mkdir(parents=True)
        accounts_file.write_text(
            "accounts:\n"
            "  - remid: first\n"
            "  - name: Player\n"
            "    personaId: 1004198123\n"
            "    remid: second\n"
            "    sid: s2\n"
            "    remidid: '77'\n",
            encoding="utf-8",
        )

        accounts = AccountFileRepository(accounts_file).load()

        assert accounts == [
            Account(remid="first"),
            Account(
                name="Player", persona_id="1004198123", remid="second", sid="s2", remid_id="77"
            ),
        ]

    def test_empty_file(self, accounts_file):
        """An empty file is an empty account list."""
        accounts_file.parent.mkdir(parents=True)
        accounts_file.write_text("", encoding="utf-8")

        assert AccountFileRepository(accounts_file).load() == []

    def test_invalid_yaml(self, accounts_file):
        """Broken YAML is a configuration error."""
        accounts_file.parent.mkdir(parents=True)
        accounts_file.write_text("accounts: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            AccountFileRepository(accounts_file).load()

    def test_wrong_shape(self, accounts_file):
        """A valid YAML document with the wrong shape is a configuration error."""
        accounts_file.parent.mkdir(parents=True)
        accounts_file.write_text("accounts:\n  - [1, 2]\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            AccountFileRepository(accounts_file).load()

        assert exc_info.value.details["errors"]


class TestSave:
    """Test saving the account list."""

    @pytest.mark.asyncio
    async def test_save_then_load(self, accounts_file, accounts):
        """Saved accounts load back identically and in order."""
        repository = AccountFileRepository(accounts_file)

        await repository.save(accounts)

        assert repository.load() == accounts

    @pytest.mark.asyncio
    async def test_file_layout(self, accounts_file):
        """Empty fields are omitted and keys use the file names."""
        repository = AccountFileRepository(accounts_file)
        remid = make_remid("k")

        await repository.save(
            [Account(remid=remid, remid_id="k"), Account(name="P", persona_id="1", remid_id="x")]
        )

        data = yaml.safe_load(accounts_file.read_text(encoding="utf-8"))
        assert data == {
            "accounts": [
                {"remid": remid, "remidid": "k"},
                {"name": "P", "personaId": "1", "remidid": "x"},
            ]
        }

    @pytest.mark.asyncio
    async def test_no_temp_files_left(self, accounts_file, accounts):
        """Atomic writes leave only the target file behind."""
        repository = AccountFileRepository(accounts_file)

        await asyncio.gather(repository.save(accounts), repository.save(accounts[:1]))

        assert [p.name for p in accounts_file.parent.iterdir()] == ["accounts.yaml"]
        assert repository.load() == accounts[:1]

    def test_save_sync(self, accounts_file, accounts):
        """Test the blocking variant."""
        repository = AccountFileRepository(accounts_file)

        repository.save_sync(accounts)

        assert repository.load() == accounts
