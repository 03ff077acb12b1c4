"""
Tests for the command-line interface.

Tests:
- Seeding and listing a store file
- Adding accounts
- Out-of-band password reset
"""

from datetime import datetime, timedelta, timezone

import pytest

from ..accounts import JsonFileAccountStore, SessionAuthority
from ..cli import main


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / "accounts.json")


class TestSeedAndList:
    """Tests for `seed` and `accounts`."""

    def test_seed_creates_defaults(self, data_file, capsys):
        main(["seed", "--data-file", data_file])

        store = JsonFileAccountStore(data_file)
        assert [a.username for a in store.list_accounts()] == ["admin", "member1"]
        assert "Seeded" in capsys.readouterr().out

    def test_seed_twice(self, data_file, capsys):
        main(["seed", "--data-file", data_file])
        main(["seed", "--data-file", data_file])

        assert "already has accounts" in capsys.readouterr().out

    def test_accounts_listing(self, data_file, capsys):
        main(["accounts", "--data-file", data_file])
        out = capsys.readouterr().out

        assert "admin-001" in out
        assert "member1" in out
        assert "Lifetime" in out

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1


class TestAddAccount:
    """Tests for `add-account`."""

    def test_days_sets_expiry(self, data_file):
        main(["add-account", "alice", "pw", "--data-file", data_file, "--days", "7"])

        alice = JsonFileAccountStore(data_file).get_account("alice")
        now = datetime.now(timezone.utc)
        assert now + timedelta(days=6) < alice.expiry_date <= now + timedelta(days=7)
        assert alice.is_active

    def test_lifetime_without_days(self, data_file):
        main(["add-account", "bob", "pw", "--data-file", data_file])

        store = JsonFileAccountStore(data_file)
        assert store.get_account("bob").expiry_date is None
        assert store.get_secret("bob") == "pw"

    def test_duplicate_exits(self, data_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["add-account", "member1", "pw", "--data-file", data_file])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out


class TestSetPassword:
    """Tests for `set-password`."""

    def test_resets_admin_and_clears_token(self, data_file):
        main(["seed", "--data-file", data_file])
        store = JsonFileAccountStore(data_file)
        authority = SessionAuthority(store)
        token = authority.login("admin", "1234").session_token

        main(["set-password", "admin", "s3cret", "--data-file", data_file])

        reopened = JsonFileAccountStore(data_file)
        assert reopened.get_secret("admin") == "s3cret"
        assert reopened.get_account("admin").session_token is None
        assert not authority.validate_session("admin", token)

    def test_running_store_keeps_reset(self, data_file):
        main(["seed", "--data-file", data_file])
        server = JsonFileAccountStore(data_file)
        server_auth = SessionAuthority(server)

        main(["set-password", "admin", "s3cret", "--data-file", data_file])
        server_auth.login("member1", "123456")

        assert server_auth.login("admin", "s3cret").is_admin
        assert JsonFileAccountStore(data_file).get_secret("admin") == "s3cret"

    def test_unknown_user_exits(self, data_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["set-password", "ghost", "pw", "--data-file", data_file])

        assert exc_info.value.code == 1
        assert "Account not found" in capsys.readouterr().out
