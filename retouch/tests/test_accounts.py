"""
Tests for accounts, sessions and the admin registry.

Tests:
- Seeding
- Login failures and token issuance
- Session validation and invalidation triggers
- Admin operations
- JSON file persistence
"""

import json
from datetime import timedelta

import pytest

from ..accounts import (
    Account,
    AccountRegistry,
    InMemoryAccountStore,
    JsonFileAccountStore,
    Role,
    SessionAuthority,
    seed_if_empty,
)
from ..accounts import store as store_module
from ..errors import (
    AccountExpired,
    AccountInactive,
    AccountNotFound,
    DuplicateAccount,
    InvalidCredentials,
    MissingInput,
    ProtectedAccount,
    SessionInvalid,
)
from .conftest import NOW


def tokens(store) -> dict:
    return {a.username: a.session_token for a in store.list_accounts()}


class TestSeeding:
    """Tests for bootstrap accounts."""

    def test_seeds_admin_and_member(self, store):
        accounts = store.list_accounts()
        assert [a.username for a in accounts] == ["admin", "member1"]
        assert accounts[0].role == Role.ADMIN
        assert accounts[1].role == Role.MEMBER
        assert accounts[1].expiry_date > NOW

    def test_seed_is_noop_when_populated(self, store):
        assert seed_if_empty(store) is False
        assert len(store.list_accounts()) == 2

    def test_restores_missing_admin_secret(self):
        store = InMemoryAccountStore()
        store.put_account(Account(id="admin-001", username="admin", role=Role.ADMIN))

        seed_if_empty(store)

        assert store.get_secret("admin") == "1234"


class TestLogin:
    """Tests for SessionAuthority.login."""

    def test_login_issues_token(self, authority):
        account = authority.login("member1", "123456")
        assert account.session_token
        assert authority.validate_session("member1", account.session_token)

    def test_wrong_password_leaves_tokens_untouched(self, authority, store):
        authority.login("member1", "123456")
        before = tokens(store)

        with pytest.raises(InvalidCredentials):
            authority.login("admin", "wrong")

        assert tokens(store) == before

    def test_unknown_user(self, authority):
        with pytest.raises(InvalidCredentials):
            authority.login("nobody", "1234")

    def test_inactive_account(self, authority, registry, store):
        registry.toggle_active("user-001")
        with pytest.raises(AccountInactive):
            authority.login("member1", "123456")

    def test_expired_account(self, authority, registry):
        registry.add_account("late", "pw", expiry_date=NOW - timedelta(days=1))
        with pytest.raises(AccountExpired):
            authority.login("late", "pw")

    def test_new_login_replaces_old_token(self, authority):
        first = authority.login("member1", "123456").session_token
        second = authority.login("member1", "123456").session_token

        assert first != second
        assert not authority.validate_session("member1", first)
        assert authority.validate_session("member1", second)


class TestValidateSession:
    """Tests for session validity rules."""

    def test_missing_token(self, authority):
        authority.login("member1", "123456")
        assert not authority.validate_session("member1", None)
        assert not authority.validate_session("member1", "")

    def test_wrong_token(self, authority):
        authority.login("member1", "123456")
        assert not authority.validate_session("member1", "sess-forged")

    def test_unknown_user(self, authority):
        assert not authority.validate_session("ghost", "sess-x")

    def test_expiry_ends_session(self, authority, clock):
        token = authority.login("member1", "123456").session_token
        clock.advance(timedelta(days=31))
        assert not authority.validate_session("member1", token)

    def test_require_session_raises(self, authority):
        with pytest.raises(SessionInvalid) as exc_info:
            authority.require_session("member1", "bad")
        assert "log in again" in exc_info.value.message

    def test_validation_has_no_side_effects(self, authority, store):
        authority.login("member1", "123456")
        before = tokens(store)
        authority.validate_session("member1", "bad")
        assert tokens(store) == before

    def test_logout_keeps_token_valid(self, authority):
        token = authority.login("member1", "123456").session_token
        authority.logout("member1")
        assert authority.validate_session("member1", token)


class TestRegistry:
    """Tests for admin operations."""

    def test_add_account(self, registry, authority):
        account = registry.add_account("alice", "pw")

        assert account.role == Role.MEMBER
        assert account.is_active
        assert account.session_token is None
        assert authority.login("alice", "pw").username == "alice"

    def test_add_duplicate(self, registry):
        with pytest.raises(DuplicateAccount):
            registry.add_account("member1", "x")

    def test_add_requires_username_and_password(self, registry):
        with pytest.raises(MissingInput):
            registry.add_account("  ", "pw")
        with pytest.raises(MissingInput):
            registry.add_account("bob", "")

    def test_list_in_insertion_order(self, registry):
        registry.add_account("zed", "pw")
        registry.add_account("amy", "pw")
        names = [a.username for a in registry.list_accounts()]
        assert names == ["admin", "member1", "zed", "amy"]

    def test_change_password_invalidates_session(self, registry, authority):
        token = authority.login("member1", "123456").session_token

        registry.change_password("member1", "newpass")

        assert not authority.validate_session("member1", token)
        with pytest.raises(InvalidCredentials):
            authority.login("member1", "123456")
        assert authority.login("member1", "newpass")

    def test_change_password_rejects_admin(self, registry, store):
        with pytest.raises(ProtectedAccount):
            registry.change_password("admin", "x")
        assert store.get_secret("admin") == "1234"

    def test_change_password_unknown(self, registry):
        with pytest.raises(AccountNotFound):
            registry.change_password("ghost", "x")

    def test_toggle_admin_is_noop(self, registry, authority, store):
        token = authority.login("admin", "1234").session_token

        snapshot = registry.toggle_active("admin-001")

        admin = next(a for a in snapshot if a.username == "admin")
        assert admin.is_active
        assert authority.validate_session("admin", token)

    def test_ban_clears_token(self, registry, authority, store):
        token = authority.login("member1", "123456").session_token

        snapshot = registry.toggle_active("user-001")

        member = next(a for a in snapshot if a.username == "member1")
        assert not member.is_active
        assert member.session_token is None
        assert not authority.validate_session("member1", token)

    def test_unban_restores_login(self, registry, authority):
        registry.toggle_active("user-001")
        registry.toggle_active("user-001")
        assert authority.login("member1", "123456").is_active

    def test_toggle_unknown_id(self, registry):
        snapshot = registry.toggle_active("user-missing")
        assert len(snapshot) == 2

    def test_save_api_key(self, registry, store):
        registry.save_api_key("member1", "  key-123  ")
        assert store.get_account("member1").api_key == "key-123"

    def test_access_summary(self, registry):
        registry.add_account("forever", "pw")
        text = registry.access_summary("forever")
        assert "ID: forever" in text
        assert "Valid until: Forever" in text


class TestExpiredMemberEndToEnd:
    """A member seeded with yesterday's expiry cannot log in."""

    def test_seeded_expired_member(self, clock):
        store = InMemoryAccountStore()
        seed_if_empty(store, now=clock() - timedelta(days=31))
        authority = SessionAuthority(store, now=clock)

        with pytest.raises(AccountExpired):
            authority.login("member1", "123456")


class TestJsonFileStore:
    """Tests for file persistence."""

    def test_round_trip(self, tmp_path, clock):
        path = tmp_path / "accounts.json"
        store = JsonFileAccountStore(path)
        seed_if_empty(store, now=clock())
        SessionAuthority(store, now=clock).login("member1", "123456")

        reopened = JsonFileAccountStore(path)
        member = reopened.get_account("member1")

        assert member.session_token is not None
        assert member.expiry_date == store.get_account("member1").expiry_date
        assert reopened.get_secret("admin") == "1234"

    def test_document_layout(self, tmp_path):
        path = tmp_path / "accounts.json"
        seed_if_empty(JsonFileAccountStore(path))

        document = json.loads(path.read_text())
        assert [a["username"] for a in document["accounts"]] == ["admin", "member1"]
        assert document["credentials"]["member1"] == "123456"

    def test_registry_changes_persist(self, tmp_path):
        path = tmp_path / "accounts.json"
        store = JsonFileAccountStore(path)
        seed_if_empty(store)
        AccountRegistry(store, SessionAuthority(store)).toggle_active("user-001")

        assert JsonFileAccountStore(path).get_account("member1").is_active is False

    def test_sees_writes_from_another_store(self, tmp_path, clock):
        path = tmp_path / "accounts.json"
        server = JsonFileAccountStore(path)
        seed_if_empty(server, now=clock())
        server_auth = SessionAuthority(server, now=clock)

        other = JsonFileAccountStore(path)
        other.put_secret("admin", "s3cret")

        assert server_auth.login("admin", "s3cret").is_admin
        with pytest.raises(InvalidCredentials):
            server_auth.login("admin", "1234")

    def test_own_write_keeps_outside_change(self, tmp_path, clock):
        path = tmp_path / "accounts.json"
        server = JsonFileAccountStore(path)
        seed_if_empty(server, now=clock())

        JsonFileAccountStore(path).put_secret("admin", "s3cret")
        SessionAuthority(server, now=clock).login("member1", "123456")

        reopened = JsonFileAccountStore(path)
        assert reopened.get_secret("admin") == "s3cret"
        assert reopened.get_account("member1").session_token is not None

    def test_failed_write_keeps_memory(self, tmp_path, clock, monkeypatch):
        path = tmp_path / "accounts.json"
        store = JsonFileAccountStore(path)
        seed_if_empty(store, now=clock())
        authority = SessionAuthority(store, now=clock)
        token = authority.login("member1", "123456").session_token
        before = path.read_text()

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(store_module.os, "replace", fail_replace)

        with pytest.raises(OSError):
            authority.login("member1", "123456")

        assert store.get_account("member1").session_token == token
        assert authority.validate_session("member1", token)
        assert path.read_text() == before
        assert list(tmp_path.iterdir()) == [path]
