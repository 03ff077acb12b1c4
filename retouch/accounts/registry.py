"""
Account Registry - Admin-facing account management.

Callers must already hold a validated ADMIN session; that capability check
lives at the service boundary, not here.
"""

from __future__ import annotations
import logging
import uuid
from datetime import datetime

from ..errors import AccountNotFound, DuplicateAccount, MissingInput, ProtectedAccount
from .authority import SessionAuthority
from .models import Account, Role, as_utc
from .store import AccountStore

logger = logging.getLogger(__name__)


class AccountRegistry:
    """
    Creates members, resets passwords, bans and unbans.

    Mutations that end access (password change, ban) invalidate the
    account's session through the SessionAuthority.
    """

    def __init__(self, store: AccountStore, authority: SessionAuthority):
        self.store = store
        self.authority = authority

    def add_account(
        self,
        username: str,
        password: str,
        expiry_date: datetime | None = None,
    ) -> Account:
        """
        Create an active MEMBER account with no session.

        Raises:
            MissingInput: empty username or password
            DuplicateAccount: username already present
        """
        username = username.strip()
        if not username or not password:
            raise MissingInput("Username and password are required.")

        account = Account(
            id=f"user-{uuid.uuid4().hex[:12]}",
            username=username,
            role=Role.MEMBER,
            is_active=True,
            expiry_date=as_utc(expiry_date) if expiry_date else None,
        )
        if not self.store.create_account(account, password):
            raise DuplicateAccount(f"User {username!r} already exists.")

        logger.info("Added member account %r", username)
        return account

    def change_password(self, username: str, new_password: str):
        """
        Replace a member's secret and end their session.

        Raises:
            MissingInput: empty password
            AccountNotFound: unknown username
            ProtectedAccount: target is an ADMIN
        """
        account = self._get_member(username)
        if not new_password:
            raise MissingInput("Password is required.")

        self.store.put_secret(account.username, new_password)
        self.authority.invalidate(account.username)
        logger.info("Password changed for %r; session invalidated", username)

    def toggle_active(self, account_id: str) -> list[Account]:
        """
        Ban or unban a member.

        ADMIN targets and unknown ids are left untouched. Banning also
        clears the session token.

        Returns the registry snapshot after the change.
        """
        target = self.store.find_by_id(account_id)
        if target is None:
            logger.warning("Toggle requested for unknown account id %r", account_id)
            return self.list_accounts()
        if target.is_admin:
            logger.warning("Refusing to toggle admin account %r", target.username)
            return self.list_accounts()

        def flip(account: Account) -> Account:
            if account.is_active:
                return account.copy_with(is_active=False, session_token=None)
            return account.copy_with(is_active=True)

        updated = self.store.update_account(target.username, flip)
        logger.info(
            "Account %r is now %s",
            target.username,
            "active" if updated.is_active else "banned",
        )
        return self.list_accounts()

    def list_accounts(self) -> list[Account]:
        """All accounts in insertion order."""
        return self.store.list_accounts()

    def save_api_key(self, username: str, api_key: str) -> Account:
        """
        Store the user's transform backend key.

        Raises:
            MissingInput: empty key
            AccountNotFound: unknown username
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise MissingInput("API key is required.")

        updated = self.store.update_account(
            username,
            lambda a: a.copy_with(api_key=api_key),
        )
        if updated is None:
            raise AccountNotFound()
        return updated

    def access_summary(self, username: str) -> str:
        """Shareable text describing a member's access."""
        account = self._get_member(username)
        valid_until = (
            account.expiry_date.date().isoformat() if account.expiry_date else "Forever"
        )
        return f"Professional AI ACCESS\nID: {account.username}\nValid until: {valid_until}"

    def _get_member(self, username: str) -> Account:
        account = self.store.get_account(username)
        if account is None:
            raise AccountNotFound(f"Account {username!r} not found.")
        if account.is_admin:
            raise ProtectedAccount()
        return account
