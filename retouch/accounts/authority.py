"""
Session Authority - Issues, validates and invalidates session tokens.

A session is valid iff:
- the account exists and has a token
- the presented token matches it
- the account is active
- the account has not expired

Sessions have no timer of their own. They end only on explicit events:
password change, ban, or a newer login overwriting the token.

Secrets are compared as stored (exact match, no hashing).
"""

from __future__ import annotations
import logging
import secrets
from datetime import datetime, timezone
from typing import Callable

from ..errors import AccountExpired, AccountInactive, InvalidCredentials, SessionInvalid
from .models import Account
from .store import AccountStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_session_token() -> str:
    """Generate an unguessable opaque token."""
    return f"sess-{secrets.token_urlsafe(32)}"


class SessionAuthority:
    """
    Gatekeeper for every privileged operation.

    Usage:
        authority = SessionAuthority(store)
        account = authority.login("member1", "123456")
        authority.require_session(account.username, account.session_token)
    """

    def __init__(
        self,
        store: AccountStore,
        now: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.now = now

    def login(self, username: str, password: str) -> Account:
        """
        Check credentials and issue a fresh token.

        Any previous token for the account stops validating.

        Raises:
            InvalidCredentials: unknown username or wrong password
            AccountInactive: account is banned
            AccountExpired: expiry date has passed
        """
        stored_secret = self.store.get_secret(username)
        account = self.store.get_account(username)
        if stored_secret is None or account is None or stored_secret != password:
            logger.info("Login rejected for %r: invalid credentials", username)
            raise InvalidCredentials()

        if not account.is_active:
            logger.info("Login rejected for %r: account inactive", username)
            raise AccountInactive()

        if account.is_expired(self.now()):
            logger.info("Login rejected for %r: account expired", username)
            raise AccountExpired()

        # Single active session: drop the old token before issuing a new one
        self.invalidate(username)
        token = new_session_token()
        updated = self.store.update_account(
            username,
            lambda a: a.copy_with(session_token=token),
        )
        logger.info("Login succeeded for %r", username)
        return updated

    def validate_session(self, username: str, token: str | None) -> bool:
        """Check a presented token. No side effects."""
        if not token:
            return False

        account = self.store.get_account(username)
        if account is None:
            return False
        if not account.is_active:
            return False
        if account.is_expired(self.now()):
            return False

        return account.session_token is not None and secrets.compare_digest(
            account.session_token.encode(), token.encode()
        )

    def require_session(self, username: str, token: str | None) -> Account:
        """
        Return the account snapshot for a valid session.

        Raises:
            SessionInvalid: for any reason the session does not validate
        """
        if not self.validate_session(username, token):
            raise SessionInvalid()
        return self.store.get_account(username)

    def invalidate(self, username: str):
        """Clear the account's token, ending any session it backs."""
        updated = self.store.update_account(
            username,
            lambda a: a.copy_with(session_token=None),
        )
        if updated is not None:
            logger.debug("Session token cleared for %r", username)

    def logout(self, username: str):
        """
        Record a logout.

        The token is NOT cleared: logout is the client forgetting its token.
        It keeps validating until password change, ban or a new login.
        """
        logger.info("Logout for %r", username)
