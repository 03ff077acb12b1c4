"""
Account Store - Durable key-value storage for accounts and credentials.

The store holds two tables:
- username -> Account
- username -> secret

Design decisions:
- The store is injected, never a module global
- Every record update is a single atomic write under a lock
- Readers get copies, so a snapshot never changes under them
- The JSON-file store keeps one document and replaces it atomically
"""

from __future__ import annotations
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

from .models import Account

logger = logging.getLogger(__name__)


class AccountStore(ABC):
    """Abstract durable mapping of accounts and their secrets."""

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """All accounts in insertion order."""

    @abstractmethod
    def get_account(self, username: str) -> Account | None:
        """Get an account by username."""

    @abstractmethod
    def put_account(self, account: Account):
        """Insert or replace an account record."""

    @abstractmethod
    def create_account(self, account: Account, secret: str) -> bool:
        """Insert an account with its secret. False if the username is taken."""

    @abstractmethod
    def update_account(
        self,
        username: str,
        change: Callable[[Account], Account],
    ) -> Account | None:
        """
        Atomically read, change and write back one record.

        Returns the stored result, or None if the username is unknown.
        """

    @abstractmethod
    def get_secret(self, username: str) -> str | None:
        """Get the stored secret for a username."""

    @abstractmethod
    def put_secret(self, username: str, secret: str):
        """Insert or replace a secret."""

    def find_by_id(self, account_id: str) -> Account | None:
        """Get an account by its id."""
        for account in self.list_accounts():
            if account.id == account_id:
                return account
        return None

    def is_empty(self) -> bool:
        return not self.list_accounts()


class InMemoryAccountStore(AccountStore):
    """
    Process-local store.

    Every write builds new tables and installs them with ``_commit``, so a
    write that fails leaves the previous tables in place.

    Usage:
        store = InMemoryAccountStore()
        seed_if_empty(store)
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._accounts: dict[str, Account] = {}
        self._secrets: dict[str, str] = {}

    def list_accounts(self) -> list[Account]:
        with self._lock:
            self._sync()
            return [a.copy_with() for a in self._accounts.values()]

    def get_account(self, username: str) -> Account | None:
        with self._lock:
            self._sync()
            account = self._accounts.get(username)
            return account.copy_with() if account else None

    def put_account(self, account: Account):
        with self._lock:
            self._sync()
            accounts = dict(self._accounts)
            accounts[account.username] = account.copy_with()
            self._commit(accounts, self._secrets)

    def create_account(self, account: Account, secret: str) -> bool:
        with self._lock:
            self._sync()
            if account.username in self._accounts:
                return False
            accounts = dict(self._accounts)
            accounts[account.username] = account.copy_with()
            secrets = dict(self._secrets)
            secrets[account.username] = secret
            self._commit(accounts, secrets)
            return True

    def update_account(
        self,
        username: str,
        change: Callable[[Account], Account],
    ) -> Account | None:
        with self._lock:
            self._sync()
            account = self._accounts.get(username)
            if account is None:
                return None
            updated = change(account.copy_with())
            accounts = dict(self._accounts)
            accounts[username] = updated
            self._commit(accounts, self._secrets)
            return updated.copy_with()

    def get_secret(self, username: str) -> str | None:
        with self._lock:
            self._sync()
            return self._secrets.get(username)

    def put_secret(self, username: str, secret: str):
        with self._lock:
            self._sync()
            secrets = dict(self._secrets)
            secrets[username] = secret
            self._commit(self._accounts, secrets)

    def _sync(self):
        """Hook for subclasses that pick up changes made elsewhere."""

    def _commit(self, accounts: dict[str, Account], secrets: dict[str, str]):
        """Install new tables. Subclasses persist first, then call up."""
        self._accounts = accounts
        self._secrets = secrets


class JsonFileAccountStore(InMemoryAccountStore):
    """
    File-backed store.

    The document is re-read whenever the file on disk has changed since
    this store last saw it, so edits made by another process (the
    ``retouch set-password`` command next to a running server) are picked
    up before the next read or write instead of being overwritten.

    Writes go to a temp file in the same directory and are moved into
    place, so a crash never leaves a half-written document. The in-memory
    tables are only swapped after the move succeeds.

    Two processes writing at the same instant can still lose one update;
    there is no cross-process lock.
    """

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._stamp = None
        self._sync()

    def _file_stamp(self):
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return None
        # os.replace gives every write a new inode
        return (stat.st_ino, stat.st_mtime_ns, stat.st_size)

    def _sync(self):
        stamp = self._file_stamp()
        if stamp is None or stamp == self._stamp:
            return

        with open(self.path, "r", encoding="utf-8") as f:
            document = json.load(f)

        accounts = {}
        for record in document.get("accounts", []):
            account = Account.from_dict(record)
            accounts[account.username] = account
        self._accounts = accounts
        self._secrets = dict(document.get("credentials", {}))
        self._stamp = stamp
        logger.debug("Loaded %d accounts from %s", len(accounts), self.path)

    def _commit(self, accounts: dict[str, Account], secrets: dict[str, str]):
        document = {
            "accounts": [a.to_dict() for a in accounts.values()],
            "credentials": dict(secrets),
        }
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        self._stamp = self._file_stamp()
        super()._commit(accounts, secrets)
