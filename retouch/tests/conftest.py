"""
Pytest fixtures for Retouch tests.
"""

import pytest
from datetime import datetime, timedelta, timezone

from ..accounts import (
    AccountRegistry,
    InMemoryAccountStore,
    SessionAuthority,
    seed_if_empty,
)
from ..api.service import APIService
from ..editing import EditOrchestrator, HistoryStack, ImageTransform, ImageVersion, ReferenceSlot
from ..editing.transform import TargetSize


NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta):
        self.now = self.now + delta


class FakeTransform(ImageTransform):
    """Records every call and answers with canned bytes or an error."""

    def __init__(self, result: bytes = b"generated-png", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls = []
        self.api_keys = []

    def generate(self, prompt, primary=None, reference=None, target_size=TargetSize.QHD_2K):
        self.calls.append({
            "prompt": prompt,
            "primary": primary,
            "reference": reference,
            "target_size": target_size,
        })
        if self.error:
            raise self.error
        return self.result

    def factory(self, api_key: str) -> ImageTransform:
        self.api_keys.append(api_key)
        return self


def make_version(name: str) -> ImageVersion:
    return ImageVersion(id=name, data=name.encode(), media_type="image/png")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> InMemoryAccountStore:
    """Seeded in-memory store: admin/1234 and member1/123456."""
    store = InMemoryAccountStore()
    seed_if_empty(store, now=clock())
    return store


@pytest.fixture
def authority(store, clock) -> SessionAuthority:
    return SessionAuthority(store, now=clock)


@pytest.fixture
def registry(store, authority) -> AccountRegistry:
    return AccountRegistry(store, authority)


@pytest.fixture
def transform() -> FakeTransform:
    return FakeTransform()


@pytest.fixture
def orchestrator(transform) -> EditOrchestrator:
    return EditOrchestrator(transform.factory)


@pytest.fixture
def history() -> HistoryStack:
    return HistoryStack()


@pytest.fixture
def reference() -> ReferenceSlot:
    return ReferenceSlot()


@pytest.fixture
def service(store, authority, orchestrator) -> APIService:
    """Service wired to the seeded store and the fake transform."""
    return APIService(store=store, orchestrator=orchestrator, authority=authority)
