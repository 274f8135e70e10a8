"""Tests for the session manager and the in-memory session store."""

from datetime import datetime, timedelta, timezone

import pytest

from modules.auth.exceptions import (
    AccountNotFoundError,
    ExpiredSessionError,
    InvalidSessionError,
    MissingSessionError,
)
from modules.auth.models import SessionBinding
from modules.auth.session_store import InMemorySessionStore
from modules.auth.sessions import SessionManager

from tests.fakes import InMemoryIdentityStore


T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class Clock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def accounts() -> InMemoryIdentityStore:
    return InMemoryIdentityStore()


@pytest.fixture
def manager(store, accounts, clock) -> SessionManager:
    return SessionManager(store, accounts, ttl_seconds=3600, clock=clock)


class TestInMemorySessionStore:
    def make_binding(self, handle: str, expires_in: int = 60) -> SessionBinding:
        return SessionBinding(
            handle=handle,
            account_id="acc-1",
            issued_at=T0,
            expires_at=T0 + timedelta(seconds=expires_in),
        )

    def test_save_and_get(self, store):
        binding = self.make_binding("h1")
        store.save(binding)
        assert store.get("h1") == binding
        assert store.get("h2") is None

    def test_delete_is_idempotent(self, store):
        store.save(self.make_binding("h1"))
        store.delete("h1")
        store.delete("h1")
        assert store.get("h1") is None

    def test_keys_are_digests(self, store):
        store.save(self.make_binding("raw-handle"))
        assert "raw-handle" not in store._bindings

    def test_delete_expired(self, store):
        store.save(self.make_binding("old", expires_in=10))
        store.save(self.make_binding("new", expires_in=100))

        removed = store.delete_expired(T0 + timedelta(seconds=10))

        assert removed == 1
        assert store.get("old") is None
        assert store.get("new") is not None
        assert len(store) == 1


class TestIssue:
    @pytest.mark.asyncio
    async def test_issue_creates_binding(self, manager, store, accounts):
        account = accounts.add()

        binding = await manager.issue(account.id)

        assert binding.account_id == account.id
        assert binding.issued_at == T0
        assert binding.expires_at == T0 + timedelta(hours=1)
        assert store.get(binding.handle) == binding

    @pytest.mark.asyncio
    async def test_each_issue_gets_a_fresh_handle(self, manager, accounts):
        account = accounts.add()
        first = await manager.issue(account.id)
        second = await manager.issue(account.id)
        assert first.handle != second.handle

    def test_ttl_must_be_positive(self, store, accounts):
        with pytest.raises(ValueError):
            SessionManager(store, accounts, ttl_seconds=0)

    def test_ttl_seconds(self, manager):
        assert manager.ttl_seconds == 3600


class TestValidate:
    @pytest.mark.asyncio
    async def test_valid_session_resolves_account(self, manager, accounts):
        account = accounts.add()
        binding = await manager.issue(account.id)

        resolved = await manager.validate(binding.handle)

        assert resolved.id == account.id
        assert resolved.email == "ada@example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("handle", [None, ""])
    async def test_missing_handle(self, manager, handle):
        with pytest.raises(MissingSessionError):
            await manager.validate(handle)

    @pytest.mark.asyncio
    async def test_unknown_handle(self, manager):
        with pytest.raises(InvalidSessionError):
            await manager.validate("never-issued")

    @pytest.mark.asyncio
    async def test_valid_just_before_expiry(self, manager, accounts, clock):
        account = accounts.add()
        binding = await manager.issue(account.id)
        clock.advance(seconds=3599)

        assert (await manager.validate(binding.handle)).id == account.id

    @pytest.mark.asyncio
    async def test_expired_session_is_rejected_and_dropped(self, manager, store, accounts, clock):
        account = accounts.add()
        binding = await manager.issue(account.id)
        clock.advance(seconds=3600)

        with pytest.raises(ExpiredSessionError):
            await manager.validate(binding.handle)

        assert store.get(binding.handle) is None
        # Never comes back, even if the clock were wound back
        clock.now = T0
        with pytest.raises(InvalidSessionError):
            await manager.validate(binding.handle)

    @pytest.mark.asyncio
    async def test_validation_does_not_extend_expiry(self, manager, accounts, clock):
        account = accounts.add()
        binding = await manager.issue(account.id)

        clock.advance(minutes=50)
        await manager.validate(binding.handle)
        clock.advance(minutes=10)

        with pytest.raises(ExpiredSessionError):
            await manager.validate(binding.handle)

    @pytest.mark.asyncio
    async def test_deleted_account_invalidates_session(self, manager, store, accounts):
        account = accounts.add()
        binding = await manager.issue(account.id)
        accounts.remove(account.id)

        with pytest.raises(AccountNotFoundError):
            await manager.validate(binding.handle)

        assert store.get(binding.handle) is None


class TestRevoke:
    @pytest.mark.asyncio
    async def test_revoke_invalidates(self, manager, accounts):
        account = accounts.add()
        binding = await manager.issue(account.id)

        await manager.revoke(binding.handle)

        with pytest.raises(InvalidSessionError):
            await manager.validate(binding.handle)

    @pytest.mark.asyncio
    async def test_revoke_is_idempotent(self, manager, accounts):
        account = accounts.add()
        binding = await manager.issue(account.id)

        await manager.revoke(binding.handle)
        await manager.revoke(binding.handle)
        await manager.revoke("never-issued")
        await manager.revoke(None)

    @pytest.mark.asyncio
    async def test_revoke_leaves_other_sessions(self, manager, accounts):
        account = accounts.add()
        first = await manager.issue(account.id)
        second = await manager.issue(account.id)

        await manager.revoke(first.handle)

        assert (await manager.validate(second.handle)).id == account.id


class TestPurgeExpired:
    @pytest.mark.asyncio
    async def test_purge_expired(self, manager, store, accounts, clock):
        account = accounts.add()
        old = await manager.issue(account.id)
        clock.advance(minutes=30)
        fresh = await manager.issue(account.id)
        clock.advance(minutes=30)

        removed = await manager.purge_expired()

        assert removed == 1
        assert store.get(old.handle) is None
        assert store.get(fresh.handle) is not None

    @pytest.mark.asyncio
    async def test_issue_reclaims_abandoned_sessions(self, store, accounts, clock):
        manager = SessionManager(store, accounts, ttl_seconds=60, clock=clock)
        account = accounts.add()

        for _ in range(50):
            await manager.issue(account.id)
            clock.advance(hours=1)

        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_issue_sweeps_at_most_once_per_interval(self, store, accounts, clock):
        manager = SessionManager(
            store, accounts, ttl_seconds=60, clock=clock, purge_interval_seconds=3600
        )
        account = accounts.add()
        await manager.issue(account.id)

        clock.advance(minutes=5)
        await manager.issue(account.id)
        assert len(store) == 2

        clock.advance(hours=1)
        await manager.issue(account.id)
        assert len(store) == 1
