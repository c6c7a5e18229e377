from datetime import datetime, timedelta, timezone

import pytest

from taskkeeper.services.scheduler import SessionSweeper
from taskkeeper.services.session_store import SessionStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, minutes):
        self.now += timedelta(minutes=minutes)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def sessions(clock):
    return SessionStore(ttl_minutes=10, clock=clock)


def test_resolve_returns_bound_user(sessions):
    token = sessions.create(7)

    assert sessions.resolve(token) == 7
    assert sessions.resolve("unknown") is None


def test_session_expires_after_ttl(sessions, clock):
    token = sessions.create(7)
    clock.advance(11)

    assert sessions.resolve(token) is None
    assert len(sessions) == 0


def test_activity_slides_expiry(sessions, clock):
    token = sessions.create(7)
    clock.advance(8)
    assert sessions.resolve(token) == 7
    clock.advance(8)

    assert sessions.resolve(token) == 7


def test_destroy_is_idempotent(sessions):
    token = sessions.create(7)

    assert sessions.destroy(token) is True
    assert sessions.destroy(token) is False
    assert sessions.resolve(token) is None


def test_purge_expired_keeps_live_sessions(sessions, clock):
    old = sessions.create(1)
    clock.advance(6)
    fresh = sessions.create(2)
    clock.advance(6)

    assert sessions.purge_expired() == 1
    assert sessions.resolve(old) is None
    assert sessions.resolve(fresh) == 2


@pytest.mark.asyncio
async def test_sweeper_purges_and_reports(sessions, clock):
    sweeper = SessionSweeper(sessions, interval_minutes=1)
    sessions.create(1)
    clock.advance(20)

    assert await sweeper.sweep() == 1

    sweeper.start()
    try:
        status = sweeper.get_status()
        assert status["is_running"] is True
        assert [job["id"] for job in status["jobs"]] == ["purge_expired_sessions"]
    finally:
        sweeper.stop()
    assert sweeper.is_running is False
