# tests/test_session_service.py
import pytest

from eyecare.services import SessionNotFoundError, WizardSessionService


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_idle_sessions_expire():
    clock = FakeClock()
    service = WizardSessionService(session_ttl_seconds=60, max_sessions=10, clock=clock)
    session_id, _ = service.start_session()

    clock.now = 59
    service.get(session_id)

    # last access was at 59, so still alive at 100
    clock.now = 100
    service.get(session_id)

    clock.now = 161
    with pytest.raises(SessionNotFoundError):
        service.get(session_id)
    assert service.session_count() == 0


def test_least_recently_used_session_evicted_at_cap():
    clock = FakeClock()
    service = WizardSessionService(session_ttl_seconds=3600, max_sessions=2, clock=clock)
    first, _ = service.start_session()
    clock.now = 1
    second, _ = service.start_session()

    clock.now = 2
    service.get(first)

    clock.now = 3
    third, _ = service.start_session()

    assert service.session_count() == 2
    service.get(first)
    service.get(third)
    with pytest.raises(SessionNotFoundError):
        service.get(second)


def test_discard():
    service = WizardSessionService()
    session_id, _ = service.start_session()
    service.discard(session_id)
    with pytest.raises(SessionNotFoundError):
        service.discard(session_id)
