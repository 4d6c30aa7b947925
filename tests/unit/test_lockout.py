"""Unit tests for the login lockout state machine."""

from datetime import datetime, timedelta, timezone

import pytest
from services.storefront_service.services.lockout import (
    LoginAttemptState,
    is_locked,
    register_failed_attempt,
    reset_attempts,
)

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
LOCK = timedelta(hours=2)


def _fail(state, times, now=NOW):
    for _ in range(times):
        state = register_failed_attempt(state, now, max_attempts=5, lock_duration=LOCK)
    return state


@pytest.mark.unit
def test_four_failures_leave_account_unlocked():
    state = _fail(LoginAttemptState(), 4)
    assert state.attempts == 4
    assert state.locked_until is None
    assert not is_locked(state, NOW)


@pytest.mark.unit
def test_fifth_failure_locks_for_lock_duration():
    state = _fail(LoginAttemptState(), 5)
    assert state.attempts == 5
    assert state.locked_until == NOW + LOCK
    assert is_locked(state, NOW + timedelta(minutes=119))


@pytest.mark.unit
def test_failure_while_locked_does_not_extend_lock():
    locked = _fail(LoginAttemptState(), 5)
    again = register_failed_attempt(
        locked, NOW + timedelta(minutes=30), max_attempts=5, lock_duration=LOCK
    )
    assert again.locked_until == locked.locked_until
    assert again.attempts == 6


@pytest.mark.unit
def test_failure_after_lock_expiry_restarts_count():
    locked = _fail(LoginAttemptState(), 5)
    after = NOW + LOCK + timedelta(seconds=1)

    assert not is_locked(locked, after)
    state = register_failed_attempt(locked, after, max_attempts=5, lock_duration=LOCK)

    assert state.attempts == 1
    assert state.locked_until is None


@pytest.mark.unit
def test_reset_clears_attempts_and_lock():
    assert reset_attempts() == LoginAttemptState(attempts=0, locked_until=None)


@pytest.mark.unit
def test_naive_lock_timestamp_is_treated_as_utc():
    naive = datetime(2026, 10, 1, 13, 0)
    state = LoginAttemptState(attempts=5, locked_until=naive)
    assert state.locked_until.tzinfo is not None
    assert is_locked(state, NOW)


@pytest.mark.unit
def test_states_are_immutable():
    state = LoginAttemptState()
    with pytest.raises(AttributeError):
        state.attempts = 3
