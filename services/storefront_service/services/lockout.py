"""Login-attempt lockout as pure state transitions.

State machine::

    unlocked --(max_attempts failures)--> locked
    locked --(lock expires, one more failure)--> unlocked, attempts=1
    any unlocked state --(successful login)--> unlocked, attempts=0
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from libs.common.datetime_utils import ensure_utc

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_LOCK_DURATION = timedelta(hours=2)


@dataclass(frozen=True)
class LoginAttemptState:
    attempts: int = 0
    locked_until: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "locked_until", ensure_utc(self.locked_until))


def is_locked(state: LoginAttemptState, now: datetime) -> bool:
    return state.locked_until is not None and state.locked_until > now


def register_failed_attempt(
    state: LoginAttemptState,
    now: datetime,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    lock_duration: timedelta = DEFAULT_LOCK_DURATION,
) -> LoginAttemptState:
    """Return the state after one more failed login at ``now``."""
    if state.locked_until is not None and state.locked_until < now:
        # Previous lock expired: start counting again.
        return LoginAttemptState(attempts=1, locked_until=None)

    attempts = state.attempts + 1
    if attempts >= max_attempts and not is_locked(state, now):
        return LoginAttemptState(attempts=attempts, locked_until=now + lock_duration)
    return replace(state, attempts=attempts)


def reset_attempts() -> LoginAttemptState:
    return LoginAttemptState()
