"""Account registration and login with attempt lockout."""

from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status
from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from services.storefront_service.models import User, UserStatus
from services.storefront_service.services.lockout import (
    LoginAttemptState,
    is_locked,
    register_failed_attempt,
    reset_attempts,
)
from services.storefront_service.services.passwords import (
    hash_password,
    verify_password,
)
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


def attempt_state(user: User) -> LoginAttemptState:
    return LoginAttemptState(
        attempts=user.login_attempts or 0, locked_until=user.lock_until
    )


def apply_attempt_state(user: User, state: LoginAttemptState) -> User:
    user.login_attempts = state.attempts
    user.lock_until = state.locked_until
    return user


def set_password(user: User, password: str) -> User:
    """Store only the hash of ``password``."""
    user.password_hash = hash_password(password)
    return user


async def register_user(
    db: AsyncSession,
    *,
    username: str,
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    phone: Optional[str] = None,
) -> User:
    existing = await db.execute(
        select(User.id).where(or_(User.username == username, User.email == email))
    )
    if existing.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists with this username or email",
        )

    user = User(
        username=username,
        email=email,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
    )
    set_password(user, password)
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("Registered user %s (%s)", user.username, user.id)
    return user


async def record_failed_login(
    db: AsyncSession, user: User, now: Optional[datetime] = None
) -> LoginAttemptState:
    """Apply one failed attempt to ``user`` under a row lock and commit."""
    settings = get_settings()
    now = now or utc_now()

    result = await db.execute(
        select(User)
        .where(User.id == user.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    locked_row = result.scalar_one()
    state = register_failed_attempt(
        attempt_state(locked_row),
        now,
        max_attempts=settings.MAX_LOGIN_ATTEMPTS,
        lock_duration=timedelta(seconds=settings.ACCOUNT_LOCKOUT_SECONDS),
    )
    apply_attempt_state(locked_row, state)
    await db.commit()

    if is_locked(state, now):
        logger.warning(
            "Locked account %s until %s after %d failed logins",
            locked_row.username,
            state.locked_until.isoformat(),
            state.attempts,
        )
    return state


async def authenticate_user(
    db: AsyncSession,
    *,
    identifier: str,
    password: str,
    now: Optional[datetime] = None,
) -> User:
    """Check credentials for a username or email.

    Raises 401 on bad credentials (recording the failure), 423 while the
    account is locked and 403 for inactive accounts.
    """
    now = now or utc_now()
    result = await db.execute(
        select(User).where(or_(User.username == identifier, User.email == identifier))
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )

    if is_locked(attempt_state(user), now):
        raise HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail="Account temporarily locked due to too many failed login attempts",
        )

    if not verify_password(password, user.password_hash):
        await record_failed_login(db, user, now)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )

    if user.status != UserStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Account is not active"
        )

    apply_attempt_state(user, reset_attempts())
    user.last_login = now
    await db.commit()
    await db.refresh(user)
    return user
