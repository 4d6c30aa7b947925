"""Authentication router: registration, login, token refresh, current user."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, status
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.auth.tokens import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)
from libs.common.rate_limit import auth_limit
from libs.db.session import get_async_db
from services.storefront_service.models import User, UserStatus
from services.storefront_service.routers._helpers import get_or_404
from services.storefront_service.schemas import (
    LoginRequest,
    RefreshRequest,
    TokenResponse,
    UserRegister,
    UserResponse,
)
from services.storefront_service.services.account_ops import (
    authenticate_user,
    register_user,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["auth"])


def issue_token(user: User) -> TokenResponse:
    token = create_access_token(
        str(user.id), role=user.role.value, email=user.email
    )
    return TokenResponse(
        token=token,
        refresh_token=create_refresh_token(str(user.id)),
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED
)
@auth_limit
async def register(
    request: Request,
    user_in: UserRegister,
    db: AsyncSession = Depends(get_async_db),
):
    """Create a customer account and sign it in."""
    user = await register_user(db, **user_in.model_dump())
    return issue_token(user)


@router.post("/login", response_model=TokenResponse)
@auth_limit
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Sign in with username or email."""
    user = await authenticate_user(
        db, identifier=credentials.username, password=credentials.password
    )
    return issue_token(user)


@router.post("/refresh", response_model=TokenResponse)
@auth_limit
async def refresh(
    request: Request,
    body: RefreshRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Exchange a refresh token for a new token pair."""
    subject = decode_refresh_token(body.refresh_token)
    try:
        user_id = uuid.UUID(subject)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token"
        )

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token"
        )
    if user.status != UserStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Account is not active"
        )
    return issue_token(user)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    return await get_or_404(
        db,
        select(User).where(User.id == uuid.UUID(current_user.user_id)),
        "User not found",
    )
