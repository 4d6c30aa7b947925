"""Admin router: dashboard, analytics and user management."""

import uuid
from datetime import timedelta
from decimal import Decimal
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.storefront_service.models import (
    BlogPost,
    BlogPostStatus,
    Contact,
    ContactStatus,
    Order,
    OrderStatus,
    Product,
    ProductStatus,
    Review,
    ReviewStatus,
    User,
    UserRole,
    UserStatus,
)
from services.storefront_service.routers._helpers import get_or_404, paginate
from services.storefront_service.schemas import (
    AnalyticsPeriod,
    AnalyticsResponse,
    BlogPostViews,
    DailyCount,
    DashboardStats,
    PopularProduct,
    UserListResponse,
    UserResponse,
    UserStatusUpdate,
)
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

router = APIRouter(tags=["admin"])

PERIOD_DAYS = {"7d": 7, "30d": 30, "90d": 90, "1y": 365}

USER_SORT_FIELDS = {
    "created_at": User.created_at,
    "username": User.username,
    "email": User.email,
    "last_login": User.last_login,
}


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Headline counts for the admin dashboard."""
    total_products = await db.scalar(select(func.count(Product.id)))
    total_orders = await db.scalar(select(func.count(Order.id)))
    pending_orders = await db.scalar(
        select(func.count(Order.id)).where(Order.status == OrderStatus.PENDING)
    )
    pending_reviews = await db.scalar(
        select(func.count(Review.id)).where(Review.status == ReviewStatus.PENDING)
    )
    new_contacts = await db.scalar(
        select(func.count(Contact.id)).where(Contact.status == ContactStatus.NEW)
    )
    revenue = await db.scalar(
        select(func.coalesce(func.sum(Order.total), 0)).where(
            Order.status.not_in([OrderStatus.CANCELLED, OrderStatus.REFUNDED])
        )
    )

    return DashboardStats(
        total_products=total_products or 0,
        total_orders=total_orders or 0,
        pending_orders=pending_orders or 0,
        pending_reviews=pending_reviews or 0,
        new_contacts=new_contacts or 0,
        revenue=Decimal(str(revenue or 0)).quantize(Decimal("0.01")),
    )


async def daily_counts(db: AsyncSession, created_at, since) -> list[DailyCount]:
    """Rows per calendar day (UTC) for ``created_at >= since``, oldest first."""
    day = func.date(created_at)
    result = await db.execute(
        select(day, func.count())
        .where(created_at >= since)
        .group_by(day)
        .order_by(day)
    )
    return [DailyCount(day=value, count=total) for value, total in result.all()]


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    period: AnalyticsPeriod = "30d",
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Activity over the period plus the most reviewed products and most read posts."""
    since = utc_now() - timedelta(days=PERIOD_DAYS[period])

    popular = await db.execute(
        select(Product)
        .where(Product.status == ProductStatus.ACTIVE)
        .order_by(Product.review_count.desc(), Product.rating.desc(), Product.name)
        .limit(10)
    )
    most_read = await db.execute(
        select(BlogPost)
        .where(BlogPost.status == BlogPostStatus.PUBLISHED)
        .order_by(BlogPost.views.desc(), BlogPost.title)
        .limit(10)
    )

    return AnalyticsResponse(
        period=period,
        contacts_over_time=await daily_counts(db, Contact.created_at, since),
        user_registrations=await daily_counts(db, User.created_at, since),
        popular_products=[
            PopularProduct.model_validate(p) for p in popular.scalars().all()
        ],
        blog_views=[BlogPostViews.model_validate(p) for p in most_read.scalars().all()],
    )


# ============================================================================
# USERS
# ============================================================================


@router.get("/users", response_model=UserListResponse)
async def list_users(
    role: Optional[UserRole] = None,
    status_filter: Optional[UserStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    sort_by: Literal["created_at", "username", "email", "last_login"] = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """List accounts with role, status and free-text filters."""
    query = select(User)
    if role:
        query = query.where(User.role == role)
    if status_filter:
        query = query.where(User.status == status_filter)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                User.username.ilike(pattern),
                User.email.ilike(pattern),
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
            )
        )

    column = USER_SORT_FIELDS[sort_by]
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc())

    users, meta = await paginate(db, query, page, page_size)
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in users], **meta
    )


def _reject_self(user_id: uuid.UUID, current_user: AuthUser, detail: str) -> None:
    if str(user_id) == current_user.user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.put("/users/{user_id}/status", response_model=UserResponse)
async def update_user_status(
    user_id: uuid.UUID,
    body: UserStatusUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Activate, deactivate or suspend an account."""
    _reject_self(user_id, current_user, "You cannot change your own status")
    user = await get_or_404(
        db, select(User).where(User.id == user_id), "User not found"
    )

    user.status = body.status
    await db.commit()
    await db.refresh(user)

    logger.info(
        "User %s set to %s by %s", user_id, body.status.value, current_user.user_id
    )
    return user


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Hard delete an account. Orders and posts keep their rows with no owner."""
    _reject_self(user_id, current_user, "You cannot delete your own account")
    user = await get_or_404(
        db, select(User).where(User.id == user_id), "User not found"
    )

    await db.delete(user)
    await db.commit()
    logger.info("User %s deleted by %s", user_id, current_user.user_id)
