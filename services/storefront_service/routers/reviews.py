"""Product reviews router. New reviews wait for moderation."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.storefront_service.models import Product, Review, ReviewStatus
from services.storefront_service.routers._helpers import get_or_404, paginate
from services.storefront_service.schemas import (
    ReviewCreate,
    ReviewListResponse,
    ReviewModerate,
    ReviewResponse,
)
from services.storefront_service.services.rating_ops import recompute_product_rating
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

router = APIRouter(tags=["reviews"])


def review_query(review_id: uuid.UUID):
    return (
        select(Review)
        .where(Review.id == review_id)
        .options(selectinload(Review.product))
    )


@router.get("", response_model=ReviewListResponse)
async def list_reviews(
    product_id: Optional[uuid.UUID] = None,
    status_filter: ReviewStatus = Query(ReviewStatus.APPROVED, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_async_db),
):
    """List reviews, approved ones by default."""
    query = (
        select(Review)
        .where(Review.status == status_filter)
        .options(selectinload(Review.product))
        .order_by(Review.created_at.desc())
    )
    if product_id:
        query = query.where(Review.product_id == product_id)

    reviews, meta = await paginate(db, query, page, page_size)
    return ReviewListResponse(items=reviews, **meta)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_in: ReviewCreate,
    db: AsyncSession = Depends(get_async_db),
):
    """Submit a review. It stays pending until an admin approves it."""
    await get_or_404(
        db,
        select(Product.id).where(Product.id == review_in.product_id),
        "Product not found",
    )

    review = Review(**review_in.model_dump(), status=ReviewStatus.PENDING)
    db.add(review)
    await recompute_product_rating(db, review.product_id)
    await db.commit()

    return await get_or_404(db, review_query(review.id), "Review not found")


@router.put("/{review_id}/moderate", response_model=ReviewResponse)
async def moderate_review(
    review_id: uuid.UUID,
    moderation: ReviewModerate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Approve or reject a review and refresh the product's rating."""
    review = await get_or_404(
        db, select(Review).where(Review.id == review_id), "Review not found"
    )
    review.status = ReviewStatus(moderation.status)
    review.moderated_by = uuid.UUID(current_user.user_id)
    review.moderated_at = utc_now()

    await recompute_product_rating(db, review.product_id)
    await db.commit()

    logger.info(
        "Review %s %s by %s", review_id, review.status.value, current_user.user_id
    )
    return await get_or_404(db, review_query(review_id), "Review not found")
