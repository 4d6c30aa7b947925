"""Product rating aggregation over approved reviews."""

import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from libs.common.logging import get_logger
from services.storefront_service.models import Product, Review, ReviewStatus
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


def aggregate_ratings(ratings: Iterable[int]) -> tuple[Decimal, int]:
    """Return ``(mean, count)``; the mean is rounded to two places, 0 when empty."""
    ratings = list(ratings)
    if not ratings:
        return Decimal("0.00"), 0
    mean = Decimal(sum(ratings)) / len(ratings)
    return mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP), len(ratings)


async def recompute_product_rating(
    db: AsyncSession, product_id: uuid.UUID
) -> Product | None:
    """Refresh a product's rating and review_count from its approved reviews.

    Locks the product row so concurrent moderation cannot lose an update.
    Does not commit; the caller owns the transaction.
    """
    await db.flush()  # pending review changes must be visible to the query
    result = await db.execute(
        select(Product)
        .where(Product.id == product_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    product = result.scalar_one_or_none()
    if product is None:
        return None

    ratings_result = await db.execute(
        select(Review.rating).where(
            Review.product_id == product_id,
            Review.status == ReviewStatus.APPROVED,
        )
    )
    product.rating, product.review_count = aggregate_ratings(ratings_result.scalars())
    await db.flush()

    logger.info(
        "Product %s rating=%s from %d approved reviews",
        product_id,
        product.rating,
        product.review_count,
    )
    return product
