"""Integration tests for product rating recomputation."""

import uuid
from decimal import Decimal

import pytest
from services.storefront_service.models import ReviewStatus
from services.storefront_service.services.rating_ops import recompute_product_rating
from tests.factories import ProductFactory, ReviewFactory


async def _product_with_reviews(db, reviews):
    product = ProductFactory.create()
    db.add(product)
    await db.flush()
    for rating, status in reviews:
        db.add(ReviewFactory.create(product.id, rating=rating, status=status))
    await db.commit()
    return product


@pytest.mark.asyncio
@pytest.mark.integration
async def test_only_approved_reviews_count(db_session):
    """[5, 4, 3] approved plus a pending 1 -> rating 4.00 from 3 reviews."""
    product = await _product_with_reviews(
        db_session,
        [
            (5, ReviewStatus.APPROVED),
            (4, ReviewStatus.APPROVED),
            (3, ReviewStatus.APPROVED),
            (1, ReviewStatus.PENDING),
            (1, ReviewStatus.REJECTED),
        ],
    )

    updated = await recompute_product_rating(db_session, product.id)
    await db_session.commit()

    assert updated.rating == Decimal("4.00")
    assert updated.review_count == 3

    await db_session.refresh(product)
    assert product.rating == Decimal("4.00")
    assert product.review_count == 3


@pytest.mark.asyncio
@pytest.mark.integration
async def test_no_approved_reviews_resets_rating(db_session):
    product = await _product_with_reviews(db_session, [(2, ReviewStatus.PENDING)])
    product.rating = Decimal("3.50")
    product.review_count = 2
    await db_session.commit()

    updated = await recompute_product_rating(db_session, product.id)

    assert updated.rating == Decimal("0.00")
    assert updated.review_count == 0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unknown_product_returns_none(db_session):
    assert await recompute_product_rating(db_session, uuid.uuid4()) is None
