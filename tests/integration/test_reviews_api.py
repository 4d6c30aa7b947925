"""Integration tests for /reviews and their effect on product ratings."""

import uuid
from decimal import Decimal

import pytest
from services.storefront_service.models import Review, ReviewStatus
from tests.factories import ProductFactory, ReviewFactory


async def _make_product(db):
    product = ProductFactory.create()
    db.add(product)
    await db.commit()
    return product


def _review_body(product_id, rating=5, **overrides) -> dict:
    body = {
        "productId": str(product_id),
        "rating": rating,
        "comment": "Sturdy, well finished and easy to assemble.",
        "reviewerName": "Ada",
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
@pytest.mark.integration
async def test_new_review_is_pending_and_does_not_move_rating(client, db_session):
    product = await _make_product(db_session)

    response = await client.post("/reviews", json=_review_body(product.id, rating=1))

    assert response.status_code == 201
    assert response.json()["status"] == "pending"

    detail = (await client.get(f"/products/{product.id}")).json()
    assert Decimal(detail["rating"]) == Decimal("0")
    assert detail["reviewCount"] == 0
    assert detail["reviews"] == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_review_for_missing_product_is_404(client):
    response = await client.post("/reviews", json=_review_body(uuid.uuid4()))
    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_review_rating_out_of_range_is_rejected(client, db_session):
    product = await _make_product(db_session)
    response = await client.post("/reviews", json=_review_body(product.id, rating=6))
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "rating"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_moderation_recomputes_rating(client, db_session, admin_headers):
    """Approving [5, 4, 3] gives 4.00; rejecting the 3 moves it to 4.50."""
    product = await _make_product(db_session)
    review_ids = []
    for rating in (5, 4, 3):
        created = await client.post("/reviews", json=_review_body(product.id, rating))
        review_ids.append(created.json()["id"])

    for review_id in review_ids:
        response = await client.put(
            f"/reviews/{review_id}/moderate",
            json={"status": "approved"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert response.json()["moderatedAt"] is not None

    detail = (await client.get(f"/products/{product.id}")).json()
    assert Decimal(detail["rating"]) == Decimal("4.00")
    assert detail["reviewCount"] == 3
    assert len(detail["reviews"]) == 3

    await client.put(
        f"/reviews/{review_ids[2]}/moderate",
        json={"status": "rejected"},
        headers=admin_headers,
    )
    detail = (await client.get(f"/products/{product.id}")).json()
    assert Decimal(detail["rating"]) == Decimal("4.50")
    assert detail["reviewCount"] == 2


@pytest.mark.asyncio
@pytest.mark.integration
async def test_moderation_records_moderator_id(
    client, db_session, admin_user, admin_headers
):
    product = await _make_product(db_session)
    created = await client.post("/reviews", json=_review_body(product.id, 4))
    review_id = uuid.UUID(created.json()["id"])

    await client.put(
        f"/reviews/{review_id}/moderate",
        json={"status": "approved"},
        headers=admin_headers,
    )

    review = await db_session.get(Review, review_id, populate_existing=True)
    assert review.moderated_by == admin_user.id
    assert isinstance(review.moderated_by, uuid.UUID)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_moderation_only_accepts_approve_or_reject(
    client, db_session, admin_headers
):
    product = await _make_product(db_session)
    review = ReviewFactory.create(product.id)
    db_session.add(review)
    await db_session.commit()

    response = await client.put(
        f"/reviews/{review.id}/moderate",
        json={"status": "spam"},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.integration
async def test_review_list_defaults_to_approved(client, db_session):
    product = await _make_product(db_session)
    db_session.add_all(
        [
            ReviewFactory.create(product.id, status=ReviewStatus.APPROVED),
            ReviewFactory.create(product.id, status=ReviewStatus.PENDING),
        ]
    )
    await db_session.commit()

    response = await client.get("/reviews", params={"product_id": str(product.id)})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["status"] == "approved"
    assert data["items"][0]["product"]["id"] == str(product.id)

    pending = await client.get(
        "/reviews", params={"product_id": str(product.id), "status": "pending"}
    )
    assert pending.json()["total"] == 1
