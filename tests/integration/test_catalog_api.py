"""Integration tests for products, categories and tags."""

import uuid
from decimal import Decimal

import pytest
from services.storefront_service.models import ProductStatus
from tests.factories import CategoryFactory, ProductFactory, TagFactory

# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_category_slug_is_derived_and_follows_renames(client, admin_headers):
    created = await client.post(
        "/categories", json={"name": "Living Room"}, headers=admin_headers
    )
    assert created.status_code == 201
    assert created.json()["slug"] == "living-room"

    renamed = await client.patch(
        f"/categories/{created.json()['id']}",
        json={"name": "Family Room"},
        headers=admin_headers,
    )
    assert renamed.status_code == 200
    assert renamed.json()["slug"] == "family-room"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_resaving_category_form_keeps_custom_slug(client, admin_headers):
    created = await client.post(
        "/categories",
        json={"name": "Living Room", "slug": "lounge"},
        headers=admin_headers,
    )
    assert created.json()["slug"] == "lounge"

    resaved = await client.patch(
        f"/categories/{created.json()['id']}",
        json={"name": "Living Room", "description": "Sofas and armchairs"},
        headers=admin_headers,
    )
    assert resaved.status_code == 200
    assert resaved.json()["slug"] == "lounge"
    assert resaved.json()["description"] == "Sofas and armchairs"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_duplicate_category_name_conflicts(client, admin_headers):
    await client.post("/categories", json={"name": "Office"}, headers=admin_headers)
    response = await client.post(
        "/categories", json={"name": "Office"}, headers=admin_headers
    )
    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "Resource already exists"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_category_tree_lists_active_children(client, db_session):
    root = CategoryFactory.create(name="Bedroom", slug="bedroom")
    db_session.add(root)
    await db_session.flush()
    db_session.add_all(
        [
            CategoryFactory.create(name="Beds", slug="beds", parent_id=root.id),
            CategoryFactory.create(
                name="Old Stock", slug="old-stock", parent_id=root.id, is_active=False
            ),
        ]
    )
    await db_session.commit()

    response = await client.get("/categories")

    assert response.status_code == 200
    [tree] = response.json()
    assert tree["slug"] == "bedroom"
    assert [child["slug"] for child in tree["children"]] == ["beds"]


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_tag_create_and_duplicate(client, admin_headers):
    created = await client.post(
        "/tags", json={"name": "Hand Made", "color": "#AA5500"}, headers=admin_headers
    )
    assert created.status_code == 201
    assert created.json()["slug"] == "hand-made"
    assert created.json()["usageCount"] == 0

    duplicate = await client.post(
        "/tags", json={"name": "Hand Made"}, headers=admin_headers
    )
    assert duplicate.status_code == 409


@pytest.mark.asyncio
@pytest.mark.integration
async def test_tag_name_without_slug_characters_is_rejected(client, admin_headers):
    response = await client.post("/tags", json={"name": "!!!"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_tags_ordered_by_usage(client, db_session, admin_headers):
    rare = TagFactory.create(name="Rare", slug="rare")
    popular = TagFactory.create(name="Popular", slug="popular")
    db_session.add_all([rare, popular])
    await db_session.commit()

    for _ in range(2):
        await client.post(
            "/products",
            json={
                "name": "Chair",
                "description": "A chair",
                "price": "40.00",
                "tagIds": [str(popular.id)],
            },
            headers=admin_headers,
        )

    response = await client.get("/tags")
    assert [t["slug"] for t in response.json()] == ["popular", "rare"]
    assert response.json()[0]["usageCount"] == 2

    await client.delete(f"/tags/{rare.id}", headers=admin_headers)
    assert [t["slug"] for t in (await client.get("/tags")).json()] == ["popular"]


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_create_requires_admin(client):
    response = await client.post(
        "/products", json={"name": "Desk", "description": "Oak", "price": "10"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_list_filters(client, db_session):
    office = CategoryFactory.create(name="Office", slug="office")
    db_session.add(office)
    await db_session.flush()
    db_session.add_all(
        [
            ProductFactory.create(
                name="Standing Desk", price=Decimal("450.00"), category_id=office.id
            ),
            ProductFactory.create(name="Walnut Sofa", price=Decimal("1200.00")),
            ProductFactory.create(
                name="Archived Lamp",
                price=Decimal("30.00"),
                status=ProductStatus.ARCHIVED,
            ),
        ]
    )
    await db_session.commit()

    everything = (await client.get("/products")).json()
    assert everything["total"] == 2

    by_category = (await client.get("/products", params={"category": "office"})).json()
    assert [p["name"] for p in by_category["items"]] == ["Standing Desk"]

    by_price = (
        await client.get("/products", params={"min_price": "500", "sort_by": "price"})
    ).json()
    assert [p["name"] for p in by_price["items"]] == ["Walnut Sofa"]

    by_search = (await client.get("/products", params={"search": "desk"})).json()
    assert by_search["total"] == 1


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_update_and_archive(client, db_session, admin_headers):
    product = ProductFactory.create(name="Pine Bed")
    db_session.add(product)
    await db_session.commit()

    updated = await client.patch(
        f"/products/{product.id}",
        json={"price": "199.99", "stockQuantity": 3},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert Decimal(updated.json()["price"]) == Decimal("199.99")
    assert updated.json()["stockQuantity"] == 3

    archived = await client.delete(f"/products/{product.id}", headers=admin_headers)
    assert archived.status_code == 204
    assert (await client.get("/products")).json()["total"] == 0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_negative_price_is_rejected(client, admin_headers):
    response = await client.post(
        "/products",
        json={"name": "Stool", "description": "Three legs", "price": "-1"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "price"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_with_unknown_category_is_not_found(client, admin_headers):
    response = await client.post(
        "/products",
        json={
            "name": "Stool",
            "description": "Three legs",
            "price": "40",
            "categoryId": str(uuid.uuid4()),
        },
        headers=admin_headers,
    )
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Category not found"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_move_to_unknown_category_is_not_found(
    client, db_session, admin_headers
):
    product = ProductFactory.create(name="Pine Chest")
    db_session.add(product)
    await db_session.commit()

    response = await client.patch(
        f"/products/{product.id}",
        json={"categoryId": str(uuid.uuid4())},
        headers=admin_headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Category not found"
