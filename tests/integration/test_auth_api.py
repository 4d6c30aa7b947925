"""Integration tests for /auth endpoints, including lockout over HTTP."""

import pytest
from tests.factories import UserFactory


async def _make_user(db, **overrides):
    user = UserFactory.create(**overrides)
    db.add(user)
    await db.commit()
    return user


def _login(username, password=UserFactory.DEFAULT_PASSWORD) -> dict:
    return {"username": username, "password": password}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_then_me(client):
    response = await client.post(
        "/auth/register",
        json={
            "username": "woodworker",
            "email": "wood@test.com",
            "password": "plane-and-chisel",
            "firstName": "Wanda",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["tokenType"] == "bearer"
    assert data["user"]["username"] == "woodworker"
    assert data["user"]["role"] == "customer"
    assert "passwordHash" not in data["user"]

    me = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] == "wood@test.com"
    assert me.json()["firstName"] == "Wanda"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_duplicate_username_conflicts(client, db_session):
    user = await _make_user(db_session)

    response = await client.post(
        "/auth/register",
        json={
            "username": user.username,
            "email": "fresh@test.com",
            "password": "another-pass",
        },
    )
    assert response.status_code == 409
    assert response.json()["success"] is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_login_with_username_or_email(client, db_session):
    user = await _make_user(db_session)

    by_name = await client.post("/auth/login", json=_login(user.username))
    by_email = await client.post("/auth/login", json=_login(user.email))

    assert by_name.status_code == 200
    assert by_email.status_code == 200
    assert by_name.json()["user"]["lastLogin"] is not None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_login_token_grants_admin_routes(client, db_session):
    from services.storefront_service.models import UserRole

    admin = await _make_user(db_session, role=UserRole.STAFF)
    token = (await client.post("/auth/login", json=_login(admin.username))).json()[
        "token"
    ]

    response = await client.get(
        "/admin/dashboard", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.integration
async def test_repeated_failures_lock_account(client, db_session):
    user = await _make_user(db_session)

    for _ in range(5):
        response = await client.post(
            "/auth/login", json=_login(user.username, "wrong-password")
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    locked = await client.post("/auth/login", json=_login(user.username))
    assert locked.status_code == 423


@pytest.mark.asyncio
@pytest.mark.integration
async def test_garbage_token_is_rejected(client):
    response = await client.get(
        "/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Token is not valid"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_refresh_issues_new_token_pair(client, db_session):
    user = await _make_user(db_session)
    login = (await client.post("/auth/login", json=_login(user.username))).json()

    refreshed = await client.post(
        "/auth/refresh", json={"refreshToken": login["refreshToken"]}
    )
    assert refreshed.status_code == 200
    data = refreshed.json()
    assert data["user"]["id"] == str(user.id)

    me = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert me.status_code == 200


@pytest.mark.asyncio
@pytest.mark.integration
async def test_tokens_are_not_interchangeable(client, db_session):
    user = await _make_user(db_session)
    login = (await client.post("/auth/login", json=_login(user.username))).json()

    as_refresh = await client.post(
        "/auth/refresh", json={"refreshToken": login["token"]}
    )
    assert as_refresh.status_code == 401
    assert as_refresh.json()["message"] == "Invalid refresh token"

    as_bearer = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {login['refreshToken']}"}
    )
    assert as_bearer.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_refresh_rejected_for_inactive_account(client, db_session):
    from services.storefront_service.models import UserStatus

    user = await _make_user(db_session)
    login = (await client.post("/auth/login", json=_login(user.username))).json()

    user.status = UserStatus.INACTIVE
    await db_session.commit()

    response = await client.post(
        "/auth/refresh", json={"refreshToken": login["refreshToken"]}
    )
    assert response.status_code == 403
