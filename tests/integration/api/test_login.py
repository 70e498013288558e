"""
Integration tests for POST /api/login
"""
import pytest
from httpx import AsyncClient

from tests.integration.api.helpers import signup

BAD_CREDENTIALS = "Incorrect email or password. Please double-check your credentials."


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient):
    created = await signup(client)

    response = await client.post("/api/login", json={"email": "a@x.com", "password": "secret1"})

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_wrong_password(client: AsyncClient):
    await signup(client)

    response = await client.post("/api/login", json={"email": "a@x.com", "password": "wrong"})

    assert response.status_code == 401
    error = response.json()["error"]
    assert error["code"] == "INVALID_CREDENTIALS"
    assert error["message"] == BAD_CREDENTIALS


@pytest.mark.asyncio
async def test_unknown_email_matches_wrong_password(client: AsyncClient):
    """No user enumeration: identical status and body"""
    await signup(client)

    wrong_password = await client.post(
        "/api/login", json={"email": "a@x.com", "password": "wrong"}
    )
    unknown_email = await client.post(
        "/api/login", json={"email": "nobody@x.com", "password": "wrong"}
    )

    assert unknown_email.status_code == wrong_password.status_code == 401
    assert unknown_email.json() == wrong_password.json()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload", [{"email": "a@x.com"}, {"password": "secret1"}, {}, {"email": "", "password": ""}]
)
async def test_missing_fields(client: AsyncClient, payload):
    response = await client.post("/api/login", json=payload)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Email and password are required."
