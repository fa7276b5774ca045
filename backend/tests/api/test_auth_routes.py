"""Auth Routes — anonymous tokens, account creation, sign-in errors."""

import applixy.api.auth_tokens as auth_tokens
from applixy.config import get_settings


async def test_anonymous_sign_in_issues_token(client):
    res = await client.post("/api/v1/auth/anonymous")
    assert res.status_code == 200
    body = res.json()
    assert body["anonymous"] is True
    assert body["token_type"] == "bearer"
    assert auth_tokens.decode_token(body["access_token"], get_settings()) == body["user_id"]


async def test_create_account_then_sign_in(client):
    res = await client.post(
        "/api/v1/auth/accounts", json={"email": "sam@example.com", "password": "hunter22"},
    )
    assert res.status_code == 201
    user_id = res.json()["user_id"]

    res = await client.post(
        "/api/v1/auth/sign-in", json={"email": "SAM@example.com", "password": "hunter22"},
    )
    assert res.status_code == 200
    assert res.json()["user_id"] == user_id
    assert res.json()["anonymous"] is False


async def test_duplicate_account_is_409(client):
    creds = {"email": "sam@example.com", "password": "hunter22"}
    await client.post("/api/v1/auth/accounts", json=creds)
    res = await client.post("/api/v1/auth/accounts", json=creds)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ACCOUNT_EXISTS"


async def test_wrong_password_is_401(client):
    await client.post(
        "/api/v1/auth/accounts", json={"email": "sam@example.com", "password": "hunter22"},
    )
    res = await client.post(
        "/api/v1/auth/sign-in", json={"email": "sam@example.com", "password": "nope-nope"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_CREDENTIALS"


async def test_malformed_credentials_are_400(client):
    res = await client.post(
        "/api/v1/auth/accounts", json={"email": "not-an-email", "password": "x"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_tampered_token_is_rejected(client):
    res = await client.get("/api/v1/feed", headers={"Authorization": "Bearer abc.def.ghi"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "AUTH_REQUIRED"


async def test_validation_details_name_the_offending_fields(client):
    res = await client.post(
        "/api/v1/auth/accounts", json={"email": "not-an-email", "password": "x"},
    )
    error = res.json()["error"]
    fields = {d["field"] for d in error["details"]}
    assert "email" in fields
    assert error["message"].startswith("Please check:")
