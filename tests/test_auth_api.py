"""
HTTP tests for /api/auth/* and /api/profile.
"""

import uuid
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from sqlalchemy.exc import DBAPIError

from auth.jwt import create_token
from database.session import engine

ALICE = {"username": "alice", "email": "alice@x.com", "password": "secret1"}


async def _signup(client, **overrides) -> httpx.Response:
    return await client.post("/api/auth/signup", json={**ALICE, **overrides})


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestSignup:
    @pytest.mark.asyncio
    async def test_oversized_username_is_400(self, client):
        resp = await _signup(client, username="a" * 65)
        assert resp.status_code == 400
        assert resp.json() == {"message": "Username must be at most 64 characters."}

    @pytest.mark.asyncio
    async def test_signup_returns_token_and_user(self, client):
        resp = await _signup(client)
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "User registered successfully"
        assert body["user"]["username"] == "alice"
        assert body["user"]["email"] == "alice@x.com"
        assert body["token"]
        assert "password" not in body["user"]

    @pytest.mark.asyncio
    async def test_short_username(self, client):
        resp = await _signup(client, username="ab")
        assert resp.status_code == 400
        assert resp.json() == {"message": "Username must be at least 3 characters."}

    @pytest.mark.asyncio
    async def test_bad_email(self, client):
        resp = await _signup(client, email="alice")
        assert resp.status_code == 400
        assert resp.json()["message"] == "A valid email is required."

    @pytest.mark.asyncio
    async def test_repeat_signup_conflicts(self, client):
        assert (await _signup(client)).status_code == 201
        resp = await _signup(client)
        assert resp.status_code == 409
        assert resp.json() == {"message": "User already exists"}

    @pytest.mark.asyncio
    async def test_reused_username_with_new_email_conflicts(self, client):
        await _signup(client)
        resp = await _signup(client, email="other@x.com")
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, client):
        resp = await client.post(
            "/api/auth/signup",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_with_username_and_email(self, client):
        signup = (await _signup(client)).json()
        for identifier in ("alice", "alice@x.com"):
            resp = await client.post(
                "/api/auth/login",
                json={"emailOrUsername": identifier, "password": "secret1"},
            )
            assert resp.status_code == 200
            body = resp.json()
            assert body["user"] == signup["user"]
            assert body["token"]

    @pytest.mark.asyncio
    async def test_invalid_credentials_are_uniform(self, client):
        await _signup(client)
        wrong_pw = await client.post(
            "/api/auth/login", json={"emailOrUsername": "alice", "password": "wrong-pw"}
        )
        unknown = await client.post(
            "/api/auth/login", json={"emailOrUsername": "ghost", "password": "secret1"}
        )
        assert wrong_pw.status_code == unknown.status_code == 401
        assert wrong_pw.json() == unknown.json() == {"message": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_missing_identifier(self, client):
        resp = await client.post("/api/auth/login", json={"password": "secret1"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Email or username is required."

    @pytest.mark.asyncio
    async def test_short_password_rejected_before_lookup(self, client):
        with patch("database.users.UserStore.find_by_identifier", new_callable=AsyncMock) as lookup:
            resp = await client.post(
                "/api/auth/login", json={"emailOrUsername": "alice", "password": "abc"}
            )
        assert resp.status_code == 400
        lookup.assert_not_called()


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_is_stateless(self, client):
        resp = await client.post("/api/auth/logout")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Logged out"}


class TestProfileEndpoints:
    @pytest.mark.asyncio
    async def test_requires_token(self, client):
        resp = await client.get("/api/profile")
        assert resp.status_code == 401
        assert resp.json() == {"message": "No token provided"}

    @pytest.mark.asyncio
    async def test_invalid_and_expired_tokens_look_the_same(self, client):
        token = (await _signup(client)).json()["token"]
        expired = create_token(str(uuid.uuid4()), "alice", expires_in=-5)

        tampered = await client.get("/api/profile", headers=_bearer(token + "x"))
        stale = await client.get("/api/profile", headers=_bearer(expired))

        assert tampered.status_code == stale.status_code == 403
        assert tampered.json() == stale.json() == {"message": "Invalid token"}

    @pytest.mark.asyncio
    async def test_token_for_missing_user(self, client):
        token = create_token(str(uuid.uuid4()), "ghost")
        resp = await client.get("/api/profile", headers=_bearer(token))
        assert resp.status_code == 404
        assert resp.json() == {"message": "User not found"}

    @pytest.mark.asyncio
    async def test_read_update_round_trip(self, client):
        token = (await _signup(client)).json()["token"]

        resp = await client.put(
            "/api/profile",
            headers=_bearer(token),
            json={"name": "X", "codeforces": "alice_cf"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"message": "Profile updated successfully"}

        profile = (await client.get("/api/profile", headers=_bearer(token))).json()
        assert profile == {
            "name": "X",
            "username": "alice",
            "codeforces": "alice_cf",
            "codechef": "",
            "leetcode": "",
            "email": "alice@x.com",
        }

    @pytest.mark.asyncio
    async def test_password_change_flow(self, client):
        token = (await _signup(client)).json()["token"]

        missing = await client.put(
            "/api/profile", headers=_bearer(token), json={"password": "newsecret"}
        )
        assert missing.status_code == 400

        wrong = await client.put(
            "/api/profile",
            headers=_bearer(token),
            json={"password": "newsecret", "oldPassword": "nope-nope"},
        )
        assert wrong.status_code == 401
        assert wrong.json() == {"message": "Old password is incorrect."}

        still_old = await client.post(
            "/api/auth/login", json={"emailOrUsername": "alice", "password": "secret1"}
        )
        assert still_old.status_code == 200

        ok = await client.put(
            "/api/profile",
            headers=_bearer(token),
            json={"password": "newsecret", "oldPassword": "secret1"},
        )
        assert ok.status_code == 200
        relogin = await client.post(
            "/api/auth/login", json={"emailOrUsername": "alice", "password": "newsecret"}
        )
        assert relogin.status_code == 200

    @pytest.mark.asyncio
    async def test_username_taken(self, client):
        await _signup(client, username="bobby", email="bob@x.com")
        token = (await _signup(client)).json()["token"]
        resp = await client.put("/api/profile", headers=_bearer(token), json={"username": "bobby"})
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_generic_500(self, app):
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        token = create_token(str(uuid.uuid4()), "alice")
        with patch(
            "auth.service.AuthService.get_profile",
            new_callable=AsyncMock,
            side_effect=RuntimeError("store unavailable"),
        ):
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
                resp = await c.get("/api/profile", headers=_bearer(token))
        assert resp.status_code == 500
        assert resp.json() == {"message": "Internal server error", "error": "store unavailable"}

    @pytest.mark.asyncio
    async def test_database_failure_hides_statement_and_parameters(self, app):
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        token = create_token(str(uuid.uuid4()), "alice")
        failure = DBAPIError(
            "UPDATE users SET password_hash=? WHERE user_id=?",
            ("$2b$04$leaked-digest", "alice"),
            Exception("value too long for type character varying(255)"),
        )
        with patch(
            "auth.service.AuthService.get_profile",
            new_callable=AsyncMock,
            side_effect=failure,
        ):
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
                resp = await c.get("/api/profile", headers=_bearer(token))
        assert resp.status_code == 500
        assert resp.json() == {"message": "Internal server error", "error": "Database error"}
        assert "leaked-digest" not in resp.text
        assert "password_hash" not in resp.text

    def test_engine_hides_bound_parameters(self):
        assert engine.sync_engine.hide_parameters is True

    @pytest.mark.asyncio
    async def test_oversized_profile_field_is_400(self, client):
        token = (await _signup(client)).json()["token"]
        resp = await client.put("/api/profile", headers=_bearer(token), json={"leetcode": "x" * 256})
        assert resp.status_code == 400
        assert resp.json() == {"message": "LeetCode handle must be at most 255 characters."}
