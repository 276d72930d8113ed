"""
Tests for AccessGate and the interceptor chain
"""

import pytest
from datetime import datetime, timedelta, timezone

import jwt
from fastapi.testclient import TestClient

from app.api.context import AccessGate, RequestContext
from app.domain.errors import AuthError
from app.services.token_service import TokenService

SECRET = "unit-test-secret-key-with-at-least-32-bytes"


def make_ctx(path: str = "/cart", headers: dict | None = None) -> RequestContext:
    return RequestContext(method="GET", path=path, headers=headers or {})


class TestAccessGateUnit:

    def test_binds_user_id(self):
        tokens = TokenService(secret_key=SECRET)
        ctx = make_ctx(headers={"authorization": f"Bearer {tokens.issue(7)}"})

        AccessGate(tokens)(ctx)

        assert ctx.user_id == 7

    @pytest.mark.parametrize("path", ["/register", "/login"])
    def test_public_paths_skip_check(self, path):
        ctx = make_ctx(path=path)

        AccessGate(TokenService(secret_key=SECRET))(ctx)

        assert ctx.user_id is None

    @pytest.mark.parametrize("header", ["", "Bearer", "Bearer   ", "Basic abc"])
    def test_missing_token_is_forbidden(self, header):
        ctx = make_ctx(headers={"authorization": header})

        with pytest.raises(AuthError) as exc:
            AccessGate(TokenService(secret_key=SECRET))(ctx)

        assert exc.value.status_code == 403
        assert ctx.user_id is None

    def test_invalid_token_is_unauthorized(self):
        ctx = make_ctx(headers={"authorization": "Bearer abc.def.ghi"})

        with pytest.raises(AuthError) as exc:
            AccessGate(TokenService(secret_key=SECRET))(ctx)

        assert exc.value.status_code == 401


class TestAccessGateHttp:

    def test_no_header(self, client: TestClient):
        response = client.get("/cart")

        assert response.status_code == 403
        assert response.json() == {"error": "Token is required"}

    def test_invalid_token(self, client: TestClient):
        response = client.get("/cart", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_expired_token(self, client: TestClient, app):
        token_service = app.state.token_service
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "1", "iat": past, "exp": past + timedelta(minutes=1)},
            token_service.secret_key,
            algorithm=token_service.algorithm,
        )

        response = client.get("/orders", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/categories"),
            ("get", "/products/1"),
            ("get", "/product/1"),
            ("post", "/cart"),
            ("put", "/cart/1"),
            ("delete", "/cart/1"),
            ("post", "/orders"),
            ("get", "/orders"),
            ("get", "/orders/1"),
        ],
    )
    def test_protected_endpoints(self, client: TestClient, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 403

    def test_register_and_login_are_public(self, client: TestClient):
        assert client.post("/register", json={"username": "a", "password": "b"}).status_code == 201
        assert client.post("/login", json={"username": "a", "password": "b"}).status_code == 200

    def test_cart_bound_to_token_user(self, client: TestClient, auth_headers):
        alice = auth_headers("alice", "pw1")
        bob = auth_headers("bob", "pw2")

        client.post("/cart", json={"productId": 1, "quantity": 2}, headers=alice)

        assert client.get("/cart", headers=bob).json()["items"] == []
        assert len(client.get("/cart", headers=alice).json()["items"]) == 1

    def test_token_for_missing_user(self, client: TestClient, app):
        # podpis i exp poprawne, ale user 999 nie istnieje (np. baza zresetowana)
        token = app.state.token_service.issue(999)
        headers = {"Authorization": f"Bearer {token}"}

        response = client.get("/cart", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert client.post("/cart", json={"productId": 1, "quantity": 1}, headers=headers).status_code == 401
        assert client.delete("/cart/1", headers=headers).status_code == 401
