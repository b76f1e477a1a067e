"""
Blog API Backend - HTTP Route Tests
====================================

What:  End-to-end tests through the ASGI app: middleware, auth gate,
       validation, services and the SQLite test database.
How:   HTTPX AsyncClient over ASGITransport (see conftest.test_client).

What we test:
    ✅ Public endpoints: /, /health, /signup, /signin
    ✅ Every /posts route rejects missing/invalid tokens with 401
    ✅ Path id and body validation → 400, before touching the database
    ✅ Post lifecycle: create → read → update → delete → 404
    ✅ Error envelope carries message + request_id
"""

from unittest.mock import AsyncMock, patch

import pytest

from blog_api.exceptions import ServiceUnavailableError
from blog_api.services.blog_service import blog_service


async def _create_post(client, headers, **overrides):
    payload = {"title": "Hey", "userId": 1, "body": "World", "tags": ["go"]}
    payload.update(overrides)
    response = await client.post("/posts", json=payload, headers=headers)
    assert response.status_code == 200
    return response.json()["transactionResult"]["blog"]


class TestPublicRoutes:
    @pytest.mark.asyncio
    async def test_root_says_hello(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "hello world"}

    @pytest.mark.asyncio
    async def test_health_reports_version(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["version"] == "1.0.0"

    @pytest.mark.asyncio
    async def test_every_response_has_request_id(self, test_client):
        response = await test_client.get("/")
        assert response.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"


class TestSignupSignin:
    @pytest.mark.asyncio
    async def test_signup_returns_token(self, test_client, ann):
        response = await test_client.post("/signup", json=ann)

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["message"] == "User created successfully"

    @pytest.mark.asyncio
    async def test_duplicate_signup_conflicts(self, test_client, ann):
        await test_client.post("/signup", json=ann)

        response = await test_client.post("/signup", json=ann)

        assert response.status_code == 409
        assert response.json()["message"] == "User already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"name": "An", "email": "a@x.com", "password": "secret1"},
            {"name": "Ann", "email": "not-an-email", "password": "secret1"},
            {"name": "Ann", "email": "a@x.com", "password": "short"},
            {"email": "a@x.com", "password": "secret1"},
        ],
    )
    async def test_invalid_signup_is_400(self, test_client, body):
        """Short name, bad email, short password and missing name are all rejected."""
        response = await test_client.post("/signup", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Invalid inputs"
        assert data["details"]["violations"]

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/signup", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_signin_after_signup(self, test_client, ann):
        await test_client.post("/signup", json=ann)

        response = await test_client.post(
            "/signin", json={"email": ann["email"], "password": ann["password"]}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "User logged in successfully"

    @pytest.mark.asyncio
    async def test_signin_wrong_password_is_401(self, test_client, ann):
        await test_client.post("/signup", json=ann)

        wrong = await test_client.post(
            "/signin", json={"email": ann["email"], "password": "not-it-1"}
        )
        unknown = await test_client.post(
            "/signin", json={"email": "nobody@x.com", "password": ann["password"]}
        )

        assert wrong.status_code == 401
        assert unknown.status_code == 401
        assert wrong.json()["message"] == unknown.json()["message"]


class TestAuthGate:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/posts"),
            ("POST", "/posts"),
            ("GET", "/posts/1"),
            ("PUT", "/posts/1"),
            ("DELETE", "/posts/1"),
        ],
    )
    async def test_missing_token_is_401(self, test_client, method, path):
        response = await test_client.request(method, path, json={})

        assert response.status_code == 401
        data = response.json()
        assert data["message"] == "authentication failed"
        assert data["request_id"]

    @pytest.mark.asyncio
    async def test_garbage_token_is_401(self, test_client):
        response = await test_client.get("/posts", headers={"Authorization": "garbage"})

        assert response.status_code == 401
        assert response.json()["message"] == "invalid token"

    @pytest.mark.asyncio
    async def test_bad_id_without_token_is_still_401(self, test_client):
        """The auth gate runs before the id check."""
        response = await test_client.get("/posts/abc")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_bearer_prefix_is_accepted(self, test_client, auth_headers):
        headers = {"Authorization": f"Bearer {auth_headers['Authorization']}"}

        response = await test_client.get("/posts", headers=headers)

        assert response.status_code == 200


class TestPostsValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "bad_id", ["abc", "0", "-1", "1.5", "²", "2147483648", "99999999999999999999"]
    )
    async def test_invalid_id_never_reaches_service(self, test_client, auth_headers, bad_id):
        with patch.object(blog_service, "get_blog", new=AsyncMock()) as mock_get:
            response = await test_client.get(f"/posts/{bad_id}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide a valid id"
        mock_get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_id_on_delete_is_400(self, test_client, auth_headers):
        response = await test_client.delete("/posts/abc", headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"userId": "1"},
            {"title": "Hi"},
            {"body": ""},
            {"tags": "go"},
        ],
    )
    async def test_invalid_create_body_is_400(self, test_client, auth_headers, overrides):
        payload = {"title": "Hello", "userId": 1, "body": "World", "tags": ["go"]}
        payload.update(overrides)

        response = await test_client.post("/posts", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid inputs"

    @pytest.mark.asyncio
    async def test_invalid_update_body_is_400(self, test_client, auth_headers):
        post = await _create_post(test_client, auth_headers, title="Hello")

        response = await test_client.put(
            f"/posts/{post['id']}", json={"title": "x"}, headers=auth_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["title", "body", "tags"])
    async def test_explicit_null_in_update_is_400(self, test_client, auth_headers, field):
        """Omitting a field leaves it unchanged; sending null is not the same thing."""
        post = await _create_post(test_client, auth_headers)

        response = await test_client.put(
            f"/posts/{post['id']}", json={field: None}, headers=auth_headers
        )
        fetched = await test_client.get(f"/posts/{post['id']}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["details"]["violations"][0]["field"] == field
        assert fetched.json()["title"] == "Hey"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_out_of_range_id_is_400_against_real_store(self, test_client, auth_headers, method):
        response = await test_client.request(
            method, "/posts/99999999999999999999", json={"title": "Hello"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide a valid id"

    @pytest.mark.asyncio
    async def test_largest_id_is_accepted_and_not_found(self, test_client, auth_headers):
        response = await test_client.get("/posts/2147483647", headers=auth_headers)
        assert response.status_code == 404


class TestPostsLifecycle:
    @pytest.mark.asyncio
    async def test_create_returns_blog_with_tags(self, test_client, auth_headers):
        response = await test_client.post(
            "/posts",
            json={"title": "Hey", "userId": 1, "body": "World", "tags": ["go"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        blog = response.json()["transactionResult"]["blog"]
        assert blog["title"] == "Hey"
        assert blog["body"] == "World"
        assert blog["userId"] == 1
        assert blog["tag"]["tag"] == ["go"]
        assert blog["tag"]["blogId"] == blog["id"]

    @pytest.mark.asyncio
    async def test_get_returns_stored_blog(self, test_client, auth_headers):
        post = await _create_post(test_client, auth_headers, tags=["a", "b"])

        response = await test_client.get(f"/posts/{post['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["tag"]["tag"] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_list_returns_all_posts(self, test_client, auth_headers):
        first = await _create_post(test_client, auth_headers, title="First")
        second = await _create_post(test_client, auth_headers, title="Second")

        response = await test_client.get("/posts", headers=auth_headers)

        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [first["id"], second["id"]]

    @pytest.mark.asyncio
    async def test_update_is_partial_and_replaces_tags(self, test_client, auth_headers):
        post = await _create_post(test_client, auth_headers, tags=["a", "b"])

        response = await test_client.put(
            f"/posts/{post['id']}", json={"tags": ["c"]}, headers=auth_headers
        )

        assert response.status_code == 200
        blog = response.json()["blog"]
        assert blog["title"] == "Hey"
        assert blog["body"] == "World"
        assert blog["tag"]["tag"] == ["c"]

    @pytest.mark.asyncio
    async def test_delete_then_get_is_404(self, test_client, auth_headers):
        post = await _create_post(test_client, auth_headers)

        deleted = await test_client.delete(f"/posts/{post['id']}", headers=auth_headers)
        fetched = await test_client.get(f"/posts/{post['id']}", headers=auth_headers)

        assert deleted.status_code == 200
        assert deleted.json() == {"message": "blog post deleted successfully"}
        assert fetched.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_unknown_id_is_404(self, test_client, auth_headers, method):
        response = await test_client.request(
            method, "/posts/9999", json={"title": "Nothing"}, headers=auth_headers
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_store_timeout_is_503_with_retry_after(self, test_client, auth_headers):
        with patch.object(
            blog_service,
            "list_blogs",
            new=AsyncMock(side_effect=ServiceUnavailableError(context={"operation": "list_blogs"})),
        ):
            response = await test_client.get("/posts", headers=auth_headers)

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "5"
        assert "operation" not in response.json()
