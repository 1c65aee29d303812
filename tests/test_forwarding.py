"""
Tests for resource forwarding
"""

import httpx
import pytest


class TestPassThrough:
    """Backend answers are relayed unchanged"""

    def test_status_and_body_relayed(self, client, backend):
        backend.respond(200, json_body=[{"id": 7, "name": "Crate"}])

        response = client.get("/api/containers")

        assert response.status_code == 200
        assert response.json() == [{"id": 7, "name": "Crate"}]
        assert response.headers["content-type"] == "application/json"
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("status_code", [201, 204, 404, 422, 500])
    def test_backend_status_relayed_verbatim(self, client, backend, status_code):
        content = b"" if status_code == 204 else b'{"detail": "from backend"}'
        backend.respond(status_code, content=content, headers={"content-type": "application/json"})

        response = client.put("/api/stock-items/3", json={"name": "Widget"})

        assert response.status_code == status_code
        assert response.content == content

    def test_non_json_content_type_preserved(self, client, backend):
        backend.respond(200, content=b"plain answer", headers={"content-type": "text/plain"})

        response = client.get("/api/stock-items/categories")

        assert response.text == "plain answer"
        assert response.headers["content-type"] == "text/plain"

    def test_cors_methods_match_route(self, client, backend):
        response = client.get("/api/branches/2")

        assert response.headers["access-control-allow-methods"] == "GET, PUT, DELETE, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"


class TestOutboundRequest:
    """What the gateway sends to the backend"""

    def test_target_url_built_from_base(self, client, backend):
        client.get("/api/purchase-orders/12")

        assert backend.last.url.host == "backend.test"
        assert backend.last.url.path == "/api/purchase-orders/12"
        assert backend.last.method == "GET"

    def test_collection_uses_trailing_slash(self, client, backend):
        client.get("/api/suppliers?search=acme")

        assert backend.last.url.path == "/api/suppliers/"
        assert backend.last.url.params["search"] == "acme"

    def test_pagination_defaults_added(self, client, backend):
        client.get("/api/stock-items")

        assert backend.last.url.params["skip"] == "0"
        assert backend.last.url.params["limit"] == "100"

    def test_pagination_values_forwarded(self, client, backend):
        client.get("/api/users?skip=20&limit=10")

        assert backend.last.url.params["skip"] == "20"
        assert backend.last.url.params["limit"] == "10"

    def test_skip_warning_header_always_sent(self, client, backend):
        client.get("/api/customers/1")

        assert backend.last.headers["ngrok-skip-browser-warning"] == "true"

    def test_authorization_forwarded(self, client, backend):
        client.get("/api/invoices/4", headers={"Authorization": "Bearer abc"})

        assert backend.last.headers["authorization"] == "Bearer abc"

    def test_session_cookie_forwarded_as_bearer(self, client, backend):
        client.get("/api/permissions", headers={"Cookie": "auth_token=cookie-token"})

        assert backend.last.headers["authorization"] == "Bearer cookie-token"

    def test_no_authorization_when_absent(self, client, backend):
        response = client.get("/api/permissions")

        assert response.status_code == 200
        assert "authorization" not in backend.last.headers

    def test_browser_headers_not_forwarded(self, client, backend):
        client.get(
            "/api/customers",
            headers={"Origin": "https://app.example", "Referer": "https://app.example/x", "X-Custom": "1"},
        )

        assert "origin" not in backend.last.headers
        assert "referer" not in backend.last.headers
        assert "x-custom" not in backend.last.headers
        assert backend.last.headers["host"] == "backend.test"

    def test_body_forwarded_for_writes(self, client, backend):
        client.post(
            "/api/customers",
            content=b'{"name": "ACME"}',
            headers={"Content-Type": "application/json"},
        )

        assert backend.last.method == "POST"
        assert backend.last.content == b'{"name": "ACME"}'
        assert backend.last.headers["content-type"] == "application/json"

    def test_delete_forwarded(self, client, backend):
        backend.respond(204)

        response = client.delete("/api/roles/5")

        assert response.status_code == 204
        assert backend.last.method == "DELETE"
        assert backend.last.url.path == "/api/roles/5"

    def test_string_parameters_quoted(self, client, backend):
        client.get("/api/roles/slug/sales rep")

        assert backend.last.url.raw_path == b"/api/roles/slug/sales%20rep"

    def test_nested_identifiers(self, client, backend):
        client.post("/api/roles/3/permissions/9")

        assert backend.last.url.path == "/api/roles/3/permissions/9"

    def test_exactly_one_call_per_request(self, client, backend):
        backend.respond(503, json_body={"detail": "down"})

        client.get("/api/customers/1")

        assert len(backend.requests) == 1


class TestTransportFailures:
    """Network failures surface as an error envelope"""

    def test_connection_failure_returns_500(self, client, backend):
        backend.fail(httpx.ConnectError, "connection refused")

        response = client.get("/api/containers/8")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to process container request"
        assert "connection refused" in data["details"]
        assert response.headers["access-control-allow-origin"] == "*"

    def test_timeout_returns_500(self, client, backend):
        backend.fail(httpx.ReadTimeout, "timed out")

        response = client.put("/api/invoices/8", json={})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to process invoice request"

    def test_login_failure_envelope(self, client, backend):
        backend.fail()

        response = client.post("/api/auth/login", json={"email": "a@b.c", "password": "x"})

        assert response.status_code == 500
        assert response.json()["error"] == "Login failed"


class TestRedirects:
    """Backend redirects are followed and the final answer relayed"""

    @pytest.mark.parametrize("method", ["put", "delete"])
    def test_container_writes_use_trailing_slash(self, client, backend, method):
        kwargs = {"json": {"name": "Crate"}} if method == "put" else {}

        getattr(client, method)("/api/containers/5", **kwargs)

        assert backend.last.url.path == "/api/containers/5/"

    def test_container_read_has_no_trailing_slash(self, client, backend):
        client.get("/api/containers/5")

        assert backend.last.url.path == "/api/containers/5"

    def test_trailing_slash_redirect_followed(self, client, backend):
        def handler(request):
            if not request.url.path.endswith("/"):
                return httpx.Response(307, headers={"location": f"{request.url.path}/"})
            return httpx.Response(200, json={"id": 5, "name": "Crate"})

        backend.handler = handler

        response = client.put(
            "/api/stock-items/5",
            content=b'{"name": "Crate"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"id": 5, "name": "Crate"}
        assert [request.url.path for request in backend.requests] == ["/api/stock-items/5", "/api/stock-items/5/"]
        assert backend.last.method == "PUT"
        assert backend.last.content == b'{"name": "Crate"}'

    def test_unfollowed_redirect_keeps_location(self, client, backend):
        backend.respond(304, headers={"location": "/api/containers/5/"})

        response = client.get("/api/containers/5")

        assert response.status_code == 304
        assert response.headers["location"] == "/api/containers/5/"
