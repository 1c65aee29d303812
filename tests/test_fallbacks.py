"""
Tests for fallback data on selected read routes
"""

import httpx
import pytest

from proxy_service.services.fallbacks import (
    BRANCHES_FALLBACK,
    CUSTOMER_FALLBACK,
    PERMISSION_FALLBACK,
    ROLES_FALLBACK,
    SUPPLIERS_FALLBACK,
    USER_FALLBACK,
)


class TestBranchesFallback:

    @pytest.mark.parametrize("failure", [httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout])
    def test_transport_failure_serves_fallback(self, client, backend, failure):
        backend.fail(failure, "backend gone")

        response = client.get("/api/branches")

        assert response.status_code == 200
        assert response.headers["x-fallback-data"] == "true"
        assert response.headers["access-control-allow-origin"] == "*"
        data = response.json()
        assert len(data) == 4
        assert [branch["branch_code"] for branch in data] == ["DXB", "AUH", "SHJ", "AJM"]

    @pytest.mark.parametrize("status_code", [401, 403, 404, 500, 502])
    def test_error_status_serves_fallback(self, client, backend, status_code):
        backend.respond(status_code, json_body={"detail": "nope"})

        response = client.get("/api/branches?skip=0&limit=10")

        assert response.status_code == 200
        assert response.headers["x-fallback-data"] == "true"
        assert len(response.json()) == 4

    def test_live_data_preferred(self, client, backend):
        backend.respond(200, json_body=[{"id": 99, "branch_code": "LIVE"}])

        response = client.get("/api/branches")

        assert response.json() == [{"id": 99, "branch_code": "LIVE"}]
        assert "x-fallback-data" not in response.headers

    def test_list_timeout_is_short(self, client, backend):
        seen = {}

        def handler(request):
            seen["timeout"] = request.extensions["timeout"]
            return httpx.Response(200, json=[])

        backend.handler = handler
        client.get("/api/branches")

        assert seen["timeout"]["read"] == 5.0


class TestRolesFallback:

    def test_roles_list_fallback(self, client, backend):
        backend.respond(401, json_body={"detail": "Not authenticated"})

        response = client.get("/api/roles")

        assert response.status_code == 200
        assert response.headers["x-fallback-data"] == "true"
        assert [role["slug"] for role in response.json()] == [
            "administrator", "manager", "staff", "sales-representative", "accountant"
        ]

    def test_writes_never_use_fallback(self, client, backend):
        backend.fail()

        response = client.post("/api/roles", json={"name": "Auditor"})

        assert response.status_code == 500
        assert "x-fallback-data" not in response.headers


class TestUserFallback:

    def test_user_detail_fallback(self, client, backend):
        backend.respond(500, json_body={"detail": "boom"})

        response = client.get("/api/users/3")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 3
        assert data["username"] == "user_3"
        assert data["role"]["slug"] == "manager"

    def test_role_tiers(self):
        assert USER_FALLBACK.payload({"id": 1})["role_id"] == 1
        assert USER_FALLBACK.payload({"id": 4})["role_id"] == 2
        assert USER_FALLBACK.payload({"id": 9})["role_id"] == 3
        assert USER_FALLBACK.payload({"id": 1})["branch_ids"] == [1, 2]
        assert USER_FALLBACK.payload({"id": 9})["branch_ids"] == [1]

    def test_user_update_relays_errors(self, client, backend):
        backend.respond(500, json_body={"detail": "boom"})

        response = client.put("/api/users/3", json={"full_name": "X"})

        assert response.status_code == 500
        assert response.json() == {"detail": "boom"}


class TestUsersFallback:

    def test_users_list_fallback(self, client, backend):
        backend.fail()

        response = client.get("/api/users?skip=10&limit=5")

        assert response.status_code == 200
        assert response.headers["x-fallback-data"] == "true"
        data = response.json()
        assert data["total"] == 5
        assert data["skip"] == 10
        assert data["limit"] == 5
        assert [user["username"] for user in data["items"]] == [
            "admin", "manager", "sales_rep", "inventory_clerk", "cashier"
        ]
        assert data["items"][3]["supplier_ids"] == [1, 3, 4]


class TestCustomersFallback:

    def test_customers_list_fallback(self, client, backend):
        backend.respond(401, json_body={"detail": "Not authenticated"})

        response = client.get("/api/customers")

        assert response.status_code == 200
        assert response.headers["x-fallback-data"] == "true"
        data = response.json()
        assert len(data) == 6
        assert data[5]["business_name"] is None

    def test_customer_detail_fallback(self, client, backend):
        backend.fail(httpx.ReadTimeout, "timed out")

        response = client.get("/api/customers/2")

        assert response.status_code == 200
        assert response.headers["x-fallback-data"] == "true"
        assert response.json()["customer_code"] == "CUST-002"

    def test_unknown_customer_not_found(self, client, backend):
        backend.fail()

        response = client.get("/api/customers/4")

        assert response.status_code == 404
        assert response.json() == {"detail": "Customer not found"}

    def test_backend_not_found_relayed(self, client, backend):
        backend.respond(404, json_body={"detail": "No such customer"})

        response = client.get("/api/customers/2")

        assert response.status_code == 404
        assert response.json() == {"detail": "No such customer"}
        assert "x-fallback-data" not in response.headers

    def test_lookup_by_id(self):
        assert CUSTOMER_FALLBACK.payload({"id": 3})["full_name"] == "Sarah Johnson"
        assert CUSTOMER_FALLBACK.payload({"id": 6}) is None


class TestSuppliersFallback:

    def test_suppliers_list_fallback(self, client, backend):
        backend.respond(500, json_body={"detail": "boom"})

        response = client.get("/api/suppliers")

        assert response.status_code == 200
        data = response.json()
        assert [supplier["supplier_code"] for supplier in data["items"]] == [
            "SUP-001", "SUP-002", "SUP-003", "SUP-004", "SUP-005"
        ]
        assert (data["skip"], data["limit"]) == (0, 100)

    def test_bad_paging_values_use_defaults(self):
        data = SUPPLIERS_FALLBACK.payload({}, {"skip": "x", "limit": "20"})

        assert (data["skip"], data["limit"]) == (0, 20)


class TestPermissionsFallback:

    def test_permissions_list_fallback(self, client, backend):
        backend.fail()

        response = client.get("/api/permissions")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 16
        assert data[0]["slug"] == "view_users"
        assert data[15]["module"] == "Sales"

    def test_permission_detail_fallback(self, client, backend):
        backend.respond(403, json_body={"detail": "Forbidden"})

        response = client.get("/api/permissions/7")

        assert response.status_code == 200
        assert response.headers["x-fallback-data"] == "true"
        assert response.json()["slug"] == "permission_7"

    @pytest.mark.parametrize("permission_id,module", [(1, "Users"), (8, "Roles"), (12, "Permissions"), (13, "General")])
    def test_module_tiers(self, permission_id, module):
        assert PERMISSION_FALLBACK.payload({"id": permission_id})["module"] == module

    def test_role_permissions_fallback(self, client, backend):
        backend.fail(httpx.ConnectTimeout, "timed out")

        response = client.get("/api/roles/3/permissions")

        assert response.status_code == 200
        assert [permission["name"] for permission in response.json()] == [
            "View Dashboard", "Manage Users", "View Users", "Manage Roles", "View Roles"
        ]

    def test_permission_create_never_uses_fallback(self, client, backend):
        backend.fail()

        response = client.post("/api/permissions", json={"name": "Audit"})

        assert response.status_code == 500
        assert "x-fallback-data" not in response.headers


def test_static_payloads_are_copies():
    first = BRANCHES_FALLBACK.payload({})
    first[0]["branch_name"] = "changed"

    assert BRANCHES_FALLBACK.payload({})[0]["branch_name"] == "Main Warehouse - Dubai"
    assert len(ROLES_FALLBACK.payload({})) == 5
