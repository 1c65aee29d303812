"""
Inventory and administration resource routes
Each entry maps a gateway path onto the matching backend path
"""

from typing import Dict, List, Optional, Tuple

from fastapi import APIRouter

from proxy_service.services.fallbacks import (
    BRANCHES_FALLBACK,
    CUSTOMER_FALLBACK,
    CUSTOMERS_FALLBACK,
    PERMISSION_FALLBACK,
    PERMISSIONS_FALLBACK,
    ROLE_PERMISSIONS_FALLBACK,
    ROLES_FALLBACK,
    SUPPLIERS_FALLBACK,
    USER_FALLBACK,
    USERS_FALLBACK,
    FallbackProvider,
)
from proxy_service.services.forwarder import ResourceRoute, register_routes

router = APIRouter()

PAGINATION = {"skip": "0", "limit": "100"}

# Reads are quick list/detail queries; writes get more room
READ_TIMEOUTS = {"GET": 10.0, "DELETE": 10.0}
WRITE_TIMEOUTS = {"GET": 10.0, "POST": 15.0, "PUT": 15.0, "DELETE": 10.0}


def collection(resource: str, label: str, methods: Tuple[str, ...] = ("GET", "POST"),
               timeouts: Optional[Dict[str, float]] = None,
               default_query: Optional[Dict[str, str]] = None,
               fallback: Optional[FallbackProvider] = None,
               json_body: bool = False) -> ResourceRoute:
    return ResourceRoute(
        path=f"/api/{resource}",
        backend_path=f"/api/{resource}/",
        methods=methods,
        label=label,
        timeouts=dict(timeouts if timeouts is not None else WRITE_TIMEOUTS),
        default_query=dict(default_query or {}),
        fallback=fallback,
        json_body=json_body,
        error_message=f"Failed to process {label} request",
    )


def item(resource: str, label: str, methods: Tuple[str, ...] = ("GET", "PUT", "DELETE"),
         param: str = "id", timeouts: Optional[Dict[str, float]] = None,
         fallback: Optional[FallbackProvider] = None,
         slash_methods: Tuple[str, ...] = ()) -> ResourceRoute:
    backend_path = f"/api/{resource}/{{{param}}}"
    return ResourceRoute(
        path=f"/api/{resource}/{{{param}}}",
        backend_path=backend_path,
        methods=methods,
        method_paths={method: backend_path + "/" for method in slash_methods},
        label=label,
        timeouts=dict(timeouts if timeouts is not None else WRITE_TIMEOUTS),
        id_params=(param,),
        fallback=fallback,
        error_message=f"Failed to process {label} request",
    )


# Fixed sub-paths are listed before the {id} routes they would otherwise match
RESOURCE_ROUTES: List[ResourceRoute] = [
    # Branches
    collection("branches", "branch", methods=("GET",), timeouts={"GET": 5.0},
               default_query=PAGINATION, fallback=BRANCHES_FALLBACK),
    item("branches", "branch"),

    # Container items
    collection("container-items", "container item", default_query=PAGINATION),
    item("container-items", "container item"),

    # Containers
    collection("containers", "container"),
    item("containers", "container", slash_methods=("PUT", "DELETE")),

    # Customers
    collection("customers", "customer", default_query=PAGINATION, fallback=CUSTOMERS_FALLBACK),
    item("customers", "customer", fallback=CUSTOMER_FALLBACK),

    # Invoices
    collection("invoices", "invoice"),
    item("invoices", "invoice", timeouts={"GET": 10.0, "PUT": 45.0, "DELETE": 10.0}),

    # Permissions
    collection("permissions", "permission", fallback=PERMISSIONS_FALLBACK, json_body=True),
    item("permissions", "permission", fallback=PERMISSION_FALLBACK),

    # Purchase order items
    ResourceRoute(
        path="/api/po-items/available",
        backend_path="/api/po-items/available",
        methods=("GET",),
        label="purchase order item",
        timeouts=dict(READ_TIMEOUTS),
        error_message="Failed to fetch available purchase order items",
    ),
    ResourceRoute(
        path="/api/po-items/stock/{stock_number}",
        backend_path="/api/po-items/stock/{stock_number}",
        methods=("GET",),
        label="purchase order item",
        timeouts=dict(READ_TIMEOUTS),
        error_message="Failed to fetch purchase order items for stock number",
    ),
    item("po-items", "purchase order item", param="item_id"),

    # Purchase orders
    item("purchase-orders", "purchase order"),

    # Roles
    collection("roles", "role", timeouts={"GET": 5.0, "POST": 10.0},
               default_query=PAGINATION, fallback=ROLES_FALLBACK),
    ResourceRoute(
        path="/api/roles/slug/{slug}",
        backend_path="/api/roles/slug/{slug}",
        methods=("GET",),
        label="role",
        timeouts=dict(READ_TIMEOUTS),
        error_message="Failed to fetch role by slug",
    ),
    item("roles", "role"),
    ResourceRoute(
        path="/api/roles/{id}/permissions",
        backend_path="/api/roles/{id}/permissions",
        methods=("GET",),
        label="role",
        timeouts=dict(READ_TIMEOUTS),
        id_params=("id",),
        fallback=ROLE_PERMISSIONS_FALLBACK,
        error_message="Failed to fetch role permissions",
    ),
    ResourceRoute(
        path="/api/roles/{id}/permissions/{permission_id}",
        backend_path="/api/roles/{id}/permissions/{permission_id}",
        methods=("POST", "DELETE"),
        label="role",
        timeouts=dict(WRITE_TIMEOUTS),
        id_params=("id", "permission_id"),
        error_message="Failed to update role permissions",
    ),

    # Stock items
    collection("stock-items", "stock item", default_query=PAGINATION),
    ResourceRoute(
        path="/api/stock-items/categories",
        backend_path="/api/stock-items/categories",
        methods=("GET",),
        label="stock item",
        timeouts=dict(READ_TIMEOUTS),
        error_message="Failed to fetch stock item categories",
    ),
    item("stock-items", "stock item"),

    # Suppliers
    collection("suppliers", "supplier", default_query=PAGINATION, fallback=SUPPLIERS_FALLBACK),

    # Users
    collection("users", "user", default_query=PAGINATION, fallback=USERS_FALLBACK),
    ResourceRoute(
        path="/api/users/{id}/upload-profile-image",
        backend_path="/api/users/{id}/upload-profile-image",
        methods=("POST",),
        label="user",
        timeouts={"POST": 30.0},
        id_params=("id",),
        require_auth=400,
        error_message="Failed to upload profile image",
    ),
    item("users", "user", fallback=USER_FALLBACK),
]

register_routes(router, RESOURCE_ROUTES)
