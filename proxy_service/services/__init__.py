"""
Forwarding services for the proxy gateway
"""

from .fallbacks import (
    FallbackProvider,
    LookupFallback,
    PagedFallback,
    PermissionFallback,
    StaticFallback,
    UserFallback,
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
)
from .forwarder import ResourceRoute, forward_resource, preflight_response, register_routes

__all__ = [
    "FallbackProvider",
    "LookupFallback",
    "PagedFallback",
    "PermissionFallback",
    "StaticFallback",
    "UserFallback",
    "BRANCHES_FALLBACK",
    "CUSTOMER_FALLBACK",
    "CUSTOMERS_FALLBACK",
    "PERMISSION_FALLBACK",
    "PERMISSIONS_FALLBACK",
    "ROLE_PERMISSIONS_FALLBACK",
    "ROLES_FALLBACK",
    "SUPPLIERS_FALLBACK",
    "USER_FALLBACK",
    "USERS_FALLBACK",
    "ResourceRoute",
    "forward_resource",
    "preflight_response",
    "register_routes",
]
