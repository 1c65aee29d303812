"""
Generic catch-all proxy
/api/proxy/<path> is forwarded to <backend>/<path> with the inbound headers
"""

from fastapi import APIRouter

from proxy_service.services.forwarder import ResourceRoute, register_routes
from proxy_service.utils.headers import PASS_THROUGH_POLICY

router = APIRouter()

CATCH_ALL_ROUTE = ResourceRoute(
    path="/api/proxy/{path:path}",
    backend_path="/{path}",
    methods=("GET", "POST", "PUT", "DELETE", "PATCH"),
    label="proxy",
    header_policy=PASS_THROUGH_POLICY,
    error_message="Proxy request failed",
)

register_routes(router, [CATCH_ALL_ROUTE])
