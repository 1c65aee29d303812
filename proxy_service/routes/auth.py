"""
Authentication routes
Login and current-user lookups are forwarded; logout clears the session cookie locally
"""

from datetime import datetime

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from proxy_service.services.forwarder import ResourceRoute, preflight_response, register_routes
from proxy_service.utils.dependencies import ConfigDep
from proxy_service.utils.headers import cors_headers

logger = structlog.get_logger(__name__)

router = APIRouter()

AUTH_ROUTES = [
    ResourceRoute(
        path="/api/auth/login",
        backend_path="/api/auth/login",
        methods=("POST",),
        label="login",
        timeouts={"POST": 15.0},
        error_message="Login failed",
    ),
    ResourceRoute(
        path="/api/auth/me",
        backend_path="/api/auth/me",
        methods=("GET",),
        label="current user",
        timeouts={"GET": 10.0},
        require_auth=401,
        distinct_transport_errors=True,
        error_message="Auth Me proxy failed",
    ),
]

register_routes(router, AUTH_ROUTES)


@router.post("/api/auth/logout")
async def logout(config: ConfigDep):
    """Clear the session cookie"""
    logger.info("Logout request received")

    response = JSONResponse(
        content={
            "message": "Logged out successfully",
            "timestamp": datetime.utcnow().isoformat()
        },
        headers=cors_headers(["POST"])
    )
    response.delete_cookie(
        config.auth_cookie_name,
        path="/",
        httponly=True,
        samesite="lax"
    )

    logger.info("Auth cookie cleared", cookie=config.auth_cookie_name)
    return response


@router.options("/api/auth/logout", include_in_schema=False)
async def logout_preflight():
    return preflight_response(["POST"])
