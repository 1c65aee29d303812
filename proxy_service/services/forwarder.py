"""
Resource Forwarder
Configuration-driven forwarding of gateway routes to the backend service
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx
import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from proxy_service.models.errors import InvalidRequestBodyError, MissingAuthorizationError, UpstreamRequestError
from proxy_service.services.fallbacks import FALLBACK_HEADER, FallbackProvider
from proxy_service.utils.backend_client import BackendClient
from proxy_service.utils.config import GatewayConfig
from proxy_service.utils.dependencies import BackendClientDep, ConfigDep
from proxy_service.utils.headers import RESOURCE_POLICY, HeaderPolicy, cors_headers, resolve_authorization
from proxy_service.utils.validators import parse_resource_id

logger = structlog.get_logger(__name__)

BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
JSON_CHECKED_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True)
class ResourceRoute:
    """
    One gateway path and how it maps onto the backend.

    `path` is the inbound FastAPI path template and `backend_path` the
    backend path template; both use the same parameter names.
    `method_paths` overrides the backend path for individual methods.
    """
    path: str
    backend_path: str
    methods: Tuple[str, ...]
    method_paths: Dict[str, str] = field(default_factory=dict)
    label: str = "resource"
    timeouts: Dict[str, float] = field(default_factory=dict)
    id_params: Tuple[str, ...] = ()
    default_query: Dict[str, str] = field(default_factory=dict)
    fallback: Optional[FallbackProvider] = None
    require_auth: Optional[int] = None
    header_policy: HeaderPolicy = RESOURCE_POLICY
    distinct_transport_errors: bool = False
    json_body: bool = False
    error_message: str = "Proxy request failed"

    def timeout_for(self, method: str) -> Optional[float]:
        return self.timeouts.get(method.upper())

    def backend_path_for(self, method: str) -> str:
        return self.method_paths.get(method.upper(), self.backend_path)

    def uses_fallback(self, method: str) -> bool:
        return self.fallback is not None and method.upper() == "GET"

    def falls_back_on(self, method: str, status_code: int) -> bool:
        return self.uses_fallback(method) and status_code not in self.fallback.relay_statuses


def preflight_response(methods: Sequence[str]) -> Response:
    """Answer a CORS preflight without touching the backend"""
    return Response(status_code=200, headers=cors_headers(methods))


def relay_response(upstream: httpx.Response, methods: Sequence[str]) -> Response:
    """Backend status, body and content-type, with CORS headers added"""
    headers = cors_headers(methods)
    headers["Content-Type"] = upstream.headers.get("content-type", "application/json")
    if "location" in upstream.headers:
        headers["Location"] = upstream.headers["location"]
    return Response(content=upstream.content, status_code=upstream.status_code, headers=headers)


def fallback_response(route: ResourceRoute, path_params: Dict[str, Any], request: Request) -> JSONResponse:
    headers = cors_headers(route.methods)
    headers[FALLBACK_HEADER] = "true"
    payload = route.fallback.payload(path_params, request.query_params)
    if payload is None:
        return JSONResponse(
            content={"detail": f"{route.label.capitalize()} not found"}, status_code=404, headers=headers
        )
    return JSONResponse(content=payload, status_code=200, headers=headers)


def resolve_path_params(route: ResourceRoute, raw_params: Dict[str, str]) -> Dict[str, Any]:
    """Validate id parameters and URL-quote the rest"""
    resolved: Dict[str, Any] = {}
    for name, raw in raw_params.items():
        if name in route.id_params:
            resolved[name] = parse_resource_id(raw, route.label)
        else:
            resolved[name] = quote(raw, safe="/")
    return resolved


def build_query(request: Request, route: ResourceRoute) -> List[Tuple[str, str]]:
    query = list(request.query_params.multi_items())
    present = {key for key, _ in query}
    for key, value in route.default_query.items():
        if key not in present:
            query.append((key, value))
    return query


def build_headers(request: Request, route: ResourceRoute, config: GatewayConfig,
                  authorization: Optional[str]) -> Dict[str, str]:
    headers = route.header_policy.apply(request.headers.items())
    if "content-type" not in {name.lower() for name in headers}:
        headers["Content-Type"] = "application/json"
    if authorization:
        # Drop any differently-cased copy before setting the canonical one
        headers = {k: v for k, v in headers.items() if k.lower() != "authorization"}
        headers["Authorization"] = authorization
    headers[config.skip_warning_header] = config.skip_warning_value
    return headers


def check_json_body(body: Optional[bytes]) -> None:
    try:
        json.loads(body or b"")
    except ValueError as e:
        raise InvalidRequestBodyError(
            "Invalid request body", details="Request body must be valid JSON"
        ) from e


def transport_error(route: ResourceRoute, exc: httpx.RequestError) -> UpstreamRequestError:
    if route.distinct_transport_errors:
        if isinstance(exc, httpx.TimeoutException):
            return UpstreamRequestError(
                "Backend API timeout - please try again", details=str(exc), status_code=504
            )
        return UpstreamRequestError(
            "Backend API unavailable - please check connection", details=str(exc), status_code=502
        )
    return UpstreamRequestError(route.error_message, details=str(exc) or exc.__class__.__name__)


async def forward_resource(route: ResourceRoute, request: Request,
                           config: GatewayConfig, client: BackendClient) -> Response:
    """Forward one inbound request to the backend and relay the answer"""
    method = request.method.upper()
    path_params = resolve_path_params(route, dict(request.path_params))

    authorization = resolve_authorization(request, config.auth_cookie_name)
    if route.require_auth and not authorization:
        raise MissingAuthorizationError(
            "Authorization header required",
            details=f"{route.label.capitalize()} requests must carry a bearer token",
            status_code=route.require_auth,
        )

    url = config.backend_base + route.backend_path_for(method).format(**path_params)
    body = await request.body() if method in BODY_METHODS else None
    if route.json_body and method in JSON_CHECKED_METHODS:
        check_json_body(body)
    timeout = route.timeout_for(method) or config.default_timeout

    logger.info(
        "Forwarding request",
        route=route.path,
        method=method,
        backend_url=url,
        auth_present=bool(authorization),
        timeout=timeout,
    )

    try:
        upstream = await client.send(
            method,
            url,
            params=build_query(request, route),
            headers=build_headers(request, route, config, authorization),
            content=body or None,
            timeout=timeout,
            connect_timeout=config.connect_timeout,
        )
    except httpx.RequestError as e:
        if route.uses_fallback(method):
            logger.warning(
                "Backend unreachable, serving fallback data",
                route=route.path,
                fallback=route.fallback.name,
                error=str(e),
            )
            return fallback_response(route, path_params, request)
        logger.error("Backend request failed", route=route.path, method=method, error=str(e))
        raise transport_error(route, e) from e

    logger.info("Backend responded", route=route.path, method=method, status_code=upstream.status_code)

    if not upstream.is_success and route.falls_back_on(method, upstream.status_code):
        logger.warning(
            "Backend returned error status, serving fallback data",
            route=route.path,
            fallback=route.fallback.name,
            status_code=upstream.status_code,
        )
        return fallback_response(route, path_params, request)

    return relay_response(upstream, route.methods)


def _forwarding_endpoint(route: ResourceRoute):
    async def endpoint(request: Request, config: ConfigDep, client: BackendClientDep):
        return await forward_resource(route, request, config, client)
    return endpoint


def _preflight_endpoint(route: ResourceRoute):
    async def endpoint():
        return preflight_response(route.methods)
    return endpoint


def register_routes(router: APIRouter, routes: Sequence[ResourceRoute]) -> APIRouter:
    """Add a forwarding endpoint and a preflight responder for every route"""
    for route in routes:
        name = route.path.strip("/").replace("/", "_").replace("{", "").replace("}", "").replace(":path", "")
        endpoint = _forwarding_endpoint(route)
        for method in route.methods:
            router.add_api_route(
                route.path,
                endpoint,
                methods=[method],
                name=f"{method.lower()}_{name}",
            )
        router.add_api_route(
            route.path,
            _preflight_endpoint(route),
            methods=["OPTIONS"],
            name=f"preflight_{name}",
            include_in_schema=False,
        )
    return router
