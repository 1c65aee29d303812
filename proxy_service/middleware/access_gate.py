"""
Access gate
Redirects between login and protected pages based on the session cookie
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple
from urllib.parse import urlencode

import structlog
from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)


class GateAction(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GateDecision:
    action: GateAction
    location: Optional[str] = None


ALLOW = GateDecision(GateAction.ALLOW)


class AccessGate:
    """
    Route table for page access.

    Only the presence of the session token is checked; the backend
    validates it on every proxied call.
    """

    BYPASS_PREFIXES = ("/_next", "/api", "/static")

    def __init__(
        self,
        public_routes: FrozenSet[str] = frozenset({"/", "/signup"}),
        auth_routes: FrozenSet[str] = frozenset({"/", "/signup"}),
        protected_prefixes: Tuple[str, ...] = ("/dashboard", "/profile", "/settings"),
        protected_landing: str = "/dashboard",
        auth_landing: str = "/",
    ):
        self.public_routes = public_routes
        self.auth_routes = auth_routes
        self.protected_prefixes = protected_prefixes
        self.protected_landing = protected_landing
        self.auth_landing = auth_landing

    def bypasses(self, path: str) -> bool:
        """Static assets, framework internals and API routes are never gated"""
        return path.startswith(self.BYPASS_PREFIXES) or "." in path

    def is_protected(self, path: str) -> bool:
        return path.startswith(self.protected_prefixes)

    def decide(self, path: str, has_token: bool) -> GateDecision:
        if self.bypasses(path):
            return ALLOW

        if has_token:
            if path in self.auth_routes:
                return GateDecision(GateAction.REDIRECT, self.protected_landing)
            return ALLOW

        if self.is_protected(path):
            query = urlencode({"redirect": path})
            return GateDecision(GateAction.REDIRECT, f"{self.auth_landing}?{query}")

        # Public, auth and unclassified pages are open
        return ALLOW


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Apply an AccessGate to every incoming request"""

    def __init__(self, app, gate: Optional[AccessGate] = None, cookie_name: str = "auth_token"):
        super().__init__(app)
        self.gate = gate or AccessGate()
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if self.gate.bypasses(path):
            return await call_next(request)

        has_token = bool(request.cookies.get(self.cookie_name))
        decision = self.gate.decide(path, has_token)

        logger.info(
            "Access gate",
            path=path,
            has_token=has_token,
            protected=self.gate.is_protected(path),
            action=decision.action.value,
        )

        if decision.action is GateAction.REDIRECT:
            return RedirectResponse(url=decision.location, status_code=307)

        return await call_next(request)
