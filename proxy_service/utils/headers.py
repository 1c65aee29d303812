"""
Header handling for forwarded requests and relayed responses
"""

from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from fastapi import Request

CORS_ALLOW_HEADERS = "Content-Type, Authorization"


class HeaderPolicy:
    """
    Filter an inbound header set before it is forwarded.

    With an allow-list only the named headers pass; the deny-list is always
    applied on top. Names are compared case-insensitively.
    """

    def __init__(self, allow: Optional[Iterable[str]] = None, deny: Iterable[str] = ()):
        self.allow: Optional[FrozenSet[str]] = (
            frozenset(name.lower() for name in allow) if allow is not None else None
        )
        self.deny: FrozenSet[str] = frozenset(name.lower() for name in deny)

    def permits(self, name: str) -> bool:
        name = name.lower()
        if name in self.deny:
            return False
        return self.allow is None or name in self.allow

    def apply(self, headers: Iterable[Tuple[str, str]]) -> Dict[str, str]:
        """Permitted headers; repeated names are joined into one comma-separated value"""
        kept: Dict[str, str] = {}
        names: Dict[str, str] = {}
        for name, value in headers:
            if not self.permits(name):
                continue
            key = name.lower()
            if key in names:
                kept[names[key]] = f"{kept[names[key]]}, {value}"
            else:
                names[key] = name
                kept[name] = value
        return kept


# Resource routes forward only what the backend needs to serve the call
RESOURCE_POLICY = HeaderPolicy(
    allow=("content-type", "accept", "accept-language", "authorization"),
)

# The catch-all proxy forwards everything except browser origin data and
# headers that httpx negotiates itself; the relayed body is always decoded
PASS_THROUGH_POLICY = HeaderPolicy(
    deny=(
        "host", "origin", "referer", "content-length", "connection",
        "transfer-encoding", "accept-encoding",
    ),
)


def resolve_authorization(request: Request, cookie_name: str) -> Optional[str]:
    """
    Return the Authorization value to forward, or None.

    The header wins; otherwise the session cookie is sent as a bearer token.
    The token itself is never inspected.
    """
    authorization = request.headers.get("authorization")
    if authorization:
        return authorization

    token = request.cookies.get(cookie_name)
    if token:
        return f"Bearer {token}"
    return None


def allow_methods(methods: Sequence[str]) -> str:
    ordered = [m.upper() for m in methods if m.upper() != "OPTIONS"]
    ordered.append("OPTIONS")
    return ", ".join(ordered)


def cors_headers(methods: Sequence[str], allow_headers: str = CORS_ALLOW_HEADERS) -> Dict[str, str]:
    """Permissive CORS headers added to every relayed response"""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": allow_methods(methods),
        "Access-Control-Allow-Headers": allow_headers,
    }
