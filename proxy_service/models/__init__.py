"""
Data models for the proxy gateway
"""

from .errors import (
    ErrorEnvelope,
    GatewayError,
    InvalidIdentifierError,
    InvalidPathError,
    InvalidRequestBodyError,
    MissingAuthorizationError,
    UpstreamRequestError,
)

__all__ = [
    "ErrorEnvelope",
    "GatewayError",
    "InvalidIdentifierError",
    "InvalidPathError",
    "InvalidRequestBodyError",
    "MissingAuthorizationError",
    "UpstreamRequestError",
]
