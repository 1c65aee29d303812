"""
Utility modules for the proxy gateway
"""

from .backend_client import BackendClient, backend_client, get_backend_client
from .config import GatewayConfig, get_gateway_config
from .headers import HeaderPolicy, RESOURCE_POLICY, PASS_THROUGH_POLICY, cors_headers, resolve_authorization
from .validators import parse_resource_id, split_media_path

__all__ = [
    "BackendClient",
    "backend_client",
    "get_backend_client",
    "GatewayConfig",
    "get_gateway_config",
    "HeaderPolicy",
    "RESOURCE_POLICY",
    "PASS_THROUGH_POLICY",
    "cors_headers",
    "resolve_authorization",
    "parse_resource_id",
    "split_media_path",
]
