"""
FastAPI Dependencies
Configuration and backend client injection
"""

from typing import Annotated

from fastapi import Depends

from proxy_service.utils.backend_client import BackendClient, get_backend_client
from proxy_service.utils.config import GatewayConfig, get_gateway_config

# Type aliases for cleaner dependency injection
ConfigDep = Annotated[GatewayConfig, Depends(get_gateway_config)]
BackendClientDep = Annotated[BackendClient, Depends(get_backend_client)]
