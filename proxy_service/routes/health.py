"""
Health check routes for the proxy gateway
"""

from datetime import datetime

from fastapi import APIRouter, Request

from proxy_service.utils.dependencies import ConfigDep

router = APIRouter()


@router.get("/health")
async def health_check(request: Request, config: ConfigDep):
    """Health check endpoint"""
    client = getattr(request.app.state, "backend_client", None)
    return {
        "service": config.service_name,
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": config.backend_base,
        "backend_client": "started" if client is not None and client.started else "not_initialized",
        "version": config.service_version
    }
