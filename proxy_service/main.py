"""
Proxy Gateway - Main Application
Forwards browser API calls to the backend service with CORS headers added
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from proxy_service.middleware.access_gate import AccessGateMiddleware
from proxy_service.models.errors import ErrorEnvelope, GatewayError
from proxy_service.routes import auth, diagnostics, health, images, proxy, resources
from proxy_service.utils.backend_client import backend_client
from proxy_service.utils.config import get_gateway_config

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(message)s'
)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info("Starting Proxy Gateway")

    config = get_gateway_config()
    config.log_config()

    # Shared connection pool for all forwarded calls
    await backend_client.start()
    app.state.backend_client = backend_client

    yield

    await backend_client.stop()
    logger.info("Proxy Gateway shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Proxy Gateway",
    description="Same-origin gateway forwarding browser API calls to the inventory backend",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(AccessGateMiddleware, cookie_name=get_gateway_config().auth_cookie_name)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    logger.info(
        "Request received",
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else "unknown"
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code
    )

    return response


@app.exception_handler(GatewayError)
async def gateway_exception_handler(request: Request, exc: GatewayError):
    """Render locally synthesized failures as an error envelope"""
    logger.warning(
        "Request rejected",
        method=request.method,
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.error
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_envelope().model_dump(),
        headers={"Access-Control-Allow-Origin": "*"}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        method=request.method,
        path=request.url.path,
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorEnvelope(error="Internal server error", details=str(exc)).model_dump(),
        headers={"Access-Control-Allow-Origin": "*"}
    )


# Register routes
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, tags=["Authentication"])
app.include_router(images.router, tags=["Images"])
app.include_router(resources.router, tags=["Resources"])
app.include_router(proxy.router, tags=["Proxy"])
app.include_router(diagnostics.router, tags=["Diagnostics"])


# Root endpoint
@app.get("/api")
async def root():
    """Root endpoint"""
    return {
        "service": "proxy-gateway",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "proxy_service.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "3000")),
        reload=True,
        log_level="info"
    )
