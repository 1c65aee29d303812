"""
Diagnostic routes
Operational troubleshooting endpoints; not part of the request-serving path
"""

import os
from datetime import datetime
from typing import Any, Dict, List

import httpx
import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from proxy_service.utils.dependencies import BackendClientDep, ConfigDep

logger = structlog.get_logger(__name__)

router = APIRouter()

PROBE_TIMEOUT = 5.0
PREVIEW_LENGTH = 200

BACKEND_PROBES = [
    ("Root Endpoint", "/"),
    ("Health Endpoint", "/health"),
    ("OpenAPI Docs", "/openapi.json"),
]

# Origin a deployed frontend would send, used to check backend CORS handling
BROWSER_ORIGIN = "https://unixpartwebfrontend.vercel.app"


@router.get("/api/debug")
async def debug_config(config: ConfigDep):
    """Report the configuration the gateway is running with"""
    return {
        "backend_api_url": config.backend_api_url,
        "backend_base": config.backend_base,
        "media_base": config.media_base,
        "environment": config.environment,
        "message": "Debug endpoint to check environment variables",
        "timestamp": datetime.utcnow().isoformat(),
        "platform": {
            "hostname": os.getenv("HOSTNAME"),
            "region": os.getenv("REGION"),
        }
    }


@router.post("/api/debug")
async def debug_echo(request: Request):
    """Echo what the gateway received"""
    return {
        "message": "Debug POST endpoint",
        "origin": request.headers.get("origin"),
        "headers": dict(request.headers),
        "url": str(request.url),
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/api/test-backend")
async def test_backend(config: ConfigDep, client: BackendClientDep):
    """Probe a few well-known backend endpoints"""
    tests: List[Dict[str, Any]] = []

    for name, path in BACKEND_PROBES:
        url = f"{config.backend_base}{path}"
        try:
            response = await client.send(
                "GET",
                url,
                headers={config.skip_warning_header: config.skip_warning_value},
                timeout=PROBE_TIMEOUT,
            )
            tests.append({
                "name": name,
                "url": url,
                "status": response.status_code,
                "success": response.is_success,
                "response": response.text[:PREVIEW_LENGTH]
            })
        except httpx.RequestError as e:
            logger.warning("Backend probe failed", probe=name, url=url, error=str(e))
            tests.append({
                "name": name,
                "url": url,
                "status": "ERROR",
                "success": False,
                "error": str(e) or e.__class__.__name__
            })

    successful = sum(1 for test in tests if test["success"])
    return {
        "message": "Backend connectivity tests",
        "apiBaseUrl": config.backend_base,
        "timestamp": datetime.utcnow().isoformat(),
        "tests": tests,
        "summary": {
            "total": len(tests),
            "successful": successful,
            "failed": len(tests) - successful
        }
    }


@router.get("/api/test-config")
async def test_config(config: ConfigDep, client: BackendClientDep):
    """Check that the configured backend answers the users listing"""
    test_url = f"{config.backend_base}/api/users/"
    config_info = {
        "backend_api_url": config.backend_api_url,
        "environment": config.environment,
        "testUrl": test_url,
    }

    try:
        response = await client.send(
            "GET",
            test_url,
            headers={
                config.skip_warning_header: config.skip_warning_value,
                "Content-Type": "application/json",
            },
            timeout=config.default_timeout,
        )
    except httpx.RequestError as e:
        logger.error("Config test failed", url=test_url, error=str(e))
        return JSONResponse(
            status_code=500,
            content={
                "config": config_info,
                "error": {"message": str(e) or e.__class__.__name__},
                "timestamp": datetime.utcnow().isoformat(),
            }
        )

    return {
        "config": config_info,
        "backendTest": {
            "status": response.status_code,
            "statusText": response.reason_phrase,
            "ok": response.is_success,
        },
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.post("/api/test-cors")
async def test_cors(request: Request, config: ConfigDep, client: BackendClientDep):
    """Replay a login body the way a browser on the deployed origin would send it"""
    body = await request.body()
    url = f"{config.backend_base}/api/auth/login"

    try:
        response = await client.send(
            "POST",
            url,
            headers={
                "Content-Type": "application/json",
                config.skip_warning_header: config.skip_warning_value,
                "Origin": BROWSER_ORIGIN,
            },
            content=body,
            timeout=config.default_timeout,
        )
    except httpx.RequestError as e:
        logger.error("CORS test failed", url=url, error=str(e))
        return JSONResponse(status_code=500, content={"error": str(e) or e.__class__.__name__})

    return {
        "success": response.is_success,
        "status": response.status_code,
        "statusText": response.reason_phrase,
        "headers": dict(response.headers),
        "data": response.text,
        "requestOrigin": BROWSER_ORIGIN,
    }
