"""
Image proxy routes
Serves uploaded media from the backend over the gateway's origin
"""

import httpx
import structlog
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.background import BackgroundTask

from proxy_service.models.errors import InvalidPathError
from proxy_service.services.forwarder import preflight_response
from proxy_service.utils.dependencies import BackendClientDep, ConfigDep
from proxy_service.utils.validators import split_media_path

logger = structlog.get_logger(__name__)

router = APIRouter()

IMAGE_TIMEOUT = 10.0
IMAGE_CACHE_CONTROL = "public, max-age=31536000, immutable"
DEFAULT_IMAGE_TYPE = "image/png"


@router.get("/api/images/{path:path}")
async def get_image(path: str, config: ConfigDep, client: BackendClientDep):
    """Fetch an uploaded image, e.g. /api/images/uploads/profiles/users/1.png"""
    try:
        segments = split_media_path(path)
    except InvalidPathError as e:
        logger.warning("Invalid image path", path=path)
        return PlainTextResponse(e.error, status_code=e.status_code)

    image_path = "/".join(segments)
    backend_url = f"{config.media_base}/{image_path}"
    logger.info("Fetching image", backend_url=backend_url)

    try:
        upstream = await client.open_stream(
            "GET",
            backend_url,
            headers={config.skip_warning_header: config.skip_warning_value},
            timeout=IMAGE_TIMEOUT,
            connect_timeout=config.connect_timeout,
        )
    except httpx.RequestError as e:
        logger.error("Image proxy error", path=image_path, error=str(e))
        return PlainTextResponse("Failed to load image", status_code=500)

    if not upstream.is_success:
        await upstream.aclose()
        logger.warning("Image not found on backend", path=image_path, status_code=upstream.status_code)
        return PlainTextResponse("Image not found", status_code=upstream.status_code)

    content_type = upstream.headers.get("content-type", DEFAULT_IMAGE_TYPE)
    logger.info("Streaming image", path=image_path, content_type=content_type)

    return StreamingResponse(
        upstream.aiter_bytes(),
        status_code=200,
        media_type=content_type,
        headers={
            "Cache-Control": IMAGE_CACHE_CONTROL,
            "Access-Control-Allow-Origin": "*",
        },
        background=BackgroundTask(upstream.aclose),
    )


@router.options("/api/images/{path:path}", include_in_schema=False)
async def image_preflight(path: str):
    response = preflight_response(["GET"])
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response
