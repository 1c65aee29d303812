"""
Backend HTTP Client
Shared client for forwarding gateway calls to the backend service

Connection pooling follows the same approach as the other service clients:
- Single shared AsyncClient initialized at app startup
- Limits to prevent connection exhaustion
- Per-call timeout supplied by the route being forwarded
"""

from typing import Optional, Any

import httpx
import structlog

logger = structlog.get_logger(__name__)


class BackendClient:
    """
    HTTP client for proxied backend calls.

    Every call is attempted exactly once; transport failures propagate
    to the caller as httpx.RequestError subclasses.

    Lifecycle:
        - Call start() during app startup (FastAPI lifespan)
        - Call stop() during app shutdown
        - If not started, the client is created on first use
    """

    # Connection pool settings (per worker)
    MAX_CONNECTIONS = 100
    MAX_KEEPALIVE = 20
    KEEPALIVE_EXPIRY = 5.0

    # Used when a call does not carry its own timeout
    CONNECT_TIMEOUT = 5.0
    DEFAULT_TIMEOUT = 15.0
    POOL_TIMEOUT = 30.0

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def started(self) -> bool:
        return self._client is not None

    async def start(self):
        """
        Initialize the shared HTTP client.
        Call this during FastAPI app startup via lifespan.
        """
        if self._client is not None:
            logger.warning("BackendClient already started")
            return

        limits = httpx.Limits(
            max_connections=self.MAX_CONNECTIONS,
            max_keepalive_connections=self.MAX_KEEPALIVE,
            keepalive_expiry=self.KEEPALIVE_EXPIRY
        )

        timeout = httpx.Timeout(
            self.DEFAULT_TIMEOUT,
            connect=self.CONNECT_TIMEOUT,
            pool=self.POOL_TIMEOUT
        )

        # Redirects such as trailing-slash canonicalization are followed;
        # the browser sees the final answer
        self._client = httpx.AsyncClient(
            limits=limits,
            timeout=timeout,
            transport=self._transport,
            follow_redirects=True
        )

        logger.info(
            "BackendClient started",
            max_connections=self.MAX_CONNECTIONS,
            pool_timeout=self.POOL_TIMEOUT
        )

    async def stop(self):
        """
        Close the HTTP client and release resources.
        Call this during FastAPI app shutdown via lifespan.
        """
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("BackendClient stopped")

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            logger.warning("BackendClient not initialized, starting on first use")
            await self.start()
        return self._client

    def _timeout(self, timeout: Optional[float], connect: Optional[float] = None) -> httpx.Timeout:
        seconds = timeout or self.DEFAULT_TIMEOUT
        return httpx.Timeout(seconds, connect=min(connect or self.CONNECT_TIMEOUT, seconds))

    async def send(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        headers: Optional[dict] = None,
        content: Optional[bytes] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
    ) -> httpx.Response:
        """Send one request to the backend and return the fully read response"""
        client = await self._get_client()

        logger.debug("Backend request", method=method, url=url)
        response = await client.request(
            method,
            url,
            params=params,
            headers=headers,
            content=content,
            timeout=self._timeout(timeout, connect_timeout),
        )
        logger.debug("Backend response", method=method, url=url, status_code=response.status_code)
        return response

    async def open_stream(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
    ) -> httpx.Response:
        """
        Send one request and return the response with its body unread.

        The caller owns the response and must close it with aclose().
        """
        client = await self._get_client()
        request = client.build_request(
            method,
            url,
            headers=headers,
            timeout=self._timeout(timeout, connect_timeout),
        )
        return await client.send(request, stream=True)


# Global instance of the client
backend_client = BackendClient()


def get_backend_client() -> BackendClient:
    """Backend client dependency"""
    return backend_client
