"""
Shared HTTP client infrastructure for the BallDontLie integration.

Provides BaseApiClient with credential checks, optional client-side rate
limiting and a small error taxonomy. There are deliberately no retries at this
layer: every call is exactly one outbound request and callers decide how a
failure is handled.

Usage:
    class MyClient(BaseApiClient):
        BASE_URL = "https://api.example.com"

        async def get_data(self) -> dict:
            return await self.fetch_json("/data")

    async with MyClient(credential="...") as client:
        data = await client.get_data()
"""

import asyncio
import logging
import time
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ExternalAPIError(Exception):
    """Base exception for external API errors."""

    def __init__(
        self,
        message: str,
        code: str = "EXTERNAL_API_ERROR",
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class MissingCredentialError(ExternalAPIError):
    """Raised before any request when no API credential is configured."""

    def __init__(self, message: str = "No API key provided"):
        super().__init__(message, code="MISSING_CREDENTIAL", status_code=401)


class HttpError(ExternalAPIError):
    """The API answered with a non-2xx status."""

    def __init__(self, status: int, path: str = ""):
        super().__init__(f"HTTP {status} for {path}", code="HTTP_ERROR", status_code=status)
        self.status = status
        self.path = path


class NetworkError(ExternalAPIError):
    """Transport-level failure (DNS, timeout, connection reset)."""

    def __init__(self, message: str):
        super().__init__(message, code="NETWORK_ERROR", status_code=503)


class InvalidResponseError(ExternalAPIError):
    """A 2xx response whose body is not the expected JSON shape."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_RESPONSE", status_code=502)


# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------

class RateLimiter:
    """Simple token bucket rate limiter for async API calls."""

    def __init__(self, requests_per_minute: int = 600):
        self.delay = 60.0 / requests_per_minute
        self._last_request = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until we can make a request."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request
            if elapsed < self.delay:
                await asyncio.sleep(self.delay - elapsed)
            self._last_request = time.monotonic()


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------

class BaseApiClient:
    """
    Async HTTP client base with credential handling and rate limiting.

    Use as an async context manager, or lazily (the underlying client is
    created on first use) followed by ``await client.close()``.
    """

    BASE_URL: str = ""

    def __init__(
        self,
        credential: Optional[str],
        *,
        base_url: str | None = None,
        auth_scheme: str = "",
        requests_per_minute: Optional[int] = 600,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._credential = (credential or "").strip()
        self._auth_scheme = auth_scheme.strip()
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._rate_limiter = RateLimiter(requests_per_minute) if requests_per_minute else None
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # -- Lifecycle -----------------------------------------------------------

    async def __aenter__(self) -> "BaseApiClient":
        self._client = self._build_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the HTTP client, lazily creating it if needed."""
        if self._client is None or self._client.is_closed:
            self._client = self._build_client()
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def is_configured(self) -> bool:
        """Whether a credential is available."""
        return bool(self._credential)

    def require_credential(self) -> None:
        """Raise MissingCredentialError if no credential is configured."""
        if not self._credential:
            raise MissingCredentialError()

    @property
    def auth_header(self) -> str:
        if self._auth_scheme:
            return f"{self._auth_scheme} {self._credential}"
        return self._credential

    # -- HTTP ----------------------------------------------------------------

    async def fetch_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Issue one authenticated GET and decode the JSON body.

        Raises:
            MissingCredentialError: no credential, nothing was sent
            HttpError: response status outside 2xx
            NetworkError: transport failure
            InvalidResponseError: 2xx body is not a JSON object
        """
        self.require_credential()

        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        try:
            response = await self.client.get(
                path,
                params=params,
                headers={"Authorization": self.auth_header},
            )
        except httpx.TransportError as e:
            logger.warning(f"Request error for {path}: {e!r}")
            raise NetworkError(f"Request failed for {path}: {e!r}") from e

        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} for {path}")
            raise HttpError(response.status_code, path)

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(f"Invalid JSON body for {path}")
            raise InvalidResponseError(f"Invalid JSON body for {path}") from e

        if not isinstance(body, dict):
            raise InvalidResponseError(
                f"Expected a JSON object for {path}, got {type(body).__name__}"
            )
        return body
