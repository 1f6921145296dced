"""
Shared HTTP Adapter

Single GET-with-JSON primitive used by every external service adapter.
Applies the common request headers and translates failures into
ExternalServiceError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from opentelemetry import trace

from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class JsonHttpClient:
    """
    Thin async JSON client over httpx.

    The underlying ``httpx.AsyncClient`` is created lazily and reused until
    ``close`` is called.
    """

    def __init__(
        self,
        user_agent: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            user_agent: Identifying client string sent on every request
            timeout_seconds: Transport timeout for each call
            transport: Optional custom transport (tests use httpx.MockTransport)
        """
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self._headers,
                timeout=httpx.Timeout(self._timeout_seconds),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get_json(
        self,
        service: str,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Perform a GET request and decode the JSON body.

        Args:
            service: Service name used in errors and spans
            url: Absolute URL
            params: Query parameters

        Returns:
            Decoded JSON payload

        Raises:
            ExternalServiceError: On transport error, non-2xx status or bad JSON
        """
        with tracer.start_as_current_span(f"ner.http.{service}") as span:
            span.set_attribute("http.url", url)
            client = await self._get_client()

            try:
                response = await client.get(url, params=params)
            except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
                span.set_attribute("ner.error", str(e))
                raise ExternalServiceError(service, f"request failed: {e}") from e

            span.set_attribute("http.status_code", response.status_code)
            if not response.is_success:
                raise ExternalServiceError(
                    service,
                    f"API error: {response.status_code}",
                    status_code=response.status_code,
                )

            try:
                return response.json()
            except ValueError as e:
                raise ExternalServiceError(
                    service,
                    "response body is not valid JSON",
                    status_code=response.status_code,
                ) from e
