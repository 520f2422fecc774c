"""
Remote Data Source Adapter
Wraps one HTTP GET against the BTC network API with a hard deadline.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx

from btc_core.api.config_manager import APISettings
from btc_core.api.resources import Resource
from btc_core.errors import (
    DecodeError,
    FetchError,
    FetchTimeoutError,
    HttpStatusError,
    TransportError,
)
from btc_core.logging import get_logger
from btc_core.services.base_service import ServiceResult

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class RemoteDataSource:
    """
    Async adapter around httpx for the BTC network API.

    fetch() never raises for network problems: it returns a ServiceResult
    whose error_code names the failure class (FETCH_001 timeout,
    FETCH_002 HTTP status, FETCH_003 transport, FETCH_004 decode).

    Usage:
        async with RemoteDataSource(settings) as source:
            result = await source.fetch(resource)
            if result:
                payload = result.data
    """

    def __init__(
        self,
        settings: APISettings,
        client: Optional[httpx.AsyncClient] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={**DEFAULT_HEADERS, **(headers or {})},
            timeout=httpx.Timeout(settings.timeout_ms / 1000),
            verify=settings.verify_tls,
        )

    async def __aenter__(self) -> RemoteDataSource:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def url_for(self, resource: Resource) -> str:
        return f"{self.settings.base_url}/{resource.path}"

    async def fetch(self, resource: Resource, timeout_ms: Optional[int] = None) -> ServiceResult:
        """
        Fetch one resource and parse its JSON body.

        Args:
            resource: Endpoint description
            timeout_ms: Deadline for the whole call (default: settings.timeout_ms)

        Returns:
            ServiceResult.ok(parsed_json) or a failed result built from a FetchError
        """
        try:
            payload = await self._get_json(resource, timeout_ms or self.settings.timeout_ms)
        except FetchError as e:
            logger.warning(f"Fetch failed for {resource.name}: {e}")
            return ServiceResult.from_exception(e)
        return ServiceResult.ok(payload, metadata={"resource": resource.name})

    async def _get_json(self, resource: Resource, timeout_ms: int) -> Any:
        url = self.url_for(resource)
        try:
            response = await asyncio.wait_for(
                self._client.get(url, params=resource.query_params()),
                timeout=timeout_ms / 1000,
            )
            response.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise FetchTimeoutError(
                f"Request to {resource.path} timed out after {timeout_ms} ms",
                timeout_ms=timeout_ms,
                resource=resource.name,
                url=url,
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise HttpStatusError(
                f"Failed to fetch {resource.name}: {status}",
                status_code=status,
                resource=resource.name,
                url=url,
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"Connection to {resource.path} failed: {e}",
                resource=resource.name,
                url=url,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(
                f"Invalid JSON from {resource.path}: {e}",
                resource=resource.name,
                url=url,
            )
