# =============================================================================
# btc_core/services/fetch_orchestrator.py
# Retrying Fetch Orchestrator
# =============================================================================
"""
Fans out one fetch per resource, retries the whole batch on any failure and
reports exhaustion as a failed ServiceResult.

Retry policy (fixed): 3 attempts in total, 2 seconds between attempts. A
failure of any single resource re-runs every resource of the batch.
"""

from __future__ import annotations
import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from btc_core.api.resources import Resource
from btc_core.errors import DecodeError, ExhaustedError, FetchError
from btc_core.offline.connection_state import ConnectionTracker, get_connection_tracker
from btc_core.services.base_service import BaseService, ServiceResult


class ResourceFetcher(Protocol):
    """Anything that can fetch one resource (RemoteDataSource, test stubs)."""

    async def fetch(self, resource: Resource, timeout_ms: Optional[int] = None) -> ServiceResult:
        ...


def unwrap_collection(resource: Resource, payload: Any) -> Any:
    """
    Extract a resource's collection from its response body.

    A missing or null collection key yields an empty collection. A bare JSON
    array is accepted for list resources.

    Raises:
        DecodeError: If the body is neither an object nor (for lists) an array,
            or the collection has the wrong type
    """
    if isinstance(payload, list) and resource.is_list:
        return payload
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Unexpected {type(payload).__name__} payload for {resource.name}",
            resource=resource.name,
        )

    collection = payload.get(resource.collection_key)
    if collection is None:
        return resource.empty()
    if resource.is_list and not isinstance(collection, list):
        raise DecodeError(f"Expected a list under '{resource.collection_key}'", resource=resource.name)
    if not resource.is_list and not isinstance(collection, dict):
        raise DecodeError(f"Expected an object under '{resource.collection_key}'", resource=resource.name)
    return collection


class FetchOrchestrator(BaseService):
    """
    Runs one fetch batch with the dashboard's retry policy.

    Usage:
        async with RemoteDataSource(settings) as source:
            orchestrator = FetchOrchestrator(source)
            result = await orchestrator.run(resources_for(["stats", "requests"]))
            if result:
                payloads = result.data      # {"stats": {...}, "requests": [...]}
            else:
                cause = result.error        # display string only
    """

    MAX_ATTEMPTS = 3
    RETRY_DELAY_SECONDS = 2.0

    def __init__(
        self,
        source: ResourceFetcher,
        tracker: Optional[ConnectionTracker] = None,
        timeout_ms: Optional[int] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        max_attempts: Optional[int] = None,
        retry_delay_seconds: Optional[float] = None,
    ):
        super().__init__()
        self.source = source
        self.tracker = tracker or get_connection_tracker()
        self.timeout_ms = timeout_ms
        self._sleep = sleep
        self.max_attempts = max_attempts or self.MAX_ATTEMPTS
        self.retry_delay_seconds = (
            self.RETRY_DELAY_SECONDS if retry_delay_seconds is None else retry_delay_seconds
        )

    async def run(self, resources: Sequence[Resource]) -> ServiceResult:
        """
        Fetch every resource, retrying the batch until it succeeds or the
        attempt budget is spent.

        Returns:
            ServiceResult.ok(RawPayloads) on success (the tracker is marked live),
            or a failed result with error_code "FETCH_EXHAUSTED"
        """
        resources = list(resources)
        attempts = 0
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_delay_seconds),
            retry=retry_if_exception_type(FetchError),
            sleep=self._sleep,
            before_sleep=self._log_retry,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    payloads = await self._fetch_batch(resources)
        except FetchError as e:
            exhausted = ExhaustedError(
                e.message,
                attempts=attempts,
                last_error=e,
                details={"resource": e.resource},
            )
            self.logger.error(f"Fetch batch exhausted after {attempts} attempts: {e.message}")
            return ServiceResult.from_exception(exhausted)

        self.tracker.mark_live()
        return ServiceResult.ok(payloads, metadata={"attempts": attempts})

    async def _fetch_batch(self, resources: List[Resource]) -> Dict[str, Any]:
        """One attempt: fetch all resources concurrently, fail if any failed."""
        results = await asyncio.gather(
            *(self.source.fetch(resource, self.timeout_ms) for resource in resources)
        )

        payloads: Dict[str, Any] = {}
        for resource, result in zip(resources, results):
            if not result:
                raise FetchError(
                    result.error or f"Failed to fetch {resource.name}",
                    resource=resource.name,
                    code=result.error_code or "FETCH_000",
                )
            payloads[resource.name] = unwrap_collection(resource, result.data)
        return payloads

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self.logger.warning(
            f"Fetch attempt {retry_state.attempt_number}/{self.max_attempts} failed: "
            f"{getattr(error, 'message', error)}; retrying in {self.retry_delay_seconds:.0f}s"
        )
