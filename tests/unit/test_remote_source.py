# =============================================================================
# tests/unit/test_remote_source.py
# Unit Tests for RemoteDataSource (httpx.MockTransport, no network)
# =============================================================================

import asyncio

import httpx

from btc_core.api.remote_source import RemoteDataSource
from btc_core.api.resources import build_catalogue


def _fetch(settings, handler, name="stats", timeout_ms=None):
    """Run one fetch against a mock transport and return (result, client)."""
    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with RemoteDataSource(settings, client=client) as source:
            result = await source.fetch(build_catalogue(settings)[name], timeout_ms)
        closed = client.is_closed
        await client.aclose()
        return result, closed
    return asyncio.run(run())


class TestRemoteDataSourceSuccess:

    def test_returns_parsed_json(self, settings):
        seen = []

        def handler(request):
            seen.append(request.url)
            return httpx.Response(200, json={"stats": {"totalDonors": 5}})

        result, _ = _fetch(settings, handler)

        assert result.success
        assert result.data == {"stats": {"totalDonors": 5}}
        assert str(seen[0]) == "https://btc.test/Dashboard/stats"

    def test_center_query_parameters(self, settings):
        seen = []

        def handler(request):
            seen.append(request.url.params)
            return httpx.Response(200, json={"bloodTansfusionCenters": []})

        _fetch(settings, handler, name="centers")

        params = seen[0]
        assert params["wilayaId"] == "0"
        assert params["paginationTake"] == "50"
        assert params["paginationSkip"] == "0"
        assert params["level"] == "0"

    def test_injected_client_left_open(self, settings):
        _, closed = _fetch(settings, lambda request: httpx.Response(200, json={}))
        assert not closed


class TestRemoteDataSourceFailures:

    def test_http_status(self, settings):
        result, _ = _fetch(settings, lambda request: httpx.Response(500))
        assert not result.success
        assert result.error_code == "FETCH_002"
        assert result.error == "Failed to fetch stats: 500"
        assert result.metadata["status_code"] == 500

    def test_transport_error(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result, _ = _fetch(settings, handler)
        assert result.error_code == "FETCH_003"

    def test_client_timeout(self, settings):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        result, _ = _fetch(settings, handler)
        assert result.error_code == "FETCH_001"

    def test_deadline_cancels_slow_call(self, settings):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200, json={})

        result, _ = _fetch(settings, handler, timeout_ms=20)
        assert result.error_code == "FETCH_001"
        assert result.metadata["timeout_ms"] == 20

    def test_invalid_json(self, settings):
        result, _ = _fetch(settings, lambda request: httpx.Response(200, content=b"<html>"))
        assert result.error_code == "FETCH_004"
