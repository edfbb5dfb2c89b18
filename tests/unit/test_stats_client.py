"""Tests for the statistics API client against an in-process server"""

import asyncio
import json
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from readstats.dashboard.client import (
    FAILED_TO_FETCH_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    StatsAPIClient,
)
from readstats.dashboard.models import (
    StatisticsSnapshot,
    StatsServiceError,
    StatsTransportError,
)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@asynccontextmanager
async def serve(handler: Handler) -> AsyncIterator[str]:
    """``/api/stats`` を提供するテストサーバーを起動し、ベース URL を返す"""
    app = web.Application()
    app.router.add_get("/api/stats", handler)
    server = TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("")).rstrip("/")
    finally:
        await server.close()


def json_handler(body, status: int = 200) -> Handler:
    async def handler(request: web.Request) -> web.Response:
        return web.json_response(body, status=status)

    return handler


@pytest.mark.asyncio
async def test_success_returns_snapshot(stats_payload):
    async with serve(json_handler({"success": True, "data": stats_payload})) as url:
        snapshot = await StatsAPIClient().fetch_snapshot(url)

    assert isinstance(snapshot, StatisticsSnapshot)
    assert snapshot.model_dump(by_alias=True, mode="json") == stats_payload


@pytest.mark.asyncio
async def test_requests_api_stats_path(stats_payload):
    seen: list[str] = []

    async def handler(request: web.Request) -> web.Response:
        seen.append(request.path)
        return web.json_response({"success": True, "data": stats_payload})

    async with serve(handler) as url:
        await StatsAPIClient().fetch_snapshot(url)

    assert seen == ["/api/stats"]


@pytest.mark.asyncio
async def test_success_without_data_returns_none():
    async with serve(json_handler({"success": True, "data": None})) as url:
        assert await StatsAPIClient().fetch_snapshot(url) is None

    async with serve(json_handler({"success": True})) as url:
        assert await StatsAPIClient().fetch_snapshot(url) is None


@pytest.mark.asyncio
async def test_service_failure_uses_error_field():
    body = {"success": False, "error": "Database unavailable"}
    async with serve(json_handler(body)) as url:
        with pytest.raises(StatsServiceError, match="Database unavailable"):
            await StatsAPIClient().fetch_snapshot(url)


@pytest.mark.asyncio
async def test_service_failure_without_error_uses_fallback():
    async with serve(json_handler({"success": False})) as url:
        with pytest.raises(StatsServiceError) as exc_info:
            await StatsAPIClient().fetch_snapshot(url)

    assert str(exc_info.value) == UNKNOWN_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_http_500_with_error_envelope_uses_envelope_message():
    body = {"success": False, "error": "Aggregation job failed"}
    async with serve(json_handler(body, status=500)) as url:
        with pytest.raises(StatsServiceError) as exc_info:
            await StatsAPIClient().fetch_snapshot(url)

    assert str(exc_info.value) == "Aggregation job failed"
    assert exc_info.value.status == 500


@pytest.mark.asyncio
async def test_http_error_without_envelope_uses_generic_message():
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=502, text="Bad Gateway")

    async with serve(handler) as url:
        with pytest.raises(StatsServiceError) as exc_info:
            await StatsAPIClient().fetch_snapshot(url)

    assert str(exc_info.value) == FAILED_TO_FETCH_MESSAGE
    assert exc_info.value.status == 502


@pytest.mark.asyncio
async def test_http_error_with_success_body_uses_generic_message(stats_payload):
    body = {"success": True, "data": stats_payload}
    async with serve(json_handler(body, status=404)) as url:
        with pytest.raises(StatsServiceError, match=FAILED_TO_FETCH_MESSAGE):
            await StatsAPIClient().fetch_snapshot(url)


@pytest.mark.asyncio
async def test_non_json_body_is_transport_error():
    async def handler(request: web.Request) -> web.Response:
        return web.Response(text="<html>maintenance</html>", content_type="text/html")

    async with serve(handler) as url:
        with pytest.raises(StatsTransportError, match="not valid JSON"):
            await StatsAPIClient().fetch_snapshot(url)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        [1, 2, 3],
        {"data": {}},
        {"success": "yes"},
        {"success": True, "data": "not an object"},
    ],
)
async def test_unexpected_envelope_shape_is_transport_error(body):
    async def handler(request: web.Request) -> web.Response:
        return web.Response(text=json.dumps(body), content_type="application/json")

    async with serve(handler) as url:
        with pytest.raises(StatsTransportError, match="unexpected response shape"):
            await StatsAPIClient().fetch_snapshot(url)


@pytest.mark.asyncio
async def test_invalid_snapshot_is_transport_error(stats_payload):
    stats_payload["totalPageViews"] = -1
    del stats_payload["dailyStats"]

    async with serve(json_handler({"success": True, "data": stats_payload})) as url:
        with pytest.raises(StatsTransportError, match="Invalid statistics payload"):
            await StatsAPIClient().fetch_snapshot(url)


@pytest.mark.asyncio
async def test_unreachable_host_is_transport_error():
    async with serve(json_handler({"success": True})) as url:
        pass

    # サーバー停止後は接続が拒否される
    with pytest.raises(StatsTransportError):
        await StatsAPIClient(timeout=5, connect_timeout=2).fetch_snapshot(url)


@pytest.mark.asyncio
async def test_timeout_is_transport_error():
    async def handler(request: web.Request) -> web.Response:
        await asyncio.sleep(1)
        return web.json_response({"success": True})

    async with serve(handler) as url:
        with pytest.raises(StatsTransportError):
            await StatsAPIClient(timeout=0.1, connect_timeout=0.1).fetch_snapshot(url)


@pytest.mark.asyncio
async def test_empty_base_url_is_transport_error():
    with pytest.raises(StatsTransportError):
        await StatsAPIClient().fetch_snapshot("")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field",
    ["averageReadingTimeSeconds", "averageCharacterCount", "averageDifficultyScore"],
)
async def test_non_finite_average_is_transport_error(stats_payload, field):
    # 1e400 は JSON として正しいが float では inf になる
    stats_payload[field] = "__OVERFLOW__"
    body = json.dumps({"success": True, "data": stats_payload}).replace(
        '"__OVERFLOW__"', "1e400"
    )

    async def handler(request: web.Request) -> web.Response:
        return web.Response(text=body, content_type="application/json")

    async with serve(handler) as url:
        with pytest.raises(StatsTransportError, match="Invalid statistics payload"):
            await StatsAPIClient().fetch_snapshot(url)
