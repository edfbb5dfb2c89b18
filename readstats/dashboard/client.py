"""
HTTP client for the reading-time statistics API
"""

import json
from typing import Any

import aiohttp
from pydantic import ValidationError

from readstats.dashboard.models import (
    StatisticsSnapshot,
    StatsEnvelope,
    StatsServiceError,
    StatsTransportError,
)
from readstats.utils.logger import mask_url_credentials
from readstats.utils.mixins import LoggerMixin

STATS_PATH = "/api/stats"
FAILED_TO_FETCH_MESSAGE = "Failed to fetch stats"
UNKNOWN_ERROR_MESSAGE = "Unknown error"


class StatsAPIClient(LoggerMixin):
    """統計 API クライアント"""

    def __init__(self, timeout: float = 30.0, connect_timeout: float = 10.0) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout, connect=connect_timeout)

    async def fetch_snapshot(self, base_url: str) -> StatisticsSnapshot | None:
        """
        ``GET {base_url}/api/stats`` を発行し、エンベロープを検証して返す

        Args:
            base_url: 統計 API のベース URL（末尾のパスなし）

        Returns:
            検証済みのスナップショット。サービスが成功を返したがデータが
            無い場合は None

        Raises:
            StatsTransportError: 通信失敗、またはレスポンス本文が不正な場合
            StatsServiceError: 非 2xx 、または ``success: false`` の場合
        """
        endpoint = f"{base_url}{STATS_PATH}"
        self.logger.debug("Fetching statistics", url=mask_url_credentials(endpoint))

        try:
            async with (
                aiohttp.ClientSession(timeout=self.timeout) as session,
                session.get(endpoint) as response,
            ):
                status = response.status
                body = await response.read()

        except TimeoutError as e:
            self.logger.warning(
                "Timeout when fetching statistics", url=mask_url_credentials(endpoint)
            )
            raise StatsTransportError("Request to statistics API timed out") from e

        except (aiohttp.ClientError, ValueError) as e:
            self.logger.warning(
                "Client error when fetching statistics",
                url=mask_url_credentials(endpoint),
                error=str(e),
            )
            raise StatsTransportError(str(e) or e.__class__.__name__) from e

        if not 200 <= status < 300:
            self.logger.warning("HTTP error from statistics API", status=status)
            message = self._error_from_failed_response(body)
            raise StatsServiceError(message or FAILED_TO_FETCH_MESSAGE, status=status)

        envelope = self._parse_envelope(body)

        if not envelope.success:
            raise StatsServiceError(envelope.error or UNKNOWN_ERROR_MESSAGE)

        if envelope.data is None:
            self.logger.info("Statistics API returned no data")
            return None

        try:
            snapshot = StatisticsSnapshot.model_validate(envelope.data)
        except ValidationError as e:
            raise StatsTransportError(
                f"Invalid statistics payload: {e.error_count()} validation error(s)"
            ) from e

        self.logger.info(
            "Statistics fetched",
            total_page_views=snapshot.total_page_views,
            daily_entries=len(snapshot.daily_stats),
        )
        return snapshot

    def _parse_envelope(self, body: bytes) -> StatsEnvelope:
        """レスポンス本文をエンベロープとして検証"""
        try:
            payload: Any = json.loads(body)
        except ValueError as e:
            raise StatsTransportError(
                "Statistics API returned a response that is not valid JSON"
            ) from e

        try:
            return StatsEnvelope.model_validate(payload)
        except ValidationError as e:
            raise StatsTransportError(
                "Statistics API returned an unexpected response shape"
            ) from e

    def _error_from_failed_response(self, body: bytes) -> str | None:
        """非 2xx レスポンスに失敗エンベロープがあればその error を返す"""
        try:
            envelope = self._parse_envelope(body)
        except StatsTransportError:
            return None

        if envelope.success or not envelope.error:
            return None
        return envelope.error
