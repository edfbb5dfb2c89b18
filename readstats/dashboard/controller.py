"""
Dashboard Controller: owns the view state machine
"""

import asyncio
from collections.abc import Callable
from typing import Protocol

from readstats.dashboard.config_store import ConfigurationStore
from readstats.dashboard.models import (
    DashboardError,
    StatisticsSnapshot,
    ViewState,
    ViewStatus,
)
from readstats.dashboard.series import DashboardData, build_dashboard_data
from readstats.utils.mixins import LoggerMixin

StateListener = Callable[[ViewState], None]


class StatisticsSource(Protocol):
    async def fetch_snapshot(self, base_url: str) -> StatisticsSnapshot | None: ...


class DashboardController(LoggerMixin):
    """ダッシュボードの表示状態を管理するコントローラー

    状態遷移はイベントループ上で一つずつ処理される。フェッチを開始する操作は
    同期的に ``Loading`` へ遷移し、結果を待つための ``asyncio.Task`` を返す。
    各フェッチには世代番号が付き、最新の世代以外の結果は破棄される。
    """

    def __init__(
        self, store: ConfigurationStore, client: StatisticsSource
    ) -> None:
        self._store = store
        self._client = client
        self._state = ViewState.unconfigured()
        self._api_url: str | None = None
        self._generation = 0
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def api_url(self) -> str | None:
        """現在使用中の API URL"""
        return self._api_url

    @property
    def dashboard_data(self) -> DashboardData | None:
        """Ready 状態のときのチャート用データ"""
        if self._state.snapshot is None:
            return None
        return build_dashboard_data(self._state.snapshot)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """状態遷移の通知を登録し、解除用の関数を返す"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def initialize(self) -> "asyncio.Task[ViewState] | None":
        """保存済み URL があればフェッチを開始、無ければ Unconfigured"""
        url = self._store.load()
        if not url:
            self.logger.info("No API URL configured")
            self._set_state(ViewState.unconfigured())
            return None

        self._api_url = url
        return self.fetch_statistics(url)

    def submit_url(self, url: str) -> "asyncio.Task[ViewState]":
        """URL を保存してからフェッチを開始"""
        # フェッチ結果より前に保存する
        self._store.save(url)
        self._api_url = url
        return self.fetch_statistics(url)

    def refresh(self) -> "asyncio.Task[ViewState] | None":
        """現在の URL で再取得"""
        if not self._api_url:
            self.logger.debug("Refresh ignored: no API URL configured")
            return None
        return self.fetch_statistics(self._api_url)

    def fetch_statistics(self, url: str) -> "asyncio.Task[ViewState]":
        """Loading に遷移し、統計の取得タスクを開始"""
        self._generation += 1
        generation = self._generation

        self.logger.info("Fetching statistics", generation=generation)
        self._set_state(ViewState.loading())

        return asyncio.get_running_loop().create_task(
            self._run_fetch(url, generation)
        )

    async def _run_fetch(self, url: str, generation: int) -> ViewState:
        result = await self._resolve(url)

        if generation != self._generation:
            self.logger.info(
                "Discarding stale statistics response",
                generation=generation,
                current_generation=self._generation,
                status=result.status.value,
            )
            return self._state

        self._set_state(result)
        return result

    async def _resolve(self, url: str) -> ViewState:
        try:
            snapshot = await self._client.fetch_snapshot(url)
        except DashboardError as e:
            self.logger.warning("Statistics fetch failed", error=str(e))
            return ViewState.error(str(e))
        except Exception as e:
            self.logger.error(
                "Unexpected error while fetching statistics",
                error=str(e),
                exc_info=True,
            )
            return ViewState.error(str(e) or e.__class__.__name__)

        if snapshot is None:
            return ViewState.empty()
        return ViewState.ready(snapshot)

    def _set_state(self, state: ViewState) -> None:
        previous = self._state
        self._state = state

        if previous.status != state.status:
            self.logger.debug(
                "View state changed",
                previous=previous.status.value,
                current=state.status.value,
            )
        if state.status is ViewStatus.ERROR:
            self.logger.info("Dashboard entered error state", message=state.message)

        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                self.logger.error(
                    "State listener failed",
                    status=state.status.value,
                    error=str(e),
                    exc_info=True,
                )
