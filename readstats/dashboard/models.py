"""
Statistics payload models and dashboard view states
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_type
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    StrictBool,
)
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    """API の camelCase フィールドを受け付ける不変モデルの基底"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        allow_inf_nan=False,
    )


class SampleTextUsage(_ApiModel):
    """サンプルテキストの使用回数"""

    short: NonNegativeInt = Field(description="短いサンプルの使用回数")
    medium: NonNegativeInt = Field(description="中程度のサンプルの使用回数")
    difficult: NonNegativeInt = Field(description="難しいサンプルの使用回数")


class DailyStat(_ApiModel):
    """日別統計"""

    date: date_type = Field(description="集計日")
    page_views: NonNegativeInt = Field(description="ページビュー数")
    analyses: NonNegativeInt = Field(description="分析実行数")
    unique_sessions: NonNegativeInt = Field(description="ユニークセッション数")


class StatisticsSnapshot(_ApiModel):
    """統計 API から受信した検証済みスナップショット"""

    total_page_views: NonNegativeInt
    total_analyses: NonNegativeInt
    unique_sessions: NonNegativeInt
    average_character_count: NonNegativeFloat
    average_difficulty_score: NonNegativeFloat
    average_reading_time_seconds: NonNegativeFloat
    sample_text_usage: SampleTextUsage
    error_count: NonNegativeInt
    # サービス側の並び順をそのまま保持する（並べ替え・重複除去はしない）
    daily_stats: tuple[DailyStat, ...] = Field(
        description="日別統計（日付の昇順）"
    )


class StatsEnvelope(BaseModel):
    """API レスポンスの共通エンベロープ ``{success, data, error}``"""

    model_config = ConfigDict(frozen=True)

    success: StrictBool
    # data はエンベロープの検証後に StatisticsSnapshot として検証する
    data: dict[str, Any] | None = None
    error: str | None = None


class ViewStatus(str, Enum):
    """ダッシュボードの表示状態"""

    UNCONFIGURED = "unconfigured"
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


@dataclass(frozen=True)
class ViewState:
    """レンダリング層が読み取る唯一の表示状態"""

    status: ViewStatus
    message: str | None = None
    snapshot: StatisticsSnapshot | None = None

    @classmethod
    def unconfigured(cls) -> ViewState:
        return cls(ViewStatus.UNCONFIGURED)

    @classmethod
    def loading(cls) -> ViewState:
        return cls(ViewStatus.LOADING)

    @classmethod
    def error(cls, message: str) -> ViewState:
        return cls(ViewStatus.ERROR, message=message)

    @classmethod
    def empty(cls) -> ViewState:
        return cls(ViewStatus.EMPTY)

    @classmethod
    def ready(cls, snapshot: StatisticsSnapshot) -> ViewState:
        return cls(ViewStatus.READY, snapshot=snapshot)


class DashboardError(Exception):
    """ダッシュボード関連のエラー"""


class StatsTransportError(DashboardError):
    """到達不能・タイムアウト・不正なレスポンス本文"""


class StatsServiceError(DashboardError):
    """サービスが失敗を報告した（ success: false または非 2xx ）"""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
