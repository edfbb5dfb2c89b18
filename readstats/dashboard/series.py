"""
Chart-ready series and summary metrics derived from a statistics snapshot
"""

from dataclasses import dataclass
from typing import Any, NamedTuple

from readstats.dashboard.models import StatisticsSnapshot

PAGE_VIEWS_LABEL = "ページビュー"
ANALYSES_LABEL = "分析実行数"
SAMPLE_USAGE_LABELS = ("短いサンプル", "中程度のサンプル", "難しいサンプル")


class ReadingTime(NamedTuple):
    """平均読了時間（分・秒）"""

    minutes: int
    seconds: int


def format_reading_time(reading_time_seconds: float) -> ReadingTime:
    """
    秒数を分と秒に分割

    小数部は分割前に切り捨てるため、秒は常に整数になる。

    Args:
        reading_time_seconds: 0 以上の秒数

    Returns:
        ReadingTime(minutes, seconds)
    """
    total_seconds = int(reading_time_seconds)
    minutes, seconds = divmod(total_seconds, 60)
    return ReadingTime(minutes=minutes, seconds=seconds)


@dataclass(frozen=True)
class DailySeries:
    """日付ごとに揃えたページビューと分析実行数の系列"""

    labels: tuple[str, ...]
    page_views: tuple[int, ...]
    analyses: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.labels)

    def to_chart_data(self) -> dict[str, Any]:
        """折れ線グラフ用のデータ"""
        return {
            "labels": list(self.labels),
            "datasets": [
                {"label": PAGE_VIEWS_LABEL, "data": list(self.page_views)},
                {"label": ANALYSES_LABEL, "data": list(self.analyses)},
            ],
        }


@dataclass(frozen=True)
class SampleUsageDistribution:
    """サンプルテキスト使用回数（正規化しない生の値）"""

    short: int
    medium: int
    difficult: int

    @property
    def counts(self) -> tuple[int, int, int]:
        return (self.short, self.medium, self.difficult)

    def items(self) -> list[tuple[str, int]]:
        return list(zip(SAMPLE_USAGE_LABELS, self.counts, strict=True))

    def to_chart_data(self) -> dict[str, Any]:
        """ドーナツグラフ用のデータ"""
        return {
            "labels": list(SAMPLE_USAGE_LABELS),
            "datasets": [{"data": list(self.counts)}],
        }


@dataclass(frozen=True)
class SummaryMetrics:
    """サマリーカードとメトリクスカードの値"""

    total_page_views: int
    total_analyses: int
    unique_sessions: int
    error_count: int
    average_character_count: float
    average_difficulty_score: float
    average_reading_time: ReadingTime


@dataclass(frozen=True)
class DashboardData:
    """レンダリング層に渡す派生データ一式"""

    summary: SummaryMetrics
    daily: DailySeries
    sample_usage: SampleUsageDistribution


def build_daily_series(snapshot: StatisticsSnapshot) -> DailySeries:
    """dailyStats の順序をそのまま保った二つの系列を作成"""
    entries = snapshot.daily_stats
    return DailySeries(
        labels=tuple(entry.date.isoformat() for entry in entries),
        page_views=tuple(entry.page_views for entry in entries),
        analyses=tuple(entry.analyses for entry in entries),
    )


def build_sample_usage(snapshot: StatisticsSnapshot) -> SampleUsageDistribution:
    usage = snapshot.sample_text_usage
    return SampleUsageDistribution(
        short=usage.short, medium=usage.medium, difficult=usage.difficult
    )


def build_summary_metrics(snapshot: StatisticsSnapshot) -> SummaryMetrics:
    return SummaryMetrics(
        total_page_views=snapshot.total_page_views,
        total_analyses=snapshot.total_analyses,
        unique_sessions=snapshot.unique_sessions,
        error_count=snapshot.error_count,
        average_character_count=snapshot.average_character_count,
        average_difficulty_score=snapshot.average_difficulty_score,
        average_reading_time=format_reading_time(
            snapshot.average_reading_time_seconds
        ),
    )


def build_dashboard_data(snapshot: StatisticsSnapshot) -> DashboardData:
    return DashboardData(
        summary=build_summary_metrics(snapshot),
        daily=build_daily_series(snapshot),
        sample_usage=build_sample_usage(snapshot),
    )
