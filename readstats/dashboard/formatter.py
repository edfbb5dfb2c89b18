"""
Dashboard formatting utilities
"""

from readstats.dashboard.models import ViewState, ViewStatus
from readstats.dashboard.series import (
    ANALYSES_LABEL,
    PAGE_VIEWS_LABEL,
    DashboardData,
    ReadingTime,
    SummaryMetrics,
    build_dashboard_data,
)

DASHBOARD_TITLE = "note読了時間予想 - 統計ダッシュボード"
API_URL_PLACEHOLDER = "https://your-api.vercel.app"


def format_view_state(state: ViewState, api_url: str | None = None) -> str:
    """
    表示状態をMarkdown形式にフォーマット

    Args:
        state: コントローラーの現在の表示状態
        api_url: 設定中の API URL

    Returns:
        Markdown形式の文字列
    """
    if state.status is ViewStatus.UNCONFIGURED:
        return _format_unconfigured()
    if state.status is ViewStatus.LOADING:
        return "読み込み中..."
    if state.status is ViewStatus.ERROR:
        return f"エラー: {state.message}"
    if state.status is ViewStatus.EMPTY or state.snapshot is None:
        return "データがありません"

    return format_dashboard(build_dashboard_data(state.snapshot), api_url)


def format_dashboard(data: DashboardData, api_url: str | None = None) -> str:
    sections = [f"# {DASHBOARD_TITLE}\n"]

    sections.append(_format_summary_cards(data.summary))
    sections.append(_format_metric_cards(data.summary))
    sections.append(_format_daily_table(data))
    sections.append(_format_sample_usage(data))

    if api_url:
        sections.append(f"## 設定\n\n- Analytics API URL: `{api_url}`\n")

    return "\n".join(sections)


def format_number(value: float) -> str:
    """桁区切り付きの数値表記"""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_reading_time_label(reading_time: ReadingTime) -> str:
    return f"{reading_time.minutes}分{reading_time.seconds}秒"


def _format_unconfigured() -> str:
    lines = [
        "# Analytics API URL設定\n",
        "統計 API の URL が設定されていません。",
        f"`--api-url` で URL を指定してください（例: `{API_URL_PLACEHOLDER}`）。",
    ]
    return "\n".join(lines)


def _format_summary_cards(summary: SummaryMetrics) -> str:
    lines = ["## サマリー"]
    lines.append(f"- **総ページビュー**: {format_number(summary.total_page_views)}")
    lines.append(f"- **総分析実行数**: {format_number(summary.total_analyses)}")
    lines.append(f"- **ユニークセッション**: {format_number(summary.unique_sessions)}")
    lines.append(f"- **エラー数**: {format_number(summary.error_count)}")
    return "\n".join(lines) + "\n"


def _format_metric_cards(summary: SummaryMetrics) -> str:
    lines = ["## メトリクス"]
    lines.append(
        f"- **平均文字数**: {format_number(summary.average_character_count)}"
    )
    lines.append(f"- **平均難易度スコア**: {summary.average_difficulty_score:.1f}")
    lines.append(
        f"- **平均読了時間**: {format_reading_time_label(summary.average_reading_time)}"
    )
    return "\n".join(lines) + "\n"


def _format_daily_table(data: DashboardData) -> str:
    lines = ["## 30日間の推移"]

    if not len(data.daily):
        lines.append("日別データがありません")
        return "\n".join(lines) + "\n"

    lines.append(f"| 日付 | {PAGE_VIEWS_LABEL} | {ANALYSES_LABEL} |")
    lines.append("|---|---:|---:|")
    for label, page_views, analyses in zip(
        data.daily.labels, data.daily.page_views, data.daily.analyses, strict=True
    ):
        lines.append(
            f"| {label} | {format_number(page_views)} | {format_number(analyses)} |"
        )
    return "\n".join(lines) + "\n"


def _format_sample_usage(data: DashboardData) -> str:
    lines = ["## サンプルテキスト使用状況"]
    for label, count in data.sample_usage.items():
        lines.append(f"- {label}: {format_number(count)}")
    return "\n".join(lines) + "\n"
