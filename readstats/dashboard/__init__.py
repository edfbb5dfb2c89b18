"""
Statistics dashboard: configuration store, API client and view state controller
"""

from readstats.dashboard.client import StatsAPIClient
from readstats.dashboard.config_store import (
    ConfigurationStore,
    InMemoryConfigurationStore,
    JsonFileConfigurationStore,
)
from readstats.dashboard.controller import DashboardController
from readstats.dashboard.formatter import format_view_state
from readstats.dashboard.models import (
    DailyStat,
    DashboardError,
    SampleTextUsage,
    StatisticsSnapshot,
    StatsEnvelope,
    StatsServiceError,
    StatsTransportError,
    ViewState,
    ViewStatus,
)
from readstats.dashboard.series import (
    DailySeries,
    DashboardData,
    ReadingTime,
    SampleUsageDistribution,
    SummaryMetrics,
    build_dashboard_data,
    build_daily_series,
    build_sample_usage,
    build_summary_metrics,
    format_reading_time,
)

__all__ = [
    "DashboardController",
    "StatsAPIClient",
    "ConfigurationStore",
    "JsonFileConfigurationStore",
    "InMemoryConfigurationStore",
    "StatisticsSnapshot",
    "DailyStat",
    "SampleTextUsage",
    "StatsEnvelope",
    "ViewState",
    "ViewStatus",
    "DashboardError",
    "StatsTransportError",
    "StatsServiceError",
    "DailySeries",
    "SampleUsageDistribution",
    "SummaryMetrics",
    "DashboardData",
    "ReadingTime",
    "build_dashboard_data",
    "build_daily_series",
    "build_sample_usage",
    "build_summary_metrics",
    "format_reading_time",
    "format_view_state",
]
