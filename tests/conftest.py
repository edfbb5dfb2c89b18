"""
共通フィクスチャと収集設定。

- テスト向けの環境変数を毎テスト自動設定（autouse）
- ルートを `sys.path` に追加して `import readstats.*` を解決
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

# プロジェクトルート（このファイルの親の親）をパスに追加
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """テスト用の環境変数を毎テストで設定し、設定キャッシュを破棄する。

    各テスト終了時に `monkeypatch` により自動で復元されます。
    """
    from readstats.config import clear_settings_cache

    env: dict[str, str] = {
        "ENVIRONMENT": "testing",
        "CONFIG_STORE_PATH": str(tmp_path / "data" / "dashboard_config.json"),
        "LOG_DIR": str(tmp_path / "logs"),
        "LOG_FORMAT": "console",
    }

    for k, v in env.items():
        monkeypatch.setenv(k, v)

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def stats_payload() -> dict[str, Any]:
    """統計 API の data 部分のサンプル"""
    return {
        "totalPageViews": 12840,
        "totalAnalyses": 5321,
        "uniqueSessions": 2210,
        "averageCharacterCount": 1534.5,
        "averageDifficultyScore": 3.46,
        "averageReadingTimeSeconds": 125.9,
        "sampleTextUsage": {"short": 120, "medium": 85, "difficult": 40},
        "errorCount": 7,
        "dailyStats": [
            {
                "date": "2026-10-14",
                "pageViews": 410,
                "analyses": 160,
                "uniqueSessions": 75,
            },
            {
                "date": "2026-10-15",
                "pageViews": 398,
                "analyses": 171,
                "uniqueSessions": 80,
            },
            {
                "date": "2026-10-16",
                "pageViews": 452,
                "analyses": 190,
                "uniqueSessions": 91,
            },
        ],
    }
