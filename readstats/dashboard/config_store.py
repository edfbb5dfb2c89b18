"""
Configuration Store: persists the statistics API base URL across sessions
"""

import json
from pathlib import Path
from typing import Protocol

from readstats.utils.error_handler import safe_with_default
from readstats.utils.mixins import LoggerMixin

API_URL_KEY = "analytics_api_url"


class ConfigurationStore(Protocol):
    """API URL の読み書きインターフェース"""

    def load(self) -> str | None: ...

    def save(self, url: str) -> None: ...


class JsonFileConfigurationStore(LoggerMixin):
    """JSON ファイルに API URL を保存する Configuration Store"""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @safe_with_default("load stored API URL", None)
    def load(self) -> str | None:
        """保存済みの URL を返す（未保存なら None ）"""
        if not self.path.exists():
            self.logger.debug("Configuration file not found", path=str(self.path))
            return None

        with open(self.path, encoding="utf-8") as f:
            document = json.load(f)

        url = document.get(API_URL_KEY) if isinstance(document, dict) else None
        if not isinstance(url, str) or not url:
            return None
        return url

    def save(self, url: str) -> None:
        """URL を保存（既存の値は上書き、形式の検証はしない）"""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        document: dict = {}
        if self.path.exists():
            try:
                with open(self.path, encoding="utf-8") as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    document = loaded
            except (OSError, ValueError) as e:
                self.logger.warning(
                    "Overwriting unreadable configuration file",
                    path=str(self.path),
                    error=str(e),
                )

        document[API_URL_KEY] = url

        # 一時ファイルに書き込んでから置き換える
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

        self.logger.info("API URL saved", path=str(self.path))


class InMemoryConfigurationStore:
    """プロセス内だけで値を保持する Configuration Store（テスト用）"""

    def __init__(self, initial: str | None = None) -> None:
        self._url = initial

    def load(self) -> str | None:
        return self._url or None

    def save(self, url: str) -> None:
        self._url = url
