"""共通エラーハンドリングユーティリティ

呼び出し元を失敗させてはいけない操作のために、例外をログ記録して
デフォルト値を返すデコレータを提供します。
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class ErrorHandler:
    """共通エラーハンドリング機能を提供するクラス"""

    @staticmethod
    def log_and_return_default(
        operation_name: str, exception: Exception, default_value: T, **kwargs: Any
    ) -> T:
        """エラーをログ記録し、デフォルト値を返す標準パターン"""
        logger.error(f"Failed to {operation_name}", error=str(exception), **kwargs)
        return default_value


def safe_with_default(operation_name: str, default_value: Any, **log_kwargs: Any):
    """
    エラー時にログを記録してデフォルト値を返すデコレータ

    Args:
        operation_name: 操作の名前（ログ記録用）
        default_value: エラー時の戻り値
        **log_kwargs: ログに追加する情報
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                return ErrorHandler.log_and_return_default(
                    operation_name, e, default_value, **log_kwargs
                )

        return wrapper

    return decorator
