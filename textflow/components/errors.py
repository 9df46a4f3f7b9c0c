"""
文件路径：textflow/components/errors.py

说明：排版、数据与翻译相关的异常类型，均携带 `ERR_` 错误码。
"""

from __future__ import annotations

from ..variables import (
    ERR_DATA_INVALID,
    ERR_INVALID_ARGUMENT,
    ERR_METRICS_FAILURE,
    ERR_TRANSLATION_FAILED,
)


class TextFlowError(Exception):
    """本项目异常基类，消息格式为 "[错误码] 描述"。"""

    err_code: int = 0

    def __init__(self, message: str) -> None:
        super().__init__(f"[{self.err_code}] {message}")
        self.detail = message


class InvalidArgumentError(TextFlowError, ValueError):
    """参数非法（如非正的行宽或字号），调用方需修正输入，不可重试。"""

    err_code = ERR_INVALID_ARGUMENT


class MetricsFailureError(TextFlowError, RuntimeError):
    """字形度量抛出异常或返回非有限/负宽度。"""

    err_code = ERR_METRICS_FAILURE


class DataInvalidError(TextFlowError, ValueError):
    """请求数据结构非法（如缺少 pages 数组）。"""

    err_code = ERR_DATA_INVALID


class TranslationError(TextFlowError, RuntimeError):
    """翻译结果无法解析。"""

    err_code = ERR_TRANSLATION_FAILED


__all__ = [
    "TextFlowError",
    "InvalidArgumentError",
    "MetricsFailureError",
    "DataInvalidError",
    "TranslationError",
]
