"""
文件路径：textflow/components/__init__.py

说明：
- 通用组件包入口：日志、文件路径、重试与错误格式化在此实现；
- 坐标、页选择、文本、字体与异常拆分在同名子模块中，这里聚合导出；
- 业务模块统一使用 `from textflow.components import ...` 导入。
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional, Type

from ..variables import (
    PATH_LOGS_DIR,
    PATH_OUTPUT_DIR,
    PATH_TEMP_DIR,
    PATH_LOG_FILE,
    CONST_DEFAULT_OUTPUT_SUFFIX,
    CONST_LOG_FORMAT,
    CONST_LOG_DATEFMT,
    CONST_MAX_RETRY,
    ERR_PATH_NOT_WRITABLE,
    ERR_FILE_NOT_FOUND,
)

from .coords import clamp_baseline, cover_rect, fit_font_size, to_reportlab_y
from .errors import (
    DataInvalidError,
    InvalidArgumentError,
    MetricsFailureError,
    TextFlowError,
    TranslationError,
)
from .fonts import (
    GlyphMetrics,
    estimated_glyph_metrics,
    pick_preferred_cjk_font,
    probe_available_cjk_fonts,
    register_cjk_font,
    reportlab_glyph_metrics,
)
from .page import parse_page_selection
from .text import (
    estimate_text_width,
    has_cjk_ideograph,
    has_kana,
    is_dense_script_char,
    split_paragraphs,
    tokenize_paragraph,
)


# =============================
# 日志工具
# =============================
_LOGGER_CONFIGURED: bool = False


def get_logger(name: str) -> logging.Logger:
    """获取 logger，首次调用时配置文件与控制台双输出。

    参数：
        name: 日志记录器名称（一般使用 __name__）。
    """
    global _LOGGER_CONFIGURED
    if not _LOGGER_CONFIGURED:
        PATH_LOGS_DIR.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(PATH_LOG_FILE, encoding="utf-8")
        console_handler = logging.StreamHandler()
        logging.basicConfig(
            level=logging.INFO,
            format=CONST_LOG_FORMAT,
            datefmt=CONST_LOG_DATEFMT,
            handlers=[file_handler, console_handler],
        )
        _LOGGER_CONFIGURED = True
    return logging.getLogger(name)


# =============================
# 文件操作
# =============================
class FileHandler:
    """文件与路径相关的通用处理器。"""

    @staticmethod
    def ensure_project_dirs() -> None:
        """确保 logs/output/temp 目录存在。"""
        for d in (PATH_LOGS_DIR, PATH_OUTPUT_DIR, PATH_TEMP_DIR):
            d.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def validate_readable_file(path: Path) -> None:
        """校验文件可读。

        异常：
            FileNotFoundError: 文件不存在或不是普通文件。
        """
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(ErrorHandler.format_error(ERR_FILE_NOT_FOUND, f"文件不存在或不可读: {path}"))

    @staticmethod
    def ensure_parent_writable(target: Path) -> None:
        """确保目标文件的父目录可写，不存在则创建。

        异常：
            PermissionError: 目录不可写。
        """
        parent = target.parent
        parent.mkdir(parents=True, exist_ok=True)
        probe = parent / f".__writable_probe_{int(time.time()*1000)}"
        try:
            with open(probe, "w", encoding="utf-8") as f:  # noqa: P103
                f.write("probe")
        except OSError as exc:
            raise PermissionError(ErrorHandler.format_error(ERR_PATH_NOT_WRITABLE, f"目录不可写: {parent}")) from exc
        else:
            probe.unlink(missing_ok=True)

    @staticmethod
    def timestamped_output_path(
        source: Optional[Path],
        suffix: str = CONST_DEFAULT_OUTPUT_SUFFIX,
        output_dir: Optional[Path] = None,
    ) -> Path:
        """生成带时间戳的输出路径，默认位于 output 目录。

        示例：
            >>> FileHandler.timestamped_output_path(Path("manual.pdf"))
            Path("output/manual_20240101_120000_translated.pdf")
        """
        target_dir = output_dir if output_dir is not None else PATH_OUTPUT_DIR
        target_dir.mkdir(parents=True, exist_ok=True)
        ts = time.strftime("%Y%m%d_%H%M%S")
        stem = source.stem if source is not None else "output"
        return target_dir / f"{stem}_{ts}{suffix}"


# =============================
# 重试机制与错误处理
# =============================
def retry_on_exception(
    retries: int = CONST_MAX_RETRY,
    exceptions: Iterable[Type[BaseException]] = (OSError,),
    delay_s: float = 0.2,
    backoff: float = 2.0,
) -> Callable[[Callable[..., object]], Callable[..., object]]:
    """装饰器：本地 IO 异常自动重试，含指数退避。

    参数：
        retries: 重试次数（不含首次）。
        exceptions: 触发重试的异常类型集合。
        delay_s: 初始等待秒数。
        backoff: 每次重试的等待倍数。
    """
    exc_types = tuple(exceptions)

    def decorator(func: Callable[..., object]) -> Callable[..., object]:
        def wrapper(*args, **kwargs):
            wait = delay_s
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exc_types as exc:
                    if attempt >= retries:
                        raise
                    logger = get_logger(func.__module__)
                    logger.warning("操作失败，准备重试（第 %s 次）：%s", attempt + 1, exc)
                    time.sleep(wait)
                    wait *= backoff
                    attempt += 1

        wrapper.__name__ = getattr(func, "__name__", "wrapper")
        wrapper.__doc__ = func.__doc__
        return wrapper

    return decorator


class ErrorHandler:
    """错误处理相关工具。"""

    @staticmethod
    def format_error(err_code: int, message: str) -> str:
        """生成统一错误信息字符串。"""
        return f"[{err_code}] {message}"


# =============================
# 导出声明
# =============================
__all__ = [
    # 日志工具
    "get_logger",
    # 文件操作
    "FileHandler",
    # 重试与错误处理
    "retry_on_exception",
    "ErrorHandler",
    "TextFlowError",
    "InvalidArgumentError",
    "MetricsFailureError",
    "DataInvalidError",
    "TranslationError",
    # 坐标处理
    "to_reportlab_y",
    "cover_rect",
    "fit_font_size",
    "clamp_baseline",
    # 页选择解析
    "parse_page_selection",
    # 文本
    "estimate_text_width",
    "has_cjk_ideograph",
    "has_kana",
    "is_dense_script_char",
    "split_paragraphs",
    "tokenize_paragraph",
    # 字体
    "GlyphMetrics",
    "pick_preferred_cjk_font",
    "probe_available_cjk_fonts",
    "register_cjk_font",
    "reportlab_glyph_metrics",
    "estimated_glyph_metrics",
]
