"""
文件路径：textflow/components/coords.py

说明：坐标换算、遮盖框与字号计算。
"""

from __future__ import annotations

from typing import Tuple

from ..variables import (
    CONST_CLAMP_MARGIN_DEFAULT,
    CONST_COVER_PADDING,
    CONST_FONT_SIZE_MAX,
    CONST_FONT_SIZE_MIN,
    CONST_FONT_SIZE_RATIO,
)


def to_reportlab_y(y_top_based: float, page_height: float) -> float:
    """将 pdfplumber 顶左原点的 Y 值转换为 ReportLab 底左原点的 Y。"""
    return page_height - y_top_based


def cover_rect(
    x: float,
    y: float,
    width: float,
    height: float,
    page_width: float,
    page_height: float,
    padding: float = CONST_COVER_PADDING,
) -> Tuple[float, float, float, float]:
    """计算遮盖原文的白底矩形 (x, y, w, h)，底左原点。

    四周外扩 padding，但不越出页面左/下边界；宽高受页面右/上边界限制。
    """
    rx = max(0.0, x - padding)
    ry = max(0.0, y - padding)
    rw = min(width + padding * 2, page_width - x + padding)
    rh = min(height + padding * 2, page_height - y + padding)
    return rx, ry, max(0.0, rw), max(0.0, rh)


def fit_font_size(
    source_size: float,
    ratio: float = CONST_FONT_SIZE_RATIO,
    minimum: float = CONST_FONT_SIZE_MIN,
    maximum: float = CONST_FONT_SIZE_MAX,
) -> float:
    """译文字号：原字号按比例缩小，并限制在 [minimum, maximum]。"""
    return max(minimum, min(float(source_size) * ratio, maximum))


def clamp_baseline(
    x: float,
    y_baseline: float,
    page_width: float,
    page_height: float,
    font_size: float,
    margin: float = CONST_CLAMP_MARGIN_DEFAULT,
    ascent_ratio: float = 0.8,
    descent_ratio: float = 0.2,
) -> Tuple[float, float]:
    """基线感知的钳制：保证文本不因上升/下降部分越界而被裁剪。"""
    x_clamped = max(margin, min(page_width - margin, x))

    ascent = max(0.0, float(font_size) * float(ascent_ratio))
    descent = max(0.0, float(font_size) * float(descent_ratio))
    y_min = margin + descent
    y_max = page_height - margin - ascent
    if y_min > y_max:
        # 页面很小或字体很大：退化为常规钳制
        y_min, y_max = margin, page_height - margin
    y_clamped = max(y_min, min(y_max, y_baseline))
    return x_clamped, y_clamped


__all__ = [
    "to_reportlab_y",
    "cover_rect",
    "fit_font_size",
    "clamp_baseline",
]
