"""
文件路径：textflow/processors/layout.py

说明：文本换行与分页。

- `wrap_text_lines`：贪心换行。先按强制换行拆段，空段落输出一个空行；
  段内逐个原子词元尝试追加，超宽则另起一行；单个词元本身超宽时独占一行，不做断字。
- `paginate_lines`：将已换行的行按行高自上而下排布到多页。

两者均为纯函数，不持有状态，可被并发调用。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Callable, Iterable, List

from ..components import (
    GlyphMetrics,
    InvalidArgumentError,
    MetricsFailureError,
    split_paragraphs,
    tokenize_paragraph,
)


@dataclass(frozen=True)
class PlacedLine:
    """分页后的单行：页索引、基线 y（ReportLab 坐标）与文本。"""

    page_index: int
    y: float
    text: str


def _require_positive(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(f"{name} 必须为数值：{value!r}")
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise InvalidArgumentError(f"{name} 必须为正的有限数：{value!r}")
    return number


def _checked_metrics(glyph_metrics: GlyphMetrics, font_size: float) -> Callable[[str], float]:
    """包装度量函数：异常或非法返回值统一转为 MetricsFailureError。"""

    def _measure(segment: str) -> float:
        try:
            width = glyph_metrics(segment, font_size)
        except Exception as exc:  # noqa: BLE001
            raise MetricsFailureError(f"字形度量失败：{segment!r} @ {font_size}：{exc}") from exc
        if isinstance(width, bool) or not isinstance(width, Real):
            raise MetricsFailureError(f"字形度量返回非数值：{segment!r} -> {width!r}")
        if not math.isfinite(width) or width < 0:
            raise MetricsFailureError(f"字形度量返回非法宽度：{segment!r} -> {width!r}")
        return float(width)

    return _measure


def _wrap_paragraph(paragraph: str, measure: Callable[[str], float], max_width: float) -> List[str]:
    tokens = tokenize_paragraph(paragraph)
    if not tokens:
        return [""]

    wrapped: List[str] = []
    current = ""
    for token, spaced in tokens:
        if current:
            candidate = f"{current} {token}" if spaced else current + token
        else:
            candidate = token
        if measure(candidate) <= max_width:
            current = candidate
        elif current:
            wrapped.append(current)
            current = token
        else:
            # 单个原子词元超宽：独占一行
            wrapped.append(token)
    if current:
        wrapped.append(current)
    return wrapped


def wrap_text_lines(
    text: str,
    glyph_metrics: GlyphMetrics,
    font_size: float,
    max_width: float,
) -> List[str]:
    """按最大行宽将文本分行。

    参数：
        text: 待排版文本，可含 "\\n" 强制换行。
        glyph_metrics: 度量函数 (segment, font_size) -> width。
        font_size: 字号（pt），须为正。
        max_width: 最大行宽（pt），须为正。

    返回：
        行列表。空串返回 [""]；每个空段落（含仅空白）对应一个 ""。

    异常：
        InvalidArgumentError: text 非字符串，或 font_size/max_width 非正。
        MetricsFailureError: 度量函数抛出异常或返回非法宽度。
    """
    if not isinstance(text, str):
        raise InvalidArgumentError(f"text 必须为字符串：{type(text).__name__}")
    size = _require_positive("font_size", font_size)
    limit = _require_positive("max_width", max_width)
    measure = _checked_metrics(glyph_metrics, size)

    lines: List[str] = []
    for paragraph in split_paragraphs(text):
        lines.extend(_wrap_paragraph(paragraph, measure, limit))
    return lines


def rewrap_lines(
    lines: Iterable[str],
    glyph_metrics: GlyphMetrics,
    font_size: float,
    max_width: float,
) -> List[str]:
    """将每一行视为强制段落重新换行；对 wrap_text_lines 的输出应原样返回。"""
    return wrap_text_lines("\n".join(lines), glyph_metrics, font_size, max_width)


def paginate_lines(
    lines: Iterable[str],
    *,
    top_y: float,
    bottom_y: float,
    line_height: float,
) -> List[PlacedLine]:
    """将行自上而下排布到多页。

    每页首行基线位于 top_y，逐行下移 line_height；下一行基线低于 bottom_y 时换页。
    每页至少容纳一行。
    """
    step = _require_positive("line_height", line_height)
    if top_y < bottom_y:
        raise InvalidArgumentError(f"top_y({top_y}) 不能低于 bottom_y({bottom_y})")

    placed: List[PlacedLine] = []
    page_index = 0
    y = float(top_y)
    for line in lines:
        if y < bottom_y:
            page_index += 1
            y = float(top_y)
        placed.append(PlacedLine(page_index=page_index, y=y, text=line))
        y -= step
    return placed


__all__ = ["PlacedLine", "wrap_text_lines", "rewrap_lines", "paginate_lines"]
