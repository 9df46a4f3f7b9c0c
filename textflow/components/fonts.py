"""
文件路径：textflow/components/fonts.py

说明：字体探测、注册与基于 ReportLab 的字形度量。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFont

from .text import estimate_text_width
from ..variables import (
    CONST_CANDIDATE_CJK_FONT_PATHS,
    PATH_FONT_FILE,
    PATH_FONTS_DIR,
    STYLE_FONT_NAME,
    STYLE_FONT_NAME_CJK_FALLBACK,
    STYLE_FONT_NAME_CJK_PREFERRED,
)

GlyphMetrics = Callable[[str, float], float]

logger = logging.getLogger(__name__)

_EMBEDDABLE_SUFFIXES = {".ttf", ".otf"}


def probe_available_cjk_fonts() -> List[Path]:
    """探测可内嵌的 CJK 字体文件（TTF/OTF），按优先级返回去重列表。

    优先级：
    1) `PATH_FONT_FILE`
    2) `config/fonts/` 目录（按文件名排序）
    3) `CONST_CANDIDATE_CJK_FONT_PATHS`
    """
    seen: set[str] = set()
    results: List[Path] = []

    def _add(p: Path) -> None:
        key = str(p.resolve())
        if key not in seen and p.exists() and p.suffix.lower() in _EMBEDDABLE_SUFFIXES:
            seen.add(key)
            results.append(p)

    if PATH_FONT_FILE:
        _add(Path(PATH_FONT_FILE))

    if PATH_FONTS_DIR.exists():
        for p in sorted(list(PATH_FONTS_DIR.glob("*.ttf")) + list(PATH_FONTS_DIR.glob("*.otf"))):
            _add(p)

    for s in CONST_CANDIDATE_CJK_FONT_PATHS:
        _add(Path(s))

    return results


def pick_preferred_cjk_font() -> Optional[Path]:
    """选择首个可用的 CJK 字体文件，若无则返回 None。"""
    fonts = probe_available_cjk_fonts()
    return fonts[0] if fonts else None


def register_cjk_font(font_file: Optional[Path] = None) -> Tuple[str, Optional[Path]]:
    """注册用于度量与绘制的字体。

    顺序：显式 font_file -> 自动探测的 TTF/OTF -> ReportLab 内置 CID 字体 -> Helvetica。

    返回：
        (已注册的字体名, 内嵌字体文件路径或 None)
    """

    def _try_register(path: Path, face_name: str) -> bool:
        try:
            pdfmetrics.registerFont(TTFont(face_name, str(path)))
            logger.info("已注册字体：%s -> %s", face_name, path)
            return True
        except Exception as exc:  # noqa: BLE001
            logger.warning("注册字体失败：%s -> %s，原因：%s", face_name, path, exc)
            return False

    if font_file is not None:
        p = Path(font_file)
        if p.exists() and p.suffix.lower() in _EMBEDDABLE_SUFFIXES:
            if _try_register(p, STYLE_FONT_NAME_CJK_PREFERRED):
                return STYLE_FONT_NAME_CJK_PREFERRED, p
        else:
            logger.warning("忽略不可用的字体文件：%s", p)

    for p in probe_available_cjk_fonts():
        face_name = STYLE_FONT_NAME_CJK_PREFERRED if p == PATH_FONT_FILE else p.stem
        if _try_register(p, face_name):
            return face_name, p

    try:
        pdfmetrics.registerFont(UnicodeCIDFont(STYLE_FONT_NAME_CJK_FALLBACK))
        logger.info("已启用 CJK 回退字体：%s（未嵌入）", STYLE_FONT_NAME_CJK_FALLBACK)
        return STYLE_FONT_NAME_CJK_FALLBACK, None
    except Exception as exc:  # noqa: BLE001
        logger.warning("CJK 回退字体注册失败，将使用 %s：%s", STYLE_FONT_NAME, exc)
        return STYLE_FONT_NAME, None


def reportlab_glyph_metrics(font_name: str) -> GlyphMetrics:
    """返回基于 `pdfmetrics.stringWidth` 的度量函数 (segment, font_size) -> width。

    字体需已注册；度量函数不持有可变状态，可被并发调用。
    """

    def _width(segment: str, font_size: float) -> float:
        return pdfmetrics.stringWidth(segment, font_name, font_size)

    return _width


def estimated_glyph_metrics(char_width_ratio: float = 0.6) -> GlyphMetrics:
    """返回不依赖字体文件的估算度量函数，基于 `estimate_text_width`。

    用于未安装 CJK 字体时的换行预览；结果与实际绘制宽度可能有偏差。
    """

    def _width(segment: str, font_size: float) -> float:
        return estimate_text_width(segment, font_size, char_width_ratio)

    return _width


__all__ = [
    "GlyphMetrics",
    "probe_available_cjk_fonts",
    "pick_preferred_cjk_font",
    "register_cjk_font",
    "reportlab_glyph_metrics",
    "estimated_glyph_metrics",
]
