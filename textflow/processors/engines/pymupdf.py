"""
文件路径：textflow/processors/engines/pymupdf.py

说明：PyMuPDF 直接在原 PDF 上遮盖原文并写入译文；若无法内嵌字体则回退到 ReportLab 合成路径。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple

import fitz  # PyMuPDF

from ...components import ErrorHandler, FileHandler, cover_rect, fit_font_size, get_logger
from ...data_handler import LayoutSettings, PageSpec
from ...variables import ERR_PDF_WRITE_FAILED, STYLE_COVER_COLOR_RGB, STYLE_TEXT_COLOR_RGB
from .reportlab import build_text_layer_and_merge, item_lines, line_origin


logger = get_logger(__name__)


def overlay_with_pymupdf(
    base_pdf: Path,
    pages: Sequence[PageSpec],
    translations: Sequence[Sequence[str]],
    output_pdf: Path,
    *,
    font_file: Optional[Path],
    fontname: str,
    metrics_font_name: str,
    settings: LayoutSettings,
    temp_overlay_pdf: Path,
    clean_temp_on_exit: bool,
) -> Tuple[str, Optional[str]]:
    """在原 PDF 上直接绘制译文；无可内嵌字体时回退 ReportLab 图层 + PyPDF2 合并。

    换行统一使用 ReportLab 度量（metrics_font_name），保证两条路径排版一致。

    返回 (engine_used, font_info)。
    """
    FileHandler.ensure_parent_writable(output_pdf)

    if not (font_file and font_file.exists() and font_file.suffix.lower() in {".ttf", ".otf"}):
        logger.info("无可内嵌字体文件，回退 ReportLab 合成路径")
        build_text_layer_and_merge(
            base_pdf,
            pages,
            translations,
            output_pdf,
            font_name=metrics_font_name,
            settings=settings,
            temp_overlay_pdf=temp_overlay_pdf,
            clean_temp_on_exit=clean_temp_on_exit,
        )
        return ("reportlab", metrics_font_name)

    text_color = tuple(v / 255.0 for v in STYLE_TEXT_COLOR_RGB)
    cover_color = tuple(v / 255.0 for v in STYLE_COVER_COLOR_RGB)
    doc = fitz.open(str(base_pdf))
    try:
        for page_index, spec in enumerate(pages):
            if page_index >= len(doc):
                logger.warning("译文页数超过原 PDF 页数，已忽略第 %s 页之后的内容", len(doc))
                break
            page = doc[page_index]
            page_h = float(page.rect.height)
            page_translations = translations[page_index] if page_index < len(translations) else []
            font_ready = False
            for idx, item in enumerate(spec.items):
                text = page_translations[idx] if idx < len(page_translations) else ""
                if not text:
                    continue
                if not font_ready:
                    page.insert_font(fontname=fontname, fontfile=str(font_file))
                    font_ready = True

                rx, ry, rw, rh = cover_rect(
                    item.x, item.y, item.width, item.height, spec.width, spec.height, padding=settings.cover_padding
                )
                # PyMuPDF 为顶左原点
                rect = fitz.Rect(rx, page_h - (ry + rh), rx + rw, page_h - ry)
                page.draw_rect(rect, color=None, fill=cover_color, overlay=True)

                font_size = fit_font_size(
                    item.font_size,
                    ratio=settings.font_size_ratio,
                    minimum=settings.font_size_min,
                    maximum=settings.font_size_max,
                )
                line_height = font_size * settings.line_height_ratio
                current_y = item.y
                for line in item_lines(item, text, metrics_font_name, font_size):
                    if line:
                        draw_x, draw_y = line_origin(
                            line,
                            item.x,
                            current_y,
                            font_name=metrics_font_name,
                            font_size=font_size,
                            page_size=(float(page.rect.width), page_h),
                            settings=settings,
                        )
                        page.insert_text(
                            (draw_x, page_h - draw_y),
                            line,
                            fontsize=font_size,
                            fontname=fontname,
                            color=text_color,
                        )
                    current_y -= line_height

        doc.save(str(output_pdf), deflate=True, garbage=4)
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(ErrorHandler.format_error(ERR_PDF_WRITE_FAILED, f"使用 PyMuPDF 写入失败: {exc}")) from exc
    finally:
        doc.close()

    size_kb = Path(output_pdf).stat().st_size / 1024.0
    logger.info("PyMuPDF 输出完成：%s (%.1f KB)", output_pdf, size_kb)
    return ("pymupdf", str(font_file))


__all__ = ["overlay_with_pymupdf"]
