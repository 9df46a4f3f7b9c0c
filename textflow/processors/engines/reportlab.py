"""
文件路径：textflow/processors/engines/reportlab.py

说明：ReportLab 路径的译文图层/文档生成与 PyPDF2 合并。
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple, Union

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas
from PyPDF2 import PdfReader, PdfWriter

from ...components import (
    FileHandler,
    clamp_baseline,
    cover_rect,
    fit_font_size,
    get_logger,
    reportlab_glyph_metrics,
    split_paragraphs,
)
from ...data_handler import LayoutSettings, PageSpec, TextItem
from ...variables import CONST_PAGE_SIZE_DEFAULT, STYLE_COVER_COLOR_RGB, STYLE_TEXT_COLOR_RGB
from ..layout import paginate_lines, wrap_text_lines


logger = get_logger(__name__)

PdfTarget = Union[Path, BinaryIO]


def _open_canvas(target: PdfTarget) -> canvas.Canvas:
    if isinstance(target, Path):
        FileHandler.ensure_parent_writable(target)
        return canvas.Canvas(str(target))
    return canvas.Canvas(target)


def item_lines(item: TextItem, text: str, font_name: str, font_size: float) -> List[str]:
    """译文行：有宽度时按原文框宽换行，无宽度时仅按强制换行拆分。"""
    if item.width > 0:
        return wrap_text_lines(text, reportlab_glyph_metrics(font_name), font_size, item.width)
    return split_paragraphs(text)


def line_origin(
    line: str,
    x: float,
    y: float,
    *,
    font_name: str,
    font_size: float,
    page_size: Tuple[float, float],
    settings: LayoutSettings,
) -> Tuple[float, float]:
    """单行绘制起点（底左原点）；启用钳制时保证整行落在页面边距内。"""
    if not settings.enable_clamp:
        return x, y
    page_w, page_h = page_size
    clamped_x, clamped_y = clamp_baseline(
        x,
        y,
        page_width=page_w,
        page_height=page_h,
        font_size=font_size,
        margin=settings.clamp_margin,
    )
    line_w = pdfmetrics.stringWidth(line, font_name, font_size)
    max_x = max(settings.clamp_margin, page_w - settings.clamp_margin - line_w)
    return min(clamped_x, max_x), clamped_y


def _draw_lines(
    c: canvas.Canvas,
    lines: Sequence[str],
    x: float,
    y: float,
    *,
    font_name: str,
    font_size: float,
    line_height: float,
    page_size: Tuple[float, float],
    settings: LayoutSettings,
) -> None:
    current_y = y
    for line in lines:
        draw_x, draw_y = line_origin(
            line, x, current_y, font_name=font_name, font_size=font_size, page_size=page_size, settings=settings
        )
        c.drawString(draw_x, draw_y, line)
        current_y -= line_height


def build_translation_layer(
    pages: Sequence[PageSpec],
    translations: Sequence[Sequence[str]],
    target: PdfTarget,
    *,
    font_name: str,
    settings: LayoutSettings,
    opaque_cover: bool = True,
) -> None:
    """逐页绘制译文：白底遮盖原文框，再以缩放后的字号在框内换行绘制。

    参数：
        pages: 页面与原文项。
        translations: 与 pages/items 一一对应的译文；缺失或空串的项跳过。
        target: 输出路径或二进制流。
        opaque_cover: 是否绘制白底遮盖框。
    """
    c = _open_canvas(target)
    for page_index, page in enumerate(pages):
        c.setPageSize((page.width, page.height))
        page_translations = translations[page_index] if page_index < len(translations) else []
        for idx, item in enumerate(page.items):
            text = page_translations[idx] if idx < len(page_translations) else ""
            if not text:
                logger.warning("第 %s 页第 %s 项译文为空，已跳过：%r", page_index + 1, idx + 1, item.text)
                continue

            if opaque_cover:
                rx, ry, rw, rh = cover_rect(
                    item.x, item.y, item.width, item.height, page.width, page.height, padding=settings.cover_padding
                )
                c.setFillColorRGB(*(v / 255.0 for v in STYLE_COVER_COLOR_RGB))
                c.rect(rx, ry, rw, rh, stroke=0, fill=1)

            font_size = fit_font_size(
                item.font_size,
                ratio=settings.font_size_ratio,
                minimum=settings.font_size_min,
                maximum=settings.font_size_max,
            )
            c.setFillColorRGB(*(v / 255.0 for v in STYLE_TEXT_COLOR_RGB))
            c.setFont(font_name, font_size)
            _draw_lines(
                c,
                item_lines(item, text, font_name, font_size),
                item.x,
                item.y,
                font_name=font_name,
                font_size=font_size,
                line_height=font_size * settings.line_height_ratio,
                page_size=(page.width, page.height),
                settings=settings,
            )
        c.showPage()
    c.save()


def render_text_document(
    text: str,
    target: PdfTarget,
    *,
    font_name: str,
    settings: LayoutSettings,
    page_size: Optional[Tuple[float, float]] = None,
) -> int:
    """将整段文本换行、分页后渲染为文档 PDF，返回页数。"""
    page_w, page_h = page_size or CONST_PAGE_SIZE_DEFAULT
    margin = settings.page_margin
    font_size = settings.document_font_size
    line_height = font_size * settings.line_height_ratio

    lines = wrap_text_lines(text, reportlab_glyph_metrics(font_name), font_size, page_w - margin * 2)
    placed = paginate_lines(
        lines,
        top_y=page_h - margin - font_size,
        bottom_y=margin,
        line_height=line_height,
    )

    c = _open_canvas(target)
    c.setPageSize((page_w, page_h))
    c.setFillColorRGB(*(v / 255.0 for v in STYLE_TEXT_COLOR_RGB))
    c.setFont(font_name, font_size)
    current_page = 0
    for line in placed:
        if line.page_index != current_page:
            c.showPage()
            c.setFont(font_name, font_size)
            current_page = line.page_index
        if line.text:
            c.drawString(margin, line.y, line.text)
    c.showPage()
    c.save()
    return current_page + 1


def merge_pdfs(base_pdf: Path, overlay_pdf: Path, output_pdf: Path) -> None:
    """将 overlay 覆盖合并到 base 上，输出到 output_pdf。"""
    FileHandler.ensure_parent_writable(output_pdf)
    base_reader = PdfReader(str(base_pdf))
    overlay_reader = PdfReader(str(overlay_pdf))

    writer = PdfWriter()
    for i, page in enumerate(base_reader.pages):
        if i < len(overlay_reader.pages):
            page.merge_page(overlay_reader.pages[i])
        writer.add_page(page)

    with open(output_pdf, "wb") as f:  # noqa: P103
        writer.write(f)


def build_text_layer_and_merge(
    base_pdf: Path,
    pages: Sequence[PageSpec],
    translations: Sequence[Sequence[str]],
    output_pdf: Path,
    *,
    font_name: str,
    settings: LayoutSettings,
    temp_overlay_pdf: Path,
    clean_temp_on_exit: bool,
) -> None:
    """生成译文图层到临时文件，再与原 PDF 合并。"""
    build_translation_layer(pages, translations, temp_overlay_pdf, font_name=font_name, settings=settings)
    merge_pdfs(base_pdf, temp_overlay_pdf, output_pdf)
    if clean_temp_on_exit:
        temp_overlay_pdf.unlink(missing_ok=True)


__all__ = [
    "PdfTarget",
    "item_lines",
    "line_origin",
    "build_translation_layer",
    "render_text_document",
    "merge_pdfs",
    "build_text_layer_and_merge",
]
