"""
文件路径：textflow/pdf_translator.py

模块职责：
- 门面类：字体注册、原文项抽取（pdfplumber）、批量翻译与自检、译文 PDF 生成（ReportLab / PyMuPDF）。
- 仅通过 `textflow/components` 进行通用操作（日志、文件、坐标），跨模块变量统一从 `textflow/variables.py` 引用。

注意：
- 坐标系差异：pdfplumber 顶左为原点；ReportLab 左下为原点。抽取时即完成 Y 轴翻转，
  之后所有 TextItem 均为底左原点。

变量引用说明（来自 textflow/variables.py）：
- PATH_TEMP_OVERLAY_PDF, PATH_FONT_FILE
- STYLE_FONT_NAME_CJK_PREFERRED
- CONST_CLEAN_TEMP_ON_EXIT, CONST_DEFAULT_OUTPUT_SUFFIX, CONST_DOCUMENT_OUTPUT_SUFFIX
- ERR_INVALID_PDF, ERR_TEXT_LAYER_BUILD_FAILED, ERR_PDF_MERGE_FAILED
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import pdfplumber

from .components import (
    FileHandler,
    estimated_glyph_metrics,
    get_logger,
    parse_page_selection,
    register_cjk_font,
    reportlab_glyph_metrics,
    retry_on_exception,
    to_reportlab_y,
)
from .data_handler import LayoutSettings, PageSpec, TextItem, load_layout_config
from .processors.layout import wrap_text_lines
from .processors.engines.reportlab import (
    build_text_layer_and_merge as _rl_build_and_merge,
    build_translation_layer as _rl_build_translation_layer,
    render_text_document as _rl_render_text_document,
)
from .processors.engines.pymupdf import overlay_with_pymupdf as _engine_pymupdf
from .translation import (
    TranslationProvider,
    TranslationReport,
    target_language_for,
    translate_texts,
    validate_translations,
)
from .variables import (
    PATH_TEMP_OVERLAY_PDF,
    STYLE_FONT_NAME_CJK_PREFERRED,
    CONST_CLEAN_TEMP_ON_EXIT,
    CONST_DEFAULT_OUTPUT_SUFFIX,
    CONST_DOCUMENT_OUTPUT_SUFFIX,
    ERR_INVALID_PDF,
    ERR_TEXT_LAYER_BUILD_FAILED,
    ERR_PDF_MERGE_FAILED,
)


logger = get_logger(__name__)


class PDFTranslator:
    """PDF 翻译处理器：抽取、翻译、排版与输出。

    用法示例：
        translator = PDFTranslator()
        pages = translator.extract_pages(Path("manual.pdf"))
        translations = translator.translate_pages(pages, provider, direction="ja-zh")
        out = translator.overlay_translations(Path("manual.pdf"), pages, translations)
    """

    def __init__(self, font_file: Optional[Path] = None, settings: Optional[LayoutSettings] = None) -> None:
        self.settings: LayoutSettings = settings if settings is not None else load_layout_config()
        self.font_name, self.font_file = register_cjk_font(font_file)
        self.glyph_metrics = reportlab_glyph_metrics(self.font_name)
        # 运行时信息：用于 CLI/日志展示
        self.last_engine_used: Optional[str] = None
        self.last_font_info: Optional[str] = None
        self.last_report: Optional[TranslationReport] = None

    # -----------------------------
    # 换行
    # -----------------------------
    def wrap(
        self,
        text: str,
        max_width: float,
        font_size: Optional[float] = None,
        estimate: bool = False,
    ) -> List[str]:
        """使用已注册字体的度量换行；estimate=True 时改用不依赖字体的估算度量。"""
        size = font_size if font_size is not None else self.settings.document_font_size
        metrics = estimated_glyph_metrics() if estimate else self.glyph_metrics
        return wrap_text_lines(text, metrics, size, max_width)

    # -----------------------------
    # 原文抽取
    # -----------------------------
    def extract_pages(self, pdf_path: Path, pages: Optional[str] = None) -> List[PageSpec]:
        """抽取每页的文本项（按行合并的词组），坐标转换为底左原点。

        参数：
            pdf_path: 输入 PDF。
            pages: 页选择（"all" 或 "1,3-5"，1 基）；未选中的页保留尺寸但不含文本项。
        """
        FileHandler.validate_readable_file(pdf_path)
        result: List[PageSpec] = []
        try:
            with pdfplumber.open(str(pdf_path)) as pdf:
                total = len(pdf.pages)
                selected = set(parse_page_selection(pages, total_pages=total) or range(total))
                for index, page in enumerate(pdf.pages):
                    width, height = float(page.width), float(page.height)
                    spec = PageSpec(width=width, height=height)
                    if index in selected:
                        words = page.extract_words(keep_blank_chars=True, extra_attrs=["size"])
                        for w in words:
                            text = str(w.get("text", "")).strip()
                            if not text:
                                continue
                            spec.items.append(
                                TextItem(
                                    text=text,
                                    x=float(w["x0"]),
                                    y=to_reportlab_y(float(w["bottom"]), height),
                                    width=float(w["x1"]) - float(w["x0"]),
                                    height=float(w["bottom"]) - float(w["top"]),
                                    font_size=float(w.get("size") or 12.0),
                                )
                            )
                    result.append(spec)
        except FileNotFoundError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise RuntimeError(f"[{ERR_INVALID_PDF}] PDF 读取失败: {pdf_path}: {exc}") from exc

        logger.info("已抽取 %s 页，共 %s 个文本项：%s", len(result), sum(len(p.items) for p in result), pdf_path)
        return result

    # -----------------------------
    # 翻译与自检
    # -----------------------------
    def translate_pages(
        self,
        pages: Sequence[PageSpec],
        provider: TranslationProvider,
        direction: str,
    ) -> List[List[str]]:
        """逐页批量翻译并自检，汇总报告写入 last_report。"""
        target_language = target_language_for(direction)
        logger.info("开始翻译：%s 页，方向=%s，目标=%s", len(pages), direction, target_language)

        report = TranslationReport()
        translations: List[List[str]] = []
        for index, page in enumerate(pages):
            texts = [item.text for item in page.items]
            page_translations = translate_texts(texts, provider, target_language)
            report = report.merge(validate_translations(texts, page_translations, target_language))
            translations.append(page_translations)
            logger.info("第 %s/%s 页：%s 个文本项", index + 1, len(pages), len(texts))

        self.last_report = report
        logger.info("译文自检：total=%s success=%s failed=%s", report.total, report.success, report.failed)
        for issue in report.issues:
            logger.warning("  - %s", issue)
        return translations

    # -----------------------------
    # 输出
    # -----------------------------
    def build_translated_pdf(
        self,
        pages: Sequence[PageSpec],
        translations: Sequence[Sequence[str]],
        output: Optional[Path] = None,
    ) -> Union[bytes, Path]:
        """生成仅含译文的独立 PDF；未提供 output 时返回 PDF 字节。"""
        try:
            if output is None:
                buffer = BytesIO()
                _rl_build_translation_layer(pages, translations, buffer, font_name=self.font_name, settings=self.settings)
                data = buffer.getvalue()
            else:
                self._build_layer_file(pages, translations, output)
                data = None
        except (ValueError, RuntimeError):
            raise
        except Exception as exc:  # noqa: BLE001
            raise RuntimeError(f"[{ERR_TEXT_LAYER_BUILD_FAILED}] 译文图层生成失败: {exc}") from exc

        self.last_engine_used = "reportlab"
        self.last_font_info = str(self.font_file) if self.font_file else self.font_name
        return data if output is None else output

    def overlay_translations(
        self,
        pdf_path: Path,
        pages: Sequence[PageSpec],
        translations: Sequence[Sequence[str]],
        output: Optional[Path] = None,
        engine: str = "pymupdf",
    ) -> Path:
        """在原 PDF 上遮盖原文并写入译文。

        参数：
            engine: "pymupdf"（直接绘制，无可内嵌字体时内部回退）或 "reportlab"（图层 + 合并）。
        """
        FileHandler.validate_readable_file(pdf_path)
        FileHandler.ensure_project_dirs()
        out = output if output is not None else FileHandler.timestamped_output_path(pdf_path, CONST_DEFAULT_OUTPUT_SUFFIX)

        if engine == "pymupdf":
            engine_used, font_info = _engine_pymupdf(
                pdf_path,
                pages,
                translations,
                out,
                font_file=self.font_file,
                fontname=STYLE_FONT_NAME_CJK_PREFERRED,
                metrics_font_name=self.font_name,
                settings=self.settings,
                temp_overlay_pdf=PATH_TEMP_OVERLAY_PDF,
                clean_temp_on_exit=bool(CONST_CLEAN_TEMP_ON_EXIT),
            )
            self.last_engine_used = engine_used
            self.last_font_info = font_info
            return out

        if engine != "reportlab":
            raise ValueError(f"未知渲染引擎：{engine}")

        try:
            self._build_and_merge(pdf_path, pages, translations, out)
        except OSError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise RuntimeError(f"[{ERR_PDF_MERGE_FAILED}] 译文合并失败: {exc}") from exc
        self.last_engine_used = "reportlab"
        self.last_font_info = self.font_name
        return out

    def translate_pdf(
        self,
        pdf_path: Path,
        provider: TranslationProvider,
        direction: str,
        output: Optional[Path] = None,
        engine: str = "pymupdf",
        pages: Optional[str] = None,
    ) -> Path:
        """端到端：抽取 -> 翻译 -> 覆盖输出。"""
        specs = self.extract_pages(pdf_path, pages=pages)
        translations = self.translate_pages(specs, provider, direction)
        return self.overlay_translations(pdf_path, specs, translations, output=output, engine=engine)

    def render_document(
        self,
        text: str,
        output: Optional[Path] = None,
        page_size: Optional[Tuple[float, float]] = None,
    ) -> Path:
        """将整段文本换行分页，渲染为文档 PDF。"""
        out = output if output is not None else FileHandler.timestamped_output_path(None, CONST_DOCUMENT_OUTPUT_SUFFIX)
        page_count = _rl_render_text_document(
            text, out, font_name=self.font_name, settings=self.settings, page_size=page_size
        )
        logger.info("文档渲染完成：%s（%s 页）", out, page_count)
        self.last_engine_used = "reportlab"
        self.last_font_info = self.font_name
        return out

    @retry_on_exception()
    def _build_layer_file(
        self,
        pages: Sequence[PageSpec],
        translations: Sequence[Sequence[str]],
        output: Path,
    ) -> None:
        _rl_build_translation_layer(pages, translations, output, font_name=self.font_name, settings=self.settings)

    @retry_on_exception()
    def _build_and_merge(
        self,
        pdf_path: Path,
        pages: Sequence[PageSpec],
        translations: Sequence[Sequence[str]],
        output: Path,
    ) -> None:
        _rl_build_and_merge(
            pdf_path,
            pages,
            translations,
            output,
            font_name=self.font_name,
            settings=self.settings,
            temp_overlay_pdf=PATH_TEMP_OVERLAY_PDF,
            clean_temp_on_exit=bool(CONST_CLEAN_TEMP_ON_EXIT),
        )


__all__ = ["PDFTranslator"]
