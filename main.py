"""
文件路径：main.py

命令行入口：
- 功能：文本换行预览、文档渲染、按请求 JSON 生成译文 PDF、在原 PDF 上覆盖译文。
- 依赖：`textflow/pdf_translator.py`、`textflow/data_handler.py`、`textflow/components`、`textflow/variables.py`。

快速使用示例：
    # 1) 换行预览：按 120pt 行宽输出分行结果
    python main.py --wrap "これはとても長いテキストです" --max-width 120 --font-size 10
    #    未安装 CJK 字体时可加 --estimate-width 使用估算宽度

    # 2) 将文本文件渲染为 A4 文档 PDF
    python main.py --document notes.txt --output output/notes.pdf

    # 3) 按请求 JSON（pages/textItems/direction）与逐页译文生成独立译文 PDF
    python main.py --pages-json request.json --translations-json translations.json

    # 4) 抽取原 PDF 文本项并覆盖写入译文
    python main.py --input manual.pdf --translations-json translations.json --engine reportlab

变量引用说明（来自 textflow/variables.py）：
- CONST_ENCODING, CONST_DEFAULT_OUTPUT_SUFFIX

组件调用说明：
- get_logger, FileHandler.validate_readable_file/timestamped_output_path
- load_pages_json, load_translations_json, load_layout_config
- PDFTranslator.wrap/render_document/build_translated_pdf/extract_pages/overlay_translations
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from textflow.components import FileHandler, TextFlowError, get_logger, pick_preferred_cjk_font
from textflow.data_handler import PageSpec, load_layout_config, load_pages_json, load_translations_json
from textflow.pdf_translator import PDFTranslator
from textflow.variables import CONST_ENCODING, CONST_DEFAULT_OUTPUT_SUFFIX


logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="PDF 译文排版工具（换行 / 文档渲染 / 译文覆盖）")
    parser.add_argument("--wrap", type=str, default=None, help="换行预览：直接输出分行结果")
    parser.add_argument("--max-width", dest="max_width", type=float, default=None, help="换行预览的最大行宽（pt）")
    parser.add_argument("--font-size", dest="font_size", type=float, default=None, help="换行预览的字号（pt）")
    parser.add_argument("--estimate-width", dest="estimate_width", action="store_true", help="换行预览使用估算宽度（不依赖字体）")
    parser.add_argument("--document", type=Path, default=None, help="将文本文件渲染为文档 PDF")
    parser.add_argument("--pages-json", dest="pages_json", type=Path, default=None, help="翻译请求 JSON（pages/textItems/direction）")
    parser.add_argument("--translations-json", dest="translations_json", type=Path, default=None, help="逐页译文 JSON")
    parser.add_argument("--input", type=Path, default=None, help="原 PDF：抽取文本项并覆盖译文")
    parser.add_argument("--pages", type=str, default=None, help="页选择：'all' 或 '1,3-5'（1 基）")
    parser.add_argument("--engine", type=str, choices=["pymupdf", "reportlab"], default="pymupdf", help="覆盖引擎")
    parser.add_argument("--output", type=Path, default=None, help="输出 PDF 路径（可省略，自动生成）")
    parser.add_argument("--font-file", dest="font_file", type=Path, default=None, help="TTF/OTF 字体文件（覆盖自动探测）")
    parser.add_argument("--layout-json", dest="layout_json", type=Path, default=None, help="版式覆盖配置 JSON")
    return parser.parse_args(argv)


def _check_translation_counts(pages: List[PageSpec], translations: List[List[str]]) -> None:
    if len(translations) != len(pages):
        logger.warning("译文页数（%s）与页面数（%s）不一致，缺失部分将跳过", len(translations), len(pages))
    for index, page in enumerate(pages):
        got = len(translations[index]) if index < len(translations) else 0
        if got != len(page.items):
            logger.warning("第 %s 页：文本项 %s 个，译文 %s 条", index + 1, len(page.items), got)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    if args.wrap is None and args.document is None and args.pages_json is None and args.input is None:
        raise SystemExit("请提供 --wrap、--document、--pages-json 或 --input 之一")

    preferred = pick_preferred_cjk_font()
    logger.info("字体探测：preferred=%s, override=%s", preferred, args.font_file)

    translator = PDFTranslator(font_file=args.font_file, settings=load_layout_config(args.layout_json))

    try:
        if args.wrap is not None:
            if args.max_width is None:
                raise SystemExit("--wrap 需要同时提供 --max-width")
            for line in translator.wrap(args.wrap, args.max_width, font_size=args.font_size, estimate=args.estimate_width):
                print(line)
            return

        if args.document is not None:
            FileHandler.validate_readable_file(args.document)
            text = args.document.read_text(encoding=CONST_ENCODING)
            out = translator.render_document(text, output=args.output)
            print(f"文档渲染完成，保存至：{out}")
            return

        if args.translations_json is None:
            raise SystemExit("--pages-json / --input 需要同时提供 --translations-json")
        translations = load_translations_json(args.translations_json)

        if args.pages_json is not None:
            pages, direction = load_pages_json(args.pages_json)
            logger.info("请求：%s 页，方向=%s", len(pages), direction)
            _check_translation_counts(pages, translations)
            out = args.output or FileHandler.timestamped_output_path(args.pages_json, CONST_DEFAULT_OUTPUT_SUFFIX)
            translator.build_translated_pdf(pages, translations, output=out)
            print(f"译文 PDF 已生成：{out}")
            return

        pages = translator.extract_pages(args.input, pages=args.pages)
        _check_translation_counts(pages, translations)
        out = translator.overlay_translations(args.input, pages, translations, output=args.output, engine=args.engine)
        print(f"译文覆盖完成（engine={translator.last_engine_used}），保存至：{out}")
    except TextFlowError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
