"""
文件路径：textflow/__init__.py

说明：PDF 译文排版工具包。核心换行见 `textflow.processors.layout.wrap_text_lines`，
门面类见 `textflow.pdf_translator.PDFTranslator`。
"""

__version__ = "0.3.0"
