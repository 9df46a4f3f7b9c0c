"""
文件路径：textflow/processors/engines/__init__.py

说明：两种绘制引擎。`reportlab.py` 生成独立图层/文档并经 PyPDF2 合并；
`pymupdf.py` 直接在原 PDF 上绘制，无法内嵌字体时回退到 ReportLab。
"""

from typing import List

__all__: List[str] = []
