"""
文件路径：textflow/processors/__init__.py

说明：
- layout.py：换行（wrap_text_lines）与分页（paginate_lines）；
- engines/{reportlab.py, pymupdf.py}：译文图层、文档渲染与原 PDF 覆盖绘制。
"""

from .layout import PlacedLine, paginate_lines, rewrap_lines, wrap_text_lines

__all__ = ["PlacedLine", "paginate_lines", "rewrap_lines", "wrap_text_lines"]
