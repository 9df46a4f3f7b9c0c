"""
文件路径：textflow/components/text.py

说明：文本度量、段落拆分与分词工具。

分词约定：
- 空白分隔词元；
- 假名、汉字、CJK 标点与全角字符逐字成为原子词元（这些文字没有空白词边界）；
- 其它连续非空白字符（英文单词、型号如 3R-MFXS50）整体为一个原子词元，永不拆分。
"""

from __future__ import annotations

import re
from typing import List, Tuple


# 密集文字：CJK 标点、假名、CJK 扩展 A、统一汉字、兼容汉字、全角形式
_DENSE_RANGES = (
    "、-〿"
    "぀-ゟ"
    "゠-ヿ"
    "ㇰ-ㇿ"
    "㐀-䶿"
    "一-鿿"
    "豈-﫿"
    "！-￯"
)

_DENSE_CHAR_RE = re.compile(f"[{_DENSE_RANGES}]")
_TOKEN_RE = re.compile(rf"\s+|[{_DENSE_RANGES}]|[^\s{_DENSE_RANGES}]+")
_KANA_RE = re.compile(r"[぀-ゟ゠-ヿ]")
_IDEOGRAPH_RE = re.compile(r"[㐀-䶿一-鿿豈-﫿]")


def is_dense_script_char(char: str) -> bool:
    """判断单个字符是否属于无空白词边界的文字（日文/中文）。"""
    return bool(char) and _DENSE_CHAR_RE.fullmatch(char) is not None


def has_kana(text: str) -> bool:
    return bool(_KANA_RE.search(text or ""))


def has_cjk_ideograph(text: str) -> bool:
    return bool(_IDEOGRAPH_RE.search(text or ""))


def split_paragraphs(text: str) -> List[str]:
    """按强制换行拆分段落，保留空段落。

    "\\r\\n" 与 "\\r" 先统一为 "\\n"；k 个换行符总是得到 k+1 个段落。
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.split("\n")


def tokenize_paragraph(paragraph: str) -> List[Tuple[str, bool]]:
    """将段落切分为原子词元。

    返回：
        [(token, spaced), ...]；spaced 表示该词元在原文中前面是否有空白，
        拼接到非空行时据此决定是否插入单个空格。
    """
    tokens: List[Tuple[str, bool]] = []
    spaced = False
    for match in _TOKEN_RE.finditer(paragraph):
        piece = match.group(0)
        if piece.isspace():
            spaced = True
            continue
        tokens.append((piece, spaced))
        spaced = False
    return tokens


def estimate_text_width(
    text: str,
    font_size: float,
    char_width_ratio: float = 0.6,
) -> float:
    """估算文本宽度（不依赖字体文件的简化度量）。

    - 密集文字按 font_size 计算；其它字符按 font_size * char_width_ratio。
    """
    if not text:
        return 0.0
    width = 0.0
    for char in text:
        if is_dense_script_char(char):
            width += font_size
        else:
            width += font_size * char_width_ratio
    return width


__all__ = [
    "is_dense_script_char",
    "has_kana",
    "has_cjk_ideograph",
    "split_paragraphs",
    "tokenize_paragraph",
    "estimate_text_width",
]
