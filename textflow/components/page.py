"""
文件路径：textflow/components/page.py

说明：页选择解析（"all" / "1,3-5"），供抽取与覆盖翻译时限定页面范围。
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

logger = logging.getLogger(__name__)


def _parse_int(token: str) -> Optional[int]:
    try:
        return int(token.strip())
    except ValueError:
        return None


def parse_page_selection(selection: Optional[str], total_pages: int, one_based: bool = True) -> List[int]:
    """解析页选择字符串，返回去重且排序的 0 基页索引列表。

    - None 或空串返回 []，由调用方决定是否回退为全部页面；
    - 越界或无法解析的片段记录告警后忽略。
    """
    if not selection:
        return []

    sel = selection.strip().lower()
    if sel == "all":
        return list(range(total_pages))

    offset = 1 if one_based else 0
    picked: Set[int] = set()
    for part in filter(None, (p.strip() for p in sel.split(","))):
        start_s, sep, end_s = part.partition("-")
        start = _parse_int(start_s)
        end = _parse_int(end_s) if sep else start
        if start is None or end is None:
            logger.warning("无法解析页选择片段：%s，已忽略", part)
            continue
        lo, hi = min(start, end), max(start, end)
        for number in range(lo, hi + 1):
            idx = number - offset
            if 0 <= idx < total_pages:
                picked.add(idx)
            else:
                logger.warning("页索引越界，已忽略：%s / total=%s", idx, total_pages)

    return sorted(picked)


__all__ = ["parse_page_selection"]
