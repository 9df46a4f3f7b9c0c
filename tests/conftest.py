from __future__ import annotations

"""
pytest 全局配置：将项目根目录加入 sys.path，确保 `from textflow...` 可被导入。
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


@pytest.fixture
def char_metrics():
    """等宽度量：每个字符 10pt，与字号无关。"""
    return lambda segment, font_size: len(segment) * 10.0
