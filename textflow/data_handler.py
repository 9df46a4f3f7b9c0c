"""
文件路径：textflow/data_handler.py

模块职责：
- 解析翻译请求数据（pages/textItems/direction），做最小校验并转换为 PageSpec；
- 读取译文 JSON 与版式覆盖配置（config/layout.json）。

说明：
- 仅依赖标准库与 `textflow/components`、`textflow/variables.py`，不依赖绘制引擎。

变量引用说明（来自 textflow/variables.py）：
- PATH_LAYOUT_JSON, CONST_ENCODING, CONST_PAGE_SIZE_DEFAULT, CONST_DIRECTION_DEFAULT
- CONST_FONT_SIZE_*, CONST_LINE_HEIGHT_RATIO, CONST_COVER_PADDING, CONST_PAGE_MARGIN_DEFAULT
- ERR_CONFIG_LOAD_FAILED
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from .components import DataInvalidError, get_logger
from .variables import (
    PATH_LAYOUT_JSON,
    CONST_ENCODING,
    CONST_PAGE_SIZE_DEFAULT,
    CONST_PAGE_MARGIN_DEFAULT,
    CONST_DIRECTION_DEFAULT,
    CONST_FONT_SIZE_RATIO,
    CONST_FONT_SIZE_MIN,
    CONST_FONT_SIZE_MAX,
    CONST_LINE_HEIGHT_RATIO,
    CONST_COVER_PADDING,
    CONST_CLAMP_MARGIN_DEFAULT,
    CONST_ENABLE_CLAMP_DEFAULT,
    STYLE_FONT_SIZE_DEFAULT,
    ERR_CONFIG_LOAD_FAILED,
)


logger = get_logger(__name__)


@dataclass
class TextItem:
    """页面上的一段原文，坐标为 ReportLab 底左原点（y 为文字底边）。"""

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    font_size: float = 12.0


@dataclass
class PageSpec:
    width: float
    height: float
    items: List[TextItem] = field(default_factory=list)


@dataclass(frozen=True)
class LayoutSettings:
    """版式参数；默认值来自 variables，可由 config/layout.json 覆盖。"""

    font_size_ratio: float = CONST_FONT_SIZE_RATIO
    font_size_min: float = CONST_FONT_SIZE_MIN
    font_size_max: float = CONST_FONT_SIZE_MAX
    line_height_ratio: float = CONST_LINE_HEIGHT_RATIO
    cover_padding: float = CONST_COVER_PADDING
    page_margin: float = CONST_PAGE_MARGIN_DEFAULT
    document_font_size: float = STYLE_FONT_SIZE_DEFAULT
    enable_clamp: bool = CONST_ENABLE_CLAMP_DEFAULT
    clamp_margin: float = CONST_CLAMP_MARGIN_DEFAULT


def _json_loads_strip_bom(content: str):
    """解析 JSON 字符串，自动去除 UTF-8 BOM。"""
    if content.startswith("\ufeff"):
        content = content.lstrip("\ufeff")
    return json.loads(content)


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_item(raw: Any) -> Optional[TextItem]:
    if not isinstance(raw, Mapping):
        return None
    text = raw.get("text")
    if text is None or str(text).strip() == "":
        return None
    return TextItem(
        text=str(text),
        x=_as_float(raw.get("x"), 0.0),
        y=_as_float(raw.get("y"), 0.0),
        width=_as_float(raw.get("width"), 0.0),
        height=_as_float(raw.get("height"), 0.0),
        font_size=_as_float(raw.get("fontSize", raw.get("font_size")), 12.0),
    )


def parse_pages_payload(payload: Any) -> Tuple[List[PageSpec], str]:
    """校验并解析翻译请求体。

    结构：
        {"pages": [{"width": 595, "height": 842,
                    "textItems": [{"text", "x", "y", "width", "height", "fontSize"}]}],
         "direction": "ja-zh"}

    返回：
        (pages, direction)

    异常：
        DataInvalidError: 缺少 pages 数组或数组为空。
    """
    if not isinstance(payload, Mapping):
        raise DataInvalidError("请求体必须为对象")
    raw_pages = payload.get("pages")
    if not isinstance(raw_pages, list) or not raw_pages:
        raise DataInvalidError("Invalid request: pages array required")

    default_w, default_h = CONST_PAGE_SIZE_DEFAULT
    pages: List[PageSpec] = []
    for idx, raw_page in enumerate(raw_pages):
        if not isinstance(raw_page, Mapping):
            raise DataInvalidError(f"第 {idx + 1} 页不是对象")
        raw_items = raw_page.get("textItems") or []
        if not isinstance(raw_items, list):
            raise DataInvalidError(f"第 {idx + 1} 页的 textItems 必须为数组")
        items = [item for item in (_parse_item(r) for r in raw_items) if item is not None]
        if len(items) < len(raw_items):
            logger.info("第 %s 页跳过 %s 个空文本项", idx + 1, len(raw_items) - len(items))
        pages.append(
            PageSpec(
                width=_as_float(raw_page.get("width"), default_w) or default_w,
                height=_as_float(raw_page.get("height"), default_h) or default_h,
                items=items,
            )
        )

    direction = str(payload.get("direction") or CONST_DIRECTION_DEFAULT)
    return pages, direction


def load_pages_json(path: Path) -> Tuple[List[PageSpec], str]:
    """从 JSON 文件读取并解析翻译请求体。"""
    content = path.read_text(encoding=CONST_ENCODING)
    try:
        data = _json_loads_strip_bom(content)
    except json.JSONDecodeError as exc:
        raise DataInvalidError(f"JSON 解析失败：{path}：{exc}") from exc
    return parse_pages_payload(data)


def load_translations_json(path: Path) -> List[List[str]]:
    """读取逐页译文。

    支持两种结构：
    - 数组：[["页1译文1", ...], ["页2译文1", ...]]
    - 对象：{"translations": [ ... ]}
    """
    content = path.read_text(encoding=CONST_ENCODING)
    try:
        data = _json_loads_strip_bom(content)
    except json.JSONDecodeError as exc:
        raise DataInvalidError(f"JSON 解析失败：{path}：{exc}") from exc
    if isinstance(data, dict):
        data = data.get("translations")
    if not isinstance(data, list) or not all(isinstance(page, list) for page in data):
        raise DataInvalidError("译文必须为逐页数组：[[...], [...]]")
    return [["" if t is None else str(t) for t in page] for page in data]


def load_layout_config(config_path: Optional[Path] = None) -> LayoutSettings:
    """加载版式覆盖配置。

    参数：
        config_path: 配置路径；默认读取 `config/layout.json`，文件不存在时使用默认值。

    返回：
        LayoutSettings；未知键记录告警后忽略。
    """
    path = config_path or PATH_LAYOUT_JSON
    defaults = LayoutSettings()
    if not path.exists():
        logger.info("未找到版式配置，使用默认值：%s", path)
        return defaults
    try:
        data = _json_loads_strip_bom(path.read_text(encoding=CONST_ENCODING))
        if not isinstance(data, dict):
            raise ValueError("配置顶层必须为对象")
        known = {f.name for f in fields(LayoutSettings)}
        overrides = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("忽略未知版式配置项：%s", key)
                continue
            current = getattr(defaults, key)
            overrides[key] = bool(value) if isinstance(current, bool) else float(value)
        return replace(defaults, **overrides)
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] 配置加载失败: {exc}") from exc


__all__ = [
    "TextItem",
    "PageSpec",
    "LayoutSettings",
    "parse_pages_payload",
    "load_pages_json",
    "load_translations_json",
    "load_layout_config",
]
