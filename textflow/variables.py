"""
文件路径：textflow/variables.py

模块职责：
- 统一管理全局跨模块变量，确保模块化、无冲突、可追溯。
- 变量命名规范：{分类前缀}_{描述性名称}（全大写+下划线）。
  - PATH_：路径相关
  - STYLE_：样式相关
  - CONST_：通用常量
  - ERR_：错误码

使用说明：
- 业务模块不定义新的全局变量，从本模块导入所需常量。
- 目录路径均使用 pathlib.Path 对象表示。
"""

from pathlib import Path
from typing import Dict, Optional, Tuple


# =============================
# 路径（PATH_）
# =============================
# 项目根目录：textflow/variables.py 的上两级目录
PATH_ROOT: Path = Path(__file__).resolve().parents[1]

PATH_CONFIG_DIR: Path = PATH_ROOT / "config"
PATH_TEMP_DIR: Path = PATH_ROOT / "temp"
PATH_OUTPUT_DIR: Path = PATH_ROOT / "output"
PATH_LOGS_DIR: Path = PATH_ROOT / "logs"
PATH_FONTS_DIR: Path = PATH_CONFIG_DIR / "fonts"

PATH_LAYOUT_JSON: Path = PATH_CONFIG_DIR / "layout.json"  # 版式覆盖配置（可选）
PATH_TEMP_OVERLAY_PDF: Path = PATH_TEMP_DIR / "translation_overlay.pdf"  # 译文图层临时文件
PATH_LOG_FILE: Path = PATH_LOGS_DIR / "app.log"

# 显式字体文件（TTF/OTF，可内嵌）；不存在时走自动探测
PATH_FONT_FILE: Optional[Path] = PATH_FONTS_DIR / "NotoSansSC-Regular.ttf"


# =============================
# 样式（STYLE_）
# =============================
STYLE_FONT_NAME: str = "Helvetica"  # 注册中文字体失败时的最终回退
STYLE_FONT_NAME_CJK_PREFERRED: str = "NotoSansSC"  # 注册 TTF/OTF 时使用的字体名
STYLE_FONT_NAME_CJK_FALLBACK: str = "STSong-Light"  # ReportLab 内置 CID 字体（不嵌入）
STYLE_FONT_SIZE_DEFAULT: float = 11.0  # 文档渲染默认字号（pt）
STYLE_TEXT_COLOR_RGB: Tuple[int, int, int] = (0, 0, 0)
STYLE_COVER_COLOR_RGB: Tuple[int, int, int] = (255, 255, 255)  # 遮盖原文的底色


# =============================
# 常量（CONST_）
# =============================
CONST_ENCODING: str = "utf-8"
CONST_MAX_RETRY: int = 2  # 本地 IO 重试次数（不含首次）
CONST_CLEAN_TEMP_ON_EXIT: bool = True
CONST_DEFAULT_OUTPUT_SUFFIX: str = "_translated.pdf"
CONST_DOCUMENT_OUTPUT_SUFFIX: str = "_document.pdf"

# 页面尺寸：A4（pt）
CONST_PAGE_SIZE_DEFAULT: Tuple[float, float] = (595.28, 841.89)
CONST_PAGE_MARGIN_DEFAULT: float = 56.0  # 文档渲染四周页边距

# 译文字号：原字号 * 0.85，夹在 [8, 18]
CONST_FONT_SIZE_RATIO: float = 0.85
CONST_FONT_SIZE_MIN: float = 8.0
CONST_FONT_SIZE_MAX: float = 18.0
CONST_LINE_HEIGHT_RATIO: float = 1.1  # 行高 = 字号 * 1.1
CONST_COVER_PADDING: float = 2.0  # 白底遮盖框外扩

# 坐标钳制
CONST_CLAMP_MARGIN_DEFAULT: float = 2.0
CONST_ENABLE_CLAMP_DEFAULT: bool = False

# 翻译方向 -> 目标语言（提示词中使用的语言名）
CONST_DIRECTION_DEFAULT: str = "zh-ja"
CONST_TARGET_LANGUAGES: Dict[str, str] = {
    "ja-zh": "簡体字中国語",
    "ja-en": "英語",
}
CONST_TARGET_LANGUAGE_DEFAULT: str = "日本語"
# 型号判定：纯英数字/连字符/下划线视为无需翻译
CONST_MODEL_NUMBER_PATTERN: str = r"^[A-Za-z0-9\-_]+$"

# 常见 CJK 字体候选路径（仅 .ttf/.otf 可被内嵌，.ttc 会被跳过）
CONST_CANDIDATE_CJK_FONT_PATHS: Tuple[str, ...] = (
    "C:/Windows/Fonts/simhei.ttf",
    "C:/Windows/Fonts/msgothic.ttc",
    "/System/Library/Fonts/STSong.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/noto/NotoSansSC-Regular.ttf",
    "/usr/share/fonts/truetype/wqy/wqy-zenhei.ttc",
)

CONST_LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONST_LOG_DATEFMT: str = "%Y-%m-%d %H:%M:%S"


# =============================
# 错误码（ERR_）
# =============================
# 1xxx：文件/路径
ERR_FILE_NOT_FOUND: int = 1001
ERR_INVALID_PDF: int = 1002
ERR_PATH_NOT_WRITABLE: int = 1003

# 2xxx：排版
ERR_INVALID_ARGUMENT: int = 2001
ERR_METRICS_FAILURE: int = 2002
ERR_TEXT_LAYER_BUILD_FAILED: int = 2003

# 3xxx：合并/写入
ERR_PDF_MERGE_FAILED: int = 3001
ERR_PDF_WRITE_FAILED: int = 3002

# 4xxx：配置/数据
ERR_CONFIG_LOAD_FAILED: int = 4001
ERR_DATA_INVALID: int = 4002

# 5xxx：翻译
ERR_TRANSLATION_FAILED: int = 5001


__all__ = [
    # PATH_
    "PATH_ROOT",
    "PATH_CONFIG_DIR",
    "PATH_TEMP_DIR",
    "PATH_OUTPUT_DIR",
    "PATH_LOGS_DIR",
    "PATH_FONTS_DIR",
    "PATH_LAYOUT_JSON",
    "PATH_TEMP_OVERLAY_PDF",
    "PATH_LOG_FILE",
    "PATH_FONT_FILE",
    # STYLE_
    "STYLE_FONT_NAME",
    "STYLE_FONT_NAME_CJK_PREFERRED",
    "STYLE_FONT_NAME_CJK_FALLBACK",
    "STYLE_FONT_SIZE_DEFAULT",
    "STYLE_TEXT_COLOR_RGB",
    "STYLE_COVER_COLOR_RGB",
    # CONST_
    "CONST_ENCODING",
    "CONST_MAX_RETRY",
    "CONST_CLEAN_TEMP_ON_EXIT",
    "CONST_DEFAULT_OUTPUT_SUFFIX",
    "CONST_DOCUMENT_OUTPUT_SUFFIX",
    "CONST_PAGE_SIZE_DEFAULT",
    "CONST_PAGE_MARGIN_DEFAULT",
    "CONST_FONT_SIZE_RATIO",
    "CONST_FONT_SIZE_MIN",
    "CONST_FONT_SIZE_MAX",
    "CONST_LINE_HEIGHT_RATIO",
    "CONST_COVER_PADDING",
    "CONST_CLAMP_MARGIN_DEFAULT",
    "CONST_ENABLE_CLAMP_DEFAULT",
    "CONST_DIRECTION_DEFAULT",
    "CONST_TARGET_LANGUAGES",
    "CONST_TARGET_LANGUAGE_DEFAULT",
    "CONST_MODEL_NUMBER_PATTERN",
    "CONST_CANDIDATE_CJK_FONT_PATHS",
    "CONST_LOG_FORMAT",
    "CONST_LOG_DATEFMT",
    # ERR_
    "ERR_FILE_NOT_FOUND",
    "ERR_INVALID_PDF",
    "ERR_PATH_NOT_WRITABLE",
    "ERR_INVALID_ARGUMENT",
    "ERR_METRICS_FAILURE",
    "ERR_TEXT_LAYER_BUILD_FAILED",
    "ERR_PDF_MERGE_FAILED",
    "ERR_PDF_WRITE_FAILED",
    "ERR_CONFIG_LOAD_FAILED",
    "ERR_DATA_INVALID",
    "ERR_TRANSLATION_FAILED",
]
