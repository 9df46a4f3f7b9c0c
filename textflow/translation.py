"""
文件路径：textflow/translation.py

模块职责：
- 构造批量翻译提示词、解析模型返回的 JSON、校验译文（自检报告）。
- 翻译提供方以可调用对象注入：provider(prompt) -> 原始响应文本；本模块不直接发起网络请求。
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from .components import TranslationError, get_logger, has_cjk_ideograph, has_kana
from .variables import (
    CONST_MODEL_NUMBER_PATTERN,
    CONST_TARGET_LANGUAGE_DEFAULT,
    CONST_TARGET_LANGUAGES,
)


logger = get_logger(__name__)

TranslationProvider = Callable[[str], str]

_MODEL_NUMBER_RE = re.compile(CONST_MODEL_NUMBER_PATTERN)
_LATIN_RE = re.compile(r"[A-Za-z]")
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


@dataclass
class TranslationReport:
    """译文自检结果。"""

    total: int = 0
    success: int = 0
    failed: int = 0
    issues: List[str] = field(default_factory=list)

    def merge(self, other: "TranslationReport") -> "TranslationReport":
        return TranslationReport(
            total=self.total + other.total,
            success=self.success + other.success,
            failed=self.failed + other.failed,
            issues=self.issues + other.issues,
        )


def target_language_for(direction: str) -> str:
    """翻译方向 -> 提示词中的目标语言名，如 "ja-zh" -> "簡体字中国語"。"""
    return CONST_TARGET_LANGUAGES.get((direction or "").strip().lower(), CONST_TARGET_LANGUAGE_DEFAULT)


def build_translation_prompt(texts: Sequence[str], target_language: str) -> str:
    numbered = "\n".join(f"{i + 1}. {t}" for i, t in enumerate(texts))
    return (
        f"以下のテキストを{target_language}に翻訳してください。\n"
        "各行を翻訳し、同じ順序でJSON配列として返してください。\n"
        "型番や固有名詞（例: 3R-MFXS50, Anyty）はそのまま返してください。\n"
        "\n"
        "入力:\n"
        f"{numbered}\n"
        "\n"
        '出力形式: {"translations": ["翻訳1", "翻訳2", ...]}\n'
        f"必ず{len(texts)}個の翻訳を返してください。"
    )


def parse_translation_response(content: str, expected: int) -> List[str]:
    """解析 {"translations": [...]}，条数不足以 "" 补齐，多余截断。

    异常：
        TranslationError: 内容不是合法 JSON 或缺少 translations 数组。
    """
    cleaned = _CODE_FENCE_RE.sub("", (content or "").strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise TranslationError(f"译文 JSON 解析失败：{exc}") from exc
    translations = data.get("translations") if isinstance(data, dict) else None
    if not isinstance(translations, list):
        raise TranslationError("响应缺少 translations 数组")

    result = ["" if t is None else str(t) for t in translations[:expected]]
    result.extend([""] * (expected - len(result)))
    return result


def translate_texts(
    texts: Sequence[str],
    provider: TranslationProvider,
    target_language: str,
) -> List[str]:
    """批量翻译；提供方或解析失败时记录告警并原样返回原文，保证后续绘制不中断。"""
    if not texts:
        return []
    prompt = build_translation_prompt(texts, target_language)
    try:
        return parse_translation_response(provider(prompt), len(texts))
    except Exception as exc:  # noqa: BLE001
        logger.warning("翻译失败，回退为原文（%s 条）：%s", len(texts), exc)
        return list(texts)


def _has_target_script(text: str, target_language: str) -> bool:
    if target_language == CONST_TARGET_LANGUAGES["ja-zh"]:
        return has_cjk_ideograph(text)
    if target_language == CONST_TARGET_LANGUAGES["ja-en"]:
        return bool(_LATIN_RE.search(text))
    return has_kana(text) or has_cjk_ideograph(text)


def validate_translations(
    originals: Sequence[str],
    translations: Sequence[str],
    target_language: str,
) -> TranslationReport:
    """校验译文：条数一致、非空、含目标语言文字（纯型号视为成功）。"""
    issues: List[str] = []
    success = 0
    if len(originals) != len(translations):
        issues.append(f"条数不一致：原文 {len(originals)} 条，译文 {len(translations)} 条")

    for idx, trans in enumerate(translations):
        if not trans or not trans.strip():
            issues.append(f"译文 {idx + 1}：空结果")
            continue
        if _has_target_script(trans, target_language) or _MODEL_NUMBER_RE.match(trans):
            success += 1
        else:
            issues.append(f"译文 {idx + 1}：不含{target_language}文字 - {trans!r}")

    return TranslationReport(
        total=len(originals),
        success=success,
        failed=len(originals) - success,
        issues=issues,
    )


__all__ = [
    "TranslationProvider",
    "TranslationReport",
    "target_language_for",
    "build_translation_prompt",
    "parse_translation_response",
    "translate_texts",
    "validate_translations",
]
