from __future__ import annotations

import json

import pytest

from textflow.components import TranslationError
from textflow.translation import (
    TranslationReport,
    build_translation_prompt,
    parse_translation_response,
    target_language_for,
    translate_texts,
    validate_translations,
)


class TestTargetLanguage:
    def test_known_directions(self):
        assert target_language_for("ja-zh") == "簡体字中国語"
        assert target_language_for("ja-en") == "英語"

    def test_default_is_japanese(self):
        assert target_language_for("zh-ja") == "日本語"
        assert target_language_for("") == "日本語"


class TestPrompt:
    def test_numbered_items_and_count(self):
        prompt = build_translation_prompt(["電源", "3R-MFXS50"], "簡体字中国語")
        assert "1. 電源" in prompt
        assert "2. 3R-MFXS50" in prompt
        assert "簡体字中国語に翻訳" in prompt
        assert "必ず2個の翻訳" in prompt
        assert '{"translations"' in prompt


class TestParseResponse:
    def test_exact_count(self):
        assert parse_translation_response('{"translations": ["a", "b"]}', 2) == ["a", "b"]

    def test_padded_and_truncated(self):
        assert parse_translation_response('{"translations": ["a"]}', 3) == ["a", "", ""]
        assert parse_translation_response('{"translations": ["a", "b", "c"]}', 2) == ["a", "b"]

    def test_code_fence_stripped(self):
        content = '```json\n{"translations": ["x"]}\n```'
        assert parse_translation_response(content, 1) == ["x"]

    @pytest.mark.parametrize("content", ["not json", '{"other": []}', '["a"]', ""])
    def test_malformed(self, content):
        with pytest.raises(TranslationError):
            parse_translation_response(content, 1)


class TestTranslateTexts:
    def test_provider_called_with_prompt(self):
        prompts = []

        def provider(prompt):
            prompts.append(prompt)
            return json.dumps({"translations": ["电源", "3R-MFXS50"]}, ensure_ascii=False)

        result = translate_texts(["電源", "3R-MFXS50"], provider, "簡体字中国語")
        assert result == ["电源", "3R-MFXS50"]
        assert len(prompts) == 1 and "1. 電源" in prompts[0]

    def test_empty_input_skips_provider(self):
        def provider(prompt):
            raise AssertionError("should not be called")

        assert translate_texts([], provider, "日本語") == []

    def test_provider_failure_falls_back_to_originals(self):
        def provider(prompt):
            raise ConnectionError("timeout")

        assert translate_texts(["a", "b"], provider, "日本語") == ["a", "b"]

    def test_malformed_response_falls_back_to_originals(self):
        assert translate_texts(["a"], lambda prompt: "oops", "日本語") == ["a"]


class TestValidateTranslations:
    def test_chinese_target(self):
        report = validate_translations(["電源", "型番", "説明"], ["电源", "3R-MFXS50", "power on"], "簡体字中国語")
        assert (report.total, report.success, report.failed) == (3, 2, 1)
        assert len(report.issues) == 1

    def test_bare_word_counts_as_model_number(self):
        report = validate_translations(["説明"], ["power"], "簡体字中国語")
        assert (report.success, report.failed) == (1, 0)

    def test_empty_translation_is_failure(self):
        report = validate_translations(["a"], [" "], "日本語")
        assert report.success == 0 and report.failed == 1

    def test_count_mismatch_recorded(self):
        report = validate_translations(["a", "b"], ["あ"], "日本語")
        assert report.total == 2 and report.success == 1
        assert any("条数不一致" in issue for issue in report.issues)

    def test_english_target(self):
        report = validate_translations(["電源"], ["Power"], "英語")
        assert report.success == 1

    def test_merge(self):
        merged = TranslationReport(1, 1, 0, []).merge(TranslationReport(2, 1, 1, ["x"]))
        assert merged == TranslationReport(3, 2, 1, ["x"])
