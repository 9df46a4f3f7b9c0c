from __future__ import annotations

import math

import pytest

from textflow.components import (
    estimate_text_width,
    estimated_glyph_metrics,
    has_cjk_ideograph,
    has_kana,
    is_dense_script_char,
    split_paragraphs,
    tokenize_paragraph,
)


class TestTextWidthEstimation:
    def test_empty_text_width_is_zero(self):
        assert estimate_text_width("", 12) == 0.0

    def test_mixed_cjk_ascii_width(self):
        # "测试ABC" -> 2*12 + 3*12*0.6 = 24 + 21.6 = 45.6
        w = estimate_text_width("测试ABC", font_size=12, char_width_ratio=0.6)
        assert math.isclose(w, 45.6, rel_tol=1e-6, abs_tol=1e-6)

    def test_kana_counts_as_full_width(self):
        assert estimate_text_width("かな", font_size=10) == 20.0

    def test_estimated_glyph_metrics_matches_estimate(self):
        metrics = estimated_glyph_metrics()
        assert metrics("電源", 10) == estimate_text_width("電源", 10) == 20.0
        assert metrics("abc", 10) == pytest.approx(18.0)
        assert estimated_glyph_metrics(0.5)("abc", 10) == pytest.approx(15.0)


class TestScriptDetection:
    def test_dense_chars(self):
        for ch in ("あ", "カ", "漢", "。", "、", "Ａ"):
            assert is_dense_script_char(ch), ch

    def test_non_dense_chars(self):
        for ch in ("a", "3", "-", " ", "　", "한", ""):
            assert not is_dense_script_char(ch), repr(ch)

    def test_has_kana(self):
        assert has_kana("日本語です")
        assert has_kana("カタカナTest")
        assert not has_kana("中国語")
        assert not has_kana("Hello123")
        assert not has_kana("")

    def test_has_cjk_ideograph(self):
        assert has_cjk_ideograph("你好")
        assert has_cjk_ideograph("日本")
        assert not has_cjk_ideograph("ひらがな")
        assert not has_cjk_ideograph("3R-MFXS50")


class TestSplitAndTokenize:
    def test_split_keeps_empty_paragraphs(self):
        assert split_paragraphs("a\n\nb\n") == ["a", "", "b", ""]

    def test_split_empty_text(self):
        assert split_paragraphs("") == [""]

    def test_tokenize_latin_words(self):
        assert tokenize_paragraph("foo  bar") == [("foo", False), ("bar", True)]

    def test_tokenize_dense_per_char(self):
        assert tokenize_paragraph("日本語") == [("日", False), ("本", False), ("語", False)]

    def test_tokenize_model_number_is_atomic(self):
        assert tokenize_paragraph("型番3R-MFXS50です") == [
            ("型", False),
            ("番", False),
            ("3R-MFXS50", False),
            ("で", False),
            ("す", False),
        ]

    def test_tokenize_ideographic_space_is_whitespace(self):
        assert tokenize_paragraph("注意　事項") == [("注", False), ("意", False), ("事", True), ("項", False)]

    def test_tokenize_whitespace_only(self):
        assert tokenize_paragraph("  \t ") == []
