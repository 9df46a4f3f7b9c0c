from __future__ import annotations

import math

import pytest

from textflow.components import InvalidArgumentError, MetricsFailureError, estimate_text_width, tokenize_paragraph
from textflow.processors.layout import rewrap_lines, wrap_text_lines


class TestWrapBasics:
    def test_short_text_fits_one_line(self, char_metrics):
        assert wrap_text_lines("短いテキスト", char_metrics, font_size=10, max_width=100) == ["短いテキスト"]

    def test_dense_script_wraps_per_character(self, char_metrics):
        text = "これはとても長いテキストです"
        lines = wrap_text_lines(text, char_metrics, font_size=10, max_width=50)
        assert len(lines) > 1
        assert all(len(line) <= 5 for line in lines)
        assert "".join(lines) == text

    def test_dense_script_exact_split(self, char_metrics):
        lines = wrap_text_lines("これはとても長いテキストです", char_metrics, font_size=10, max_width=50)
        assert lines == ["これはとて", "も長いテキ", "ストです"]

    def test_words_wrap_on_whitespace(self, char_metrics):
        # "aaa bbb" = 70 > 60 -> 换行
        lines = wrap_text_lines("aaa bbb ccc", char_metrics, font_size=10, max_width=60)
        assert lines == ["aaa", "bbb", "ccc"]

    def test_words_share_line_when_fit(self, char_metrics):
        lines = wrap_text_lines("aa bb cc dd", char_metrics, font_size=10, max_width=50)
        assert lines == ["aa bb", "cc dd"]

    def test_whitespace_normalised_when_everything_fits(self, char_metrics):
        lines = wrap_text_lines("  alpha \t beta   gamma  ", char_metrics, font_size=10, max_width=10_000)
        assert lines == ["alpha beta gamma"]

    def test_overlong_token_gets_own_line_without_split(self, char_metrics):
        lines = wrap_text_lines("ab 3R-MFXS50 cd", char_metrics, font_size=10, max_width=40)
        assert lines == ["ab", "3R-MFXS50", "cd"]

    def test_overlong_first_token(self, char_metrics):
        lines = wrap_text_lines("abcdefgh ij", char_metrics, font_size=10, max_width=30)
        assert lines == ["abcdefgh", "ij"]

    def test_mixed_latin_and_dense_keeps_source_spacing(self, char_metrics):
        lines = wrap_text_lines("Anyty製品 の説明", char_metrics, font_size=10, max_width=1000)
        assert lines == ["Anyty製品 の説明"]

    def test_mixed_latin_and_dense_wraps_between(self, char_metrics):
        # "Anyty" 5 字 = 50；其后汉字逐字追加
        lines = wrap_text_lines("Anyty製品です", char_metrics, font_size=10, max_width=60)
        assert lines == ["Anyty製", "品です"]


class TestParagraphs:
    def test_blank_line_preserved(self, char_metrics):
        assert wrap_text_lines("line1\n\nline2", char_metrics, font_size=10, max_width=1000) == ["line1", "", "line2"]

    def test_paragraph_count_preserved(self, char_metrics):
        text = "a\nb\n\n\nc\n"
        lines = wrap_text_lines(text, char_metrics, font_size=10, max_width=1000)
        assert lines == ["a", "b", "", "", "c", ""]
        assert len(lines) >= text.count("\n") + 1

    def test_whitespace_only_paragraph_is_blank(self, char_metrics):
        assert wrap_text_lines("a\n   \nb", char_metrics, font_size=10, max_width=1000) == ["a", "", "b"]

    def test_crlf_and_cr_are_forced_breaks(self, char_metrics):
        assert wrap_text_lines("a\r\nb\rc", char_metrics, font_size=10, max_width=1000) == ["a", "b", "c"]

    def test_forced_break_not_merged_with_neighbour(self, char_metrics):
        lines = wrap_text_lines("aa\nbb", char_metrics, font_size=10, max_width=1000)
        assert lines == ["aa", "bb"]

    def test_empty_input_yields_single_empty_line(self, char_metrics):
        assert wrap_text_lines("", char_metrics, font_size=10, max_width=50) == [""]


class TestWidthInvariant:
    @pytest.mark.parametrize(
        "text",
        [
            "The quick brown fox jumps over the lazy dog",
            "型番 3R-MFXS50 の取扱説明書です。電源を入れる前に確認してください。",
            "製品名：Anyty\n\n注意事項：高温多湿を避けて保管してください",
        ],
    )
    def test_no_line_exceeds_limit_unless_single_token(self, text):
        metrics = lambda s, size: estimate_text_width(s, size)  # noqa: E731
        max_width = 80.0
        for line in wrap_text_lines(text, metrics, font_size=10, max_width=max_width):
            if metrics(line, 10) > max_width:
                assert len(tokenize_paragraph(line)) == 1

    def test_rewrap_is_idempotent(self, char_metrics):
        text = "これはとても長いテキストです\n\nsome english words here and a verylongtokenthatoverflows"
        lines = wrap_text_lines(text, char_metrics, font_size=10, max_width=70)
        assert rewrap_lines(lines, char_metrics, font_size=10, max_width=70) == lines

    def test_metrics_receive_font_size(self):
        seen = []

        def metrics(segment, font_size):
            seen.append(font_size)
            return len(segment) * font_size

        wrap_text_lines("ab cd", metrics, font_size=7.5, max_width=100)
        assert seen and all(math.isclose(s, 7.5) for s in seen)


class TestErrors:
    @pytest.mark.parametrize("max_width", [0, -1, float("nan"), float("inf"), "10", True])
    def test_invalid_max_width(self, char_metrics, max_width):
        with pytest.raises(InvalidArgumentError):
            wrap_text_lines("text", char_metrics, font_size=10, max_width=max_width)

    @pytest.mark.parametrize("font_size", [0, -5, None])
    def test_invalid_font_size(self, char_metrics, font_size):
        with pytest.raises(InvalidArgumentError):
            wrap_text_lines("text", char_metrics, font_size=font_size, max_width=50)

    def test_zero_width_rejected_even_for_empty_text(self, char_metrics):
        with pytest.raises(InvalidArgumentError):
            wrap_text_lines("", char_metrics, font_size=10, max_width=0)

    def test_invalid_argument_is_value_error(self, char_metrics):
        with pytest.raises(ValueError):
            wrap_text_lines("text", char_metrics, font_size=10, max_width=0)

    def test_non_string_text(self, char_metrics):
        with pytest.raises(InvalidArgumentError):
            wrap_text_lines(None, char_metrics, font_size=10, max_width=50)  # type: ignore[arg-type]

    def test_metrics_exception_propagates(self):
        def broken(segment, font_size):
            raise KeyError("font not registered")

        with pytest.raises(MetricsFailureError) as info:
            wrap_text_lines("abc", broken, font_size=10, max_width=50)
        assert isinstance(info.value.__cause__, KeyError)

    @pytest.mark.parametrize("bad_width", [-1.0, float("nan"), float("inf"), "10"])
    def test_metrics_bad_return_value(self, bad_width):
        with pytest.raises(MetricsFailureError):
            wrap_text_lines("abc", lambda s, size: bad_width, font_size=10, max_width=50)

    def test_error_message_carries_code(self, char_metrics):
        with pytest.raises(InvalidArgumentError, match=r"^\[2001\]"):
            wrap_text_lines("abc", char_metrics, font_size=10, max_width=-3)
