from __future__ import annotations

import pytest

from textflow.components import clamp_baseline, cover_rect, fit_font_size, to_reportlab_y


class TestCoverRect:
    def test_padding_applied(self):
        assert cover_rect(100, 200, 50, 10, page_width=595, page_height=842, padding=2) == (98, 198, 54, 14)

    def test_clamped_to_page_origin(self):
        x, y, w, h = cover_rect(1, 0, 20, 10, page_width=595, page_height=842, padding=2)
        assert (x, y) == (0.0, 0.0)
        assert (w, h) == (24, 14)

    def test_limited_by_right_and_top_edges(self):
        # w = min(100 + 4, 595 - 550 + 2) = 47；h = min(20 + 4, 842 - 830 + 2) = 14
        x, y, w, h = cover_rect(550, 830, 100, 20, page_width=595, page_height=842, padding=2)
        assert (w, h) == (47, 14)


class TestFitFontSize:
    @pytest.mark.parametrize(
        "source,expected",
        [(12, 10.2), (4, 8.0), (40, 18.0), (20, 17.0)],
    )
    def test_scaled_and_clamped(self, source, expected):
        assert fit_font_size(source) == pytest.approx(expected)

    def test_custom_bounds(self):
        assert fit_font_size(10, ratio=1.0, minimum=6, maximum=9) == 9


class TestCoordinateFlip:
    def test_to_reportlab_y(self):
        assert to_reportlab_y(42.0, page_height=842.0) == 800.0


class TestClampBaseline:
    def test_clamp_y_near_top(self):
        # page_h=100, margin=2, font_size=10 -> ascent=8 -> y_max = 90
        x, y = clamp_baseline(x=10, y_baseline=99, page_width=200, page_height=100, font_size=10, margin=2)
        assert (x, y) == (10, 90)

    def test_clamp_y_near_bottom(self):
        # y_min = margin + descent = 2 + 2 = 4
        _, y = clamp_baseline(x=10, y_baseline=1, page_width=200, page_height=100, font_size=10, margin=2)
        assert y == 4

    def test_degenerate_case_fallback_to_regular_clamp(self):
        _, y = clamp_baseline(x=10, y_baseline=100, page_width=100, page_height=20, font_size=50, margin=2)
        assert y == 18
