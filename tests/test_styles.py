"""Tests for styles and theme modules -- text measurement, truncation and the
CSS custom property system used by the SVG renderer.
"""
from __future__ import annotations

import re

import pytest

from erd_viewer.styles import estimate_mono_text_width, estimate_text_width, truncate_to_width
from erd_viewer.theme import THEMES, DEFAULTS, DiagramColors, build_style_block, svg_open_tag


# ============================================================================
# Text measurement
# ============================================================================


class TestTextWidth:
    def test_heavier_weights_are_wider(self):
        assert estimate_text_width("orders", 12, 700) > estimate_text_width("orders", 12, 400)

    def test_mono_width_is_uniform(self):
        assert estimate_mono_text_width("iiii", 10) == estimate_mono_text_width("WWWW", 10)


class TestTruncate:
    def test_short_text_is_unchanged(self):
        assert truncate_to_width("id", 100, 10) == "id"

    def test_long_text_gets_an_ellipsis(self):
        assert truncate_to_width("customer_identifier", 50, 10) == "cust…"

    def test_no_room_leaves_only_the_ellipsis(self):
        assert truncate_to_width("abc", 5, 10) == "…"


# ============================================================================
# Theme system (CSS custom properties)
# ============================================================================


class TestThemes:
    def test_each_theme_has_valid_bg_and_fg_colors(self):
        for name, colors in THEMES.items():
            assert re.match(r"^#[0-9a-fA-F]{6}$", colors.bg), f"{name} bg invalid"
            assert re.match(r"^#[0-9a-fA-F]{6}$", colors.fg), f"{name} fg invalid"

    def test_defaults_are_a_light_palette(self):
        assert DEFAULTS["bg"] == "#FFFFFF"


class TestSvgOpenTag:
    def test_sets_bg_and_fg_css_variables_in_inline_style(self):
        tag = svg_open_tag(400, 300, DiagramColors(bg="#1a1b26", fg="#a9b1d6"))
        assert "--bg:#1a1b26" in tag
        assert "--fg:#a9b1d6" in tag
        assert "background:var(--bg)" in tag

    def test_omits_unset_enrichment_variables(self):
        tag = svg_open_tag(400, 300, DiagramColors(bg="#fff", fg="#000"))
        assert "--line" not in tag
        assert "--accent" not in tag

    def test_viewbox_origin_can_be_negative(self):
        tag = svg_open_tag(400, 300, DiagramColors(bg="#fff", fg="#000"), min_x=-50, min_y=-20)
        assert 'viewBox="-50 -20 400 300"' in tag


class TestStyleBlock:
    @pytest.mark.parametrize("var", ["--_line", "--_header", "--_separator", "--_key-badge", "--_pk"])
    def test_defines_derived_variables(self, var):
        assert f"{var}:" in build_style_block("Inter")

    def test_key_badge_text_follows_the_accent_color(self):
        assert re.search(r"--_pk:\s+var\(--accent, var\(--fg\)\);", build_style_block("Inter"))

    def test_uses_requested_font(self):
        assert "font-family: 'Fira Sans'" in build_style_block("Fira Sans")
