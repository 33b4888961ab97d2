"""Tests for oiltype.ui.colors – color blending and clock color."""

from __future__ import annotations

from oiltype.ui.colors import CLOCK_WARNING_SECONDS, GameColors, blend_hex, clock_color


# ===========================================================================
# GameColors – constants exist
# ===========================================================================

class TestGameColors:
    def test_bg_main_is_hex(self):
        assert GameColors.BG_MAIN.startswith("#")
        assert len(GameColors.BG_MAIN) == 7

    def test_danger_is_hex(self):
        assert GameColors.DANGER.startswith("#")

    def test_card_border_is_rgba(self):
        assert GameColors.CARD_BORDER.startswith("rgba(")


# ===========================================================================
# blend_hex
# ===========================================================================

class TestBlendHex:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_midpoint(self):
        result = blend_hex("#000000", "#FFFFFF", 0.5)
        assert 126 <= int(result[1:3], 16) <= 128

    def test_t_clamped(self):
        assert blend_hex("#000000", "#FFFFFF", 5.0) == "#FFFFFF"
        assert blend_hex("#000000", "#FFFFFF", -1.0) == "#000000"

    def test_invalid_input_returns_a(self):
        assert blend_hex("red", "#FFFFFF", 0.5) == "red"
        assert blend_hex("#GGGGGG", "#FFFFFF", 0.5) == "#GGGGGG"


# ===========================================================================
# clock_color
# ===========================================================================

class TestClockColor:
    def test_plenty_of_time_is_white(self):
        assert clock_color(60.0) == "#FFFFFF"

    def test_at_threshold_is_white(self):
        assert clock_color(CLOCK_WARNING_SECONDS) == "#FFFFFF"

    def test_zero_is_danger(self):
        assert clock_color(0.0) == GameColors.DANGER.upper()

    def test_gets_redder(self):
        green_high = int(clock_color(8.0)[3:5], 16)
        green_low = int(clock_color(2.0)[3:5], 16)
        assert green_low < green_high
