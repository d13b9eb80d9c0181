"""
Unit tests for color space conversions.
"""

import itertools

import numpy as np
import pytest

from palcreator.exceptions import InvalidParameter
from palcreator.services.colors.conversion import (
    add_alpha, alpha_to_hex, hex_to_hsv, hex_to_rgb, hsv_to_hex, hsv_to_rgb, is_hex_color,
    rgb_to_hex, rgb_to_hsv, rgb_to_lab, split_alpha, strip_alpha, to_byte,
)


class TestRgbToHex:
    """Test RGB to hex conversion utility"""

    def test_rgb_to_hex_basic_colors(self):
        assert rgb_to_hex(np.array([255, 0, 0])) == "#FF0000"
        assert rgb_to_hex(np.array([0, 255, 0])) == "#00FF00"
        assert rgb_to_hex(np.array([0, 0, 255])) == "#0000FF"
        assert rgb_to_hex(np.array([0, 0, 0])) == "#000000"
        assert rgb_to_hex(np.array([255, 255, 255])) == "#FFFFFF"

    def test_rgb_to_hex_rounds_half_up_and_clips(self):
        assert rgb_to_hex((127.5, 0.49, 254.5)) == "#8000FF"
        assert rgb_to_hex((-12.0, 300.0, 31.2)) == "#00FF1F"

    def test_to_byte(self):
        assert to_byte(0.5) == 1
        assert to_byte(255.4) == 255
        assert to_byte(-3) == 0


class TestHexToRgb:
    """Test strict hex parsing"""

    def test_hex_to_rgb_accepts_either_case(self):
        assert hex_to_rgb("#1F4E79") == (31, 78, 121)
        assert hex_to_rgb("#d3b58f") == (211, 181, 143)

    @pytest.mark.parametrize("bad", ["1F4E79", "#1F4E7", "#1F4E799", "#ZZZZZZ", "#1F4E79FF", "", None, 123])
    def test_hex_to_rgb_rejects_malformed(self, bad):
        with pytest.raises(InvalidParameter):
            hex_to_rgb(bad)

    def test_is_hex_color(self):
        assert is_hex_color("#00ff00")
        assert not is_hex_color("#00ff0080")
        assert not is_hex_color(["#00ff00"])


class TestHsv:
    """Test RGB <-> HSV conversions"""

    def test_primary_colors(self):
        hsv = rgb_to_hsv(np.array([[255, 0, 0], [0, 255, 0], [0, 0, 255]]))
        np.testing.assert_allclose(hsv[:, 0], [0.0, 120.0, 240.0])
        np.testing.assert_allclose(hsv[:, 1], [1.0, 1.0, 1.0])
        np.testing.assert_allclose(hsv[:, 2], [1.0, 1.0, 1.0])

    def test_achromatic_colors_have_zero_hue_and_saturation(self):
        hsv = rgb_to_hsv(np.array([[0, 0, 0], [128, 128, 128], [255, 255, 255]]))
        np.testing.assert_allclose(hsv[:, 0], 0.0)
        np.testing.assert_allclose(hsv[:, 1], 0.0)
        np.testing.assert_allclose(hsv[:, 2], [0.0, 128 / 255, 1.0])

    def test_hue_wraps_below_360(self):
        h, s, v = hex_to_hsv("#FF0001")
        assert 359.0 < h < 360.0

    def test_round_trip_within_one_step(self):
        levels = list(range(0, 256, 15)) + [1, 254, 255]
        rgb = np.array(list(itertools.product(levels, repeat=3)), dtype=np.float64)
        back = hsv_to_rgb(rgb_to_hsv(rgb))
        assert np.max(np.abs(np.floor(back + 0.5) - rgb)) <= 1

    def test_hsv_to_hex(self):
        assert hsv_to_hex(0.0, 1.0, 1.0) == "#FF0000"
        assert hsv_to_hex(240.0, 1.0, 0.5) == "#000080"
        assert hsv_to_hex(*hex_to_hsv("#2D7560")) == "#2D7560"


class TestAlphaDigits:
    """Test alpha hex encoding and decoding"""

    def test_alpha_to_hex_bounds(self):
        assert alpha_to_hex(0.0) == "00"
        assert alpha_to_hex(1.0) == "FF"
        assert alpha_to_hex(0.5) == "80"
        assert alpha_to_hex(0.25) == "40"

    def test_add_alpha_uppercases(self):
        assert add_alpha("#ff0000", 0.5) == "#FF000080"

    def test_split_alpha(self):
        base, alpha = split_alpha("#00FF0040")
        assert base == "#00FF00"
        assert alpha == pytest.approx(64 / 255)

    def test_split_alpha_rejects_six_digits(self):
        with pytest.raises(InvalidParameter):
            split_alpha("#00FF00")

    def test_full_opacity_strips_back_to_original(self):
        palette = ["#1F4E79", "#D3B58F", "#2D7560"]
        with_alpha = [add_alpha(c, 1.0) for c in palette]
        assert all(c.endswith("FF") for c in with_alpha)
        assert strip_alpha(with_alpha) == palette


class TestLab:
    """Test sRGB -> Lab"""

    def test_white_and_black(self):
        lab = rgb_to_lab(np.array([[255, 255, 255], [0, 0, 0]]))
        np.testing.assert_allclose(lab[0], [100.0, 0.0, 0.0], atol=0.05)
        np.testing.assert_allclose(lab[1], [0.0, 0.0, 0.0], atol=1e-6)
