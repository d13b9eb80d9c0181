"""
Unit tests for alpha compositing.
"""

import warnings

import pytest

from palcreator.exceptions import InvalidParameter, LengthMismatchWarning
from palcreator.services.colors.alpha import apply_alpha, as_alpha_list
from palcreator.services.colors.conversion import strip_alpha


class TestApplyAlpha:
    """Test #RRGGBBAA generation"""

    def test_zip_to_shorter_with_warning(self):
        with pytest.warns(LengthMismatchWarning, match="differ"):
            result = apply_alpha(["#FF0000", "#00FF00", "#0000FF"], [0.5, 0.25])
        assert result == ["#FF000080", "#00FF0040"]

    def test_longer_alpha_is_truncated(self):
        with pytest.warns(LengthMismatchWarning):
            result = apply_alpha(["#FF0000", "#00FF00"], [0.0, 1.0, 0.5])
        assert result == ["#FF000000", "#00FF00FF"]

    def test_single_alpha_applies_to_all(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = apply_alpha(["#FF0000", "#00FF00", "#0000FF"], 0.5)
        assert result == ["#FF000080", "#00FF0080", "#0000FF80"]

    def test_single_color_repeats_for_each_alpha(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = apply_alpha("#1F4E79", [0.2, 0.4, 1.0])
        assert result == ["#1F4E7933", "#1F4E7966", "#1F4E79FF"]

    def test_equal_lengths(self):
        result = apply_alpha(["#ff0000", "#00ff00"], (0.0, 1.0))
        assert result == ["#FF000000", "#00FF00FF"]

    def test_opaque_round_trip(self):
        palette = ["#1F4E79", "#D3B58F"]
        assert strip_alpha(apply_alpha(palette, 1.0)) == palette

    def test_malformed_hex_reported(self):
        with pytest.raises(InvalidParameter) as excinfo:
            apply_alpha(["#FF0000", "#ZZZZZZ", "00FF00"], 0.5)
        assert "#ZZZZZZ" in str(excinfo.value)
        assert "00FF00" in str(excinfo.value)
        assert excinfo.value.field == "pal"

    @pytest.mark.parametrize("alpha", [1.5, -0.1, [0.5, 2.0], float("nan")])
    def test_alpha_out_of_range(self, alpha):
        with pytest.raises(InvalidParameter, match="alpha"):
            apply_alpha(["#FF0000", "#00FF00"], alpha)

    def test_empty_palette(self):
        with pytest.raises(InvalidParameter):
            apply_alpha([], 0.5)


class TestAsAlphaList:
    """Test alpha normalization"""

    def test_scalar_and_sequence(self):
        assert as_alpha_list(1) == [1.0]
        assert as_alpha_list((0.1, 0.2)) == [0.1, 0.2]

    @pytest.mark.parametrize("alpha", [True, "0.5", [], [0.5, "x"], None])
    def test_rejects_non_numeric(self, alpha):
        with pytest.raises(InvalidParameter):
            as_alpha_list(alpha)
