"""
Tests the parameter clamps
"""

import pytest

from rasterfx import InvalidAngle, InvalidDirection, params


class TestClamps:
    """Total clamps never fail for numeric input."""

    def test_contrast(self):
        assert params.contrast(-500) == -100
        assert params.contrast(500) == 100
        assert params.contrast(42) == 42

    def test_smooth(self):
        assert params.smooth(0) == 1
        assert params.smooth(5000) == 2048
        assert params.smooth(7) == 7

    def test_brightness(self):
        assert params.brightness(-300) == -255
        assert params.brightness(300) == 255
        assert params.brightness("12") == 12

    def test_percent(self):
        assert params.percent(-5) == 0
        assert params.percent(150) == 100
        assert params.percent(33.9) == 33

    def test_blur(self):
        assert params.blur(0) == 1
        assert params.blur(-4) == 1
        assert params.blur(25) == 25
        assert params.blur("3") == 3

    def test_color_level(self):
        assert params.color_level(300) == 255
        assert params.color_level(-300) == -255

    def test_pixelate(self):
        assert params.pixelate(-1) == 0
        assert params.pixelate(12) == 12

    def test_not_a_number(self):
        with pytest.raises(ValueError):
            params.contrast("lots")

    def test_infinity_clamps_to_bounds(self):
        assert params.contrast(float("inf")) == 100
        assert params.contrast(float("-inf")) == -100
        assert params.smooth(float("inf")) == 2048
        assert params.percent(float("-inf")) == 0
        assert params.blur(float("-inf")) == 1
        assert params.opacity(float("inf")) == 100
        assert params.opacity(float("-inf")) == 0

    @pytest.mark.parametrize("clamp", [params.blur, params.pixelate])
    def test_unbounded_rejects_infinity(self, clamp):
        with pytest.raises(ValueError):
            clamp(float("inf"))

    @pytest.mark.parametrize("clamp", [params.contrast, params.percent, params.opacity, params.opacity_percent])
    def test_nan_is_rejected(self, clamp):
        with pytest.raises(ValueError):
            clamp(float("nan"))

    def test_opacity_percent_keeps_fraction(self):
        assert params.opacity_percent(50.5) == 50.5
        assert params.opacity_percent(-1.5) == 0.0
        assert params.opacity_percent(120) == 100.0


class TestOpacity:
    """Opacity normalization to 0-100."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, 0), (0.5, 50), (1, 100), (75, 75), (250, 100), (-3, 0), (0.255, 26)],
    )
    def test_opacity(self, value, expected):
        assert params.opacity(value) == expected

    @pytest.mark.parametrize("value,expected", [(100, 0), (0, 127), (50, 64), (1.0, 0), (0.25, 95)])
    def test_opacity_to_alpha(self, value, expected):
        assert params.opacity_to_alpha(value) == expected


class TestRounding:
    """Round half away from zero."""

    def test_round_half_up(self):
        assert params.round_half_up(2.5) == 3
        assert params.round_half_up(2.4999) == 2
        assert params.round_half_up(-2.5) == -3
        assert params.round_half_up(63.5) == 64


class TestRotate:
    """Angles are validated, not clamped."""

    @pytest.mark.parametrize("angle", [360, -360, 720, float("nan"), "abc", None])
    def test_rejects(self, angle):
        with pytest.raises(InvalidAngle):
            params.rotate(angle)

    def test_accepts(self):
        assert params.rotate(45) == 45.0
        assert params.rotate(-359.9) == -359.9
        assert params.rotate("90") == 90.0


class TestDirection:
    """Flip directions."""

    @pytest.mark.parametrize("value,expected", [("x", "x"), ("Y", "y"), ("xY", "xy"), (" YX ", "yx")])
    def test_accepts(self, value, expected):
        assert params.direction(value) == expected

    @pytest.mark.parametrize("value", ["z", "", "xx", None, 1])
    def test_rejects(self, value):
        with pytest.raises(InvalidDirection):
            params.direction(value)
