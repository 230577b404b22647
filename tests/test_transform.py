"""
Tests flip and rotation.

Pixel positions are checked explicitly, the rotation direction is clockwise
for positive angles.
"""

import numpy as np
import pytest

from rasterfx import Bitmap, InvalidAngle, InvalidColorFormat, InvalidDirection, flip, rotate
from rasterfx.config import settings


@pytest.fixture
def marked_bitmap():
    """A 3x2 opaque black bitmap with a red top-left and a half transparent green top-right pixel."""
    bitmap = Bitmap.create(3, 2)
    bitmap.set_pixel(0, 0, (255, 0, 0, 0))
    bitmap.set_pixel(2, 0, (0, 255, 0, 64))
    return bitmap


class TestFlip:
    """Flip along x, y and both axes."""

    @pytest.mark.parametrize("size", [(1, 1), (3, 5), (8, 2), (1, 7)])
    def test_double_flip_y_is_identity(self, make_pixels, size):
        bitmap = Bitmap(make_pixels(*size, seed=3))
        result = flip(flip(bitmap, "y"), "y")
        assert np.array_equal(result.pixels, bitmap.pixels)

    def test_xy_equals_both_orders(self, random_bitmap):
        both = flip(random_bitmap, "xy")
        assert np.array_equal(both.pixels, flip(flip(random_bitmap, "x"), "y").pixels)
        assert np.array_equal(both.pixels, flip(flip(random_bitmap, "y"), "x").pixels)
        assert np.array_equal(both.pixels, flip(random_bitmap, "YX").pixels)

    def test_flip_x_pixel_position(self, marked_bitmap):
        result = flip(marked_bitmap, "x")
        assert result.get_pixel(2, 0) == (255, 0, 0, 0)
        assert result.get_pixel(0, 0) == (0, 255, 0, 64)
        assert result.size == (3, 2)

    def test_flip_y_pixel_position(self, marked_bitmap):
        result = flip(marked_bitmap, "y")
        assert result.get_pixel(0, 1) == (255, 0, 0, 0)
        assert result.get_pixel(2, 1) == (0, 255, 0, 64)
        assert result.get_pixel(0, 0) == (0, 0, 0, 0)

    def test_returns_new_bitmap(self, random_bitmap):
        before = random_bitmap.pixels.copy()
        result = flip(random_bitmap, "x")
        assert result is not random_bitmap
        assert result.save_alpha
        assert np.array_equal(random_bitmap.pixels, before)

    def test_invalid_direction(self, random_bitmap):
        with pytest.raises(InvalidDirection):
            flip(random_bitmap, "z")


class TestRotate:
    """Rotation with background fill."""

    @pytest.mark.parametrize("angle", [360, -360, 400])
    def test_invalid_angle(self, marked_bitmap, angle):
        with pytest.raises(InvalidAngle):
            rotate(marked_bitmap, angle, "#000000")

    def test_invalid_color(self, marked_bitmap):
        with pytest.raises(InvalidColorFormat):
            rotate(marked_bitmap, 10, "#nothex")

    def test_rotate_90_clockwise(self, marked_bitmap):
        result = rotate(marked_bitmap, 90)
        assert result.size == (2, 3)
        # (x, y) -> (H - 1 - y, x)
        assert result.get_pixel(1, 0) == (255, 0, 0, 0)
        assert result.get_pixel(1, 2) == (0, 255, 0, 64)
        assert result.save_alpha

    def test_rotate_minus_90(self, marked_bitmap):
        result = rotate(marked_bitmap, -90)
        assert result.size == (2, 3)
        # (x, y) -> (y, W - 1 - x)
        assert result.get_pixel(0, 2) == (255, 0, 0, 0)
        assert result.get_pixel(0, 0) == (0, 255, 0, 64)

    def test_rotate_180(self, marked_bitmap):
        result = rotate(marked_bitmap, 180)
        assert result.size == (3, 2)
        assert result.get_pixel(2, 1) == (255, 0, 0, 0)
        assert result.get_pixel(0, 1) == (0, 255, 0, 64)

    def test_rotate_zero_copies(self, random_bitmap):
        result = rotate(random_bitmap, 0)
        assert result is not random_bitmap
        assert np.array_equal(result.pixels, random_bitmap.pixels)

    def test_four_quarter_turns(self, random_bitmap):
        result = random_bitmap
        for _ in range(4):
            result = rotate(result, 90)
        assert np.array_equal(result.pixels, random_bitmap.pixels)

    def test_arbitrary_angle_grows_canvas(self):
        bitmap = Bitmap.create(20, 20, "#ffffff")
        result = rotate(bitmap, 45, "#ff0000")
        assert result.width > 20 and result.height > 20
        assert result.get_pixel(0, 0) == (255, 0, 0, 0)
        center = result.get_pixel(result.width // 2, result.height // 2)
        # Bilinear resampling may be off by a rounding step
        assert min(center[:3]) >= 250 and center[3] <= 1

    def test_transparent_background(self):
        bitmap = Bitmap.create(20, 10, "#ffffff")
        result = rotate(bitmap, 30, [0, 0, 0, 127])
        assert result.get_pixel(0, 0)[3] == 127
        assert result.get_pixel(result.width - 1, result.height - 1)[3] == 127

    @pytest.mark.parametrize("resample", ["nearest", "bilinear", "bicubic"])
    @pytest.mark.parametrize(
        "bg_color",
        [(100, 100, 100, 64), (255, 0, 0, 0), (0, 128, 255, 100), (10, 20, 30, 127), (200, 50, 25, 1)],
    )
    def test_background_color_is_exact(self, monkeypatch, resample, bg_color):
        monkeypatch.setattr(settings, "ROTATE_RESAMPLE", resample)
        bitmap = Bitmap.create(20, 10, "#ffffff")
        result = rotate(bitmap, 30, bg_color)
        right, bottom = result.width - 1, result.height - 1
        for x, y in [(0, 0), (right, 0), (0, bottom), (right, bottom)]:
            assert result.get_pixel(x, y) == bg_color

    def test_translucent_background_keeps_content(self):
        bitmap = Bitmap.create(20, 10, "#ffffff")
        result = rotate(bitmap, 30, (100, 100, 100, 64))
        center = result.get_pixel(result.width // 2, result.height // 2)
        assert min(center[:3]) >= 250 and center[3] <= 1
