"""
Pytest fixtures for rasterfx tests
"""

import numpy as np
import pytest

from rasterfx import Bitmap
from rasterfx.filters import use_filter_applier


def random_pixels(width: int, height: int, seed: int = 0, opaque: bool = False) -> np.ndarray:
    """
    Creates reproducible random pixels with a valid alpha channel.

    :param width: The width in pixels
    :param height: The height in pixels
    :param seed: The random seed
    :param opaque: If set all alpha values are 0 (opaque)
    :return: uint8 array (height, width, 4)
    """
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, (height, width, 4), dtype=np.uint8)
    pixels[:, :, 3] = 0 if opaque else pixels[:, :, 3] % 128
    return pixels


class RecordingApplier:
    """Filter applier recording its calls instead of touching pixels."""

    def __init__(self):
        self.calls = []

    def __call__(self, bitmap, kind, *params):
        self.calls.append((bitmap, kind, params))

    @property
    def kinds(self):
        return [kind for _, kind, _ in self.calls]


@pytest.fixture
def recorder():
    """Installs a recording filter applier for the duration of a test."""
    applier = RecordingApplier()
    with use_filter_applier(applier):
        yield applier


@pytest.fixture
def random_bitmap() -> Bitmap:
    """A 7x5 bitmap with random colors and alpha values."""
    return Bitmap(random_pixels(7, 5, seed=1))


@pytest.fixture
def opaque_bitmap() -> Bitmap:
    """A 6x4 opaque bitmap with random colors."""
    return Bitmap(random_pixels(6, 4, seed=2, opaque=True))


@pytest.fixture
def make_pixels():
    """Factory fixture for :func:`random_pixels`."""
    return random_pixels
