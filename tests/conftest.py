# -*- coding: utf-8 -*-
"""
Shared test fixtures - Synthetic RGB images for filter tests.

Dependencies
------------
pytest

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import numpy as np
import pytest

from pixelfx.buffer import PixelBuffer


def buffer_from_rows(rows):
    """Build a PixelBuffer from nested ``[row][col] = (r, g, b)`` lists."""
    return PixelBuffer.from_array(np.array(rows, dtype=np.uint8))


@pytest.fixture
def invert_scenario():
    """2x2 image whose inverse is known exactly."""
    return buffer_from_rows([
        [(10, 20, 30), (250, 240, 230)],
        [(0, 0, 0), (255, 255, 255)],
    ])


@pytest.fixture
def gradient_image():
    """16x12 image with distinct smooth gradients per channel."""
    ys, xs = np.mgrid[0:12, 0:16]
    data = np.stack([xs * 15, ys * 20, (xs + ys) * 7], axis=-1)
    return PixelBuffer.from_array(data.astype(np.uint8))


@pytest.fixture
def noise_image():
    """Seeded 21x17 random image."""
    rng = np.random.default_rng(1234)
    return PixelBuffer.from_array(
        rng.integers(0, 256, size=(17, 21, 3), dtype=np.uint8)
    )


@pytest.fixture
def flat_image():
    """9x7 image filled with a single colour."""
    data = np.empty((7, 9, 3), dtype=np.uint8)
    data[...] = (120, 60, 30)
    return PixelBuffer.from_array(data)


@pytest.fixture
def progress_log():
    """List that records every reported percentage; call it as a callback."""
    class _Log(list):
        def __call__(self, percent):
            self.append(percent)
    return _Log()
