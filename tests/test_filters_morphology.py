# -*- coding: utf-8 -*-
"""
Morphology Filter Tests - Red-ranked Dilation, Erosion, Opening, and
Closing.

Tests interior-only writes with a black border band, whole-pixel
copying, row-major tie-breaking, opening/closing monotonicity on the red
channel, progress splitting between stages, and cancellation.

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

from pixelfx.buffer import BLACK, Color, PixelBuffer
from pixelfx.exceptions import InvalidDimensionsError
from pixelfx.processing.filters import Closing, Dilation, Erosion, Opening
from pixelfx.progress import CANCELLED

BRIGHT = (200, 10, 20)


def single_pixel(size, background, value):
    data = np.empty((size, size, 3), dtype=np.uint8)
    data[...] = background
    data[size // 2, size // 2] = value
    return PixelBuffer.from_array(data)


def deep_interior(image, margin=4):
    return (slice(margin, image.height - margin),
            slice(margin, image.width - margin))


class TestDilationErosion:
    """Tests for the single-stage filters."""

    def test_dilation_spreads_bright_pixel(self):
        src = single_pixel(13, (0, 0, 0), BRIGHT)
        out = Dilation().process(src)
        for x, y in [(4, 4), (8, 8), (6, 6), (4, 8)]:
            assert out.get_pixel(x, y) == Color(*BRIGHT)
        for x, y in [(3, 6), (9, 6), (6, 3), (6, 9)]:
            assert out.get_pixel(x, y) == BLACK

    def test_erosion_removes_bright_pixel(self):
        src = single_pixel(13, (0, 0, 0), BRIGHT)
        assert not Erosion().process(src).data.any()

    def test_erosion_spreads_dark_pixel(self):
        src = single_pixel(13, (255, 255, 255), (5, 100, 150))
        out = Erosion().process(src)
        assert out.get_pixel(4, 4) == Color(5, 100, 150)
        assert out.get_pixel(3, 3) == Color(255, 255, 255)

    def test_border_band_is_black(self):
        src = single_pixel(13, (255, 255, 255), (255, 255, 255))
        out = Dilation().process(src).data
        assert not out[:2].any()
        assert not out[-2:].any()
        assert not out[:, :2].any()
        assert not out[:, -2:].any()
        assert (out[2:-2, 2:-2] == 255).all()

    def test_copies_whole_pixel(self):
        """All three channels come from the red-ranked neighbour."""
        data = np.zeros((5, 5, 3), dtype=np.uint8)
        data[..., 1] = 250
        data[0, 4] = (90, 1, 2)
        out = Dilation().process(PixelBuffer.from_array(data))
        assert out.get_pixel(2, 2) == Color(90, 1, 2)

    def test_ties_go_to_first_in_row_major_order(self):
        data = np.zeros((5, 5, 3), dtype=np.uint8)
        data[..., 0] = 100
        data[..., 1] = np.arange(25, dtype=np.uint8).reshape(5, 5) + 1
        src = PixelBuffer.from_array(data)
        assert Dilation().process(src).get_pixel(2, 2) == Color(100, 1, 0)
        assert Erosion().process(src).get_pixel(2, 2) == Color(100, 1, 0)

    def test_image_smaller_than_element(self):
        src = single_pixel(3, (255, 255, 255), BRIGHT)
        assert not Dilation().process(src).data.any()
        assert Dilation().pixel_at(src, 1, 1) == BLACK

    def test_size_one_is_identity(self, noise_image):
        assert Dilation(size=1).process(noise_image) == noise_image
        assert Erosion(size=1).process(noise_image) == noise_image

    def test_size_three(self):
        src = single_pixel(7, (0, 0, 0), BRIGHT)
        out = Dilation(size=3).process(src)
        assert out.get_pixel(2, 2) == Color(*BRIGHT)
        assert out.get_pixel(1, 1) == BLACK

    def test_even_size_rejected(self):
        with pytest.raises(InvalidDimensionsError):
            Erosion(size=4)

    def test_dilation_never_below_source(self, noise_image):
        out = Dilation().process(noise_image).data[..., 0]
        rows, cols = deep_interior(noise_image, 2)
        src = noise_image.data[..., 0]
        assert (out[rows, cols] >= src[rows, cols]).all()


class TestComposite:
    """Tests for Opening and Closing."""

    def test_opening_removes_bright_pixel(self):
        src = single_pixel(13, (0, 0, 0), BRIGHT)
        assert not Opening().process(src).data.any()

    def test_closing_fills_dark_pixel(self):
        src = single_pixel(13, (255, 255, 255), (5, 5, 5))
        out = Closing().process(src).data
        rows, cols = deep_interior(src)
        assert (out[rows, cols] == 255).all()

    def test_opening_never_increases_red(self, noise_image):
        out = Opening().process(noise_image).data[..., 0]
        rows, cols = deep_interior(noise_image)
        src = noise_image.data[..., 0]
        assert (out[rows, cols] <= src[rows, cols]).all()

    def test_closing_never_decreases_red(self, noise_image):
        out = Closing().process(noise_image).data[..., 0]
        rows, cols = deep_interior(noise_image)
        src = noise_image.data[..., 0]
        assert (out[rows, cols] >= src[rows, cols]).all()

    def test_opening_is_erosion_then_dilation(self, noise_image):
        staged = Dilation().process(Erosion().process(noise_image))
        assert Opening().process(noise_image) == staged

    def test_closing_is_dilation_then_erosion(self, noise_image):
        staged = Erosion().process(Dilation().process(noise_image))
        assert Closing().process(noise_image) == staged

    def test_stages(self):
        first, second = Opening(size=3).stages
        assert isinstance(first, Erosion) and first.size == 3
        assert isinstance(second, Dilation) and second.size == 3


class TestPixelAtAgreement:
    """pixel_at matches the row-driven pass."""

    @pytest.mark.parametrize('filter_', [
        Dilation(), Erosion(), Opening(size=3), Closing(size=3),
    ], ids=repr)
    def test_matches(self, filter_):
        rng = np.random.default_rng(7)
        src = PixelBuffer.from_array(
            rng.integers(0, 256, size=(11, 12, 3), dtype=np.uint8)
        )
        out = filter_.process(src)
        for y in range(src.height):
            for x in range(src.width):
                assert out.get_pixel(x, y) == filter_.pixel_at(src, x, y)


class TestProgressAndCancellation:
    """Row checkpoints and stage progress splitting."""

    def test_one_report_per_interior_row(self, noise_image, progress_log):
        Dilation().process(noise_image, progress_callback=progress_log)
        assert len(progress_log) == noise_image.height - 4

    def test_composite_progress_split(self, noise_image, progress_log):
        Opening().process(noise_image, progress_callback=progress_log)
        assert len(progress_log) == 2 * (noise_image.height - 4)
        assert progress_log == sorted(progress_log)
        assert max(progress_log[:noise_image.height - 4]) <= 50
        assert min(progress_log[noise_image.height - 4:]) >= 50

    def test_cancel_before_first_row(self, noise_image):
        assert Erosion().process(noise_image, lambda: True) is CANCELLED

    def test_cancel_in_second_stage(self, noise_image):
        polls = []

        def cancel():
            polls.append(1)
            return len(polls) > noise_image.height - 4

        assert Closing().process(noise_image, cancel) is CANCELLED
        assert len(polls) == noise_image.height - 3
