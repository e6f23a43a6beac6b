"""Tests for the Raster and Region data objects."""

from __future__ import annotations

import numpy as np
import pytest

from findcomp.models import Raster, Region


class TestRegion:
    def test_empty_region(self):
        region = Region(id=3)
        assert region.id == 3
        assert region.size == 0
        assert region.pixels == []
        assert region.bounding_box is None

    def test_add_pixel_updates_bounding_box(self):
        region = Region(id=0)
        region.add_pixel(4, 2)
        assert region.bounding_box == (4, 2, 4, 2)
        region.add_pixel(1, 5)
        region.add_pixel(6, 0)
        assert region.bounding_box == (1, 0, 6, 5)
        assert region.size == 3
        assert region.pixels == [(4, 2), (1, 5), (6, 0)]

    def test_from_pixels_folds_bounding_box(self):
        region = Region.from_pixels(7, [(2, 3), (0, 1), (5, 4)])
        assert region.id == 7
        assert region.size == 3
        assert (region.x_min, region.y_min, region.x_max, region.y_max) == (0, 1, 5, 4)

    def test_size_follows_pixels(self):
        region = Region.from_pixels(0, [(0, 0)])
        region.add_pixel(0, 1)
        assert region.size == len(region.pixels) == 2

    def test_sealed_region_rejects_pixels(self):
        region = Region.from_pixels(0, [(1, 1)]).seal()
        with pytest.raises(ValueError):
            region.add_pixel(2, 2)
        assert region.size == 1
        assert region.bounding_box == (1, 1, 1, 1)

    def test_sealed_region_is_read_only(self):
        region = Region.from_pixels(2, [(0, 0), (1, 0)]).seal()
        assert region.pixels == ((0, 0), (1, 0))
        with pytest.raises(AttributeError):
            region.pixels.append((5, 5))
        with pytest.raises(ValueError):
            region.x_max = 9
        with pytest.raises(ValueError):
            region.id = 3
        assert region.bounding_box == (0, 0, 1, 0)


class TestRaster:
    def test_valid_raster(self, make_raster):
        raster = make_raster([[0, 1, 2], [3, 4, 5]])
        assert raster.width == 3
        assert raster.height == 2
        assert raster.is_valid()
        assert raster.samples[1, 2] == 5

    def test_samples_are_read_only(self, make_raster):
        raster = make_raster([[0, 1], [2, 3]])
        with pytest.raises(ValueError):
            raster.samples[0, 0] = 9

    def test_source_array_is_copied(self):
        source = np.zeros((2, 2), dtype=np.uint8)
        raster = Raster(width=2, height=2, max_sample=255, samples=source)
        source[0, 0] = 255
        assert raster.samples[0, 0] == 0

    def test_empty_raster_is_not_valid(self):
        raster = Raster.empty()
        assert raster.pixel_count == 0
        assert not raster.is_valid()

    def test_wrong_max_sample_is_not_valid(self):
        raster = Raster(width=2, height=1, max_sample=65535, samples=np.zeros((1, 2)))
        assert not raster.is_valid()

    def test_mismatched_sample_count_is_not_valid(self):
        raster = Raster(width=3, height=3, max_sample=255, samples=np.zeros((2, 2)))
        assert not raster.is_valid()
