"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from findcomp.models import Raster


def _raster(rows) -> Raster:
    samples = np.asarray(rows, dtype=np.uint8)
    height, width = samples.shape
    return Raster(width=width, height=height, max_sample=255, samples=samples)


def _pnm_bytes(magic: bytes, width: int, height: int, payload: bytes, comment: bytes = b"") -> bytes:
    header = magic + b"\n" + comment + b"%d %d\n255\n" % (width, height)
    return header + payload


@pytest.fixture
def make_raster():
    """Build a Raster from a nested list (rows of samples)."""
    return _raster


@pytest.fixture
def block_raster() -> Raster:
    """5x5, all zero except a 2x2 block at (1,1)-(2,2)."""
    rows = np.zeros((5, 5), dtype=np.uint8)
    rows[1:3, 1:3] = 255
    return _raster(rows)


@pytest.fixture
def two_blobs_raster() -> Raster:
    """A 3-pixel horizontal bar and a 6-pixel 2x3 block, separated by background."""
    rows = np.zeros((6, 8), dtype=np.uint8)
    rows[0, 0:3] = 200
    rows[3:5, 4:7] = 150
    return _raster(rows)


@pytest.fixture
def pgm_file(tmp_path):
    """Write a binary P5 file from rows and return its path."""
    def _write(rows, name: str = "input.pgm", comment: bytes = b"") -> str:
        samples = np.asarray(rows, dtype=np.uint8)
        height, width = samples.shape
        path = tmp_path / name
        path.write_bytes(_pnm_bytes(b"P5", width, height, samples.tobytes(), comment))
        return str(path)
    return _write


@pytest.fixture
def ppm_file(tmp_path):
    """Write a binary P6 file from an (H, W, 3) RGB array and return its path."""
    def _write(rgb, name: str = "input.ppm") -> str:
        samples = np.asarray(rgb, dtype=np.uint8)
        height, width = samples.shape[:2]
        path = tmp_path / name
        path.write_bytes(_pnm_bytes(b"P6", width, height, samples.tobytes()))
        return str(path)
    return _write
