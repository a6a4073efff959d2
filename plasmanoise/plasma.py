"""Plasma fractal via random midpoint displacement.

A tile starts from four hashed corner values and is subdivided until every
cell is at most one pixel wide and tall. Each split places a midpoint and four
edge points at the average of their neighbours plus an offset that shrinks
with the cell size, clipped to [0, 1]. Leaf cells write the mean of their
corners into the field.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .config import (
    DEFAULT_PLASMA_SEED,
    DEFAULT_STRENGTH,
    DEFAULT_TILE_HEIGHT,
    DEFAULT_TILE_WIDTH,
    EDGE_DAMPING,
)
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_INT_MAX = 0x7FFFFFFF
_MASK32 = 0xFFFFFFFF


def plasma_hash(x: np.ndarray, y: np.ndarray, seed: int) -> np.ndarray:
    """Integer hash of pixel positions into [0, 1] (32-bit wraparound).

    Coordinates are truncated toward zero before hashing.
    """

    xi, yi = np.broadcast_arrays(
        np.trunc(np.asarray(x, dtype=np.float64)).astype(np.int64),
        np.trunc(np.asarray(y, dtype=np.float64)).astype(np.int64),
    )
    shape = xi.shape
    s = np.int64((int(seed) * 103) & _MASK32)
    k = ((xi.ravel() * 31 + yi.ravel() * 101 + s) & _MASK32).astype(np.uint32)
    with np.errstate(over="ignore"):
        k = (k << np.uint32(13)) ^ k
        k = k * (k * k * np.uint32(15731) + np.uint32(789221)) + np.uint32(1376312589)
    out = (k & np.uint32(_INT_MAX)).astype(np.float64) / _INT_MAX
    return out.reshape(shape)[()]


@dataclass(frozen=True)
class GridCell:
    x: float
    y: float
    width: float
    height: float
    c1: float
    c2: float
    c3: float
    c4: float


def _interleave(a: np.ndarray, b: np.ndarray, c: np.ndarray, d: np.ndarray) -> np.ndarray:
    """``[a0, b0, c0, d0, a1, b1, ...]``: each parent's four children in order."""
    return np.stack([a, b, c, d], axis=1).ravel()


def tile_origins(
    width: int, height: int, tile_width: int, tile_height: int
) -> list[tuple[int, int]]:
    """Top-left corners of the tiles covering a ``width`` x ``height`` field."""
    return [
        (ox, oy)
        for ox in range(0, int(width), int(tile_width))
        for oy in range(0, int(height), int(tile_height))
    ]


class PlasmaField:
    def __init__(
        self,
        *,
        seed: int = DEFAULT_PLASMA_SEED,
        tile_width: int = DEFAULT_TILE_WIDTH,
        tile_height: int = DEFAULT_TILE_HEIGHT,
        strength: float = DEFAULT_STRENGTH,
    ):
        tile_width = int(tile_width)
        tile_height = int(tile_height)
        if tile_width <= 0 or tile_height <= 0:
            raise ConfigurationError("tile_width and tile_height must be > 0")

        ratio = tile_width / tile_height
        if ratio < 1.0 or not math.log2(ratio).is_integer():
            logger.warning(
                "tile %dx%d: width is not height * 2**n, field will be degraded",
                tile_width,
                tile_height,
            )

        self.seed = int(seed)
        self.tile_width = tile_width
        self.tile_height = tile_height
        self.strength = float(strength)

    def random(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return plasma_hash(x, y, self.seed)

    def displace(self, size: float, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        scale = (size / float(self.tile_width + self.tile_height)) * self.strength
        return (self.random(x, y) - 0.5) * scale

    def corners(self, origin_x: int, origin_y: int) -> tuple[float, float, float, float]:
        x1 = origin_x + self.tile_width
        y1 = origin_y + self.tile_height
        return (
            float(self.random(origin_x, origin_y)),
            float(self.random(x1, origin_y)),
            float(self.random(x1, y1)),
            float(self.random(origin_x, y1)),
        )

    def subdivide(self, field: np.ndarray, cell: GridCell) -> int:
        """Fill ``field`` from ``cell``; returns the number of in-bounds leaf writes.

        Every cell on a level has the same size, so a whole level is split at
        once. Children are kept interleaved per parent (top-left, top-right,
        bottom-right, bottom-left), which leaves the final level in depth-first
        order. Cells thinner than a pixel can land on the same pixel; the last
        one in that order wins.
        """

        rows, cols = field.shape
        w = float(cell.width)
        h = float(cell.height)
        xs = np.array([cell.x], dtype=np.float64)
        ys = np.array([cell.y], dtype=np.float64)
        c1 = np.array([cell.c1], dtype=np.float64)
        c2 = np.array([cell.c2], dtype=np.float64)
        c3 = np.array([cell.c3], dtype=np.float64)
        c4 = np.array([cell.c4], dtype=np.float64)

        while w > 1.0 or h > 1.0:
            nw = w / 2.0
            nh = h / 2.0
            size = nw + nh

            middle = (c1 + c2 + c3 + c4) / 4.0 + self.displace(size, xs + nw, ys + nw)
            edge1 = (c1 + c2) / 2.0 + self.displace(size, xs + nw, ys) / EDGE_DAMPING
            edge2 = (c2 + c3) / 2.0 + self.displace(size, xs + w, ys + nh) / EDGE_DAMPING
            edge3 = (c3 + c4) / 2.0 + self.displace(size, xs + nw, ys + h) / EDGE_DAMPING
            edge4 = (c4 + c1) / 2.0 + self.displace(size, xs, ys + nh) / EDGE_DAMPING

            middle = np.clip(middle, 0.0, 1.0)
            edge1 = np.clip(edge1, 0.0, 1.0)
            edge2 = np.clip(edge2, 0.0, 1.0)
            edge3 = np.clip(edge3, 0.0, 1.0)
            edge4 = np.clip(edge4, 0.0, 1.0)

            xs = _interleave(xs, xs + nw, xs + nw, xs)
            ys = _interleave(ys, ys, ys + nh, ys + nh)
            c1, c2, c3, c4 = (
                _interleave(c1, edge1, middle, edge4),
                _interleave(edge1, c2, edge2, middle),
                _interleave(middle, edge2, c3, edge3),
                _interleave(edge4, middle, edge3, c4),
            )
            w = nw
            h = nh

        values = (c1 + c2 + c3 + c4) / 4.0
        px = np.floor(xs).astype(np.int64)
        py = np.floor(ys).astype(np.int64)
        # Tiles may overhang the field; those pixels are dropped.
        inside = (px >= 0) & (px < cols) & (py >= 0) & (py < rows)
        px = px[inside]
        py = py[inside]
        values = values[inside]

        # Keep the last write per pixel: first occurrence in reversed order.
        flat = (py * cols + px)[::-1]
        _, first = np.unique(flat, return_index=True)
        keep = flat.size - 1 - first
        field[py[keep], px[keep]] = values[keep]
        return int(px.size)

    def fill_tile(self, field: np.ndarray, origin_x: int, origin_y: int) -> np.ndarray:
        if np.ndim(field) != 2:
            raise ConfigurationError("field must be a 2D array")

        c1, c2, c3, c4 = self.corners(int(origin_x), int(origin_y))
        cell = GridCell(
            float(origin_x),
            float(origin_y),
            float(self.tile_width),
            float(self.tile_height),
            c1,
            c2,
            c3,
            c4,
        )
        written = self.subdivide(field, cell)
        logger.debug("plasma tile at (%d, %d): %d writes", origin_x, origin_y, written)
        return field

    def fill_field(self, field: np.ndarray) -> np.ndarray:
        if np.ndim(field) != 2:
            raise ConfigurationError("field must be a 2D array")

        rows, cols = field.shape
        origins = tile_origins(cols, rows, self.tile_width, self.tile_height)
        for ox, oy in origins:
            self.fill_tile(field, ox, oy)
        logger.debug("plasma field %dx%d filled from %d tiles", cols, rows, len(origins))
        return field
