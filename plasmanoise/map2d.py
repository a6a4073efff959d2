from __future__ import annotations

import logging

import numpy as np

from .config import (
    DEFAULT_PLASMA_SEED,
    DEFAULT_SAMPLE_STEP,
    DEFAULT_STRENGTH,
    DEFAULT_TILE_HEIGHT,
    DEFAULT_TILE_WIDTH,
)
from .core import clip01
from .errors import ConfigurationError
from .fbm import NoiseGenerator
from .plasma import PlasmaField

logger = logging.getLogger(__name__)


def _check_size(width: int, height: int) -> tuple[int, int]:
    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ConfigurationError("width and height must be > 0")
    return width, height


def fbm_map_2d(
    generator: NoiseGenerator,
    *,
    width: int,
    height: int,
    step: float = DEFAULT_SAMPLE_STEP,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    plane: float = 0.0,
    clip: bool = True,
) -> np.ndarray:
    """Sample a horizontal slice of 3D fBm into a ``(height, width)`` map.

    Pixel ``(i, j)`` reads ``fbm3d(x, plane, y)`` at ``x = offset_x + j * step``
    and ``y = offset_y + i * step``; values are shifted from [-1, 1] to [0, 1].
    Raw fBm can leave that range, so ``clip`` clamps by default.
    """

    width, height = _check_size(width, height)
    step = float(step)

    xs = float(offset_x) + np.arange(width, dtype=np.float64) * step
    ys = float(offset_y) + np.arange(height, dtype=np.float64) * step
    xg, yg = np.meshgrid(xs, ys)

    z = (generator.fbm3d(xg, np.full_like(xg, float(plane)), yg) + 1.0) / 2.0
    logger.debug(
        "fbm map %dx%d seed=%d octaves=%d", width, height, generator.seed, generator.octaves
    )
    if not bool(clip):
        return z
    return clip01(z)


def plasma_map_2d(
    *,
    width: int,
    height: int,
    seed: int = DEFAULT_PLASMA_SEED,
    tile_width: int = DEFAULT_TILE_WIDTH,
    tile_height: int = DEFAULT_TILE_HEIGHT,
    strength: float = DEFAULT_STRENGTH,
    dtype: np.dtype | None = None,
) -> np.ndarray:
    """Fill a fresh ``(height, width)`` map with tiled plasma."""

    width, height = _check_size(width, height)
    plasma = PlasmaField(
        seed=int(seed),
        tile_width=int(tile_width),
        tile_height=int(tile_height),
        strength=float(strength),
    )
    z = plasma.fill_field(np.zeros((height, width), dtype=np.float64))
    if dtype is not None:
        z = np.asarray(z, dtype=dtype)
    return z
