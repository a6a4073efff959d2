from __future__ import annotations

import logging

import numpy as np

from .config import DEFAULT_SHUFFLE
from .errors import ConfigurationError
from .rng import DeterministicRandom

logger = logging.getLogger(__name__)

SHUFFLE_MODES = ("legacy", "uniform")


def fast_floor(d: np.ndarray) -> np.ndarray:
    """Floor as truncation, stepped down for negative non-integers."""
    d = np.asarray(d, dtype=np.float64)
    t = np.trunc(d)
    return np.where((d < 0.0) & (d != t), t - 1.0, t)


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def clip01(t: np.ndarray) -> np.ndarray:
    return np.clip(t, 0.0, 1.0)


def _shuffle_legacy(table: list[int], rand: DeterministicRandom) -> None:
    # Biased on purpose: swaps with |r % 256| rather than sampling j <= i.
    for i in range(256):
        j = abs(rand.next_int(256))
        table[i], table[j] = table[j], table[i]


def _shuffle_uniform(table: list[int], rand: DeterministicRandom) -> None:
    for i in range(255, 0, -1):
        j = abs(rand.next_int()) % (i + 1)
        table[i], table[j] = table[j], table[i]


def make_permutation(seed: int, *, mode: str = DEFAULT_SHUFFLE) -> np.ndarray:
    """Shuffled 0..255 table doubled to 512 entries.

    ``legacy`` reproduces the historical biased swap bit for bit; ``uniform``
    is a plain Fisher-Yates shuffle over the same random stream.
    """

    mode = str(mode)
    if mode == "legacy":
        shuffle = _shuffle_legacy
    elif mode == "uniform":
        shuffle = _shuffle_uniform
    else:
        raise ConfigurationError(f"unknown shuffle mode: {mode}")

    rand = DeterministicRandom(int(seed))
    table = list(range(256))
    shuffle(table, rand)

    p = np.array(table, dtype=np.int32)
    perm = np.concatenate([p, p])
    perm.setflags(write=False)
    logger.debug("built %s permutation table for seed %d", mode, rand.seed)
    return perm


def grad3(
    h: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray
) -> np.ndarray:
    """Dot product with one of Perlin's 12 edge directions (16 cases)."""
    h = np.asarray(h) & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)
