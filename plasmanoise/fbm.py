from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

import numpy as np

from .config import (
    DEFAULT_LACUNARITY,
    DEFAULT_OCTAVES,
    DEFAULT_PERSISTENCE,
    DEFAULT_SEED,
    DEFAULT_SHUFFLE,
)
from .noise_2d import Noise2D, Perlin2D
from .noise_3d import Perlin3D


class Noise3D(Protocol):
    def noise(
        self, x: np.ndarray, y: np.ndarray, z: np.ndarray
    ) -> np.ndarray:  # pragma: no cover
        ...


@dataclass(frozen=True)
class NoiseConfiguration:
    octaves: int = DEFAULT_OCTAVES
    lacunarity: float = DEFAULT_LACUNARITY
    persistence: float = DEFAULT_PERSISTENCE


@lru_cache(maxsize=64)
def spectral_weights(config: NoiseConfiguration) -> tuple[float, ...]:
    """Per-octave amplitudes ``lacunarity ** (-persistence * i)``.

    Empty for ``octaves <= 0``, which makes every fBm sum zero. A zero or
    negative lacunarity is not rejected: it yields inf/NaN weights.
    """

    octaves = max(int(config.octaves), 0)
    exponent = -float(config.persistence) * np.arange(octaves, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        w = np.power(float(config.lacunarity), exponent)
    return tuple(float(v) for v in w)


def fbm2(
    noise: Noise2D,
    x: np.ndarray,
    y: np.ndarray,
    config: NoiseConfiguration = NoiseConfiguration(),
) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    lacunarity = float(config.lacunarity)
    total = np.zeros_like(x * y)
    with np.errstate(invalid="ignore", over="ignore"):
        for weight in spectral_weights(config):
            total = total + noise.noise(x, y) * weight
            x = x * lacunarity
            y = y * lacunarity
    return total


def fbm3(
    noise: Noise3D,
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    config: NoiseConfiguration = NoiseConfiguration(),
) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)

    lacunarity = float(config.lacunarity)
    total = np.zeros_like(x * y * z)
    with np.errstate(invalid="ignore", over="ignore"):
        for weight in spectral_weights(config):
            total = total + noise.noise(x, y, z) * weight
            x = x * lacunarity
            y = y * lacunarity
            z = z * lacunarity
    return total


class NoiseGenerator:
    """Seeded 2D/3D gradient noise plus fBm over an owned configuration.

    The setters swap in a new immutable ``NoiseConfiguration``; weights are
    looked up per configuration value, so there is no cache to invalidate.
    """

    def __init__(
        self,
        seed: int = DEFAULT_SEED,
        config: NoiseConfiguration | None = None,
        *,
        shuffle: str = DEFAULT_SHUFFLE,
    ):
        self.seed = int(seed)
        self.config = config if config is not None else NoiseConfiguration()
        self.perlin2 = Perlin2D(seed=self.seed, shuffle=shuffle)
        self.perlin3 = Perlin3D(seed=self.seed, shuffle=shuffle)

    @property
    def octaves(self) -> int:
        return self.config.octaves

    @property
    def lacunarity(self) -> float:
        return self.config.lacunarity

    @property
    def persistence(self) -> float:
        return self.config.persistence

    def set_octaves(self, octaves: int) -> None:
        self.config = dataclasses.replace(self.config, octaves=int(octaves))

    def set_lacunarity(self, lacunarity: float) -> None:
        self.config = dataclasses.replace(self.config, lacunarity=float(lacunarity))

    def set_persistence(self, persistence: float) -> None:
        self.config = dataclasses.replace(self.config, persistence=float(persistence))

    def weights(self) -> tuple[float, ...]:
        return spectral_weights(self.config)

    def _resolve(
        self, lacunarity: float | None, persistence: float | None
    ) -> NoiseConfiguration:
        config = self.config
        if lacunarity is not None:
            config = dataclasses.replace(config, lacunarity=float(lacunarity))
        if persistence is not None:
            config = dataclasses.replace(config, persistence=float(persistence))
        return config

    def noise2d(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return self.perlin2.noise(x, y)

    def noise3d(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        return self.perlin3.noise(x, y, z)

    def fbm2d(
        self,
        x: np.ndarray,
        y: np.ndarray,
        lacunarity: float | None = None,
        persistence: float | None = None,
    ) -> np.ndarray:
        return fbm2(self.perlin2, x, y, self._resolve(lacunarity, persistence))

    def fbm3d(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray,
        lacunarity: float | None = None,
        persistence: float | None = None,
    ) -> np.ndarray:
        return fbm3(self.perlin3, x, y, z, self._resolve(lacunarity, persistence))
