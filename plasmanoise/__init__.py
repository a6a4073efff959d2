from .errors import ConfigurationError
from .fbm import NoiseConfiguration, NoiseGenerator, fbm2, fbm3, spectral_weights
from .map2d import fbm_map_2d, plasma_map_2d
from .noise_2d import Perlin2D
from .noise_3d import Perlin3D
from .plasma import PlasmaField, plasma_hash
from .rng import DeterministicRandom

__all__ = [
    "ConfigurationError",
    "DeterministicRandom",
    "NoiseConfiguration",
    "NoiseGenerator",
    "Perlin2D",
    "Perlin3D",
    "PlasmaField",
    "fbm2",
    "fbm3",
    "fbm_map_2d",
    "plasma_hash",
    "plasma_map_2d",
    "spectral_weights",
]
