"""Default parameters for the noise and plasma generators.

These are fallbacks only. Pass keyword arguments (or a ``NoiseConfiguration``)
to override them per generator instead of editing this module.
"""

# --- Gradient noise / fBm ---
DEFAULT_SEED = 42
DEFAULT_OCTAVES = 1
DEFAULT_LACUNARITY = 2.1379201
DEFAULT_PERSISTENCE = 0.836281
DEFAULT_SHUFFLE = "legacy"

# World units per output pixel when slicing 3D fBm into a 2D map.
DEFAULT_SAMPLE_STEP = 0.005

# --- Plasma (midpoint displacement) ---
DEFAULT_PLASMA_SEED = 2147483647 // 10000 + 11
# Tile height should be tile width / 2**n.
DEFAULT_TILE_WIDTH = 1024
DEFAULT_TILE_HEIGHT = 128
DEFAULT_STRENGTH = 1.0
# Edge offsets are damped relative to the midpoint (roughly sqrt(2)).
EDGE_DAMPING = 1.42
