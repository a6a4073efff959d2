from __future__ import annotations

import logging
import time

import numpy as np

from plasmanoise.fbm import NoiseConfiguration, NoiseGenerator
from plasmanoise.map2d import fbm_map_2d, plasma_map_2d


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark.

    Rough expectations (laptop-class CPU):
    - fBm map 512x512, 3 octaves: well under a second (vectorised)
    - Plasma 256x128 tile: well under a second (level-by-level subdivision)
    """

    logging.basicConfig(level=logging.INFO)

    generator = NoiseGenerator(42, NoiseConfiguration(octaves=3))

    _timeit(
        "fbm_map_2d 512x512 (3 octaves)",
        lambda: fbm_map_2d(generator, width=512, height=512),
    )

    def run_plasma() -> None:
        z = plasma_map_2d(width=256, height=128, tile_width=256, tile_height=128)
        _ = float(np.mean(z))

    _timeit("plasma_map_2d 256x128", run_plasma)


if __name__ == "__main__":
    main()
