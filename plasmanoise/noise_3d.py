from __future__ import annotations

import numpy as np

from .config import DEFAULT_SHUFFLE
from .core import fade, fast_floor, grad3, lerp, make_permutation


class Perlin3D:
    def __init__(self, *, seed: int = 0, shuffle: str = DEFAULT_SHUFFLE):
        self.seed = int(seed)
        self.shuffle = str(shuffle)
        self.perm = make_permutation(self.seed, mode=self.shuffle)

    def noise(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)

        fx = fast_floor(x)
        fy = fast_floor(y)
        fz = fast_floor(z)

        xi = fx.astype(np.int64) & 255
        yi = fy.astype(np.int64) & 255
        zi = fz.astype(np.int64) & 255

        xf = x - fx
        yf = y - fy
        zf = z - fz

        u = fade(xf)
        v = fade(yf)
        w = fade(zf)

        p = self.perm
        a = p[xi] + yi
        aa = p[a] + zi
        ab = p[a + 1] + zi
        b = p[xi + 1] + yi
        ba = p[b] + zi
        bb = p[b + 1] + zi

        x1 = xf - 1.0
        y1 = yf - 1.0
        z1 = zf - 1.0

        # Bottom face (z0) first, then the top face (z1).
        y_lerp0 = lerp(
            lerp(grad3(p[aa], xf, yf, zf), grad3(p[ba], x1, yf, zf), u),
            lerp(grad3(p[ab], xf, y1, zf), grad3(p[bb], x1, y1, zf), u),
            v,
        )
        y_lerp1 = lerp(
            lerp(grad3(p[aa + 1], xf, yf, z1), grad3(p[ba + 1], x1, yf, z1), u),
            lerp(grad3(p[ab + 1], xf, y1, z1), grad3(p[bb + 1], x1, y1, z1), u),
            v,
        )
        return lerp(y_lerp0, y_lerp1, w)
