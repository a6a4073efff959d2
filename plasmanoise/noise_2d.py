from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Protocol

import numpy as np

from .config import DEFAULT_SHUFFLE
from .core import fade, fast_floor, lerp, make_permutation

_HASH_MASK = 0x3F


class Noise2D(Protocol):
    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


@dataclass(frozen=True)
class Corner2D:
    hash: int
    gx: float
    gy: float
    dx: float
    dy: float
    dot: float


class Perlin2D:
    """2D gradient noise with gradients derived from the hash bits.

    Each lattice corner gets a pseudo-direction built from two overlapping
    6-bit fields of its 8-bit hash, remapped from [0, 1]^2 to [-1, 1]^2. This
    is not Perlin's gradient table and intentionally differs from ``Perlin3D``.
    """

    def __init__(self, *, seed: int = 0, shuffle: str = DEFAULT_SHUFFLE):
        self.seed = int(seed)
        self.shuffle = str(shuffle)
        self.perm = make_permutation(self.seed, mode=self.shuffle)

    def hash8(self, u: np.ndarray, v: np.ndarray) -> np.ndarray:
        p = self.perm
        return p[p[np.asarray(u) & 255] + (np.asarray(v) & 255)]

    def gradient(self, u: np.ndarray, v: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        h = self.hash8(u, v)
        hx = (h & _HASH_MASK).astype(np.float64) / _HASH_MASK
        hy = ((h >> 2) & _HASH_MASK).astype(np.float64) / _HASH_MASK
        return 2.0 * hx - 1.0, 2.0 * hy - 1.0

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        fx = fast_floor(x)
        fy = fast_floor(y)
        xi0 = fx.astype(np.int64) & 255
        yi0 = fy.astype(np.int64) & 255
        xi1 = xi0 + 1
        yi1 = yi0 + 1

        xf = x - fx
        yf = y - fy
        u = fade(xf)
        v = fade(yf)

        gx00, gy00 = self.gradient(xi0, yi0)
        gx10, gy10 = self.gradient(xi1, yi0)
        gx01, gy01 = self.gradient(xi0, yi1)
        gx11, gy11 = self.gradient(xi1, yi1)

        x1 = xf - 1.0
        y1 = yf - 1.0

        d00 = gx00 * xf + gy00 * yf
        d10 = gx10 * x1 + gy10 * yf
        d01 = gx01 * xf + gy01 * y1
        d11 = gx11 * x1 + gy11 * y1

        x_lerp0 = lerp(d00, d10, u)
        x_lerp1 = lerp(d01, d11, u)
        return lerp(x_lerp0, x_lerp1, v)

    def debug_point(self, x: float, y: float) -> dict:
        # Scalar breakdown for inspection; mirrors noise() step by step.
        xf = float(x)
        yf = float(y)
        fx = float(fast_floor(xf))
        fy = float(fast_floor(yf))
        xi0 = int(fx) & 255
        yi0 = int(fy) & 255

        xrel = xf - fx
        yrel = yf - fy
        u = float(fade(xrel))
        v = float(fade(yrel))

        def corner(cu: int, cv: int, dx: float, dy: float) -> Corner2D:
            gx, gy = self.gradient(np.array(cu), np.array(cv))
            gx = float(gx)
            gy = float(gy)
            return Corner2D(
                hash=int(self.hash8(np.array(cu), np.array(cv))),
                gx=gx,
                gy=gy,
                dx=dx,
                dy=dy,
                dot=(gx * dx + gy * dy),
            )

        c00 = corner(xi0, yi0, xrel, yrel)
        c10 = corner(xi0 + 1, yi0, xrel - 1.0, yrel)
        c01 = corner(xi0, yi0 + 1, xrel, yrel - 1.0)
        c11 = corner(xi0 + 1, yi0 + 1, xrel - 1.0, yrel - 1.0)

        x_lerp0 = lerp(c00.dot, c10.dot, u)
        x_lerp1 = lerp(c01.dot, c11.dot, u)
        n = lerp(x_lerp0, x_lerp1, v)

        return {
            "seed": self.seed,
            "input": {"x": xf, "y": yf},
            "cell": {"xi0": xi0, "yi0": yi0},
            "relative": {"xf": xrel, "yf": yrel},
            "fade": {"u": u, "v": v},
            "corners": {
                "c00": asdict(c00),
                "c10": asdict(c10),
                "c01": asdict(c01),
                "c11": asdict(c11),
            },
            "interpolation": {"x_lerp0": x_lerp0, "x_lerp1": x_lerp1},
            "noise": n,
        }
