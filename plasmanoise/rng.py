from __future__ import annotations

import math
import time

_MASK64 = 0xFFFFFFFFFFFFFFFF
_LONG_MAX = float(2**63 - 1)


def to_int32(v: int) -> int:
    """Wrap an arbitrary Python int to a signed 32-bit value."""
    v &= 0xFFFFFFFF
    return v - 0x100000000 if v & 0x80000000 else v


def to_int64(v: int) -> int:
    v &= _MASK64
    return v - 0x10000000000000000 if v & 0x8000000000000000 else v


class DeterministicRandom:
    """Xorshift (Marsaglia) generator over a single 64-bit word.

    The stream is fully defined by the seed. A seed of 0 is the xorshift
    fixed point and produces zeros forever.
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = int(time.time() * 1000.0)
        self.seed = to_int64(int(seed))
        self._state = self.seed & _MASK64

    def next_long(self) -> int:
        s = self._state
        s ^= (s << 21) & _MASK64
        s ^= s >> 35
        s ^= (s << 4) & _MASK64
        self._state = s
        return to_int64(s)

    def next_int(self, bound: int | None = None) -> int:
        v = to_int32(self.next_long())
        if bound is None:
            return v
        # Truncating remainder: the sign follows the dividend.
        r = abs(v) % abs(int(bound))
        return -r if v < 0 else r

    def next_double(self) -> float:
        """Value in (-1, 1)."""
        return self.next_long() / _LONG_MAX

    def next_float(self) -> float:
        return self.next_double()

    def next_pos_float(self) -> float:
        """Value in (0, 1)."""
        return 0.5 * (self.next_float() + 1.0)

    def next_bool(self) -> bool:
        return self.next_long() > 0

    def next_standard_normal(self) -> float:
        # Polar method; retries until the pair lands strictly inside the unit disc.
        q = math.inf
        u1 = 0.0
        while q >= 1.0 or q == 0.0:
            u1 = self.next_double()
            u2 = self.next_double()
            q = u1 * u1 + u2 * u2
        return u1 * math.sqrt((-2.0 * math.log(q)) / q)
