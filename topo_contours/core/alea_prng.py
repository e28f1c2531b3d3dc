"""
Alea PRNG, Johannes Baagøe's generator.

Seeded from any string so a random field can be reproduced exactly, and
cheap enough to draw one value per cell on every randomize().
"""

TWO_POW_32 = 0x100000000
TWO_POW_NEG_32 = 2.3283064365386963e-10


def _uint32(n):
    """Truncate to an unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """Alea's string hash, stateful across calls."""

    def __init__(self):
        self.n = 0xEFC8249D

    def __call__(self, data):
        n = self.n
        for char in str(data):
            n += ord(char)
            h = 0.02519603282416938 * n
            n = _uint32(h)
            h -= n
            h *= n
            n = _uint32(h)
            h -= n
            n += h * TWO_POW_32
        self.n = n
        return _uint32(n) * TWO_POW_NEG_32


class AleaPRNG:
    """Three-lag multiply-with-carry generator producing floats in [0, 1)."""

    def __init__(self, seed):
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            parts = list(seed)
        else:
            parts = [seed]

        mash = _Mash()
        state = [mash(" "), mash(" "), mash(" ")]
        for part in parts:
            for k in range(3):
                state[k] -= mash(part)
                if state[k] < 0:
                    state[k] += 1
        self.s0, self.s1, self.s2 = state
        self.c = 1

    def random(self) -> float:
        """Next value in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def random_open(self) -> float:
        """Next value in (0, 1); zero draws are skipped."""
        value = self.random()
        while value == 0.0:
            value = self.random()
        return value
