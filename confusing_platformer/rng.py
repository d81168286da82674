"""Seeded random stream shared by level generation and hazards."""
import random


class RngStream:
    """Deterministic sequence: same seed and same calls give the same values."""

    def __init__(self, seed: int):
        self.seed = seed
        self._random = random.Random(seed)

    def next_int(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi). Raises ValueError when the range is empty."""
        return self._random.randrange(lo, hi)

    def next_float(self) -> float:
        return self._random.random()

    def stir(self):
        # Throw one value away so neighbouring seeds drift apart.
        self._random.getrandbits(32)
