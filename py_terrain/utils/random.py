"""
Seed sources for terrain generation.

Each generation draws one seed from a SeedSource and builds a fresh noise
source from it. Callers that need reproducible maps pass their own source (or
a fixed seed); everything else shares a process-wide source that is seeded
from the wall clock the first time it is needed.
"""

import time
from typing import Optional

import numpy as np

# Noise seeds are drawn from [0, MAX_SEED)
MAX_SEED = 2**63 - 1

# Global seed source instance
_seed_source = None


class SeedSource:
    """Produces the integer seeds handed to noise sources."""

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Seed for the underlying generator; wall-clock time when None
        """
        if seed is None:
            seed = time.time_ns()
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_seed(self) -> int:
        """Draw the next noise seed."""
        return int(self._rng.integers(0, MAX_SEED))


class FixedSeedSource(SeedSource):
    """Seed source that hands out the same noise seed every time."""

    def __init__(self, seed: int):
        # Any integer is a valid noise seed, negative ones included
        self.seed = seed

    def next_seed(self) -> int:
        return self.seed


def set_random_seed(seed: Optional[int]) -> None:
    """
    Replace the process-wide seed source.

    Args:
        seed: Seed for the new source; None reseeds from the wall clock
    """
    global _seed_source
    _seed_source = SeedSource(seed)


def get_seed_source() -> SeedSource:
    """
    Get the process-wide seed source, creating it on first use.

    Returns:
        SeedSource instance
    """
    global _seed_source
    if _seed_source is None:
        _seed_source = SeedSource()
    return _seed_source
