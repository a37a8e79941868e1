"""Common utilities for synthetic data generators.

Utilities provided:
- Deterministic RNG creation from a base seed and components
- Clock drift helpers (ppm -> effective sampling rate)
"""

from __future__ import annotations

import random
from typing import Union

import numpy as np


def deterministic_rng(seed: int, *components: Union[str, int]) -> random.Random:
    """Create a deterministic RNG from a base seed and additional components.

    The internal seed is a string in the form "{seed}:{comp1}:{comp2}:..." so
    that different components produce independent, reproducible streams.
    """

    joined = ":".join(str(c) for c in components)
    return random.Random(f"{seed}:{joined}")


def deterministic_numpy_rng(seed: int, *components: Union[str, int]) -> np.random.Generator:
    """Numpy counterpart of `deterministic_rng` for array-valued noise."""

    return np.random.default_rng(deterministic_rng(seed, *components).getrandbits(64))


def drifted_rate(nominal_rate_hz: float, ppm: float) -> float:
    """Effective sampling rate of a clock drifting by ``ppm``.

    Positive ppm means the drifting clock runs fast (more samples per
    reference second).
    """

    return nominal_rate_hz * (1.0 + ppm / 1_000_000.0)
