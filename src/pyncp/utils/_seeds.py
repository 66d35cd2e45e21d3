"""Random-variate sources for reproducible draws.

There is no process-wide seeding. Every sampling function takes an explicit
source, any object with ``random(size)`` and ``standard_normal(size)``.
``numpy.random.Generator`` is the reference implementation.
"""

from __future__ import annotations

import numpy as np


def default_rng(seed: int | np.random.SeedSequence | None = None) -> np.random.Generator:
    """Create a random-variate source.

    Parameters
    ----------
    seed : int, SeedSequence or None
        Seed value. None draws fresh entropy from the OS.

    Returns
    -------
    rng : numpy.random.Generator
    """
    return np.random.default_rng(seed)


def spawn_rngs(seed: int | None, n: int) -> list[np.random.Generator]:
    """Create ``n`` statistically independent sources, one per chain.

    Parameters
    ----------
    seed : int or None
        Root seed. The same seed always yields the same set of streams.
    n : int
        Number of independent generators.

    Returns
    -------
    rngs : list of numpy.random.Generator
    """
    children = np.random.SeedSequence(seed).spawn(n)
    return [np.random.default_rng(child) for child in children]
