"""Per-replicate random streams.

A master seed is expanded with SeedSequence.spawn into one child per
replicate, and each child seeds its own PCG64 Generator. Replicate i
therefore sees the same draws whatever the worker count, and whatever
the total number of replicates. A seed of None pulls OS entropy.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np


def replicate_seed_sequences(
    master_seed: Optional[int],
    n_replicates: int,
) -> List[np.random.SeedSequence]:
    """Spawn one child SeedSequence per replicate.

    Args:
        master_seed: Master seed (non-negative integer), or None to draw
            fresh entropy from the OS.
        n_replicates: Number of replicate streams.

    Returns:
        List of n_replicates independent SeedSequence children, in
        replicate order.
    """
    if n_replicates < 0:
        raise ValueError(f"n_replicates must be >= 0, got {n_replicates}")
    ss = np.random.SeedSequence(master_seed)
    return ss.spawn(n_replicates)


def create_replicate_rngs(
    master_seed: Optional[int],
    n_replicates: int,
) -> List[np.random.Generator]:
    """One PCG64 Generator per replicate, seeded from its spawned child.

    Example:
        >>> rngs = create_replicate_rngs(7, n_replicates=3)
        >>> len(rngs)
        3
    """
    return [
        np.random.Generator(np.random.PCG64(child))
        for child in replicate_seed_sequences(master_seed, n_replicates)
    ]
