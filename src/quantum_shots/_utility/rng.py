"""
Source of all randomness used during a run.

A single numpy Generator is created per top-level run and then handed down explicitly to the translator and the shot
strategies. Seeds for the simulator (measurement gates, state updates, sampling) are drawn from it in call order, so two
runs with the same seed and the same circuits draw the same seeds.
"""

import logging

import numpy as np


logger = logging.getLogger(__name__)

# Simulator seeds are unsigned 32 bit integers.
SEED_BOUND = 2**32


def new_rng(seed: int = None) -> np.random.Generator:
    """Creates the random stream for one run.

    Args:
        seed (int): Seed for a reproducible stream. If None, the stream is seeded from fresh OS entropy.

    Returns:
        The numpy Generator owning the stream.
    """
    if seed is None:
        logger.debug("Creating unseeded random stream.")
        return np.random.default_rng()
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)) or seed < 0:
        raise ValueError(f"Expected seed to be a non-negative integer or None but found {seed!r}.")
    logger.debug("Creating random stream with seed %d.", seed)
    return np.random.default_rng(int(seed))


def draw_seed(rng: np.random.Generator) -> int:
    """ Draws the next simulator seed from the stream. """
    return int(rng.integers(SEED_BOUND, dtype=np.uint64))
