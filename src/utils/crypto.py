"""Random sources for Arcoíris Táctico."""

import random
import secrets

from src.utils.config import env_seed


def create_rng(seed: int | None = None) -> random.Random:
    """Create a Random instance.

    An explicit seed wins, then ARCOIRIS_SEED. Seeded instances are
    deterministic (tests/replay); otherwise SystemRandom is returned.
    """
    if seed is None:
        seed = env_seed()
    if seed is not None:
        return random.Random(seed)
    return secrets.SystemRandom()


def coin_flip(rng: random.Random) -> int:
    """Pick a seat index (0 or 1) at random."""
    return 0 if rng.random() < 0.5 else 1
