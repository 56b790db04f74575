"""
Shared random source for a batch. Palette selection draws from one random.Random, advanced
sequentially, so a given seed reproduces the same palettes.
"""
import logging
import random
import secrets

logger = logging.getLogger(__name__)


def new_seed() -> int:
    """Fresh 64-bit seed from the OS CSPRNG."""
    return secrets.randbits(64)


def shared_random(seed: int | None = None) -> tuple[random.Random, int]:
    """
    Return (rng, seed). Without a seed one is drawn from `secrets` and logged so the batch
    can be replayed with --seed.
    """
    if seed is None:
        seed = new_seed()
        logger.info("No seed configured; using seed %s", seed)
    return random.Random(seed), seed
