# -------------------------------------
# generator shared state
# -------------------------------------
"""
Shared random source for template expansion.

Selection takes the generator as an argument; this module only holds the
default instance used when a caller passes none.
"""
import logging
import random
import secrets

logger = logging.getLogger(__name__)

ENTROPY_WORDS = ("auto", "rand", "random", "entropy")

_DEFAULT_SEED = secrets.randbits(128)
RNG = random.Random(_DEFAULT_SEED)


def seed(x: int | str | None = None) -> int:
    """
    Reseed the shared generator.

    Args:
        x: Seed value. None or "auto"/"rand"/"random"/"entropy" reseeds
           from OS entropy, anything else goes through int(x).

    Returns:
        The seed that was used.
    """
    if x is None or str(x).lower() in ENTROPY_WORDS:
        s = secrets.randbits(128)
    else:
        s = int(x)
    RNG.seed(s)
    logger.debug("seeded shared generator with %d", s)
    return s


def get_rng() -> random.Random:
    """Return the shared generator."""
    return RNG
