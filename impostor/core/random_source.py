"""
Process-wide random source
One generator per process, seeded once, handed explicitly to whoever needs it
"""

import os
import random
from typing import Optional

from impostor.core.config import settings

ROOM_ID_PREFIX = "RM-"
PLAYER_ID_PREFIX = "P-"


def create_rng(seed: Optional[int] = None, salt: Optional[int] = None) -> random.Random:
    """
    Build a generator; ``None`` seeds from OS entropy.

    ``salt`` separates processes sharing one configured seed.
    """
    if seed is None or salt is None:
        return random.Random(seed)
    return random.Random(f"{seed}:{salt}")


def new_token(rng: random.Random, prefix: str = "") -> str:
    """128-bit random identifier, upper-case hex"""
    return f"{prefix}{rng.getrandbits(128):032X}"


def new_room_id(rng: random.Random) -> str:
    return new_token(rng, ROOM_ID_PREFIX)


def new_player_id(rng: random.Random) -> str:
    return new_token(rng, PLAYER_ID_PREFIX)


# Global generator instance; each server worker gets its own stream
rng = create_rng(settings.RANDOM_SEED, salt=os.getpid() if settings.WORKERS > 1 else None)
