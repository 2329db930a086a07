"""Unbiased shuffling and the priority sequence draw."""

import random
from typing import List, Optional, Sequence, TypeVar

from models.participant import Participant
from utils.logger import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


def default_rng() -> random.Random:
    """Random source used for live draws (OS entropy)."""
    return random.SystemRandom()


def fisher_yates_shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy of ``items``.

    ``rng`` is any object with ``randint(a, b)`` returning an integer in the
    closed range. The input sequence is left untouched.
    """
    if rng is None:
        rng = default_rng()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def draw_sequence(
    participants: Sequence[Participant],
    rng: Optional[random.Random] = None,
) -> List[Participant]:
    """Draw a fresh priority order and stamp 1-based ranks.

    Any rank already present on the input is ignored. The returned list is in
    rank order.
    """
    shuffled = fisher_yates_shuffle(participants, rng)
    ranked = [p.with_rank(position + 1) for position, p in enumerate(shuffled)]
    logger.info("Drew priority sequence for %d participants", len(ranked))
    return ranked


def is_valid_sequence(participants: Sequence[Participant]) -> bool:
    """True when the ranks form a permutation of 1..N."""
    ranks = [p.rank for p in participants]
    if any(r is None for r in ranks):
        return False
    return sorted(ranks) == list(range(1, len(ranks) + 1))
