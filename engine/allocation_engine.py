"""Priority-ordered greedy allocation of typed housing units — the core engine."""

import random
from typing import Dict, List, Optional, Sequence

from models.allocation import AllocationResult, NeedShortfall
from models.housing import HousingUnit
from models.participant import Participant
from engine.errors import SequenceNotDrawnError
from engine.randomizer import default_rng, fisher_yates_shuffle, is_valid_sequence
from utils.logger import get_logger


logger = get_logger(__name__)


def partition_by_type(units: Sequence[HousingUnit]) -> Dict[str, List[HousingUnit]]:
    """Split the unit pool into per-type sub-pools, keeping import order."""
    pools: Dict[str, List[HousingUnit]] = {}
    for unit in units:
        pools.setdefault(unit.housing_type, []).append(unit)
    return pools


def shuffle_pools(
    pools: Dict[str, List[HousingUnit]],
    rng: Optional[random.Random] = None,
) -> Dict[str, List[HousingUnit]]:
    """Independently shuffle every type's sub-pool."""
    if rng is None:
        rng = default_rng()
    return {housing_type: fisher_yates_shuffle(pool, rng) for housing_type, pool in pools.items()}


def _order_by_rank(participants: Sequence[Participant]) -> List[Participant]:
    if not is_valid_sequence(participants):
        raise SequenceNotDrawnError(
            "Participants must carry unique ranks 1..N before allocation. "
            "Draw the sequence first."
        )
    return sorted(participants, key=lambda p: p.rank)


def allocate(
    participants: Sequence[Participant],
    units: Sequence[HousingUnit],
    rng: Optional[random.Random] = None,
) -> List[AllocationResult]:
    """Allocate units to participants in ascending rank order.

    Each participant's needs are served in declaration order by taking units
    from the front of that type's shuffled sub-pool. A need the pool can no
    longer cover is granted whatever remains and recorded as a shortfall on
    that participant's result; the run itself never fails for it.
    """
    ordered = _order_by_rank(participants)
    pools = shuffle_pools(partition_by_type(units), rng)

    results: List[AllocationResult] = []
    for participant in ordered:
        granted: List[HousingUnit] = []
        shortfalls: List[NeedShortfall] = []

        for need in participant.needs:
            pool = pools.get(need.housing_type, [])
            taken = pool[:need.quantity]
            del pool[:need.quantity]
            granted.extend(taken)

            if len(taken) < need.quantity:
                shortfalls.append(NeedShortfall(need.housing_type, need.quantity, len(taken)))
                logger.warning(
                    "Rank %d (%s): requested %d x %r, only %d left",
                    participant.rank, participant.name,
                    need.quantity, need.housing_type, len(taken),
                )

        results.append(AllocationResult(
            rank=participant.rank,
            participant_name=participant.name,
            allocated_units=tuple(granted),
            shortfalls=tuple(shortfalls),
        ))

    leftover = sum(len(pool) for pool in pools.values())
    logger.info(
        "Allocated %d units to %d participants (%d left unallocated)",
        sum(r.unit_count for r in results), len(results), leftover,
    )
    return results
