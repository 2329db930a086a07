"""Demand/supply check run before any randomness is consumed."""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from models.housing import HousingUnit
from models.participant import Participant
from engine.errors import SupplyValidationError
from utils.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class TypeBalance:
    housing_type: str
    demand: int
    supply: int

    @property
    def surplus(self) -> int:
        return self.supply - self.demand

    @property
    def is_short(self) -> bool:
        return self.demand > self.supply


def aggregate_demand(participants: Sequence[Participant]) -> Dict[str, int]:
    """Total requested quantity per housing type, in first-seen order."""
    demand: Dict[str, int] = {}
    for participant in participants:
        for need in participant.needs:
            demand[need.housing_type] = demand.get(need.housing_type, 0) + need.quantity
    return demand


def aggregate_supply(units: Sequence[HousingUnit]) -> Dict[str, int]:
    """Unit count per housing type, in first-seen order."""
    supply: Dict[str, int] = {}
    for unit in units:
        supply[unit.housing_type] = supply.get(unit.housing_type, 0) + 1
    return supply


def type_balance(
    participants: Sequence[Participant],
    units: Sequence[HousingUnit],
) -> List[TypeBalance]:
    """Demand vs supply for every type seen on either side.

    Demanded types come first in demand order, followed by supply-only types.
    """
    demand = aggregate_demand(participants)
    supply = aggregate_supply(units)

    types = list(demand)
    types.extend(t for t in supply if t not in demand)

    return [TypeBalance(t, demand.get(t, 0), supply.get(t, 0)) for t in types]


def validate_supply(
    participants: Sequence[Participant],
    units: Sequence[HousingUnit],
) -> List[TypeBalance]:
    """Fail if any demanded type needs more units than exist.

    Every demanded type is checked and all violations are reported together.
    Returns the balance rows on success.
    """
    balance = type_balance(participants, units)
    shortages = [b for b in balance if b.is_short]
    if shortages:
        for s in shortages:
            logger.warning(
                "Supply check failed for type %r: demand %d > supply %d",
                s.housing_type, s.demand, s.supply,
            )
        raise SupplyValidationError(shortages)

    logger.info(
        "Supply check passed: %d participants, %d units, %d types",
        len(participants), len(units), len(balance),
    )
    return balance
