from dataclasses import dataclass
from typing import Tuple

from models.housing import HousingUnit


@dataclass(frozen=True)
class NeedShortfall:
    """A need that could not be fully met from the remaining pool."""
    housing_type: str
    requested: int
    granted: int

    @property
    def missing(self) -> int:
        return self.requested - self.granted


@dataclass(frozen=True)
class AllocationResult:
    rank: int
    participant_name: str
    allocated_units: Tuple[HousingUnit, ...] = ()
    shortfalls: Tuple[NeedShortfall, ...] = ()

    @property
    def unit_count(self) -> int:
        return len(self.allocated_units)

    @property
    def is_fully_served(self) -> bool:
        return not self.shortfalls
