from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class ParticipantNeed:
    housing_type: str
    quantity: int  # Always >= 1 once imported

    @property
    def label(self) -> str:
        return f"{self.housing_type}({self.quantity})"


@dataclass(frozen=True)
class Participant:
    participant_id: str
    name: str
    needs: Tuple[ParticipantNeed, ...] = ()
    rank: Optional[int] = None  # 1-based priority, set by the sequence draw

    @property
    def total_requested(self) -> int:
        return sum(n.quantity for n in self.needs)

    @property
    def needs_label(self) -> str:
        return ", ".join(n.label for n in self.needs)

    def with_rank(self, rank: int) -> "Participant":
        return replace(self, rank=rank)
