"""Run lifecycle as an explicit state machine.

The transition function is pure: views run the engine, then feed the outcome
back in as an event. Results only exist in the SHOWING_RESULTS stage.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from models.allocation import AllocationResult
from models.housing import HousingUnit
from models.participant import Participant
from engine.errors import InvalidTransitionError, SequenceNotDrawnError
from engine.randomizer import is_valid_sequence


class Stage(Enum):
    IMPORTING = "importing"
    SEQUENCING = "sequencing"
    ALLOCATING = "allocating"
    SHOWING_RESULTS = "showing_results"


@dataclass(frozen=True)
class LotteryState:
    stage: Stage = Stage.IMPORTING
    participants: Tuple[Participant, ...] = ()
    units: Tuple[HousingUnit, ...] = ()
    results: Tuple[AllocationResult, ...] = ()


@dataclass(frozen=True)
class DataLoaded:
    participants: Tuple[Participant, ...]
    units: Tuple[HousingUnit, ...]


@dataclass(frozen=True)
class SequenceDrawn:
    participants: Tuple[Participant, ...]


@dataclass(frozen=True)
class UnitsAllocated:
    results: Tuple[AllocationResult, ...]


@dataclass(frozen=True)
class Reset:
    reason: str = field(default="")


Event = Union[DataLoaded, SequenceDrawn, UnitsAllocated, Reset]


def initial_state() -> LotteryState:
    return LotteryState()


def transition(state: LotteryState, event: Event) -> LotteryState:
    """Return the state that follows ``event``; the input state is unchanged."""
    if isinstance(event, Reset):
        return initial_state()

    if state.stage is Stage.IMPORTING and isinstance(event, DataLoaded):
        return LotteryState(
            stage=Stage.SEQUENCING,
            participants=tuple(event.participants),
            units=tuple(event.units),
        )

    if state.stage is Stage.SEQUENCING and isinstance(event, SequenceDrawn):
        ranked = tuple(sorted(event.participants, key=lambda p: p.rank or 0))
        loaded_ids = {p.participant_id for p in state.participants}
        drawn_ids = {p.participant_id for p in ranked}
        if (
            len(ranked) != len(state.participants)
            or drawn_ids != loaded_ids
            or not is_valid_sequence(ranked)
        ):
            raise SequenceNotDrawnError(
                "A drawn sequence must rank every loaded participant exactly once."
            )
        return LotteryState(
            stage=Stage.ALLOCATING,
            participants=ranked,
            units=state.units,
        )

    if state.stage is Stage.ALLOCATING and isinstance(event, UnitsAllocated):
        return LotteryState(
            stage=Stage.SHOWING_RESULTS,
            participants=state.participants,
            units=state.units,
            results=tuple(event.results),
        )

    raise InvalidTransitionError(state.stage, event)
