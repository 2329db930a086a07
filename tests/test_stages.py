"""Tests for the run state machine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import random

import pytest

from models.housing import HousingUnit
from models.participant import Participant, ParticipantNeed
from engine.allocation_engine import allocate
from engine.errors import InvalidTransitionError, SequenceNotDrawnError
from engine.randomizer import draw_sequence, is_valid_sequence
from engine.stages import (
    DataLoaded,
    LotteryState,
    Reset,
    SequenceDrawn,
    Stage,
    UnitsAllocated,
    initial_state,
    transition,
)


def make_data():
    participants = (
        Participant("a", "Alice", (ParticipantNeed("2BR", 1),)),
        Participant("b", "Bob", (ParticipantNeed("1BR", 1),)),
    )
    units = (HousingUnit("U1", "2BR"), HousingUnit("U2", "1BR"))
    return participants, units


def run_to(stage):
    participants, units = make_data()
    rng = random.Random(11)
    state = transition(initial_state(), DataLoaded(participants, units))
    if stage is Stage.SEQUENCING:
        return state
    state = transition(state, SequenceDrawn(tuple(draw_sequence(state.participants, rng))))
    if stage is Stage.ALLOCATING:
        return state
    return transition(state, UnitsAllocated(tuple(allocate(state.participants, state.units, rng))))


class TestHappyPath:
    def test_full_run(self):
        state = initial_state()
        assert state.stage is Stage.IMPORTING

        state = run_to(Stage.SEQUENCING)
        assert state.stage is Stage.SEQUENCING
        assert all(p.rank is None for p in state.participants)
        assert state.results == ()

        state = run_to(Stage.ALLOCATING)
        assert state.stage is Stage.ALLOCATING
        assert is_valid_sequence(state.participants)
        assert [p.rank for p in state.participants] == [1, 2]
        assert state.results == ()

        state = run_to(Stage.SHOWING_RESULTS)
        assert state.stage is Stage.SHOWING_RESULTS
        assert len(state.results) == 2

    def test_transition_does_not_touch_input_state(self):
        start = initial_state()
        participants, units = make_data()
        transition(start, DataLoaded(participants, units))
        assert start == LotteryState()


class TestReset:
    @pytest.mark.parametrize("stage", [Stage.SEQUENCING, Stage.ALLOCATING, Stage.SHOWING_RESULTS])
    def test_reset_discards_everything(self, stage):
        state = transition(run_to(stage), Reset("operator"))
        assert state == initial_state()

    def test_reset_from_import(self):
        assert transition(initial_state(), Reset()) == initial_state()


class TestInvalidTransitions:
    def test_cannot_allocate_before_draw(self):
        with pytest.raises(InvalidTransitionError):
            transition(run_to(Stage.SEQUENCING), UnitsAllocated(()))

    def test_cannot_draw_before_import(self):
        with pytest.raises(InvalidTransitionError):
            transition(initial_state(), SequenceDrawn(()))

    def test_cannot_redraw_after_allocation(self):
        state = run_to(Stage.SHOWING_RESULTS)
        with pytest.raises(InvalidTransitionError):
            transition(state, SequenceDrawn(state.participants))

    def test_cannot_reload_mid_run(self):
        participants, units = make_data()
        with pytest.raises(InvalidTransitionError):
            transition(run_to(Stage.ALLOCATING), DataLoaded(participants, units))

    def test_unranked_sequence_rejected(self):
        state = run_to(Stage.SEQUENCING)
        with pytest.raises(SequenceNotDrawnError):
            transition(state, SequenceDrawn(state.participants))

    def test_sequence_missing_participant_rejected(self):
        state = run_to(Stage.SEQUENCING)
        partial = (state.participants[0].with_rank(1),)
        with pytest.raises(SequenceNotDrawnError):
            transition(state, SequenceDrawn(partial))

    def test_sequence_of_other_participants_rejected(self):
        state = run_to(Stage.SEQUENCING)
        strangers = (
            Participant("x", "Xavier", (ParticipantNeed("2BR", 1),), rank=1),
            Participant("y", "Yvonne", (ParticipantNeed("1BR", 1),), rank=2),
        )
        with pytest.raises(SequenceNotDrawnError):
            transition(state, SequenceDrawn(strangers))

    def test_sequence_with_duplicated_participant_rejected(self):
        state = run_to(Stage.SEQUENCING)
        first = state.participants[0]
        doubled = (first.with_rank(1), first.with_rank(2))
        with pytest.raises(SequenceNotDrawnError):
            transition(state, SequenceDrawn(doubled))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
