"""Unit tests for the data models."""

import pytest

from fsmlayout import (
    EdgeOffset,
    FSMLayoutError,
    LayoutResult,
    StateMachine,
    TransitionError,
)


class TestStateMachineValidation:
    """Tests for StateMachine.validate."""

    def test_valid_machine(self, two_state_machine):
        two_state_machine.validate()

    def test_alphabet_normalized_to_tuple(self):
        machine = StateMachine(1, [{"a": 0}], alphabet=["a"])
        assert machine.alphabet == ("a",)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"num_states": 0, "transitions": []}, "at least one state"),
            (
                {"num_states": 1, "transitions": [{}], "alphabet": ()},
                "must not be empty",
            ),
            (
                {"num_states": 1, "transitions": [{"a": 0}], "alphabet": ("a", "a")},
                "duplicate",
            ),
            ({"num_states": 2, "transitions": [{"0": 0, "1": 0}]}, "Expected"),
            ({"num_states": 1, "transitions": [{"0": 0}]}, "no transition"),
            ({"num_states": 1, "transitions": [{"0": 0, "1": -1}]}, "points outside"),
            (
                {"num_states": 1, "transitions": [{"0": 0, "1": 0, "2": 0}]},
                "unknown symbols",
            ),
            (
                {
                    "num_states": 1,
                    "transitions": [{"0": 0, "1": 0}],
                    "initial_state": 1,
                },
                "Initial state",
            ),
            (
                {
                    "num_states": 1,
                    "transitions": [{"0": 0, "1": 0}],
                    "accept_states": {3},
                },
                "Accept state",
            ),
        ],
    )
    def test_malformed(self, kwargs, message):
        machine = StateMachine(**kwargs)
        with pytest.raises(TransitionError, match=message):
            machine.validate()

    def test_non_integer_destination(self):
        machine = StateMachine(1, [{"0": 0, "1": "0"}])
        with pytest.raises(TransitionError):
            machine.validate()

    def test_error_hierarchy(self):
        assert issubclass(TransitionError, FSMLayoutError)
        assert issubclass(TransitionError, ValueError)


class TestStateMachine:
    """Tests for running and converting machines."""

    def test_accepts(self, two_state_machine):
        assert two_state_machine.accepts("0")
        assert two_state_machine.accepts("011")
        assert not two_state_machine.accepts("")
        assert not two_state_machine.accepts("00")

    def test_accepts_rejects_unknown_symbol(self, two_state_machine):
        with pytest.raises(ValueError, match="Invalid symbol"):
            two_state_machine.accepts("02")

    def test_to_graph(self, two_state_machine):
        graph = two_state_machine.to_graph()
        assert graph.number_of_nodes() == 2
        assert graph.number_of_edges() == 4
        assert graph.has_edge(0, 1, key="0")
        assert graph.has_edge(1, 1, key="1")
        assert not graph.has_edge(0, 1, key="1")

    def test_random_is_seeded(self):
        first = StateMachine.random(10, seed=42)
        second = StateMachine.random(10, seed=42)
        assert first == second
        first.validate()

    def test_random_alphabet(self):
        machine = StateMachine.random(4, alphabet=("x", "y", "z"), seed=1)
        assert all(set(row) == {"x", "y", "z"} for row in machine.transitions)


class TestResultModels:
    """Tests for offsets and results."""

    def test_edge_offset_default(self):
        assert EdgeOffset() == EdgeOffset(0.0, 0.0)

    def test_layout_result_defaults(self):
        result = LayoutResult(
            positions={}, raw_positions={}, offsets=[], resolved_edges=[]
        )
        assert result.crossings == 0
        assert result.fallbacks == []
