"""Pytest configuration and shared fixtures for fsmlayout tests."""

import pytest

from fsmlayout import DiagramGenerator, LayoutPlanner, StateMachine


@pytest.fixture
def two_state_machine():
    """Two states over {0, 1}: mutual edges on '0', self-loops on '1'."""
    return StateMachine(
        num_states=2,
        transitions=[{"0": 1, "1": 0}, {"0": 0, "1": 1}],
        initial_state=0,
        accept_states={1},
    )


@pytest.fixture
def chain_machine():
    """Linear chain 0 -> 1 -> 2 -> 3 ending in a self-loop."""
    return StateMachine(
        num_states=4,
        transitions=[{"a": 1}, {"a": 2}, {"a": 3}, {"a": 3}],
        alphabet=("a",),
    )


@pytest.fixture
def cyclic_machine():
    """Three-state cycle."""
    return StateMachine(
        num_states=3,
        transitions=[{"a": 1}, {"a": 2}, {"a": 0}],
        alphabet=("a",),
    )


@pytest.fixture
def disconnected_machine():
    """Two states that only loop on themselves."""
    return StateMachine(
        num_states=2,
        transitions=[{"a": 0}, {"a": 1}],
        alphabet=("a",),
    )


@pytest.fixture
def two_state_input():
    """Text description of the two-state machine."""
    return """
    # mutual edges on 0, self-loops on 1
    alphabet: 0 1
    initial: 0
    accept: 1
    0 -0-> 1
    0 -1-> 0
    1 -0-> 0
    1 -1-> 1
    """


@pytest.fixture
def generator():
    """Default DiagramGenerator instance."""
    return DiagramGenerator()


@pytest.fixture
def planner():
    """Default LayoutPlanner instance."""
    return LayoutPlanner()
