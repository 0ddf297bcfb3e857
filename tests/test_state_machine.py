from dataclasses import dataclass

import pytest

from canopy.errors import InvalidTransitionError
from canopy.state_machine import State, StateMachine


@dataclass(frozen=True)
class Idle(State):
    def can_transition_to(self, candidate):
        return isinstance(candidate, Running)


@dataclass(frozen=True)
class Running(State):
    speed: int = 1


@dataclass(frozen=True)
class Stopped(State):
    pass


@pytest.fixture
def changes():
    return []


@pytest.fixture
def machine(changes):
    return StateMachine(Idle(), lambda state, previous: changes.append((state, previous)))


def test_construction_emits_initial_state(machine, changes):
    assert changes == [(Idle(), None)]
    assert machine.state == Idle()
    assert machine.previous is None


def test_valid_transition_emits_change(machine, changes):
    assert machine.update(Running())

    assert machine.state == Running()
    assert machine.previous == Idle()
    assert changes[-1] == (Running(), Idle())


def test_equal_state_is_a_no_op(machine, changes):
    machine.update(Running(speed=2))

    assert not machine.update(Running(speed=2))
    assert len(changes) == 2


def test_equal_state_is_a_no_op_even_when_guard_refuses(machine, changes):
    assert not machine.update(Idle())
    assert changes == [(Idle(), None)]


def test_invalid_transition_raises_and_keeps_state(machine, changes):
    with pytest.raises(InvalidTransitionError, match="Invalid transition from Idle") as excinfo:
        machine.update(Stopped())

    assert excinfo.value.current == Idle()
    assert excinfo.value.candidate == Stopped()
    assert machine.state == Idle()
    assert len(changes) == 1


def test_states_without_guard_allow_every_transition():
    machine = StateMachine("closed")

    assert machine.can_transition_to("open")
    assert machine.update("open")
    assert machine.update("closed")
    assert machine.previous == "open"


def test_listeners_added_later_see_subsequent_changes(machine):
    seen = []
    machine.on_change += lambda state, previous: seen.append(state)

    machine.update(Running())
    machine.update(Stopped())

    assert seen == [Running(), Stopped()]


def test_none_is_not_a_state(machine):
    with pytest.raises(ValueError):
        StateMachine(None)
    with pytest.raises(ValueError):
        machine.update(None)
