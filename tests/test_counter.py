"""Tests the counter slice."""
from __future__ import annotations

from typing import List
from statecycle import fold_actions
from statecycle.app import Login
from statecycle.counter import (
    AddToHistory,
    CounterState,
    Decrement,
    Increment,
    Reset,
    counter_reducer,
    create_counter_store,
)


def test_default_state() -> None:
    subject = create_counter_store()
    assert subject.state == CounterState(counter=0, history=())


def test_increment() -> None:
    subject = create_counter_store()

    result = subject.dispatch(Increment())

    assert result == CounterState(counter=1, history=())


def test_history_records_value_before_transition() -> None:
    subject = create_counter_store()

    subject.dispatch(Increment())
    subject.dispatch(AddToHistory())
    subject.dispatch(Decrement())

    assert subject.state == CounterState(counter=0, history=(1,))


def test_reset_keeps_history() -> None:
    subject = create_counter_store(CounterState(counter=5, history=(1, 2)))

    result = subject.dispatch(Reset())

    assert result == CounterState(counter=0, history=(1, 2))


def test_history_is_ordered() -> None:
    actions = [
        Increment(),
        AddToHistory(),
        Increment(),
        AddToHistory(),
        Reset(),
        AddToHistory(),
    ]

    result = fold_actions(counter_reducer, CounterState(), actions)

    assert result == CounterState(counter=0, history=(1, 2, 0))


def test_previous_state_untouched() -> None:
    state = CounterState(counter=3, history=(3,))

    counter_reducer(state, Increment())
    counter_reducer(state, AddToHistory())

    assert state == CounterState(counter=3, history=(3,))


def test_unknown_action_is_identity() -> None:
    state = CounterState(counter=3, history=(3,))

    assert counter_reducer(state, Login("alice", "x")) is state  # type: ignore[arg-type]


def test_observer_sees_every_state() -> None:
    subject = create_counter_store()
    results: List[int] = []

    subject.subscribe(lambda state: results.append(state.counter), replay=True)
    subject.dispatch(Increment())
    subject.dispatch(Increment())
    subject.dispatch(AddToHistory())

    assert results == [0, 1, 2, 2]
