"""Counter slice: a counter plus a history of recorded values."""
from __future__ import annotations
from typing import NamedTuple, Optional, Tuple, Union

from .store import Store


class Increment(NamedTuple):
    """Action to increment the counter."""


class Decrement(NamedTuple):
    """Action to decrement the counter."""


class Reset(NamedTuple):
    """Action to set the counter back to zero."""


class AddToHistory(NamedTuple):
    """Action to record the current counter value."""


CounterAction = Union[Increment, Decrement, Reset, AddToHistory]


class CounterState(NamedTuple):
    """Counter value and previously recorded values, oldest first."""

    counter: int = 0
    history: Tuple[int, ...] = ()


def counter_reducer(state: CounterState, action: CounterAction) -> CounterState:
    """Compute the next counter state."""
    if isinstance(action, Increment):
        return state._replace(counter=state.counter + 1)

    if isinstance(action, Decrement):
        return state._replace(counter=state.counter - 1)

    if isinstance(action, Reset):
        return state._replace(counter=0)

    if isinstance(action, AddToHistory):
        return state._replace(history=state.history + (state.counter,))

    return state


def create_counter_store(
    initial_state: Optional[CounterState] = None,
) -> Store[CounterState, CounterAction]:
    """Create a store for the counter slice."""
    if initial_state is None:
        initial_state = CounterState()

    return Store(initial_state, counter_reducer)
