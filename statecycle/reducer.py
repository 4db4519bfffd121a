"""Statecycle reducers."""
from __future__ import annotations
import functools
import inspect
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Tuple,
    Type,
    TypeVar,
    cast,
)

ActionT = TypeVar("ActionT")
StateT = TypeVar("StateT")
ReducerFunc = Callable[[StateT, Any], StateT]
HandlerMethodT = Callable[[Any, StateT, ActionT], StateT]

_ACTION_TYPE_ATTR = "__action_type__"


class Reducer(Generic[StateT, ActionT]):
    '''A reducer built from handler methods.

    Methods marked with `@reducer(ActionType)` are collected when the reducer
    is created. Any action that matches no handler leaves the state as-is.

    Example:
        ```python
        class Increment(NamedTuple):
            """Action to increment the counter."""

        class CounterReducer(Reducer[int, Increment]):
            @reducer(Increment)
            def increment(self, state: int, action: Increment) -> int:
                return state + 1
        ```
    '''

    def __init__(self) -> None:
        self._handlers: List[Tuple[Type[ActionT], Callable[..., StateT]]] = [
            (getattr(member, _ACTION_TYPE_ATTR), getattr(self, name))
            for name, member in inspect.getmembers(type(self))
            if callable(member) and hasattr(member, _ACTION_TYPE_ATTR)
        ]

    def reduce(self, state: StateT, action: ActionT) -> StateT:
        """Compute the next state for an action."""
        for action_type, handler in self._handlers:
            if isinstance(action, action_type):
                state = handler(state, action, __reducing__=True)

        return state

    def __call__(self, state: StateT, action: ActionT) -> StateT:
        return self.reduce(state, action)


def reducer(
    action_type: Any,
) -> Callable[[HandlerMethodT[StateT, ActionT]], HandlerMethodT[StateT, ActionT]]:
    """Mark a Reducer method as the handler for an action type.

    Args:
        action_type: An action class, or a tuple of action classes,
            that the method handles.
    """

    def _decorator(
        func: HandlerMethodT[StateT, ActionT]
    ) -> HandlerMethodT[StateT, ActionT]:
        @functools.wraps(func)
        def _wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            is_reducer = isinstance(self, Reducer)
            ok_to_call = kwargs.pop("__reducing__", False)

            if not is_reducer:
                raise TypeError("@reducer must be applied to methods of a Reducer")

            if not ok_to_call:
                raise TypeError("Do not call handlers directly; use Reducer.reduce")

            return func(self, *args, **kwargs)

        setattr(_wrapper, _ACTION_TYPE_ATTR, action_type)
        return cast(HandlerMethodT[StateT, ActionT], _wrapper)

    return _decorator


class CombinedReducer(Reducer[StateT, Any]):
    '''Combine slice reducers into a reducer over a composite state.

    Every slice reducer receives its own field of the composite state and
    the same action. Slices never see each other's state.

    Args:
        combine_states: A class or factory function that will return
            the composite state when passed the substates by name.
        **reducers: Slice reducers, by substate name.

    Example:
        ```python
        class AppState(NamedTuple):
            counter: int
            mirror: int


        app_reducer = CombinedReducer(
            AppState,
            counter=CounterReducer(),
            mirror=MirrorReducer(),
        )
        ```
    '''

    def __init__(
        self,
        combine_states: Callable[..., StateT],
        **reducers: ReducerFunc[Any],
    ) -> None:
        super().__init__()

        if not reducers:
            raise TypeError("At least one slice reducer must be provided")

        for name, slice_reducer in reducers.items():
            if not callable(slice_reducer):
                raise TypeError(f"Reducer for slice '{name}' must be callable")

        self._combine_states = combine_states
        self._reducers: Dict[str, ReducerFunc[Any]] = dict(reducers)

    @property
    def slice_names(self) -> Tuple[str, ...]:
        """Names of the combined slices."""
        return tuple(self._reducers)

    def reduce(self, state: StateT, action: Any) -> StateT:
        substates: Dict[str, Any] = {}
        changed = False

        for name, slice_reducer in self._reducers.items():
            try:
                substate = getattr(state, name)
            except AttributeError as e:
                raise TypeError(str(e)) from e

            next_substate = slice_reducer(substate, action)
            changed = changed or next_substate is not substate
            substates[name] = next_substate

        if not changed:
            return state

        return self._combine_states(**substates)


def combine_reducers(
    combine_states: Callable[..., StateT],
    **reducers: ReducerFunc[Any],
) -> CombinedReducer[StateT]:
    """Combine slice reducers; see `CombinedReducer`."""
    return CombinedReducer(combine_states, **reducers)


def fold_actions(
    reduce_func: ReducerFunc[StateT],
    state: StateT,
    actions: Iterable[Any],
) -> StateT:
    """Apply a reducer to each action in order, starting from a state."""
    return functools.reduce(reduce_func, actions, state)
