"""Statecycle stores."""
from __future__ import annotations
import collections
import contextlib
import enum
import itertools
import logging
from anyio import Event
from typing import (
    Any,
    AsyncIterator,
    Callable,
    Deque,
    Dict,
    Generator,
    Generic,
    Optional,
    Tuple,
    TypeVar,
)

ActionT = TypeVar("ActionT")
StateT = TypeVar("StateT")
Observer = Callable[[StateT], Any]
Unsubscribe = Callable[[], None]

log = logging.getLogger(__name__)


class ReentrantDispatchError(RuntimeError):
    """An action was dispatched while another dispatch was still running."""


class SubscriptionStrategy(str, enum.Enum):
    """Message strategy to use for a subscription.

    Props:
        LATEST: Receive the latest state. Guarantees that the store's state
            will match the state in the notification, but may miss transitions.
        EVERY: Receive every state change. Guarantees that you will be notified
            of every state transition, but the store's state have transitioned
            again by the time the notification is handled.
    """

    LATEST = "latest"
    EVERY = "every"


class Subscription(AsyncIterator[Tuple[StateT, Optional[ActionT]]]):
    """An asynchronous iterator of state change events.

    Replayed notifications carry `None` in place of an action.
    """

    def __init__(self, strategy: SubscriptionStrategy) -> None:
        self._strategy = strategy
        self._notification_event = Event()
        self._queue: Deque[Tuple[StateT, Optional[ActionT]]] = collections.deque(
            maxlen=1 if strategy == SubscriptionStrategy.LATEST else None
        )

    def _notify(self, next_state: StateT, next_action: Optional[ActionT]) -> None:
        notification = (next_state, next_action)
        self._queue.append(notification)
        self._notification_event.set()

    async def __anext__(self) -> Tuple[StateT, Optional[ActionT]]:
        while len(self._queue) == 0:
            await self._notification_event.wait()
            self._notification_event = Event()

        notification = self._queue.popleft()
        return notification

    def __aiter__(self) -> AsyncIterator[Tuple[StateT, Optional[ActionT]]]:
        return self


class Store(Generic[StateT, ActionT]):
    """A state store.

    The store owns one state value and one reducer. The state only changes
    through `dispatch`, which replaces it with the reducer's result and then
    tells every observer about it.

    Args:
        initial_state: Initial state to use in the store.
        reducer: Callable taking `(state, action)` and returning the next state.
    """

    state: StateT

    def __init__(
        self,
        initial_state: StateT,
        reducer: Callable[[StateT, ActionT], StateT],
    ) -> None:
        if initial_state is None:
            raise TypeError("Initial state must be provided")

        if not callable(reducer):
            raise TypeError("Reducer must be callable")

        self._set_state(initial_state)
        self._reducer = reducer
        self._dispatching = False
        self._observer_ids = itertools.count()
        self._observers: Dict[int, Observer[StateT]] = {}
        self._subscriptions: Dict[Subscription[StateT, ActionT], bool] = {}

    def get_state(self) -> StateT:
        """Get the current state."""
        return self.state

    def dispatch(self, action: ActionT) -> StateT:
        """Dispatch an action into the store.

        Returns:
            The state after the action was applied.

        Raises:
            ReentrantDispatchError: Called from a reducer or an observer
                while a dispatch is in progress.
        """
        if self._dispatching:
            raise ReentrantDispatchError(
                f"Cannot dispatch {action!r} while a dispatch is in progress"
            )

        self._dispatching = True

        try:
            log.debug("Dispatching %r", action)
            self._compute_state(action)
            state = self.state

            for sub in self._subscriptions.keys():
                sub._notify(state, action)

            for observer_id, observer in list(self._observers.items()):
                if observer_id in self._observers:
                    observer(state)
        finally:
            self._dispatching = False

        return state

    def subscribe(
        self,
        observer: Observer[StateT],
        *,
        replay: bool = False,
    ) -> Unsubscribe:
        """Call an observer with the new state after every dispatch.

        Args:
            observer: Callable receiving each new state.
            replay: Also call the observer right away with the current state.

        Returns:
            A function that removes the observer. Calling it again does nothing.
        """
        if not callable(observer):
            raise TypeError("Observer must be callable")

        if replay:
            observer(self.state)

        observer_id = next(self._observer_ids)
        self._observers[observer_id] = observer
        log.debug("Observer %d added, %d total", observer_id, len(self._observers))

        def _unsubscribe() -> None:
            if self._observers.pop(observer_id, None) is not None:
                log.debug("Observer %d removed", observer_id)

        return _unsubscribe

    @contextlib.contextmanager
    def stream(
        self,
        strategy: SubscriptionStrategy = SubscriptionStrategy.LATEST,
        *,
        replay: bool = False,
    ) -> Generator[Subscription[StateT, ActionT], None, None]:
        """Create a subscription to receive notifications of state changes.

        Args:
            strategy: whether to receive the latest state change (default)
                or every state change.
            replay: queue the current state as the first notification.

        Returns:
            A context manager wrapping a subscription.
        """
        sub: Subscription[StateT, ActionT] = Subscription(strategy=strategy)

        if replay:
            sub._notify(self.state, None)

        self._subscriptions[sub] = True
        try:
            yield sub
        finally:
            del self._subscriptions[sub]

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "state":
            raise TypeError("Cannot overwrite state attribute.")
        super().__setattr__(name, value)

    def _set_state(self, value: StateT) -> None:
        super().__setattr__("state", value)

    def _compute_state(self, action: ActionT) -> None:
        previous = self.state

        try:
            state = self._reducer(previous, action)
        except Exception:
            log.exception("Reducer failed on %r; state left unchanged", action)
            raise

        if state is previous:
            log.debug("State unchanged by %r", action)

        self._set_state(state)
