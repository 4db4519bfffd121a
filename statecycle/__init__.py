"""Statecycle - unidirectional state management for Python."""
import logging

from .reducer import CombinedReducer, Reducer, combine_reducers, fold_actions, reducer
from .store import ReentrantDispatchError, Store, Subscription, SubscriptionStrategy

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CombinedReducer",
    "Reducer",
    "ReentrantDispatchError",
    "Store",
    "Subscription",
    "SubscriptionStrategy",
    "combine_reducers",
    "fold_actions",
    "reducer",
]
