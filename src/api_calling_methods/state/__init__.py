"""
Presentation State Module

Provides the fetch state snapshot, its actions and reducer, and the store
that owns the current snapshot.
"""

from .store import (
    FetchFailed,
    FetchPhase,
    FetchStarted,
    FetchState,
    FetchSucceeded,
    FetchToken,
    PostsStore,
    StateReset,
    reduce,
)

__all__ = [
    "FetchFailed",
    "FetchPhase",
    "FetchStarted",
    "FetchState",
    "FetchSucceeded",
    "FetchToken",
    "PostsStore",
    "StateReset",
    "reduce",
]
