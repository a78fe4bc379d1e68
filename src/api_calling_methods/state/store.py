"""
Presentation State Module

Holds the UI-facing snapshot of the latest fetch outcome. Changes are
expressed as actions and applied by a pure reducer; PostsStore is the
single place where the current snapshot is replaced.

Completions carry the FetchToken handed out when the fetch began, so a
result belonging to a superseded request, or to a session that was reset
in the meantime, never overwrites newer state.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Union

from ..api import FetchResult, Post


logger = logging.getLogger(__name__)


class FetchPhase(Enum):
    """Lifecycle of the presentation state."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchToken:
    """Identifies one fetch: the request number and the session it started in."""
    request_id: int
    session: int


@dataclass(frozen=True)
class FetchState:
    """Immutable snapshot rendered by the screen."""
    posts: Tuple[Post, ...] = ()
    error_message: Optional[str] = None
    phase: FetchPhase = FetchPhase.IDLE
    request_id: int = 0
    session: int = 0

    @property
    def is_loading(self) -> bool:
        return self.phase is FetchPhase.LOADING

    @property
    def token(self) -> FetchToken:
        """Token of the most recently started request."""
        return FetchToken(self.request_id, self.session)


@dataclass(frozen=True)
class FetchStarted:
    pass


@dataclass(frozen=True)
class FetchSucceeded:
    posts: Tuple[Post, ...]
    token: Optional[FetchToken] = None


@dataclass(frozen=True)
class FetchFailed:
    message: str
    token: Optional[FetchToken] = None


@dataclass(frozen=True)
class StateReset:
    pass


Action = Union[FetchStarted, FetchSucceeded, FetchFailed, StateReset]


def _accepts(state: FetchState, token: Optional[FetchToken]) -> bool:
    """Whether a completion tagged with token may update state."""
    if token is None:
        return True
    return token == state.token and state.is_loading


def reduce(state: FetchState, action: Action) -> FetchState:
    """
    Compute the next state for an action.

    Returns the same object when the action is discarded.
    """
    if isinstance(action, FetchStarted):
        # Previous posts stay visible while reloading
        return replace(
            state,
            phase=FetchPhase.LOADING,
            error_message=None,
            request_id=state.request_id + 1,
        )

    if isinstance(action, StateReset):
        return replace(
            state,
            posts=(),
            error_message=None,
            phase=FetchPhase.LOADING if state.is_loading else FetchPhase.IDLE,
            session=state.session + 1,
        )

    if isinstance(action, (FetchSucceeded, FetchFailed)):
        token = action.token
        if token is not None and token.request_id == state.request_id \
                and token.session != state.session and state.is_loading:
            # Current request finished after a reset: stop loading, drop the outcome
            return replace(state, phase=FetchPhase.IDLE)
        if not _accepts(state, token):
            return state

        if isinstance(action, FetchSucceeded):
            return replace(
                state,
                posts=tuple(action.posts),
                error_message=None,
                phase=FetchPhase.SUCCEEDED,
            )
        return replace(state, error_message=action.message, phase=FetchPhase.FAILED)

    raise TypeError(f"Unknown action: {action!r}")


Subscriber = Callable[[FetchState], None]


class PostsStore:
    """
    Owner of the current FetchState.

    Must only be touched from the event-loop thread; no locking is done.
    """

    def __init__(self, initial: Optional[FetchState] = None):
        self._state = initial if initial is not None else FetchState()
        self._subscribers: List[Subscriber] = []

    @property
    def state(self) -> FetchState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked with every new snapshot.

        Returns:
            A function that removes the callback.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(self, action: Action) -> FetchState:
        """Apply an action and notify subscribers if the state changed."""
        new_state = reduce(self._state, action)
        if new_state is self._state:
            logger.debug(f"Discarded stale {type(action).__name__}")
            return self._state

        self._state = new_state
        logger.debug(f"{type(action).__name__} -> {new_state.phase.value}")
        for callback in list(self._subscribers):
            callback(new_state)
        return new_state

    def begin_fetch(self) -> FetchToken:
        """Mark a fetch as in flight and return its token."""
        return self.dispatch(FetchStarted()).token

    def complete_success(
        self,
        posts: Sequence[Post],
        token: Optional[FetchToken] = None
    ) -> FetchState:
        return self.dispatch(FetchSucceeded(tuple(posts), token))

    def complete_failure(
        self,
        message: str,
        token: Optional[FetchToken] = None
    ) -> FetchState:
        return self.dispatch(FetchFailed(message, token))

    def complete(self, token: Optional[FetchToken], result: FetchResult) -> FetchState:
        """Apply a client result as a success or a failure."""
        if result.ok:
            return self.complete_success(result.posts, token)
        return self.complete_failure(result.error.user_message, token)

    def reset(self) -> FetchState:
        """Clear posts and error; loading flag is left as is."""
        return self.dispatch(StateReset())
