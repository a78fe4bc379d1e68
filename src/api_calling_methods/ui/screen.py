"""
Posts Screen Module

Text counterpart of the single-screen posts list. Wires the API client
to the presentation store and renders the current snapshot.
"""

import logging
import textwrap
from typing import List, Optional

from ..api import APIClient
from ..config import config
from ..state import FetchState, PostsStore


logger = logging.getLogger(__name__)


def _clip(text: str, max_lines: int, width: int) -> List[str]:
    """Wrap text and keep at most max_lines, marking truncation with '...'."""
    lines = textwrap.wrap(" ".join(text.split()), width=width) or [""]
    if len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    kept[-1] = kept[-1][:max(width - 3, 0)].rstrip() + "..."
    return kept


def render(state: FetchState, mode: Optional[str] = None, max_posts: Optional[int] = None) -> str:
    """
    Render a FetchState as text.

    Args:
        state: Snapshot to render.
        mode: Selected mode label shown in the header.
        max_posts: Only render the first max_posts posts (all if None, none if negative).

    Returns:
        The rendered screen.
    """
    display = config.display
    width = display.line_width
    out = [display.screen_title, "=" * width]

    if mode:
        out.append(f"Method: {mode}")
    if state.is_loading:
        out.append("Loading...")
    if state.error_message is not None:
        out.append(state.error_message)

    posts = state.posts if max_posts is None else state.posts[:max(max_posts, 0)]
    for post in posts:
        out.append("-" * width)
        out.extend(_clip(post.title, display.title_line_limit, width))
        out.extend(
            "    " + line
            for line in _clip(post.body, display.body_line_limit, width - 4)
        )

    if len(posts) < len(state.posts):
        out.append(f"... {len(state.posts) - len(posts)} more")
    return "\n".join(out)


class PostsScreen:
    """
    Screen controller for the posts list.

    Only drives the store from the event loop it runs on.
    """

    def __init__(
        self,
        client: Optional[APIClient] = None,
        store: Optional[PostsStore] = None,
        mode: Optional[str] = None
    ):
        self.client = client or APIClient()
        self.store = store or PostsStore()
        self.mode = mode or config.display.modes[0]
        logger.info(f"PostsScreen initialized (mode: {self.mode})")

    @property
    def state(self) -> FetchState:
        return self.store.state

    async def refresh(self) -> FetchState:
        """
        Fetch posts and apply the outcome to the store.

        Returns:
            The state after the fetch completed.

        Raises:
            Exception: Anything unexpected from the client is re-raised
                after the fetch has been completed as a failure.
        """
        token = self.store.begin_fetch()
        try:
            result = await self.client.fetch_posts()
        except Exception as e:
            self.store.complete_failure(f"Error: {e}", token)
            logger.exception("Unexpected error during refresh")
            raise
        state = self.store.complete(token, result)

        if state.error_message is not None:
            logger.error(f"Refresh failed: {state.error_message}")
        else:
            logger.info(f"Showing {len(state.posts)} posts")
        return state

    def select_mode(self, mode: str) -> FetchState:
        """
        Switch the mode selector; a change clears posts and error.

        Raises:
            ValueError: If mode is not one of the configured labels.
        """
        if mode not in config.display.modes:
            raise ValueError(f"Unknown mode: {mode!r}")
        if mode == self.mode:
            return self.state

        logger.info(f"Mode changed: {self.mode} -> {mode}")
        self.mode = mode
        return self.store.reset()

    def render(self, max_posts: Optional[int] = None) -> str:
        return render(self.state, self.mode, max_posts)
