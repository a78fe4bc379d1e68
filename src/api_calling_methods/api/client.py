"""
API Client Module

Async HTTP client for fetching posts from the JSONPlaceholder API.
Each call performs exactly one GET and reports exactly one outcome:
the decoded posts or a typed FetchError. Nothing is retried or cached.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

from ..config import config
from .errors import DecodeFailure, FetchError, InvalidConfiguration, NetworkFailure


logger = logging.getLogger(__name__)


# (attribute, wire key, type)
_POST_FIELDS = (
    ("id", "id", int),
    ("user_id", "userId", int),
    ("title", "title", str),
    ("body", "body", str),
)


@dataclass(frozen=True)
class Post:
    """Represents a post from the API."""
    id: int
    user_id: int
    title: str
    body: str

    @classmethod
    def from_dict(cls, item: Any) -> "Post":
        """
        Build a Post from one decoded JSON object.

        Unknown keys are ignored.

        Raises:
            DecodeFailure: If the object is missing a field or a field has
                the wrong type.
        """
        if not isinstance(item, dict):
            raise DecodeFailure(f"Expected a post object, got {type(item).__name__}")

        values = {}
        for attribute, key, expected in _POST_FIELDS:
            if key not in item:
                raise DecodeFailure(f"Missing field '{key}'")
            value = item[key]
            # bool is a subclass of int but never a valid id
            if isinstance(value, bool) or not isinstance(value, expected):
                raise DecodeFailure(
                    f"Field '{key}' should be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
            values[attribute] = value
        return cls(**values)


def parse_posts(data: Any) -> List[Post]:
    """
    Convert a decoded JSON document into posts, keeping server order.

    Raises:
        DecodeFailure: If the document is not an array of post objects.
    """
    if not isinstance(data, list):
        raise DecodeFailure(f"Expected a JSON array, got {type(data).__name__}")
    return [Post.from_dict(item) for item in data]


@dataclass(frozen=True)
class FetchResult:
    """Terminal outcome of one fetch: either posts or an error."""
    posts: Optional[List[Post]] = None
    error: Optional[FetchError] = None

    @classmethod
    def success(cls, posts: List[Post]) -> "FetchResult":
        return cls(posts=list(posts))

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


class APIClient:
    """
    HTTP client for the JSONPlaceholder API.

    Features:
    - URL validated before any I/O
    - Transport, status and decode failures mapped to typed errors
    - Timeout left to httpx unless configured
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the API client.

        Args:
            url: Posts endpoint (uses config default if None).
            timeout: Request timeout in seconds (uses config, then httpx default, if None).
            transport: Optional httpx transport, used to fake the endpoint.
        """
        self.url = url if url is not None else config.api.posts_url
        self.timeout = timeout if timeout is not None else config.api.timeout_seconds
        self._transport = transport
        logger.info(f"APIClient initialized (url: {self.url})")

    async def fetch_posts(self) -> FetchResult:
        """
        Fetch posts from the API.

        Never raises for expected failures; they are returned in the result.

        Returns:
            FetchResult with the posts (possibly empty) or a FetchError.
        """
        logger.info(f"Fetching posts from {self.url}")

        try:
            url = self._validate_url()
            posts = await self._fetch(url)
        except FetchError as e:
            logger.warning(f"Fetch failed ({type(e).__name__}): {e.message}")
            return FetchResult.failure(e)

        logger.info(f"Fetched {len(posts)} posts successfully")
        return FetchResult.success(posts)

    async def test_connection(self) -> bool:
        """
        Check that the endpoint answers with a 2xx status.

        Returns:
            True if reachable, False otherwise.
        """
        try:
            url = self._validate_url()
            async with self._open() as client:
                response = await client.get(url)
        except (FetchError, httpx.HTTPError) as e:
            logger.warning(f"Connection test failed: {e}")
            return False

        logger.debug(f"Connection test returned {response.status_code}")
        return response.is_success

    def _open(self) -> httpx.AsyncClient:
        """Create an AsyncClient honouring the configured timeout and transport."""
        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    def _validate_url(self) -> httpx.URL:
        """
        Parse the configured URL.

        Raises:
            InvalidConfiguration: If the URL cannot be parsed, is not
                http(s), or has no host.
        """
        try:
            url = httpx.URL(self.url)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidConfiguration(str(e)) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidConfiguration(f"Malformed URL: {self.url!r}")
        return url

    async def _fetch(self, url: httpx.URL) -> List[Post]:
        """
        Perform the GET and decode the body.

        Raises:
            NetworkFailure: On transport errors or non-2xx responses.
            DecodeFailure: On an empty or malformed body.
        """
        async with self._open() as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise NetworkFailure(
                    f"Request failed with status {e.response.status_code}"
                ) from e
            except httpx.HTTPError as e:
                raise NetworkFailure(str(e) or type(e).__name__) from e

        if not response.content.strip():
            raise DecodeFailure("No data received")

        try:
            data = response.json()
        # Deeply nested arrays exhaust the decoder's recursion limit
        except (ValueError, RecursionError) as e:
            raise DecodeFailure(f"Invalid JSON: {e}") from e

        return parse_posts(data)
