"""
Tests for the API Client

Tests for fetching and decoding posts, with the endpoint faked by
httpx.MockTransport.
"""

import asyncio
import json
import pytest
import sys
from pathlib import Path

import httpx

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from api_calling_methods.api.client import APIClient, FetchResult, Post, parse_posts
from api_calling_methods.api.errors import (
    DecodeFailure,
    FetchError,
    InvalidConfiguration,
    NetworkFailure,
)
from api_calling_methods.config import config


URL = "https://jsonplaceholder.typicode.com/posts"


def make_client(handler, url=URL):
    """Create an APIClient whose requests are answered by handler."""
    return APIClient(url=url, transport=httpx.MockTransport(handler))


def respond(status=200, body=b""):
    """Handler factory returning a fixed response and recording requests."""
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(status, content=body)

    handler.calls = calls
    return handler


class TestAPIClient:
    """Tests for API client functionality."""

    @pytest.fixture
    def client(self):
        """Create an APIClient instance."""
        return APIClient()

    def test_initialization(self, client):
        """Test that API client defaults to the configured endpoint."""
        assert client.url == "https://jsonplaceholder.typicode.com/posts"
        assert client.url == config.api.posts_url
        assert client.timeout is None

    def test_single_post(self):
        """Test the example response decodes to one post."""
        handler = respond(body=b'[{"id":1,"userId":1,"title":"t","body":"b"}]')
        result = asyncio.run(make_client(handler).fetch_posts())

        assert result.ok
        assert result.posts == [Post(id=1, user_id=1, title="t", body="b")]

    def test_sends_one_plain_get(self):
        """Test that exactly one GET without query or body is issued."""
        handler = respond(body=b"[]")
        asyncio.run(make_client(handler).fetch_posts())

        assert len(handler.calls) == 1
        request = handler.calls[0]
        assert request.method == "GET"
        assert str(request.url) == URL
        assert request.url.query == b""
        assert request.content == b""

    def test_keeps_server_order(self):
        """Test that posts keep the order of the response."""
        items = [
            {"id": i, "userId": 1, "title": f"title {i}", "body": "body"}
            for i in (3, 1, 2)
        ]
        handler = respond(body=json.dumps(items).encode())
        result = asyncio.run(make_client(handler).fetch_posts())

        assert [post.id for post in result.posts] == [3, 1, 2]

    def test_empty_array(self):
        """Test that an empty array is a successful, empty result."""
        result = asyncio.run(make_client(respond(body=b"[]")).fetch_posts())

        assert result.ok
        assert result.posts == []

    def test_not_json(self):
        """Test that a non-JSON body is a decode failure."""
        result = asyncio.run(make_client(respond(body=b"not json")).fetch_posts())

        assert not result.ok
        assert isinstance(result.error, DecodeFailure)
        assert result.error.user_message.startswith("Decoding error: ")

    def test_empty_body(self):
        """Test that an empty body reports no data."""
        result = asyncio.run(make_client(respond(body=b"")).fetch_posts())

        assert isinstance(result.error, DecodeFailure)
        assert result.error.message == "No data received"

    def test_deeply_nested_body(self):
        """Test that nesting beyond the decoder's recursion limit is a decode failure."""
        handler = respond(body=b"[" * 100000 + b"]" * 100000)
        result = asyncio.run(make_client(handler).fetch_posts())

        assert not result.ok
        assert isinstance(result.error, DecodeFailure)

    def test_wrong_shape(self):
        """Test that a JSON object instead of an array is rejected."""
        handler = respond(body=b'{"posts": []}')
        result = asyncio.run(make_client(handler).fetch_posts())

        assert isinstance(result.error, DecodeFailure)

    def test_http_error_status(self):
        """Test that non-2xx statuses are network failures."""
        for status in (404, 500):
            handler = respond(status=status, body=b"[]")
            result = asyncio.run(make_client(handler).fetch_posts())

            assert isinstance(result.error, NetworkFailure)
            assert str(status) in result.error.message
            assert result.error.user_message.startswith("Error: ")

    def test_connection_refused(self):
        """Test that a transport error is a network failure."""
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        result = asyncio.run(make_client(handler).fetch_posts())

        assert isinstance(result.error, NetworkFailure)
        assert result.error.message == "Connection refused"

    def test_timeout(self):
        """Test that a timeout is a network failure."""
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = asyncio.run(make_client(handler).fetch_posts())

        assert isinstance(result.error, NetworkFailure)

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.com/posts", "https://"])
    def test_invalid_url(self, url):
        """Test that a malformed URL fails before any request."""
        handler = respond(body=b"[]")
        result = asyncio.run(make_client(handler, url=url).fetch_posts())

        assert isinstance(result.error, InvalidConfiguration)
        assert result.error.user_message == "Invalid URL"
        assert handler.calls == []

    def test_test_connection(self):
        """Test the connection check for reachable and failing endpoints."""
        assert asyncio.run(make_client(respond(body=b"[]")).test_connection()) is True
        assert asyncio.run(make_client(respond(status=503)).test_connection()) is False
        assert asyncio.run(make_client(respond(), url="nope").test_connection()) is False


class TestPostDecoding:
    """Tests for decoding post records."""

    def test_extra_keys_ignored(self):
        """Test that unknown keys do not break decoding."""
        post = Post.from_dict(
            {"id": 7, "userId": 2, "title": "x", "body": "y", "tags": ["a"]}
        )

        assert post == Post(id=7, user_id=2, title="x", body="y")

    def test_missing_field(self):
        """Test that a missing field is reported by name."""
        with pytest.raises(DecodeFailure, match="userId"):
            Post.from_dict({"id": 1, "title": "t", "body": "b"})

    @pytest.mark.parametrize("item", [
        {"id": "1", "userId": 1, "title": "t", "body": "b"},
        {"id": True, "userId": 1, "title": "t", "body": "b"},
        {"id": 1, "userId": 1, "title": None, "body": "b"},
        {"id": 1, "userId": 1.5, "title": "t", "body": "b"},
    ])
    def test_wrong_types(self, item):
        """Test that mistyped fields are rejected."""
        with pytest.raises(DecodeFailure):
            Post.from_dict(item)

    def test_non_object_element(self):
        """Test that array elements must be objects."""
        with pytest.raises(DecodeFailure):
            parse_posts([1, 2, 3])

    def test_post_is_immutable(self):
        """Test that posts cannot be modified once built."""
        post = Post(id=1, user_id=1, title="t", body="b")

        with pytest.raises(AttributeError):
            post.title = "changed"


class TestFetchResult:
    """Tests for the fetch outcome wrapper."""

    def test_success(self):
        posts = [Post(id=1, user_id=1, title="t", body="b")]
        result = FetchResult.success(posts)

        assert result.ok
        assert result.posts == posts
        assert result.error is None

    def test_failure(self):
        result = FetchResult.failure(NetworkFailure("down"))

        assert not result.ok
        assert result.posts is None
        assert isinstance(result.error, FetchError)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
