"""
API Client Module

Provides the async HTTP client for fetching posts from JSONPlaceholder API.
"""

from .client import APIClient, FetchResult, Post, parse_posts
from .errors import DecodeFailure, FetchError, InvalidConfiguration, NetworkFailure

__all__ = [
    "APIClient",
    "FetchResult",
    "Post",
    "parse_posts",
    "FetchError",
    "InvalidConfiguration",
    "NetworkFailure",
    "DecodeFailure",
]
