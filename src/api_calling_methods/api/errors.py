"""
Fetch Errors

Typed failures reported by the API client. Every failure is terminal
for the fetch that produced it and carries a human-readable message
for the screen.
"""


class FetchError(Exception):
    """Base class for all failures of a posts fetch."""

    prefix = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:
        """Message shown to the user."""
        return f"{self.prefix}: {self.message}"


class InvalidConfiguration(FetchError):
    """The configured endpoint URL is malformed."""

    @property
    def user_message(self) -> str:
        return "Invalid URL"


class NetworkFailure(FetchError):
    """Transport error or non-2xx response."""


class DecodeFailure(FetchError):
    """Response body does not match the expected post records."""

    prefix = "Decoding error"
