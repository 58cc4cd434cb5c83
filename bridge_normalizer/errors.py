"""
Error types raised for bridged API responses.

- ApiClientError  → the expected response envelope is missing. This side
                    failed to parse the response; not a remote failure.
- ApiRequestError → the remote API reported a business-level failure.
- ApiSystemError  → the remote API reported an internal failure. Wins
                    over ApiRequestError when any error entry says so.

Request and system errors carry the normalized payload in ``data`` so
callers keep the diagnostic context. Nothing here is ever retried.
"""

from typing import Any, Optional


class ApiError(Exception):
    """Base class for every classified response failure."""

    prefix = "API error"

    def __init__(self, message: str, data: Optional[Any] = None):
        self.message = message
        self.data = data
        super().__init__(f"{self.prefix}: {message}")


class ApiClientError(ApiError):
    prefix = "API client error"


class ApiRequestError(ApiError):
    prefix = "API request error"


class ApiSystemError(ApiError):
    prefix = "API system error"
