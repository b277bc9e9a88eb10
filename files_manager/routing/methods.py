from __future__ import annotations

from enum import Enum

__all__ = ["HttpMethod"]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: str | HttpMethod) -> HttpMethod:
        """Return the member for `value`, ignoring case.

        Raises:
            ValueError: if `value` is not a supported HTTP method.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"HTTP method must be a string, got {type(value).__name__}")
        return cls(value.strip().upper())
