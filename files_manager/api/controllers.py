"""Capability interfaces for the externally-implemented controllers.

Each method receives the inbound request and returns the response to send.
Authentication, persistence and statistics live behind these interfaces.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from fastapi import Request, Response

__all__ = ["AppController", "AuthController", "UsersController"]


@runtime_checkable
class AppController(Protocol):
    async def get_status(self, request: Request) -> Response:
        """Report process health."""
        ...

    async def get_stats(self, request: Request) -> Response:
        """Report aggregate counts."""
        ...


@runtime_checkable
class AuthController(Protocol):
    async def get_connect(self, request: Request) -> Response:
        """Establish an authenticated session."""
        ...

    async def get_disconnect(self, request: Request) -> Response:
        """Terminate an authenticated session."""
        ...


@runtime_checkable
class UsersController(Protocol):
    async def get_me(self, request: Request) -> Response:
        """Return the identity of the current session."""
        ...

    async def post_new(self, request: Request) -> Response:
        """Create a new user record."""
        ...
