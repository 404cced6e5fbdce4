"""Ordered chain of middleware, exposed to httpx as event hooks."""

from __future__ import annotations

from typing import Any, Callable, Iterator

import httpx

from .middleware import Middleware, http_errors


class HandlerStack:
    """An ordered stack of :class:`Middleware`.

    Requests pass through the middleware in the order they were pushed;
    responses travel back in reverse order, so the first middleware pushed
    is the outermost layer. The hooks returned by :meth:`event_hooks` read
    the stack at call time, so middleware pushed after a client was built
    still applies.
    """

    def __init__(self) -> None:
        self._stack: list[tuple[Middleware, str | None]] = []

    @classmethod
    def create(cls) -> "HandlerStack":
        """Return a stack seeded with the HTTP error middleware."""
        stack = cls()
        stack.push(http_errors(), "http_errors")
        return stack

    def push(self, middleware: Middleware, name: str | None = None) -> None:
        self._stack.append((middleware, name))

    def unshift(self, middleware: Middleware, name: str | None = None) -> None:
        self._stack.insert(0, (middleware, name))

    def remove(self, name: str) -> None:
        self._stack = [entry for entry in self._stack if entry[1] != name]

    def has(self, name: str) -> bool:
        return any(entry_name == name for _, entry_name in self._stack)

    def __iter__(self) -> Iterator[Middleware]:
        return (middleware for middleware, _ in list(self._stack))

    def __len__(self) -> int:
        return len(self._stack)

    def __repr__(self) -> str:
        names = [name or type(mw).__name__ for mw, name in self._stack]
        return f"HandlerStack({names!r})"

    # -------------------- httpx integration --------------------
    def _on_request(self, request: httpx.Request) -> None:
        for middleware in self:
            middleware.on_request(request)

    def _on_response(self, response: httpx.Response) -> None:
        for middleware in reversed(list(self)):
            middleware.on_response(response)

    async def _on_request_async(self, request: httpx.Request) -> None:
        for middleware in self:
            await middleware.on_request_async(request)

    async def _on_response_async(self, response: httpx.Response) -> None:
        for middleware in reversed(list(self)):
            await middleware.on_response_async(response)

    def event_hooks(self) -> dict[str, list[Callable[..., Any]]]:
        """Hooks for an :class:`httpx.Client`."""
        return {"request": [self._on_request], "response": [self._on_response]}

    def async_event_hooks(self) -> dict[str, list[Callable[..., Any]]]:
        """Hooks for an :class:`httpx.AsyncClient`."""
        return {
            "request": [self._on_request_async],
            "response": [self._on_response_async],
        }


__all__ = ["HandlerStack"]
