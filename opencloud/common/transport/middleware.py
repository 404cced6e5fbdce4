"""Request/response interceptors applied through a :class:`HandlerStack`.

A middleware sees every outgoing request before it is sent and every
response before it is returned to the caller. Synchronous hooks are the
primary interface; async clients call the ``*_async`` variants, which
default to the synchronous ones.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

import httpx

from opencloud.common.auth import Token
from opencloud.common.error import ErrorBuilder
from opencloud.infrastructure.observability import get_logger

from .formatter import MessageFormatter

logger = get_logger(__name__)

TokenGenerator = Callable[[], Token]


class Middleware:
    """Base interceptor; subclasses override the hooks they need."""

    def on_request(self, request: httpx.Request) -> None:
        pass

    def on_response(self, response: httpx.Response) -> None:
        pass

    async def on_request_async(self, request: httpx.Request) -> None:
        self.on_request(request)

    async def on_response_async(self, response: httpx.Response) -> None:
        self.on_response(response)


class HttpErrors(Middleware):
    """Turn 4xx/5xx responses into :class:`BadResponseError`."""

    def __init__(self, errors: ErrorBuilder | None = None) -> None:
        self.errors = errors or ErrorBuilder()

    def on_response(self, response: httpx.Response) -> None:
        if response.status_code < 400:
            return
        response.read()
        raise self.errors.http_error(response.request, response)

    async def on_response_async(self, response: httpx.Response) -> None:
        if response.status_code < 400:
            return
        await response.aread()
        raise self.errors.http_error(response.request, response)


class AuthHandler(Middleware):
    """Attach ``X-Auth-Token`` to requests, regenerating the token when needed.

    Token-generation requests themselves (``POST .../tokens``) pass through
    untouched so that authenticating never recurses into itself.
    """

    def __init__(self, token_generator: TokenGenerator, token: Token | None = None) -> None:
        self.token_generator = token_generator
        self.token = token

    def should_ignore(self, request: httpx.Request) -> bool:
        return request.method == "POST" and request.url.path.rstrip("/").endswith("tokens")

    def _needs_token(self) -> bool:
        return self.token is None or self.token.has_expired()

    def on_request(self, request: httpx.Request) -> None:
        if self.should_ignore(request):
            return
        if self._needs_token():
            logger.debug("Generating new auth token for %s %s", request.method, request.url)
            self.token = self.token_generator()
        request.headers["X-Auth-Token"] = self.token.id

    async def on_request_async(self, request: httpx.Request) -> None:
        if self.should_ignore(request):
            return
        if self._needs_token():
            logger.debug("Generating new auth token for %s %s", request.method, request.url)
            self.token = await asyncio.to_thread(self.token_generator)
        request.headers["X-Auth-Token"] = self.token.id


class Log(Middleware):
    """Log each completed transaction through ``logger``."""

    def __init__(
        self,
        logger: logging.Logger,
        formatter: MessageFormatter,
        level: int = logging.INFO,
    ) -> None:
        self.logger = logger
        self.formatter = formatter
        self.level = level

    @property
    def needs_body(self) -> bool:
        # Reading closes the stream, which is when httpx records elapsed time
        return any(p in self.formatter.template for p in ("{res_body}", "{elapsed_ms}"))

    def on_response(self, response: httpx.Response) -> None:
        if self.needs_body:
            response.read()
        self.logger.log(self.level, self.formatter.format(response.request, response))

    async def on_response_async(self, response: httpx.Response) -> None:
        if self.needs_body:
            await response.aread()
        self.logger.log(self.level, self.formatter.format(response.request, response))


def http_errors(errors: ErrorBuilder | None = None) -> HttpErrors:
    return HttpErrors(errors)


def auth_handler(token_generator: TokenGenerator, token: Token | None = None) -> AuthHandler:
    return AuthHandler(token_generator, token)


def log(
    logger: logging.Logger,
    formatter: MessageFormatter,
    level: int = logging.INFO,
) -> Log:
    return Log(logger, formatter, level)


__all__ = [
    "AuthHandler",
    "HttpErrors",
    "Log",
    "Middleware",
    "auth_handler",
    "http_errors",
    "log",
]
