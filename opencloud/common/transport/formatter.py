"""Template-based formatting of HTTP transactions for debug logging."""

from __future__ import annotations

import re
from typing import Callable

import httpx

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _headers(message: httpx.Request | httpx.Response | None) -> str:
    if message is None:
        return ""
    return "\r\n".join(f"{k}: {v}" for k, v in message.headers.items())


def _body(message: httpx.Request | httpx.Response | None) -> str:
    if message is None:
        return ""
    try:
        return message.content.decode("utf-8", errors="replace")
    except (httpx.RequestNotRead, httpx.ResponseNotRead):
        return "[streamed body]"


def _elapsed_ms(response: httpx.Response | None) -> str:
    if response is None:
        return ""
    try:
        return f"{response.elapsed.total_seconds() * 1000:.0f}"
    except RuntimeError:
        # elapsed is only known once the response has been closed
        return "-"


class MessageFormatter:
    """Render a request/response pair from a template string.

    Supported placeholders: ``{method}``, ``{uri}``, ``{target}``,
    ``{version}``, ``{host}``, ``{code}``, ``{phrase}``, ``{req_headers}``,
    ``{res_headers}``, ``{req_body}``, ``{res_body}`` and ``{elapsed_ms}``.
    Unknown placeholders are left untouched.
    """

    CLF = '{host} "{method} {target} HTTP/{version}" {code}'
    DEBUG = (
        ">>>>>>>>\n{method} {target} HTTP/{version}\n{req_headers}\n\n{req_body}\n"
        "<<<<<<<<\n{code} {phrase}\n{res_headers}\n\n{res_body}\n"
        "--------\n{elapsed_ms} ms"
    )
    SHORT = "{method} {uri} -> {code} ({elapsed_ms} ms)"

    def __init__(self, template: str = CLF) -> None:
        self.template = template

    def format(
        self, request: httpx.Request, response: httpx.Response | None = None
    ) -> str:
        values: dict[str, Callable[[], str]] = {
            "method": lambda: request.method,
            "uri": lambda: str(request.url),
            "target": lambda: request.url.raw_path.decode("ascii"),
            "host": lambda: request.url.host,
            "version": lambda: (
                response.http_version.replace("HTTP/", "") if response is not None else "1.1"
            ),
            "code": lambda: str(response.status_code) if response is not None else "NULL",
            "phrase": lambda: response.reason_phrase if response is not None else "",
            "req_headers": lambda: _headers(request),
            "res_headers": lambda: _headers(response),
            "req_body": lambda: _body(request),
            "res_body": lambda: _body(response),
            "elapsed_ms": lambda: _elapsed_ms(response),
        }

        def replace(match: re.Match[str]) -> str:
            producer = values.get(match.group(1))
            return producer() if producer is not None else match.group(0)

        return _PLACEHOLDER.sub(replace, self.template)


__all__ = ["MessageFormatter"]
