"""Exceptions raised by the SDK and the helper that formats their messages.

Two kinds of failure stop an operation before any request is sent:
:class:`ConfigurationError` (required builder options are missing) and
:class:`ClassResolutionError` (the requested service cannot be found). Neither
is retried. Failures on the wire surface as :class:`BadResponseError`, bad
user values as :class:`UserInputError`.
"""

from __future__ import annotations

import json
from typing import Any

import httpx


class BaseError(Exception):
    """Root of every exception raised by opencloud."""


class ConfigurationError(BaseError, ValueError):
    """Raised when required builder options are missing or invalid."""


class ClassResolutionError(BaseError, LookupError):
    """Raised when a service namespace has no importable Api/Service pair."""


class UserInputError(BaseError, ValueError):
    """Raised when a value passed to an operation does not match its definition."""


class EndpointNotFoundError(BaseError, LookupError):
    """Raised when the service catalog holds no endpoint for the requested service."""


class BadResponseError(BaseError):
    """Raised for HTTP responses with a 4xx or 5xx status code."""

    def __init__(
        self,
        message: str,
        request: httpx.Request | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.request = request
        self.response = response

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None


_STATUS_ADVICE = {
    400: "Check that your input values are valid and well-formed. ",
    401: "Check that your authentication credentials are valid. ",
    403: "Check that your credentials grant access to this resource. ",
    404: "Check that the resource you are trying to access exists. ",
    409: "The resource is in a state that conflicts with this request. ",
    413: "The request exceeds a size limit or quota. ",
    429: "You are being rate limited; slow down before retrying. ",
    500: "Try this operation again once the remote server is operational. ",
    503: "The service is unavailable; try again later. ",
}


class ErrorBuilder:
    """Builds long, sectioned error messages that help users debug failures."""

    docs_url = "https://docs.openstack.org/api-ref/"

    def header(self, name: str) -> str:
        return f"{name}\n{'~' * len(name)}\n"

    def message_text(self, message: httpx.Request | httpx.Response) -> str:
        """Render a request or response as its HTTP/1.1 wire text."""
        if isinstance(message, httpx.Request):
            lines = [f"{message.method} {message.url.raw_path.decode('ascii')} HTTP/1.1"]
            body = message.content if _is_read(message) else b""
        else:
            lines = [
                f"{message.http_version or 'HTTP/1.1'} "
                f"{message.status_code} {message.reason_phrase}"
            ]
            body = message.content if _is_read(message) else b""
        lines.extend(f"{name}: {value}" for name, value in message.headers.items())
        text = "\r\n".join(lines) + "\r\n\r\n"
        return text + body.decode("utf-8", errors="replace")

    def status_code_message(self, status_code: int) -> str:
        return _STATUS_ADVICE.get(status_code, "")

    def http_error(
        self, request: httpx.Request, response: httpx.Response
    ) -> BadResponseError:
        message = self.header("HTTP Error")
        message += (
            f'The remote server returned a "{response.status_code} '
            f'{response.reason_phrase}" error for the following transaction:\n\n'
        )
        message += self.header("Request")
        message += self.message_text(request).strip() + "\n\n"
        message += self.header("Response")
        message += self.message_text(response).strip() + "\n\n"
        message += self.header("Further information")
        message += self.status_code_message(response.status_code)
        message += (
            f"Visit {self.docs_url} for the API reference of the service "
            "you are calling."
        )
        return BadResponseError(message, request=request, response=response)

    def user_input_error(
        self, expected_type: str, user_value: Any, further_link: str | None = None
    ) -> UserInputError:
        message = self.header("User Input Error")
        message += f"{expected_type} was expected, but the following value was passed in:\n\n"
        message += f"{_dump(user_value)}\n\n"
        message += "Please ensure that the value adheres to the expectation above. "
        if further_link:
            message += f"Visit {further_link} for more information about input arguments. "
        return UserInputError(message)


def _is_read(message: httpx.Request | httpx.Response) -> bool:
    try:
        message.content
    except (httpx.RequestNotRead, httpx.ResponseNotRead):
        return False
    return True


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, sort_keys=True, default=repr)
    except (TypeError, ValueError):
        return repr(value)


__all__ = [
    "BadResponseError",
    "BaseError",
    "ClassResolutionError",
    "ConfigurationError",
    "EndpointNotFoundError",
    "ErrorBuilder",
    "UserInputError",
]
