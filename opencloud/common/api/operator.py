"""Shared behaviour of services and resources: running API operations."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Mapping, TypeVar

import httpx

from opencloud.common.transport import Serializer
from opencloud.infrastructure.observability import get_logger, trace_span

from .operation import Operation

logger = get_logger(__name__)

ModelT = TypeVar("ModelT")


class Operator:
    """Base for anything that sends requests described by API definitions.

    An operator holds the HTTP client it sends through, the API definition
    object it reads operations from, and optionally an async client used by
    :meth:`execute_async`.

    Any public method ``foo`` also gets an asynchronous twin ``foo_async``
    that runs it in a worker thread and returns an awaitable.
    """

    def __init__(
        self,
        client: httpx.Client,
        api: Any,
        async_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.client = client
        self.api = api
        self.async_client = async_client

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        # Only reached when normal lookup fails
        if name.endswith("_async") and not name.startswith("_"):
            target = name[: -len("_async")]
            try:
                method = object.__getattribute__(self, target)
            except AttributeError:
                raise AttributeError(
                    f"{type(self).__name__} has no method {target!r} to call asynchronously"
                ) from None
            if not callable(method):
                raise AttributeError(f"{type(self).__name__}.{target} is not callable")

            def run_in_thread(*args: Any, **kwargs: Any) -> Awaitable[Any]:
                return asyncio.to_thread(method, *args, **kwargs)

            return run_in_thread
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def get_operation(self, definition: Mapping[str, Any]) -> Operation:
        return Operation(definition)

    def _prepare(
        self, definition: Mapping[str, Any], user_values: Mapping[str, Any] | None
    ) -> tuple[Operation, dict[str, Any]]:
        operation = self.get_operation(definition)
        values = dict(user_values or {})
        operation.validate(values)
        return operation, Serializer().serialize_request(operation, values)

    def execute(
        self, definition: Mapping[str, Any], user_values: Mapping[str, Any] | None = None
    ) -> httpx.Response:
        """Validate ``user_values`` against ``definition`` and send the request."""
        operation, options = self._prepare(definition, user_values)
        with trace_span(operation.name, kind="client", method=operation.method, path=operation.path):
            logger.debug("Executing %s %s", operation.method, options["url"])
            return self.client.request(operation.method, **options)

    async def execute_async(
        self, definition: Mapping[str, Any], user_values: Mapping[str, Any] | None = None
    ) -> httpx.Response:
        """Asynchronous :meth:`execute`.

        Uses the async client when one is configured, otherwise runs the
        synchronous request in a worker thread.
        """
        if self.async_client is None:
            return await asyncio.to_thread(self.execute, definition, user_values)
        operation, options = self._prepare(definition, user_values)
        with trace_span(operation.name, kind="client", method=operation.method, path=operation.path):
            logger.debug("Executing %s %s (async)", operation.method, options["url"])
            return await self.async_client.request(operation.method, **options)

    def model(self, cls: type[ModelT], data: httpx.Response | Mapping[str, Any] | None = None) -> ModelT:
        """Create a ``cls`` resource bound to this operator's clients.

        Args:
            cls: A resource class (an :class:`Operator` subclass).
            data: A response or mapping to populate the resource from.
        """
        model = cls(self.client, self.api, self.async_client)
        if isinstance(data, httpx.Response):
            model.populate_from_response(data)
        elif data is not None:
            model.populate_from_array(data)
        return model


__all__ = ["Operator"]
