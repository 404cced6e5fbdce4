"""Base class of every service object produced by the builder."""

from __future__ import annotations

from typing import Any

from opencloud.common.api import Operator


class AbstractService(Operator):
    """A versioned cloud service (``compute.v2``, ``identity.v3``...).

    Services are operators whose HTTP client is already bound to the
    service's base URL and authenticated, so their methods only have to pick
    an operation definition from ``self.api`` and execute it.

    A service owns its clients; resources it creates share them. Use it as a
    context manager (``with`` or ``async with``) or call :meth:`close` /
    :meth:`aclose` when done.
    """

    def close(self) -> None:
        """Close the synchronous client."""
        self.client.close()

    async def aclose(self) -> None:
        """Close both clients."""
        self.client.close()
        if self.async_client is not None:
            await self.async_client.aclose()

    def __enter__(self) -> "AbstractService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> "AbstractService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["AbstractService"]
