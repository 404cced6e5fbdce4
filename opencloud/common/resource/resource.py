"""Resources: typed views over API entities that can run operations on themselves."""

from __future__ import annotations

import re
from typing import Any, Callable, Iterator, Mapping

import httpx

from opencloud.common.api import Operator
from opencloud.common.transport import flatten_json, json_decode

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Class attributes of resources that are configuration, never API data
_RESERVED = frozenset({
    "resource_key",
    "resources_key",
    "marker_key",
    "aliases",
    "client",
    "api",
    "async_client",
})


def snake_case(name: str) -> str:
    """``"accessIPv4"`` -> ``"access_ipv4"``; keys with colons or dashes are normalised too."""
    name = re.sub(r"[^0-9A-Za-z_]", "_", name)
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class AbstractResource(Operator):
    """Base class for API resources.

    Data attributes are declared as class annotations; only declared
    attributes are populated from API payloads. ``aliases`` maps a JSON key
    to an attribute name when the snake_case conversion is not enough.

    Attributes:
        resource_key: JSON key wrapping a single resource (``"server"``).
        resources_key: JSON key wrapping a collection (``"servers"``).
        marker_key: Attribute used as the pagination marker (default ``id``).
    """

    resource_key: str | None = None
    resources_key: str | None = None
    marker_key: str | None = None
    aliases: dict[str, str] = {}

    def __init__(
        self,
        client: httpx.Client,
        api: Any,
        async_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(client, api, async_client)
        for name in self.declared_attributes():
            if not hasattr(self, name):
                setattr(self, name, None)

    @classmethod
    def declared_attributes(cls) -> list[str]:
        names: list[str] = []
        for klass in reversed(cls.__mro__):
            for name in getattr(klass, "__annotations__", {}):
                if name not in _RESERVED and not name.startswith("_") and name not in names:
                    names.append(name)
        return names

    def __repr__(self) -> str:
        marker = getattr(self, self.marker_key or "id", None)
        return f"<{type(self).__name__} {marker}>" if marker else f"<{type(self).__name__}>"

    def populate_from_response(self, response: httpx.Response) -> "AbstractResource":
        data = flatten_json(json_decode(response), self.resource_key)
        if isinstance(data, Mapping):
            self.populate_from_array(data)
        return self

    def populate_from_array(self, data: Mapping[str, Any]) -> "AbstractResource":
        declared = set(self.declared_attributes())
        for key, value in data.items():
            name = self.aliases.get(key) or snake_case(key)
            if name in declared:
                setattr(self, name, value)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.declared_attributes()}

    def enumerate(
        self,
        definition: Mapping[str, Any],
        user_values: Mapping[str, Any] | None = None,
        map_fn: Callable[["AbstractResource", Mapping[str, Any]], None] | None = None,
    ) -> Iterator["AbstractResource"]:
        """Yield resources across pages of a collection operation.

        Pages are requested with a ``marker`` taken from the last resource of
        the previous page, when the operation accepts one. Iteration stops at
        an empty page, when the marker does not advance, or once ``limit``
        resources (if given) have been yielded.

        Args:
            definition: The list operation definition.
            user_values: Values for the operation; ``limit`` also caps the total.
            map_fn: Called with each resource and its raw payload before it is
                yielded.

        Raises:
            TypeError: If the collection payload is not a list.
        """
        values = dict(user_values or {})
        limit = values.get("limit")
        accepts_marker = self.get_operation(definition).has_param("marker")
        marker_attr = self.marker_key or "id"
        count = 0
        previous_marker = None

        while True:
            response = self.execute(definition, values)
            items = flatten_json(json_decode(response), self.resources_key) or []
            if not items:
                return
            if not isinstance(items, list):
                raise TypeError(
                    f"{type(self).__name__} expected a list of resources under "
                    f"{self.resources_key!r}, got {type(items).__name__}"
                )
            resource = None
            for item in items:
                resource = self.model(type(self), item)
                if map_fn is not None:
                    map_fn(resource, item)
                yield resource
                count += 1
                if limit is not None and count >= limit:
                    return
            marker = getattr(resource, marker_attr, None)
            if not accepts_marker or marker is None or marker == previous_marker:
                return
            previous_marker = marker
            values["marker"] = marker


__all__ = ["AbstractResource", "snake_case"]
