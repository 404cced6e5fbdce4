"""Definition of a single operation parameter and the checks on user values."""

from __future__ import annotations

from typing import Any, Mapping

from opencloud.common.error import ErrorBuilder

LOCATIONS = ("json", "query", "header", "url", "raw")

_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list, tuple),
}


class Parameter:
    """One named input of an operation.

    Built from a definition mapping such as::

        {"type": "string", "location": "url", "required": True}

    Recognised keys: ``type``, ``location`` (default ``json``), ``required``,
    ``sentAs``, ``path`` (dotted nesting inside the JSON body), ``prefix``
    (for headers), ``items``, ``properties``, ``enum`` and ``description``.
    """

    def __init__(self, name: str, definition: Mapping[str, Any]) -> None:
        self.name = name
        self.type: str | None = definition.get("type")
        self.location: str = definition.get("location", "json")
        self.required: bool = bool(definition.get("required", False))
        self.sent_as: str | None = definition.get("sentAs")
        self.path: str | None = definition.get("path")
        self.prefix: str = definition.get("prefix", "")
        self.enum: list[Any] | None = definition.get("enum")
        self.description: str = definition.get("description", "")

        if self.location not in LOCATIONS:
            raise ValueError(
                f"{self.location!r} is not a valid location for parameter {name!r}; "
                f"expected one of {', '.join(LOCATIONS)}"
            )
        if self.type is not None and self.type not in _TYPES:
            raise ValueError(f"{self.type!r} is not a valid type for parameter {name!r}")

        items = definition.get("items")
        self.items: Parameter | None = Parameter(name, items) if items else None
        self.properties: dict[str, Parameter] = {
            prop_name: Parameter(prop_name, prop_def)
            for prop_name, prop_def in (definition.get("properties") or {}).items()
        }

    def __repr__(self) -> str:
        return f"Parameter({self.name!r}, type={self.type!r}, location={self.location!r})"

    @property
    def sent_name(self) -> str:
        return self.sent_as or self.name

    def get_property(self, name: str) -> Parameter | None:
        return self.properties.get(name)

    def _has_valid_type(self, value: Any) -> bool:
        if self.type is None:
            return True
        if self.type in ("integer", "number") and isinstance(value, bool):
            return False
        return isinstance(value, _TYPES[self.type])

    def validate(self, value: Any, errors: ErrorBuilder | None = None) -> bool:
        """Check ``value`` against this definition, recursing into arrays and objects.

        Raises:
            UserInputError: If the value has the wrong type, is outside the
                enum, or holds an undeclared object property.
        """
        errors = errors or ErrorBuilder()

        if self.enum is not None and value not in self.enum:
            raise errors.user_input_error(
                f"One of {', '.join(repr(v) for v in self.enum)} for {self.name!r}", value
            )

        if not self._has_valid_type(value):
            raise errors.user_input_error(f"A {self.type} value for {self.name!r}", value)

        if self.type == "array" and self.items is not None:
            for item in value:
                self.items.validate(item, errors)
        elif self.type == "object" and self.properties:
            for key, item in value.items():
                prop = self.get_property(key)
                if prop is None:
                    raise errors.user_input_error(
                        f"One of the properties {', '.join(sorted(self.properties))} "
                        f"in {self.name!r}",
                        {key: item},
                    )
                prop.validate(item, errors)
        return True


__all__ = ["LOCATIONS", "Parameter"]
