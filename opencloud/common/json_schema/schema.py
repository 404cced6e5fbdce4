"""JSON schema wrapper used to validate and normalise resource payloads."""

from __future__ import annotations

from typing import Any, Mapping

from .validator import Validator


class Schema:
    """A parsed JSON schema body paired with a validator.

    Args:
        body: The schema document, e.g. ``{"properties": {"name": {...}}}``.
        validator: Object exposing ``check``, ``is_valid`` and ``get_errors``;
            defaults to the :mod:`jsonschema` backed :class:`Validator`.
    """

    def __init__(self, body: Mapping[str, Any], validator: Any = None) -> None:
        self.body = body
        self.validator = validator if validator is not None else Validator()

    @property
    def properties(self) -> Mapping[str, Any]:
        return self.body.get("properties") or {}

    def get_property_paths(self) -> list[str]:
        return [f"/{name}" for name in self.properties]

    def normalize_object(self, subject: Any, aliases: Mapping[str, str]) -> dict[str, Any]:
        """Keep only the writable properties this schema declares.

        For each declared property that is not ``readOnly``, the value is
        taken from the alias key (``aliases[name]``) when the subject has it,
        otherwise from the property's own name. Keys the schema does not
        declare are dropped.

        Args:
            subject: A mapping, or an object whose attributes are used.
            aliases: Maps canonical property names to the keys used in
                ``subject``.
        """
        values = subject if isinstance(subject, Mapping) else vars(subject)
        out: dict[str, Any] = {}
        for name, prop in self.properties.items():
            if isinstance(prop, Mapping) and prop.get("readOnly") is True:
                continue
            alias = aliases.get(name, name)
            if alias in values:
                out[name] = values[alias]
            elif name in values:
                out[name] = values[name]
        return out

    def validate(self, data: Any) -> None:
        self.validator.check(data, self.body)

    def is_valid(self) -> bool:
        return self.validator.is_valid()

    def get_errors(self) -> list[dict[str, str]]:
        return self.validator.get_errors()

    def get_error_string(self) -> str:
        message = "Provided values do not validate. Errors:\n"
        for error in self.get_errors():
            message += f"[{error['property']}] {error['message']}\n"
        return message


__all__ = ["Schema"]
