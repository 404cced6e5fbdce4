"""Adapter giving :mod:`jsonschema` a check-then-inspect interface."""

from __future__ import annotations

from typing import Any, Mapping

import jsonschema
from jsonschema.protocols import Validator as ValidatorProtocol


def _property_path(path: Any) -> str:
    out = ""
    for segment in path:
        if isinstance(segment, int):
            out += f"[{segment}]"
        else:
            out += f".{segment}" if out else str(segment)
    return out


class Validator:
    """Validate data against a schema and keep the errors for later inspection.

    Schemas without a ``$schema`` keyword are checked as draft 4, the dialect
    OpenStack-style APIs publish.
    """

    def __init__(self, validator_cls: type[ValidatorProtocol] | None = None) -> None:
        self.validator_cls = validator_cls
        self._errors: list[dict[str, str]] = []

    def check(self, data: Any, schema: Mapping[str, Any]) -> None:
        cls = self.validator_cls or jsonschema.validators.validator_for(
            schema, default=jsonschema.Draft4Validator
        )
        validator = cls(schema, format_checker=cls.FORMAT_CHECKER)
        errors = sorted(
            validator.iter_errors(data),
            key=lambda error: [str(segment) for segment in error.absolute_path],
        )
        self._errors = [
            {
                "property": _property_path(error.absolute_path),
                "message": error.message,
                "constraint": str(error.validator),
            }
            for error in errors
        ]

    def is_valid(self) -> bool:
        return not self._errors

    def get_errors(self) -> list[dict[str, str]]:
        return list(self._errors)


__all__ = ["Validator"]
