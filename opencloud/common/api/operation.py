"""An executable API operation built from a definition mapping."""

from __future__ import annotations

from typing import Any, Mapping

from opencloud.common.error import ErrorBuilder

from .parameter import Parameter


class Operation:
    """HTTP method, path template and parameters of one API call.

    Definitions are plain mappings::

        {
            "method": "GET",
            "path": "servers/{id}",
            "params": {"id": {"type": "string", "location": "url", "required": True}},
            "jsonKey": "server",
        }
    """

    def __init__(self, definition: Mapping[str, Any]) -> None:
        try:
            self.method: str = definition["method"].upper()
            self.path: str = definition["path"]
        except KeyError as exc:
            raise ValueError(f"Operation definition is missing {exc.args[0]!r}") from None
        self.name: str = definition.get("name", f"{self.method} {self.path}")
        self.json_key: str | None = definition.get("jsonKey")
        self.params: dict[str, Parameter] = {
            name: Parameter(name, param_def)
            for name, param_def in (definition.get("params") or {}).items()
        }

    def __repr__(self) -> str:
        return f"Operation({self.method} {self.path})"

    def has_param(self, name: str) -> bool:
        return name in self.params

    def get_param(self, name: str) -> Parameter | None:
        return self.params.get(name)

    def validate(self, user_values: Mapping[str, Any], errors: ErrorBuilder | None = None) -> bool:
        """Reject unknown options and missing required ones, then check each value.

        Raises:
            UserInputError: On the first problem found.
        """
        errors = errors or ErrorBuilder()

        unknown = sorted(set(user_values) - set(self.params))
        if unknown:
            raise errors.user_input_error(
                f"One of the options {', '.join(sorted(self.params)) or '(none)'} "
                f"for {self.name}",
                {name: user_values[name] for name in unknown},
            )

        for name, param in self.params.items():
            if name not in user_values:
                if param.required:
                    raise errors.user_input_error(
                        f"A value for the required option {name!r} of {self.name}", None
                    )
                continue
            param.validate(user_values[name], errors)
        return True


__all__ = ["Operation"]
