"""Turn validated operation values into httpx request arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping
from urllib.parse import quote

if TYPE_CHECKING:
    from opencloud.common.api.operation import Operation
    from opencloud.common.api.parameter import Parameter


def _json_value(param: Parameter, value: Any) -> Any:
    """Apply ``sentAs`` renames recursively through objects and arrays."""
    if param.type == "array" and param.items is not None:
        return [_json_value(param.items, item) for item in value]
    if param.type == "object" and param.properties:
        out = {}
        for key, item in value.items():
            prop = param.get_property(key)
            if prop is None:
                out[key] = item
            else:
                out[prop.sent_name] = _json_value(prop, item)
        return out
    return value


def _stock_json(body: dict[str, Any], param: Parameter, value: Any) -> None:
    target = body
    if param.path:
        for segment in param.path.split("."):
            target = target.setdefault(segment, {})
    target[param.sent_name] = _json_value(param, value)


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(item) for item in value]
    return value


class Serializer:
    """Builds the keyword arguments for :meth:`httpx.Client.request`."""

    def serialize_request(
        self, operation: Operation, user_values: Mapping[str, Any]
    ) -> dict[str, Any]:
        path = operation.path
        body: dict[str, Any] = {}
        query: dict[str, Any] = {}
        headers: dict[str, str] = {}
        content: Any = None

        for name, value in user_values.items():
            param = operation.get_param(name)
            if param is None:
                continue
            if param.location == "json":
                _stock_json(body, param, value)
            elif param.location == "query":
                query[param.sent_name] = _query_value(value)
            elif param.location == "header":
                if param.type == "object":
                    for key, item in value.items():
                        headers[f"{param.prefix}{key}"] = str(item)
                else:
                    headers[f"{param.prefix}{param.sent_name}"] = str(value)
            elif param.location == "url":
                path = path.replace(f"{{{param.sent_name}}}", quote(str(value), safe=""))
            elif param.location == "raw":
                content = value

        options: dict[str, Any] = {"url": path, "headers": headers}
        if query:
            options["params"] = query
        if body:
            options["json"] = {operation.json_key: body} if operation.json_key else body
        elif content is not None:
            options["content"] = content
        return options


__all__ = ["Serializer"]
