"""Base class for per-service API definition containers."""

from __future__ import annotations

from typing import Any


class AbstractApi:
    """Holds the operation definitions of one service version.

    Subclasses expose one method per operation returning its definition
    mapping, and may share common parameter definitions as attributes. The
    helpers below derive variants of a parameter definition without
    mutating the original.
    """

    @staticmethod
    def is_required(param: dict[str, Any]) -> dict[str, Any]:
        return {**param, "required": True}

    @staticmethod
    def not_required(param: dict[str, Any]) -> dict[str, Any]:
        return {**param, "required": False}

    @staticmethod
    def query(param: dict[str, Any]) -> dict[str, Any]:
        return {**param, "location": "query"}

    @staticmethod
    def url(param: dict[str, Any]) -> dict[str, Any]:
        return {**param, "location": "url", "required": True}

    @staticmethod
    def documented(type_: str, description: str, **extra: Any) -> dict[str, Any]:
        return {"type": type_, "description": description, **extra}


__all__ = ["AbstractApi"]
