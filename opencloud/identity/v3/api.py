"""Operation definitions of the identity v3 token API."""

from __future__ import annotations

from typing import Any

from opencloud.common.api import AbstractApi

_DOMAIN = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"},
    },
}


class Api(AbstractApi):
    """Token issue, validation, revocation and catalog lookups."""

    def __init__(self) -> None:
        self.subject_token = {
            "type": "string",
            "location": "header",
            "sentAs": "X-Subject-Token",
            "required": True,
            "description": "The token being inspected or revoked",
        }

    def post_tokens(self) -> dict[str, Any]:
        return {
            "name": "identity.post_tokens",
            "method": "POST",
            "path": "auth/tokens",
            "params": {
                "methods": {
                    "type": "array",
                    "path": "auth.identity",
                    "required": True,
                    "items": {"type": "string", "enum": ["password", "token"]},
                },
                "user": {
                    "type": "object",
                    "path": "auth.identity.password",
                    "properties": {
                        "id": {"type": "string"},
                        "name": {"type": "string"},
                        "password": {"type": "string"},
                        "domain": _DOMAIN,
                    },
                },
                "tokenId": {
                    "type": "string",
                    "path": "auth.identity.token",
                    "sentAs": "id",
                },
                "scope": {
                    "type": "object",
                    "path": "auth",
                    "properties": {
                        "project": {
                            "type": "object",
                            "properties": {
                                "id": {"type": "string"},
                                "name": {"type": "string"},
                                "domain": _DOMAIN,
                            },
                        },
                        "domain": _DOMAIN,
                        "system": {"type": "object"},
                    },
                },
            },
        }

    def get_tokens(self) -> dict[str, Any]:
        return {
            "name": "identity.get_tokens",
            "method": "GET",
            "path": "auth/tokens",
            "params": {"tokenId": self.subject_token},
        }

    def head_tokens(self) -> dict[str, Any]:
        return {
            "name": "identity.head_tokens",
            "method": "HEAD",
            "path": "auth/tokens",
            "params": {"tokenId": self.subject_token},
        }

    def delete_tokens(self) -> dict[str, Any]:
        return {
            "name": "identity.delete_tokens",
            "method": "DELETE",
            "path": "auth/tokens",
            "params": {"tokenId": self.subject_token},
        }

    def get_catalog(self) -> dict[str, Any]:
        return {
            "name": "identity.get_catalog",
            "method": "GET",
            "path": "auth/catalog",
            "params": {},
        }
