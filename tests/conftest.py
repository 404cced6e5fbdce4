"""Shared fixtures: fake identity services and canned identity responses."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest

from opencloud.common.auth import IdentityService, Token

COMPUTE_URL = "https://compute.example.com/v2.1/"


class FakeToken(Token):
    def __init__(self, token_id: str, expired: bool = False) -> None:
        self.id = token_id
        self.expired = expired

    def has_expired(self) -> bool:
        return self.expired


class FakeIdentity(IdentityService):
    """Issues ``tok-1``, ``tok-2``... and records the options it was given."""

    def __init__(self, base_url: str = COMPUTE_URL) -> None:
        self.base_url = base_url
        self.calls: list[dict[str, Any]] = []

    def authenticate(self, options):
        self.calls.append(dict(options))
        return FakeToken(f"tok-{len(self.calls)}"), self.base_url


@pytest.fixture
def fake_identity() -> FakeIdentity:
    return FakeIdentity()


def iso_in(hours: float) -> str:
    return (datetime.now(timezone.utc) + timedelta(hours=hours)).isoformat()


def token_payload(expires_in_hours: float = 1.0) -> dict[str, Any]:
    return {
        "token": {
            "methods": ["password"],
            "expires_at": iso_in(expires_in_hours),
            "issued_at": iso_in(0),
            "user": {"id": "u-1", "name": "demo"},
            "project": {"id": "p-1", "name": "demo"},
            "roles": [{"id": "r-1", "name": "member"}],
            "catalog": [
                {
                    "type": "identity",
                    "name": "keystone",
                    "endpoints": [
                        {"interface": "public", "region": "RegionOne",
                         "url": "https://keystone.example.com/v3"},
                    ],
                },
                {
                    "type": "compute",
                    "name": "nova",
                    "endpoints": [
                        {"interface": "public", "region": "RegionOne",
                         "url": "https://compute.example.com/v2.1"},
                        {"interface": "internal", "region": "RegionOne",
                         "url": "http://compute.internal:8774/v2.1"},
                        {"interface": "public", "region": "RegionTwo",
                         "url": "https://compute.two.example.com/v2.1"},
                    ],
                },
            ],
        }
    }


def token_response(token_id: str = "subject-token", expires_in_hours: float = 1.0) -> httpx.Response:
    return httpx.Response(
        201,
        json=token_payload(expires_in_hours),
        headers={"X-Subject-Token": token_id},
    )
