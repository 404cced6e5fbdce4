"""Typed views over identity v3 token payloads."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

from opencloud.common.auth import Token as AuthToken
from opencloud.common.error import EndpointNotFoundError

# Legacy v2 style url types accepted alongside v3 interface names
URL_TYPES = {
    "publicURL": "public",
    "internalURL": "internal",
    "adminURL": "admin",
}


def interface_for(url_type: str) -> str:
    return URL_TYPES.get(url_type, url_type)


class Endpoint(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    interface: str
    region: str | None = None
    region_id: str | None = None
    url: str

    def supports_region(self, region: str | None) -> bool:
        return region is None or region in (self.region, self.region_id)

    def supports_interface(self, url_type: str) -> bool:
        return self.interface == interface_for(url_type)


class CatalogService(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    type: str
    endpoints: list[Endpoint] = []

    def matches(self, name: str | None, type_: str) -> bool:
        return self.type == type_ and (name is None or self.name == name)

    def get_url(self, region: str | None, url_type: str) -> str | None:
        for endpoint in self.endpoints:
            if endpoint.supports_region(region) and endpoint.supports_interface(url_type):
                return endpoint.url
        return None


class Catalog(BaseModel):
    model_config = ConfigDict(extra="ignore")

    services: list[CatalogService] = []

    def get_service_url(
        self,
        name: str | None,
        type_: str,
        region: str | None = None,
        url_type: str = "publicURL",
    ) -> str:
        """Return the endpoint URL of the first matching service.

        Raises:
            EndpointNotFoundError: If no service/endpoint pair matches.
        """
        for service in self.services:
            if service.matches(name, type_):
                url = service.get_url(region, url_type)
                if url:
                    return url
        raise EndpointNotFoundError(
            "Endpoint URL could not be found in the catalog for this service.\n"
            f"Name: {name}\nType: {type_}\nRegion: {region}\nURL type: {url_type}"
        )


class Token(BaseModel, AuthToken):
    """A v3 token; ``id`` comes from the ``X-Subject-Token`` response header."""

    model_config = ConfigDict(extra="ignore")

    id: str
    expires_at: datetime
    issued_at: datetime | None = None
    methods: list[str] = []
    user: dict[str, Any] = {}
    project: dict[str, Any] | None = None
    domain: dict[str, Any] | None = None
    roles: list[dict[str, Any]] = []
    catalog: Catalog = Catalog()

    @field_validator("expires_at", "issued_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_response(cls, response: httpx.Response) -> "Token":
        body = dict(response.json()["token"])
        catalog = body.pop("catalog", [])
        return cls(
            id=response.headers["X-Subject-Token"],
            catalog={"services": catalog},
            **body,
        )

    def has_expired(self) -> bool:
        return self.expires_at <= datetime.now(timezone.utc)

    def export(self) -> dict[str, Any]:
        """JSON-safe form, accepted back through the ``cachedToken`` option."""
        return self.model_dump(mode="json")


__all__ = [
    "Catalog",
    "CatalogService",
    "Endpoint",
    "Token",
    "URL_TYPES",
    "interface_for",
]
