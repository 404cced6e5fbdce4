"""Entry point for SDK users.

:class:`OpenCloud` owns a :class:`Builder` whose identity service defaults
to identity v3 on the configured auth URL::

    cloud = OpenCloud(
        auth_url="https://keystone.example.com/v3",
        region="RegionOne",
        user={"name": "demo", "password": "secret", "domain": {"id": "default"}},
        scope={"project": {"name": "demo", "domain": {"id": "default"}}},
    )
    identity = cloud.identity_v3()
"""

from __future__ import annotations

from typing import Any

import httpx

from opencloud.common.service import Builder
from opencloud.common.transport import HandlerStack, normalize_url
from opencloud.identity.v3 import Service as IdentityV3Service


class OpenCloud:
    """Create authenticated service objects from one set of options.

    Args:
        auth_url: Base URL of the identity service. May also be passed as the
            ``authUrl`` option.
        **options: Global builder options shared by every service.
    """

    def __init__(self, auth_url: str | None = None, **options: Any) -> None:
        if auth_url is not None:
            options["authUrl"] = auth_url
        self._owned: list[IdentityV3Service] = []
        if "identityService" not in options and options.get("authUrl"):
            options["identityService"] = IdentityV3Service.factory(
                self._identity_client(options)
            )
            self._owned.append(options["identityService"])
        self.builder = Builder(options)

    def close(self) -> None:
        """Close the identity client this facade created, if any.

        Services returned by :meth:`create_service` belong to the caller and
        are closed separately.
        """
        for service in self._owned:
            service.close()

    def __enter__(self) -> "OpenCloud":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def _identity_client(options: dict[str, Any]) -> httpx.Client:
        kwargs = {name: options[name] for name in ("timeout", "verify") if name in options}
        return httpx.Client(
            base_url=normalize_url(options["authUrl"]),
            event_hooks=HandlerStack.create().event_hooks(),
            transport=options.get("transport"),
            **kwargs,
        )

    def create_service(self, namespace: str, **options: Any) -> Any:
        return self.builder.create_service(namespace, **options)

    def identity_v3(self, **options: Any) -> IdentityV3Service:
        defaults = {"catalogType": "identity"}
        return self.builder.create_service("identity.v3", **{**defaults, **options})


__all__ = ["OpenCloud"]
