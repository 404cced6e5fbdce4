"""Identity v3 service: password/token authentication and catalog lookups."""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from opencloud.common.auth import IdentityService
from opencloud.common.error import BadResponseError, ConfigurationError
from opencloud.common.service import AbstractService
from opencloud.common.transport import json_decode
from opencloud.infrastructure.observability import get_logger, traced

from .api import Api
from .models import Catalog, Token

logger = get_logger(__name__)

# Builder options understood by the tokens operation
AUTH_OPTIONS = ("user", "tokenId", "scope")


class Service(AbstractService, IdentityService):
    """Identity v3 service.

    Also usable as the builder's ``identityService``: :meth:`authenticate`
    issues a token and resolves the endpoint described by the ``catalogName``,
    ``catalogType``, ``region`` and ``urlType`` options.
    """

    api: Api

    @classmethod
    def factory(cls, client: httpx.Client) -> "Service":
        return cls(client, Api())

    @traced("identity.authenticate", kind="client")
    def authenticate(self, options: Mapping[str, Any]) -> tuple[Token, str]:
        if not options.get("catalogType"):
            raise ConfigurationError('"catalogType" is required to find a service endpoint')

        token = self._cached_token(options.get("cachedToken"))
        if token is None:
            token = self.generate_token(**{k: options[k] for k in AUTH_OPTIONS if k in options})

        url = token.catalog.get_service_url(
            options.get("catalogName"),
            options["catalogType"],
            options.get("region"),
            options.get("urlType", "publicURL"),
        )
        return token, url

    def _cached_token(self, cached: Any) -> Token | None:
        if cached is None:
            return None
        token = cached if isinstance(cached, Token) else Token.model_validate(cached)
        if token.has_expired():
            logger.info("Cached token has expired; generating a new one")
            return None
        return token

    def generate_token(self, **options: Any) -> Token:
        """Issue a token from password (``user``) or token (``tokenId``) credentials.

        Args:
            user: ``{"id"|"name", "password", "domain"}``.
            tokenId: An existing token to exchange, possibly for another scope.
            scope: ``{"project": {...}}``, ``{"domain": {...}}`` or ``{"system": {...}}``.
        """
        if "tokenId" in options:
            options = {**options, "methods": ["token"]}
            options.pop("user", None)
        elif "user" in options:
            options = {**options, "methods": ["password"]}
        else:
            raise ConfigurationError('Either "user" or "tokenId" is required to authenticate')

        response = self.execute(self.api.post_tokens(), options)
        token = Token.from_response(response)
        logger.debug("Issued token expiring at %s", token.expires_at.isoformat())
        return token

    def get_token(self, token_id: str) -> Token:
        response = self.execute(self.api.get_tokens(), {"tokenId": token_id})
        return Token.from_response(response)

    def validate_token(self, token_id: str) -> bool:
        try:
            self.execute(self.api.head_tokens(), {"tokenId": token_id})
        except BadResponseError as exc:
            if exc.status_code == 404:
                return False
            raise
        return True

    def revoke_token(self, token_id: str) -> None:
        self.execute(self.api.delete_tokens(), {"tokenId": token_id})

    def get_catalog(self) -> Catalog:
        data = json_decode(self.execute(self.api.get_catalog()))
        return Catalog(services=data.get("catalog", []))


__all__ = ["AUTH_OPTIONS", "Service"]
