"""Contract for services able to exchange credentials for a token."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from .token import Token


class IdentityService(ABC):
    """Exchanges credentials for an access token and a service base URL."""

    @abstractmethod
    def authenticate(self, options: Mapping[str, Any]) -> tuple[Token, str]:
        """Authenticate with the resolved builder options.

        Args:
            options: The merged builder options. Implementations read their
                credentials and catalog hints (``catalogName``,
                ``catalogType``, ``region``, ``urlType``) from it.

        Returns:
            A ``(token, base_url)`` pair, where ``base_url`` is the endpoint of
            the service the options describe.
        """
