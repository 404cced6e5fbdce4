"""Credential token abstraction shared by every identity implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Token(ABC):
    """A credential issued by an identity service, valid until it expires.

    ``id`` is the opaque value sent in the ``X-Auth-Token`` header.
    """

    id: str

    @abstractmethod
    def has_expired(self) -> bool:
        """Return True once the token can no longer be used."""
