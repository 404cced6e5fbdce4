"""Authentication contracts used by the service builder."""

from .identity_service import IdentityService
from .token import Token

__all__ = ["IdentityService", "Token"]
