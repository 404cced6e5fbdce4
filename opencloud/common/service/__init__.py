"""Service base class and the builder that assembles services."""

from .builder import Builder
from .service import AbstractService

__all__ = ["AbstractService", "Builder"]
