"""Resource base class."""

from .resource import AbstractResource, snake_case

__all__ = ["AbstractResource", "snake_case"]
