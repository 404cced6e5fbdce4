"""Command-line interface for opencloud."""

from .__main__ import cli
from .schema import schema
from .token import token

__all__ = ["cli", "schema", "token"]
