"""JSON schema validation and payload normalisation."""

from .schema import Schema
from .validator import Validator

__all__ = ["Schema", "Validator"]
