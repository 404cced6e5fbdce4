"""Operation definitions and the operator base that executes them."""

from .api import AbstractApi
from .operation import Operation
from .operator import Operator
from .parameter import Parameter

__all__ = ["AbstractApi", "Operation", "Operator", "Parameter"]
