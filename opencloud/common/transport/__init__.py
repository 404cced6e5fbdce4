"""HTTP transport: middleware stack, message formatting and request serialization."""

from .formatter import MessageFormatter
from .handler_stack import HandlerStack
from .middleware import (
    AuthHandler,
    HttpErrors,
    Log,
    Middleware,
    auth_handler,
    http_errors,
    log,
)
from .serializer import Serializer
from .utils import append_path, flatten_json, json_decode, normalize_url

__all__ = [
    "AuthHandler",
    "HandlerStack",
    "HttpErrors",
    "Log",
    "MessageFormatter",
    "Middleware",
    "Serializer",
    "append_path",
    "auth_handler",
    "flatten_json",
    "http_errors",
    "json_decode",
    "log",
    "normalize_url",
]
