"""Infrastructure layer for opencloud.

Holds cross-cutting adapters that are not tied to any single cloud service.
"""

from . import observability

__all__ = ["observability"]
