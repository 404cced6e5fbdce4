"""Interface layer for opencloud.

Packages under ``opencloud.interfaces`` expose boundary adapters such as CLI
commands.
"""

from . import cli

__all__ = ["cli"]
