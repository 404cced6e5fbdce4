"""Shared helpers for resolving CLI options into SDK objects."""

from __future__ import annotations

from typing import Any, Mapping

from opencloud.client import OpenCloud
from opencloud.config import load_config, merge_options, options_from_env


def resolve_options(
    config_path: str | None,
    overrides: Mapping[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Layer ``OS_*`` variables, the config file and command-line overrides.

    ``None`` overrides are skipped so unset flags never mask lower layers.
    """
    return merge_options(
        options_from_env(environ),
        load_config(config_path) if config_path else None,
        {key: value for key, value in overrides.items() if value is not None},
    )


def build_cloud(options: Mapping[str, Any]) -> OpenCloud:
    """Return an :class:`OpenCloud` for ``options``; tests patch this to inject transports."""
    return OpenCloud(**options)
