"""Configuration utilities for opencloud.

Builder options can come from a JSON file, from the conventional ``OS_*``
environment variables, or from code. :func:`merge_options` layers them with
later sources overriding earlier ones.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping


def load_config(path: str | Path) -> Dict[str, Any]:
    """Load builder options from a JSON file.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        A dictionary of options.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object, not {type(data).__name__}")
    return data


def _named(id_: str | None, name: str | None) -> Dict[str, Any]:
    if id_:
        return {"id": id_}
    if name:
        return {"name": name}
    return {}


def options_from_env(environ: Mapping[str, str] | None = None) -> Dict[str, Any]:
    """Translate ``OS_*`` environment variables into builder options.

    Recognised: ``OS_AUTH_URL``, ``OS_USER_ID``, ``OS_USERNAME``,
    ``OS_PASSWORD``, ``OS_USER_DOMAIN_ID``, ``OS_USER_DOMAIN_NAME``,
    ``OS_PROJECT_ID``, ``OS_PROJECT_NAME``, ``OS_PROJECT_DOMAIN_ID``,
    ``OS_PROJECT_DOMAIN_NAME``, ``OS_REGION_NAME`` and ``OS_INTERFACE``.
    Unset variables produce no option.
    """
    env = os.environ if environ is None else environ
    options: Dict[str, Any] = {}

    if env.get("OS_AUTH_URL"):
        options["authUrl"] = env["OS_AUTH_URL"]
    if env.get("OS_REGION_NAME"):
        options["region"] = env["OS_REGION_NAME"]
    if env.get("OS_INTERFACE"):
        options["urlType"] = env["OS_INTERFACE"]

    user = _named(env.get("OS_USER_ID"), env.get("OS_USERNAME"))
    if user:
        if env.get("OS_PASSWORD"):
            user["password"] = env["OS_PASSWORD"]
        domain = _named(env.get("OS_USER_DOMAIN_ID"), env.get("OS_USER_DOMAIN_NAME"))
        if domain and "id" not in user:
            user["domain"] = domain
        options["user"] = user

    project = _named(env.get("OS_PROJECT_ID"), env.get("OS_PROJECT_NAME"))
    if project:
        domain = _named(env.get("OS_PROJECT_DOMAIN_ID"), env.get("OS_PROJECT_DOMAIN_NAME"))
        if domain and "id" not in project:
            project["domain"] = domain
        options["scope"] = {"project": project}

    return options


def merge_options(*layers: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Merge option mappings; later layers override earlier ones key by key."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


__all__ = ["load_config", "merge_options", "options_from_env"]
