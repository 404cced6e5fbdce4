"""Small URL and JSON helpers used across the transport layer."""

from __future__ import annotations

from typing import Any

import httpx


def normalize_url(url: str) -> str:
    """Return ``url`` with a scheme and exactly one trailing slash.

    A trailing slash matters: httpx merges relative request paths onto the
    client's base URL, and without it the last segment of the base path is
    replaced instead of extended.
    """
    if "://" not in url:
        url = f"http://{url}"
    return url.rstrip("/") + "/"


def append_path(url: str | httpx.URL, *paths: str) -> str:
    """Join ``paths`` onto ``url`` with single slashes between segments."""
    result = str(url).rstrip("/")
    for path in paths:
        segment = str(path).strip("/")
        if segment:
            result = f"{result}/{segment}"
    return result


def json_decode(response: httpx.Response) -> Any:
    """Decode a JSON response body; an empty body decodes to ``{}``."""
    if not response.content:
        return {}
    return response.json()


def flatten_json(data: Any, key: str | None = None) -> Any:
    """Unwrap ``data[key]`` when the key is given and present."""
    if data and key and isinstance(data, dict) and key in data:
        return data[key]
    return data


__all__ = ["append_path", "flatten_json", "json_decode", "normalize_url"]
