"""Utility helpers shared by the homepage configuration builders."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

from .models import HomepageConfigError

STRUCTURED_FIELDS: tuple[str, ...] = (
    "hero",
    "sections",
    "sidebar",
    "blogListingSidebar",
    "blogPostSidebar",
    "footer",
    "identity",
)


def _decode_json_field(name: str, value: object) -> object:
    """Return ``value`` parsed from JSON when it arrived as text.

    Form-encoded submissions carry structured fields as JSON strings; JSON
    submissions carry them as objects already. Blank strings count as absent.
    """
    if not isinstance(value, str):
        return value
    if not value.strip():
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        msg = f"Field '{name}' is not valid JSON: {exc.msg}."
        raise HomepageConfigError(msg) from exc


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_path(value: object | None) -> Path | None:
    """Return a ``Path`` for non-empty values, otherwise None."""
    text = _optional_str(value)
    return Path(text) if text else None


def _normalize_mount_path(value: object | None, default: str) -> str:
    """Return a mount path with a single leading slash and no trailing one."""
    text = _optional_str(value)
    if not text:
        return default
    return "/" + text.strip("/")


def _entry_types(entries: typ.Iterable[typ.Any] | None) -> list[str]:
    """Return the ordered ``type`` of each block entry (empty when missing)."""
    types: list[str] = []
    for entry in entries or ():
        match entry:
            case {"type": str(kind)}:
                types.append(kind)
            case _:
                types.append("")
    return types


__all__ = [
    "STRUCTURED_FIELDS",
    "_decode_json_field",
    "_entry_types",
    "_normalize_mount_path",
    "_optional_path",
    "_optional_str",
]
