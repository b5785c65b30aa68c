"""Typed dataclasses describing homepage builder configuration structures."""

from __future__ import annotations

import copy
import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path

from .._constants import DEFAULT_LAYOUT, DEFAULT_MOUNT_PATH


class HomepageConfigError(ValueError):
    """Raised when endpoint options or a submitted configuration are invalid."""


def default_hero() -> dict[str, typ.Any]:
    """Return the hero settings applied when none are supplied."""
    return {"enabled": True, "showSocial": True}


@dc.dataclass(slots=True)
class EndpointOptions:
    """Options the host passes when mounting the homepage endpoint."""

    mount_path: str = DEFAULT_MOUNT_PATH
    content_dir: Path | None = None
    database_path: Path | None = None


@dc.dataclass(slots=True)
class HomepageConfig:
    """The persisted homepage arrangement.

    Block lists hold ``{"type": ..., "config": {...}}`` mappings exactly as
    the editor submitted them. ``updated_at`` is owned by the store.
    """

    layout: str = DEFAULT_LAYOUT
    hero: dict[str, typ.Any] = dc.field(default_factory=default_hero)
    sections: list[typ.Any] = dc.field(default_factory=list)
    sidebar: list[typ.Any] = dc.field(default_factory=list)
    identity: dict[str, typ.Any] | None = None
    footer: list[typ.Any] = dc.field(default_factory=list)
    blog_listing_sidebar: list[typ.Any] = dc.field(default_factory=list)
    blog_post_sidebar: list[typ.Any] = dc.field(default_factory=list)
    updated_at: dt.datetime | None = None

    def to_document(self) -> dict[str, typ.Any]:
        """Return the camelCase document stored and served for this config."""
        return {
            "layout": self.layout,
            "hero": copy.deepcopy(self.hero),
            "sections": copy.deepcopy(self.sections),
            "sidebar": copy.deepcopy(self.sidebar),
            "blogListingSidebar": copy.deepcopy(self.blog_listing_sidebar),
            "blogPostSidebar": copy.deepcopy(self.blog_post_sidebar),
            "footer": copy.deepcopy(self.footer),
            "identity": copy.deepcopy(self.identity),
            "updatedAt": self.updated_at,
        }


__all__ = [
    "EndpointOptions",
    "HomepageConfig",
    "HomepageConfigError",
    "default_hero",
]
