"""Layout presets and the matcher/applier that work with them.

A preset bundles a layout with a section list and a sidebar list so an
operator can switch the whole homepage in one action. Presets never carry
footer content: the footer belongs to the operator and survives a preset
switch.

Examples
--------
>>> from homepage_builder.presets import BUILTIN_PRESETS, detect_active_preset
>>> blog = BUILTIN_PRESETS[0]
>>> detect_active_preset(blog.to_config(), BUILTIN_PRESETS)
'blog'
>>> detect_active_preset({"layout": "single-column"}, BUILTIN_PRESETS) is None
True
"""

from __future__ import annotations

import copy
import dataclasses as dc
import logging
import typing as typ

from .config.helpers import _entry_types

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .storage.config_store import ConfigurationStore

logger = logging.getLogger(__name__)


class UnknownPresetError(LookupError):
    """Raised when a preset id is not in the preset library."""

    def __init__(self, preset_id: str) -> None:
        super().__init__(f"Unknown preset '{preset_id}'.")
        self.preset_id = preset_id


@dc.dataclass(frozen=True, slots=True)
class LayoutPreset:
    """A named, immutable homepage arrangement."""

    id: str
    label: str
    description: str
    icon: str
    layout: str
    hero: dict[str, typ.Any]
    sections: tuple[dict[str, typ.Any], ...]
    sidebar: tuple[dict[str, typ.Any], ...]
    footer: tuple[dict[str, typ.Any], ...] = ()

    def to_config(self) -> dict[str, typ.Any]:
        """Return a fresh configuration payload; no preset objects are shared."""
        return {
            "layout": self.layout,
            "hero": copy.deepcopy(self.hero),
            "sections": [copy.deepcopy(entry) for entry in self.sections],
            "sidebar": [copy.deepcopy(entry) for entry in self.sidebar],
        }

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the wire form used by the dashboard."""
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "icon": self.icon,
            **self.to_config(),
            "footer": [copy.deepcopy(entry) for entry in self.footer],
        }


def _block(kind: str, **config: typ.Any) -> dict[str, typ.Any]:
    return {"type": kind, "config": config}


BUILTIN_PRESETS: tuple[LayoutPreset, ...] = (
    LayoutPreset(
        id="blog",
        label="Blog",
        description="Recent posts front and center",
        icon="newspaper",
        layout="two-column",
        hero={"enabled": True, "showSocial": True},
        sections=(_block("hero"), _block("recent-posts", maxItems=15)),
        sidebar=(
            _block("search"),
            _block("author-card"),
            _block("social-activity"),
            _block("recent-posts", maxItems=5),
        ),
    ),
    LayoutPreset(
        id="cv",
        label="CV / Portfolio",
        description="Professional profile with experience and projects",
        icon="briefcase",
        layout="full-width-hero",
        hero={"enabled": True, "showSocial": True},
        sections=(
            _block("hero"),
            _block("cv-experience"),
            _block("cv-skills"),
            _block("cv-projects"),
            _block("cv-education"),
            _block("cv-interests"),
        ),
        sidebar=(
            _block("search"),
            _block("social-activity"),
            _block("github-repos"),
            _block("blogroll"),
            _block("recent-posts"),
            _block("funkwhale"),
            _block("author-card"),
        ),
    ),
    LayoutPreset(
        id="hybrid",
        label="Hybrid",
        description="Blog posts with CV highlights",
        icon="layout",
        layout="two-column",
        hero={"enabled": True, "showSocial": True},
        sections=(
            _block("hero"),
            _block("cv-experience", maxItems=3),
            _block("recent-posts", maxItems=10),
            _block("cv-projects", maxItems=3),
        ),
        sidebar=(
            _block("search"),
            _block("author-card"),
            _block("social-activity"),
            _block("github-repos"),
            _block("blogroll"),
        ),
    ),
)


def _type_signature(entries: cabc.Iterable[typ.Any] | None) -> str:
    return ",".join(_entry_types(entries))


def detect_active_preset(
    config: typ.Mapping[str, typ.Any], presets: cabc.Iterable[LayoutPreset]
) -> str | None:
    """Return the id of the first preset ``config`` structurally equals.

    A preset matches when the layout is identical and the ordered block types
    of both ``sections`` and ``sidebar`` are identical. Per-block ``config``
    values are ignored. Returns ``None`` for a custom arrangement.
    """
    for preset in presets:
        if config.get("layout") != preset.layout:
            continue
        if _type_signature(config.get("sections")) != _type_signature(preset.sections):
            continue
        if _type_signature(config.get("sidebar")) != _type_signature(preset.sidebar):
            continue
        return preset.id
    return None


def find_preset(preset_id: str, presets: cabc.Iterable[LayoutPreset]) -> LayoutPreset:
    """Return the preset called ``preset_id`` or raise ``UnknownPresetError``."""
    for preset in presets:
        if preset.id == preset_id:
            return preset
    raise UnknownPresetError(preset_id)


def build_preset_config(
    preset: LayoutPreset, current: typ.Mapping[str, typ.Any] | None
) -> dict[str, typ.Any]:
    """Materialise ``preset`` while keeping the current footer."""
    config = preset.to_config()
    footer = current.get("footer") if current else None
    config["footer"] = copy.deepcopy(footer) if footer else []
    return config


async def apply_preset(
    preset_id: str,
    presets: cabc.Iterable[LayoutPreset],
    store: ConfigurationStore,
) -> dict[str, typ.Any]:
    """Replace the stored configuration with ``preset_id``'s arrangement.

    Raises
    ------
    UnknownPresetError
        Before any storage access when ``preset_id`` is not in ``presets``.
    """
    preset = find_preset(preset_id, presets)
    current = await store.load()
    document = await store.save(build_preset_config(preset, current))
    logger.info("Applied preset: %s", preset.label)
    return document


__all__ = [
    "BUILTIN_PRESETS",
    "LayoutPreset",
    "UnknownPresetError",
    "apply_preset",
    "build_preset_config",
    "detect_active_preset",
    "find_preset",
]
