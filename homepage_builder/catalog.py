"""Built-in section and widget descriptors for the homepage builder.

A descriptor tells the editor which block types exist, what each block's
default configuration looks like, and which fields the editor should render
for it. Descriptors defined here are always available; extensions may add
more through the capability registry (see :mod:`homepage_builder.registry`).

The ``config_schema`` of a descriptor only drives field rendering in the
editor. Submitted block configurations are not validated against it.

Examples
--------
>>> from homepage_builder.catalog import BUILTIN_SECTIONS
>>> [section.id for section in BUILTIN_SECTIONS]
['hero', 'recent-posts', 'custom-html']
>>> BUILTIN_SECTIONS[1].config_schema["maxItems"].max
50
"""

from __future__ import annotations

import copy
import dataclasses as dc
import typing as typ

from ._constants import BUILTIN_SOURCE_LABEL
from .config.models import HomepageConfigError


@dc.dataclass(frozen=True, slots=True)
class FieldSpec:
    """Editor hint for a single configurable field of a built-in block."""

    type: str
    label: str
    min: int | float | None = None
    max: int | float | None = None

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the wire mapping, omitting unset bounds."""
        data: dict[str, typ.Any] = {"type": self.type, "label": self.label}
        if self.min is not None:
            data["min"] = self.min
        if self.max is not None:
            data["max"] = self.max
        return data


@dc.dataclass(frozen=True, slots=True)
class Descriptor:
    """Metadata record describing a section or widget type.

    Attributes
    ----------
    id : str
        Identifier, unique within its kind. Section and widget ids are
        separate namespaces.
    label, description, icon : str
        Display metadata for the editor.
    default_config : dict[str, Any]
        Configuration a freshly added block starts with.
    config_schema : dict[str, FieldSpec | dict[str, Any]]
        Editor field hints keyed by configuration field name. Entries from
        extensions are kept exactly as contributed.
    data_endpoint : str or None
        Optional URL the renderer fetches block data from.
    source_plugin : str or None
        Display name of the contributing extension; ``None`` for built-ins.
    contributed : dict[str, Any] or None
        The mapping an extension contributed, served back unchanged apart
        from ``sourcePlugin``; ``None`` for descriptors built in code.
    """

    id: str
    label: str = ""
    description: str = ""
    icon: str = ""
    default_config: dict[str, typ.Any] = dc.field(default_factory=dict)
    config_schema: dict[str, FieldSpec | dict[str, typ.Any]] = dc.field(
        default_factory=dict
    )
    data_endpoint: str | None = None
    source_plugin: str | None = None
    contributed: dict[str, typ.Any] | None = dc.field(
        default=None, compare=False, repr=False
    )

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, typ.Any]) -> Descriptor:
        """Copy a contributed descriptor mapping into a ``Descriptor``.

        Every key is kept, including ones this package does not interpret.
        Both the camelCase wire spelling (``defaultConfig``) and the
        snake_case attribute spelling (``default_config``) are read. Only the
        ``id`` is required; ``config_schema`` is not checked.
        """
        match payload:
            case {"id": str(identifier)} if identifier:
                pass
            case _:
                msg = "Descriptors require a non-empty string 'id'."
                raise HomepageConfigError(msg)
        contributed = copy.deepcopy(dict(payload))
        default_config = _either(contributed, "defaultConfig", "default_config")
        schema = _either(contributed, "configSchema", "config_schema")
        return cls(
            id=identifier,
            label=str(contributed.get("label", "")),
            description=str(contributed.get("description", "")),
            icon=str(contributed.get("icon", "")),
            default_config=copy.deepcopy(dict(default_config or {})),
            config_schema=copy.deepcopy(dict(schema or {})),
            data_endpoint=_either(contributed, "dataEndpoint", "data_endpoint"),
            source_plugin=_either(contributed, "sourcePlugin", "source_plugin"),
            contributed=contributed,
        )

    def with_source(self, source_plugin: str) -> Descriptor:
        """Return a copy tagged with the contributing extension's name."""
        return dc.replace(
            self,
            default_config=copy.deepcopy(self.default_config),
            contributed=copy.deepcopy(self.contributed),
            source_plugin=source_plugin,
        )

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase mapping served to the editor."""
        if self.contributed is not None:
            data = copy.deepcopy(self.contributed)
            data.pop("source_plugin", None)
        else:
            data = {
                "id": self.id,
                "label": self.label,
                "description": self.description,
                "icon": self.icon,
                "dataEndpoint": self.data_endpoint,
                "defaultConfig": copy.deepcopy(self.default_config),
                "configSchema": {
                    name: _schema_entry(spec)
                    for name, spec in self.config_schema.items()
                },
            }
        data.pop("sourcePlugin", None)
        if self.source_plugin is not None:
            data["sourcePlugin"] = self.source_plugin
        return data


def _either(payload: dict[str, typ.Any], wire: str, attribute: str) -> typ.Any:
    return payload[wire] if wire in payload else payload.get(attribute)


def _schema_entry(spec: FieldSpec | dict[str, typ.Any]) -> dict[str, typ.Any]:
    return spec.to_dict() if isinstance(spec, FieldSpec) else copy.deepcopy(spec)


def _fields(**specs: tuple[str, str] | tuple[str, str, int, int]) -> dict[str, FieldSpec]:
    return {name: FieldSpec(*spec) for name, spec in specs.items()}


BUILTIN_SECTIONS: tuple[Descriptor, ...] = (
    Descriptor(
        id="hero",
        label="Hero Section",
        description="Author intro with avatar, name, title, and bio",
        icon="user",
        default_config={"showAvatar": True, "showSocialLinks": True},
        config_schema=_fields(
            showAvatar=("boolean", "Show avatar"),
            showSocialLinks=("boolean", "Show social links"),
        ),
    ),
    Descriptor(
        id="recent-posts",
        label="Recent Posts",
        description="Latest posts from your blog",
        icon="file-text",
        default_config={
            "maxItems": 10,
            "postTypes": ["note", "article", "photo", "bookmark"],
        },
        config_schema=_fields(
            maxItems=("number", "Max items", 1, 50),
            postTypes=("array", "Post types to include"),
        ),
    ),
    Descriptor(
        id="custom-html",
        label="Custom Content",
        description="Freeform HTML or Markdown block",
        icon="code",
        default_config={"content": ""},
        config_schema=_fields(content=("textarea", "Content (HTML/Markdown)")),
    ),
)

BUILTIN_WIDGETS: tuple[Descriptor, ...] = (
    Descriptor(
        id="author-card",
        label="Author Card",
        description="h-card with author info",
        icon="user",
    ),
    Descriptor(
        id="recent-posts",
        label="Recent Posts",
        description="Latest posts sidebar",
        icon="file-text",
        default_config={"maxItems": 5},
        config_schema=_fields(maxItems=("number", "Max items", 1, 20)),
    ),
    Descriptor(id="categories", label="Categories", description="Tag cloud", icon="tag"),
    Descriptor(id="search", label="Search", description="Site search box", icon="search"),
    Descriptor(
        id="social-activity",
        label="Social Activity",
        description="Bluesky and Mastodon feeds",
        icon="message-circle",
    ),
    Descriptor(
        id="github-repos",
        label="GitHub Projects",
        description="GitHub repositories and activity",
        icon="github",
    ),
    Descriptor(
        id="funkwhale",
        label="Listening",
        description="Funkwhale now playing and stats",
        icon="music",
    ),
    Descriptor(
        id="blogroll", label="Blogroll", description="Blog recommendations", icon="list"
    ),
    Descriptor(
        id="custom-html",
        label="Custom Content",
        description="Freeform HTML or text block",
        icon="code",
        default_config={"title": "", "content": ""},
        config_schema=_fields(
            title=("text", "Title (optional)"),
            content=("textarea", "Content (HTML)"),
        ),
    ),
)


@dc.dataclass(frozen=True, slots=True)
class CapabilityCatalog:
    """Every section and widget descriptor known after discovery.

    Built-ins come first, then each extension's contributions in
    registration order. Duplicate ids are kept; ``source_plugin`` tells them
    apart.
    """

    sections: tuple[Descriptor, ...] = ()
    widgets: tuple[Descriptor, ...] = ()

    def sections_by_source(self) -> dict[str, list[Descriptor]]:
        """Group sections by contributing extension, built-ins first."""
        grouped: dict[str, list[Descriptor]] = {}
        for section in self.sections:
            source = section.source_plugin or BUILTIN_SOURCE_LABEL
            grouped.setdefault(source, []).append(section)
        return grouped


EMPTY_CATALOG = CapabilityCatalog()


__all__ = [
    "BUILTIN_SECTIONS",
    "BUILTIN_WIDGETS",
    "EMPTY_CATALOG",
    "CapabilityCatalog",
    "Descriptor",
    "FieldSpec",
]
