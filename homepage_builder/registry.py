"""Capability discovery for homepage sections and widgets.

Extensions loaded by the host may contribute block types by exposing a
``homepage_sections`` and/or ``homepage_widgets`` attribute (the host's
camelCase spelling, ``homepageSections``/``homepageWidgets``, is accepted as
well). Nothing else is required: an extension without those attributes
simply contributes nothing.

Discovery must see every extension, so it runs in a second boot phase. The
host first registers all extensions (:meth:`ExtensionHost.register`), then
calls :meth:`ExtensionHost.boot`, which runs the callbacks extensions
queued with :meth:`ExtensionHost.on_ready`. :class:`HomepageEndpoint` queues
its discovery pass there, so extensions registered after it still count.

Examples
--------
>>> from homepage_builder.registry import ExtensionHost, HomepageEndpoint
>>> host = ExtensionHost()
>>> endpoint = HomepageEndpoint()
>>> host.register(endpoint)
>>> host.boot()
>>> len(endpoint.context.catalog.sections)
3
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import CONFIG_COLLECTION
from .catalog import BUILTIN_SECTIONS, BUILTIN_WIDGETS, CapabilityCatalog, Descriptor
from .config.loader import resolve_content_dir
from .config.models import EndpointOptions
from .context import ApplicationContext
from .presets import BUILTIN_PRESETS, LayoutPreset

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from fastapi import APIRouter

    from .storage.documents import DocumentDatabase

logger = logging.getLogger(__name__)

ContributedDescriptor = Descriptor | typ.Mapping[str, typ.Any]


@typ.runtime_checkable
class SectionProvider(typ.Protocol):
    """Extension contributing main-column section types."""

    name: str

    @property
    def homepage_sections(self) -> cabc.Iterable[ContributedDescriptor] | None: ...


@typ.runtime_checkable
class WidgetProvider(typ.Protocol):
    """Extension contributing sidebar widget types."""

    name: str

    @property
    def homepage_widgets(self) -> cabc.Iterable[ContributedDescriptor] | None: ...


def _contributed(
    extension: object, attribute: str, host_attribute: str
) -> list[ContributedDescriptor]:
    value = getattr(extension, attribute, None)
    if value is None:
        value = getattr(extension, host_attribute, None)
    return list(value or ())


def contributed_sections(extension: object) -> list[ContributedDescriptor]:
    """Return the section descriptors ``extension`` offers, if any."""
    if isinstance(extension, SectionProvider) and extension.homepage_sections is not None:
        return list(extension.homepage_sections)
    return _contributed(extension, "homepage_sections", "homepageSections")


def contributed_widgets(extension: object) -> list[ContributedDescriptor]:
    """Return the widget descriptors ``extension`` offers, if any."""
    if isinstance(extension, WidgetProvider) and extension.homepage_widgets is not None:
        return list(extension.homepage_widgets)
    return _contributed(extension, "homepage_widgets", "homepageWidgets")


def _tagged(
    items: cabc.Iterable[ContributedDescriptor], source: str, kind: str
) -> list[Descriptor]:
    tagged: list[Descriptor] = []
    for item in items:
        try:
            descriptor = (
                item if isinstance(item, Descriptor) else Descriptor.from_mapping(item)
            )
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping %s descriptor from %s: %s", kind, source, exc)
            continue
        tagged.append(descriptor.with_source(source))
    return tagged


def discover_capabilities(
    extensions: cabc.Iterable[object],
    *,
    builtin_sections: cabc.Iterable[Descriptor] = BUILTIN_SECTIONS,
    builtin_widgets: cabc.Iterable[Descriptor] = BUILTIN_WIDGETS,
    exclude: object | None = None,
) -> CapabilityCatalog:
    """Build a fresh catalog from built-ins plus every extension's contributions.

    Parameters
    ----------
    extensions : Iterable[object]
        Loaded extensions in registration order.
    builtin_sections, builtin_widgets : Iterable[Descriptor]
        Descriptors seeded at the front of the catalog, untagged.
    exclude : object, optional
        Extension skipped during the scan; the homepage endpoint passes
        itself so its built-ins are not ingested twice.

    Returns
    -------
    CapabilityCatalog
        Built-ins first, then contributions one extension at a time, each
        tagged with ``source_plugin = extension.name``. Duplicate ids are
        kept. A malformed entry (not a mapping, or lacking an ``id``) is
        logged and skipped; the rest of the pass continues.
    """
    sections = list(builtin_sections)
    widgets = list(builtin_widgets)
    for extension in extensions:
        if extension is exclude:
            continue
        source = str(getattr(extension, "name", type(extension).__name__))
        sections.extend(_tagged(contributed_sections(extension), source, "section"))
        widgets.extend(_tagged(contributed_widgets(extension), source, "widget"))
    catalog = CapabilityCatalog(sections=tuple(sections), widgets=tuple(widgets))
    logger.info(
        "Discovered %d sections, %d widgets",
        len(catalog.sections),
        len(catalog.widgets),
    )
    return catalog


class ExtensionHost:
    """Minimal extension host with an explicit two-phase boot.

    Phase one: :meth:`register` each extension; extensions call
    :meth:`add_endpoint`, :meth:`add_collection` and :meth:`on_ready` from
    their ``init`` hook. Phase two: :meth:`boot` runs every ready callback
    once, in the order they were queued.
    """

    def __init__(self, *, database: DocumentDatabase | None = None) -> None:
        self.database = database
        self.endpoints: list[object] = []
        self.collections: list[str] = []
        self._ready_callbacks: list[cabc.Callable[[ExtensionHost], object]] = []
        self._booted = False

    @property
    def booted(self) -> bool:
        return self._booted

    def register(self, extension: object) -> None:
        """Run ``extension.init(host)``, or add it as a plain endpoint."""
        self._require_loading("register extensions")
        init = getattr(extension, "init", None)
        if callable(init):
            init(self)
        else:
            self.add_endpoint(extension)

    def add_endpoint(self, endpoint: object) -> None:
        self._require_loading("add endpoints")
        self.endpoints.append(endpoint)

    def add_collection(self, name: str) -> None:
        if name not in self.collections:
            self.collections.append(name)

    def on_ready(self, callback: cabc.Callable[[ExtensionHost], object]) -> None:
        """Queue ``callback`` to run once every extension is registered."""
        self._require_loading("queue ready callbacks")
        self._ready_callbacks.append(callback)

    def boot(self) -> None:
        """Close registration and run the queued ready callbacks."""
        self._require_loading("boot")
        self._booted = True
        callbacks, self._ready_callbacks = self._ready_callbacks, []
        for callback in callbacks:
            callback(self)

    def _require_loading(self, action: str) -> None:
        if self._booted:
            msg = f"Cannot {action} after the extension host has booted."
            raise RuntimeError(msg)


class HomepageEndpoint:
    """The homepage builder as a host extension."""

    name = "Homepage builder endpoint"

    def __init__(
        self,
        options: EndpointOptions | None = None,
        *,
        context: ApplicationContext | None = None,
    ) -> None:
        self.options = options or EndpointOptions()
        self.mount_path = self.options.mount_path
        self.context = context or ApplicationContext(options=self.options)

    @property
    def homepage_sections(self) -> tuple[Descriptor, ...]:
        """Built-in section types (always available)."""
        return BUILTIN_SECTIONS

    @property
    def homepage_widgets(self) -> tuple[Descriptor, ...]:
        """Built-in sidebar widget types."""
        return BUILTIN_WIDGETS

    @property
    def layout_presets(self) -> tuple[LayoutPreset, ...]:
        return BUILTIN_PRESETS

    @property
    def navigation_items(self) -> dict[str, typ.Any]:
        return {
            "href": self.mount_path,
            "text": "homepage.title",
            "requiresDatabase": True,
        }

    @property
    def shortcut_items(self) -> dict[str, typ.Any]:
        return {
            "url": self.mount_path,
            "name": "homepage.title",
            "iconName": "home",
            "requiresDatabase": True,
        }

    @property
    def routes(self) -> APIRouter:
        """Router for the authenticated editor; the host adds authentication."""
        from .web import protected_router

        return protected_router

    @property
    def routes_public(self) -> APIRouter:
        """Router the build pipeline reads without authentication."""
        from .web import public_router

        return public_router

    def init(self, host: ExtensionHost) -> None:
        """Register with ``host`` and queue discovery for the ready phase."""
        host.add_endpoint(self)
        host.add_collection(CONFIG_COLLECTION)

        self.context.options = self.options
        self.context.mount_path = self.mount_path
        self.context.layout_presets = self.layout_presets
        self.context.content_dir = resolve_content_dir(self.options)
        self.context.get_database = lambda: host.database

        host.on_ready(self.discover)

    def discover(self, host: ExtensionHost) -> CapabilityCatalog:
        """Rebuild the catalog from every endpoint the host has loaded."""
        catalog = discover_capabilities(
            host.endpoints,
            builtin_sections=self.homepage_sections,
            builtin_widgets=self.homepage_widgets,
            exclude=self,
        )
        self.context.catalog = catalog
        return catalog


__all__ = [
    "ExtensionHost",
    "HomepageEndpoint",
    "SectionProvider",
    "WidgetProvider",
    "contributed_sections",
    "contributed_widgets",
    "discover_capabilities",
]
