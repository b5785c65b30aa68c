"""Application context shared by the homepage builder components."""

from __future__ import annotations

import asyncio
import dataclasses as dc
import typing as typ
from pathlib import Path

from ._constants import DEFAULT_CONTENT_DIR, DEFAULT_MOUNT_PATH
from .catalog import EMPTY_CATALOG, CapabilityCatalog
from .config.models import EndpointOptions

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .presets import LayoutPreset
    from .storage.documents import DocumentDatabase


@dc.dataclass(slots=True)
class ApplicationContext:
    """State the endpoint publishes for its routes and the store.

    Attributes
    ----------
    options : EndpointOptions
        Options the endpoint was created with.
    mount_path : str
        Path the protected and public routers are mounted under.
    content_dir : Path
        Content root; the build mirror lives below it.
    layout_presets : tuple[LayoutPreset, ...]
        Preset library offered by the dashboard.
    get_database : Callable[[], DocumentDatabase] or None
        Accessor returning the host's document database.
    catalog : CapabilityCatalog
        Result of the last discovery pass; empty until discovery runs.
    save_lock : asyncio.Lock
        Held while a save stores the document and rewrites the mirror.
    """

    options: EndpointOptions = dc.field(default_factory=EndpointOptions)
    mount_path: str = DEFAULT_MOUNT_PATH
    content_dir: Path = Path(DEFAULT_CONTENT_DIR)
    layout_presets: tuple[LayoutPreset, ...] = ()
    get_database: cabc.Callable[[], DocumentDatabase] | None = None
    catalog: CapabilityCatalog = EMPTY_CATALOG
    save_lock: asyncio.Lock = dc.field(default_factory=asyncio.Lock, repr=False)

    def database(self) -> DocumentDatabase:
        """Return the document database or fail when none is configured."""
        database = self.get_database() if self.get_database else None
        if database is None:
            msg = "No document database has been attached to the homepage endpoint."
            raise RuntimeError(msg)
        return database


__all__ = ["ApplicationContext"]
