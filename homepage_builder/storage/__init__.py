"""Persistence for the homepage configuration document."""

from .config_store import (
    PUBLIC_FIELDS,
    ConfigurationStore,
    MirrorWriteError,
    get_default_config,
    public_projection,
)
from .documents import (
    DocumentCollection,
    DocumentDatabase,
    MemoryDatabase,
    SqliteDatabase,
)

__all__ = [
    "PUBLIC_FIELDS",
    "ConfigurationStore",
    "DocumentCollection",
    "DocumentDatabase",
    "MemoryDatabase",
    "MirrorWriteError",
    "SqliteDatabase",
    "get_default_config",
    "public_projection",
]
