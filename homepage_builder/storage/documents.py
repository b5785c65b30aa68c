"""Document-store backends for the homepage builder.

The configuration store only needs two document operations: fetch a document
by identity and replace it wholesale (optionally inserting it). Any object
providing :class:`DocumentDatabase` can back the store; two implementations
ship here:

* :class:`MemoryDatabase` keeps documents in process memory (tests and
  ephemeral previews).
* :class:`SqliteDatabase` keeps one JSON document per row in a local SQLite
  file. Blocking ``sqlite3`` calls run in a worker thread so the event loop
  only suspends at the storage boundary.

Schema (SQLite)::

    documents(
      collection TEXT NOT NULL,
      id TEXT NOT NULL,
      body TEXT NOT NULL,             -- JSON, datetimes as {"$date": iso}
      PRIMARY KEY (collection, id)
    )
"""

from __future__ import annotations

import asyncio
import copy
import datetime as dt
import json
import sqlite3
import typing as typ
from contextlib import closing
from pathlib import Path


class DocumentCollection(typ.Protocol):
    """A named set of JSON-like documents addressed by ``_id``."""

    async def find_one(self, document_id: str) -> dict[str, typ.Any] | None:
        """Return the document with ``_id == document_id`` or ``None``."""
        ...

    async def replace_one(
        self,
        document_id: str,
        document: typ.Mapping[str, typ.Any],
        *,
        upsert: bool = False,
    ) -> None:
        """Replace the whole document, inserting it when ``upsert`` is set."""
        ...


class DocumentDatabase(typ.Protocol):
    """Factory for named collections."""

    def collection(self, name: str) -> DocumentCollection:
        """Return the collection called ``name``."""
        ...


class MemoryCollection:
    """In-process collection; stored and returned documents are copies."""

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, typ.Any]] = {}

    async def find_one(self, document_id: str) -> dict[str, typ.Any] | None:
        document = self._documents.get(document_id)
        return copy.deepcopy(document) if document is not None else None

    async def replace_one(
        self,
        document_id: str,
        document: typ.Mapping[str, typ.Any],
        *,
        upsert: bool = False,
    ) -> None:
        if document_id not in self._documents and not upsert:
            return
        stored = copy.deepcopy(dict(document))
        stored["_id"] = document_id
        self._documents[document_id] = stored


class MemoryDatabase:
    """Collections held in a dictionary for the lifetime of the process."""

    def __init__(self) -> None:
        self._collections: dict[str, MemoryCollection] = {}

    def collection(self, name: str) -> MemoryCollection:
        return self._collections.setdefault(name, MemoryCollection())


def _encode_value(value: object) -> object:
    if isinstance(value, dt.datetime):
        return {"$date": value.isoformat()}
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _decode_object(payload: dict[str, typ.Any]) -> object:
    match payload:
        case {"$date": str(text)} if len(payload) == 1:
            return dt.datetime.fromisoformat(text)
        case _:
            return payload


class SqliteCollection:
    """Collection stored as rows of the shared ``documents`` table."""

    def __init__(self, database: SqliteDatabase, name: str) -> None:
        self.database = database
        self.name = name

    async def find_one(self, document_id: str) -> dict[str, typ.Any] | None:
        return await asyncio.to_thread(self._find_one, document_id)

    async def replace_one(
        self,
        document_id: str,
        document: typ.Mapping[str, typ.Any],
        *,
        upsert: bool = False,
    ) -> None:
        stored = dict(document)
        stored["_id"] = document_id
        body = json.dumps(stored, default=_encode_value)
        await asyncio.to_thread(self._replace_one, document_id, body, upsert)

    def _find_one(self, document_id: str) -> dict[str, typ.Any] | None:
        with closing(self.database.connect()) as conn:
            row = conn.execute(
                "SELECT body FROM documents WHERE collection = ? AND id = ?",
                (self.name, document_id),
            ).fetchone()
        if row is None:
            return None
        return json.loads(row[0], object_hook=_decode_object)

    def _replace_one(self, document_id: str, body: str, upsert: bool) -> None:
        with closing(self.database.connect()) as conn, conn:
            if upsert:
                conn.execute(
                    "INSERT INTO documents (collection, id, body) VALUES (?, ?, ?) "
                    "ON CONFLICT (collection, id) DO UPDATE SET body = excluded.body",
                    (self.name, document_id, body),
                )
            else:
                conn.execute(
                    "UPDATE documents SET body = ? WHERE collection = ? AND id = ?",
                    (body, self.name, document_id),
                )


class SqliteDatabase:
    """Document database persisted in a single SQLite file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with closing(self.connect()) as conn, conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    collection TEXT NOT NULL,
                    id TEXT NOT NULL,
                    body TEXT NOT NULL,
                    PRIMARY KEY (collection, id)
                )
                """
            )

    def connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path)

    def collection(self, name: str) -> SqliteCollection:
        return SqliteCollection(self, name)


__all__ = [
    "DocumentCollection",
    "DocumentDatabase",
    "MemoryCollection",
    "MemoryDatabase",
    "SqliteCollection",
    "SqliteDatabase",
]
