"""Homepage configuration storage.

:class:`ConfigurationStore` owns the single homepage document. Saves replace
the whole document in the document store and then mirror a reduced
projection to ``<content_dir>/.indiekit/homepage.json`` so the static-site
build can watch a file instead of talking to the database.

The two writes are sequential, not transactional. When the mirror write fails
after the document was stored, :class:`MirrorWriteError` is raised carrying
the stored document, so callers can tell "saved but not mirrored" apart from
"not saved". Saves sharing a context are serialised, so the mirror always
matches the document the last save stored.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
import os
import tempfile
import typing as typ
from pathlib import Path

import msgspec

from .._constants import CONFIG_COLLECTION, CONFIG_DOCUMENT_ID, MIRROR_RELATIVE_PATH
from ..config.homepage import _build_homepage_config

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..context import ApplicationContext
    from .documents import DocumentCollection

logger = logging.getLogger(__name__)

PUBLIC_FIELDS: tuple[str, ...] = (
    "layout",
    "hero",
    "sections",
    "sidebar",
    "footer",
    "identity",
    "updatedAt",
)


class MirrorWriteError(OSError):
    """Raised when the document was stored but the mirror file was not written."""

    def __init__(self, msg: str, *, path: Path, document: dict[str, typ.Any]) -> None:
        super().__init__(msg)
        self.path = path
        self.document = document


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def get_default_config() -> dict[str, typ.Any]:
    """Return the starter configuration shown before anything is saved.

    Pure: no storage access, and every call returns a fresh object.
    """
    return {
        "layout": "two-column",
        "hero": {"enabled": True, "showSocial": True},
        "sections": [
            {
                "type": "recent-posts",
                "config": {"maxItems": 10, "postTypes": ["note", "article"]},
            },
        ],
        "sidebar": [
            {"type": "author-card", "config": {}},
            {"type": "recent-posts", "config": {"maxItems": 5}},
            {"type": "categories", "config": {}},
        ],
        "identity": None,
    }


def public_projection(
    document: typ.Mapping[str, typ.Any] | None,
) -> dict[str, typ.Any] | None:
    """Return only the fields the public build pipeline may see."""
    if document is None:
        return None
    return {name: document.get(name) for name in PUBLIC_FIELDS}


class ConfigurationStore:
    """Load and persist the homepage configuration document."""

    def __init__(
        self,
        context: ApplicationContext,
        *,
        clock: cabc.Callable[[], dt.datetime] = _utcnow,
    ) -> None:
        self.context = context
        self.clock = clock

    @property
    def mirror_path(self) -> Path:
        """Location of the build-readable JSON mirror."""
        return self.context.content_dir / MIRROR_RELATIVE_PATH

    def _collection(self) -> DocumentCollection:
        return self.context.database().collection(CONFIG_COLLECTION)

    async def load(self) -> dict[str, typ.Any] | None:
        """Return the stored document, or ``None`` when nothing was saved yet.

        Storage errors propagate. Callers fall back to
        :func:`get_default_config` themselves.
        """
        return await self._collection().find_one(CONFIG_DOCUMENT_ID)

    async def save(self, payload: typ.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
        """Normalise ``payload``, replace the stored document, and mirror it.

        Parameters
        ----------
        payload : Mapping[str, Any]
            Submitted configuration. Structured fields may be JSON strings.
            Omitted fields are reset to their defaults; ``updatedAt`` is
            always set here.

        Returns
        -------
        dict[str, Any]
            The canonical document as stored, including ``_id``.

        Raises
        ------
        HomepageConfigError
            If the payload is not a mapping or a field holds invalid JSON.
        MirrorWriteError
            If the document was stored but the mirror file could not be
            written.
        """
        config = _build_homepage_config(payload, updated_at=self.clock())
        document = {"_id": CONFIG_DOCUMENT_ID, **config.to_document()}
        async with self.context.save_lock:
            await self._collection().replace_one(
                CONFIG_DOCUMENT_ID, document, upsert=True
            )
            await asyncio.to_thread(self._write_mirror_file, document)
        return document

    async def write_mirror(self) -> Path | None:
        """Rewrite the mirror file from the stored document.

        Returns the mirror path, or ``None`` when no document exists yet.
        """
        async with self.context.save_lock:
            document = await self.load()
            if document is None:
                return None
            await asyncio.to_thread(self._write_mirror_file, document)
        return self.mirror_path

    def _write_mirror_file(self, document: dict[str, typ.Any]) -> None:
        path = self.mirror_path
        encoded = msgspec.json.format(
            msgspec.json.encode(public_projection(document)), indent=2
        )
        staging: Path | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp", delete=False
            ) as handle:
                staging = Path(handle.name)
                handle.write(encoded + b"\n")
            os.replace(staging, path)
        except OSError as exc:
            if staging is not None:
                staging.unlink(missing_ok=True)
            msg = f"Stored homepage config but failed to write {path}: {exc}"
            raise MirrorWriteError(msg, path=path, document=document) from exc
        logger.info("Wrote config to %s", path)


__all__ = [
    "PUBLIC_FIELDS",
    "ConfigurationStore",
    "MirrorWriteError",
    "get_default_config",
    "public_projection",
]
