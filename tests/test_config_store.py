"""Unit tests for the homepage configuration store.

These tests cover loading, saving, defaulting, the JSON mirror written for
the build pipeline, and the public projection. Saves run against an
in-memory database unless a test targets the SQLite backend explicitly.

Usage
-----
Run ``pytest tests/test_config_store.py -v``. Only pytest's ``tmp_path`` and
the fixtures from ``tests/conftest.py`` are required.
"""

from __future__ import annotations

import asyncio
import json
import typing as typ

import pytest

from homepage_builder.config import HomepageConfigError
from homepage_builder.context import ApplicationContext
from homepage_builder.storage import (
    PUBLIC_FIELDS,
    ConfigurationStore,
    MirrorWriteError,
    SqliteDatabase,
    get_default_config,
    public_projection,
)

if typ.TYPE_CHECKING:
    import datetime as dt
    from pathlib import Path


@pytest.mark.asyncio
async def test_load_returns_none_before_first_save(store: ConfigurationStore) -> None:
    assert await store.load() is None


@pytest.mark.asyncio
async def test_save_then_load_round_trips(
    store: ConfigurationStore, fixed_now: dt.datetime
) -> None:
    saved = await store.save(
        {
            "layout": "two-column",
            "sections": [{"type": "hero", "config": {}}],
            "sidebar": [{"type": "search", "config": {}}],
            "identity": {"name": "Ada"},
        }
    )
    assert await store.load() == saved
    assert saved["_id"] == "homepage"
    assert saved["updatedAt"] == fixed_now


@pytest.mark.asyncio
async def test_save_applies_defaults_for_missing_fields(store: ConfigurationStore) -> None:
    saved = await store.save({})
    assert saved["layout"] == "single-column"
    assert saved["hero"] == {"enabled": True, "showSocial": True}
    assert saved["sections"] == []
    assert saved["sidebar"] == []
    assert saved["footer"] == []
    assert saved["blogListingSidebar"] == []
    assert saved["blogPostSidebar"] == []
    assert saved["identity"] is None


@pytest.mark.asyncio
async def test_save_replaces_document_wholesale(store: ConfigurationStore) -> None:
    await store.save({"layout": "two-column", "footer": [{"type": "webring"}]})
    saved = await store.save({"sections": [{"type": "hero", "config": {}}]})
    assert saved["layout"] == "single-column"
    assert saved["footer"] == []


@pytest.mark.asyncio
async def test_client_supplied_updated_at_is_ignored(
    store: ConfigurationStore, fixed_now: dt.datetime
) -> None:
    saved = await store.save({"updatedAt": "1999-01-01T00:00:00Z"})
    assert saved["updatedAt"] == fixed_now


@pytest.mark.asyncio
async def test_json_encoded_fields_match_structured_fields(
    store: ConfigurationStore,
) -> None:
    as_text = await store.save({"sections": '[{"type":"hero","config":{}}]'})
    structured = await store.save({"sections": [{"type": "hero", "config": {}}]})
    assert as_text["sections"] == structured["sections"] == [
        {"type": "hero", "config": {}}
    ]


@pytest.mark.asyncio
async def test_invalid_json_field_is_rejected(store: ConfigurationStore) -> None:
    with pytest.raises(HomepageConfigError, match="sidebar"):
        await store.save({"sidebar": "[{not json"})
    assert await store.load() is None


@pytest.mark.asyncio
async def test_save_writes_mirror_without_storage_identity(
    store: ConfigurationStore,
) -> None:
    await store.save({"layout": "two-column", "footer": [{"type": "webring"}]})
    text = store.mirror_path.read_text(encoding="utf-8")
    mirrored = json.loads(text)
    assert set(mirrored) == set(PUBLIC_FIELDS)
    assert "_id" not in mirrored
    assert mirrored["layout"] == "two-column"
    assert mirrored["footer"] == [{"type": "webring"}]
    assert mirrored["updatedAt"].startswith("2026-01-02T03:04:05")
    assert "\n  " in text


@pytest.mark.asyncio
async def test_mirror_path_lives_under_content_dir(
    store: ConfigurationStore, context: ApplicationContext
) -> None:
    await store.save({})
    assert store.mirror_path == context.content_dir / ".indiekit" / "homepage.json"
    assert store.mirror_path.exists()


@pytest.mark.asyncio
async def test_mirror_failure_is_distinguishable_and_keeps_stored_document(
    tmp_path: Path, context: ApplicationContext
) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    context.content_dir = blocker
    store = ConfigurationStore(context)

    with pytest.raises(MirrorWriteError) as excinfo:
        await store.save({"layout": "two-column"})

    assert excinfo.value.document["layout"] == "two-column"
    stored = await store.load()
    assert stored is not None
    assert stored["layout"] == "two-column"


@pytest.mark.asyncio
async def test_failed_mirror_write_leaves_no_staging_file(
    store: ConfigurationStore,
) -> None:
    # A non-empty directory at the mirror path makes the final rename fail.
    store.mirror_path.mkdir(parents=True)
    (store.mirror_path / "keep").write_text("", encoding="utf-8")

    with pytest.raises(MirrorWriteError):
        await store.save({"layout": "two-column"})

    assert list(store.mirror_path.parent.glob("*.tmp")) == []


@pytest.mark.asyncio
async def test_concurrent_saves_leave_mirror_matching_stored_document(
    store: ConfigurationStore,
) -> None:
    payloads = [
        {"sections": [{"type": "custom-html", "config": {"content": str(index)}}]}
        for index in range(40)
    ]

    await asyncio.gather(*(store.save(payload) for payload in payloads))

    stored = await store.load()
    mirrored = json.loads(store.mirror_path.read_text(encoding="utf-8"))
    assert mirrored["sections"] == stored["sections"]
    assert list(store.mirror_path.parent.glob("*.tmp")) == []


@pytest.mark.asyncio
async def test_write_mirror_without_document_returns_none(
    store: ConfigurationStore,
) -> None:
    assert await store.write_mirror() is None
    assert not store.mirror_path.exists()


@pytest.mark.asyncio
async def test_write_mirror_restores_deleted_file(store: ConfigurationStore) -> None:
    await store.save({"layout": "full-width-hero"})
    store.mirror_path.unlink()
    assert await store.write_mirror() == store.mirror_path
    assert json.loads(store.mirror_path.read_text(encoding="utf-8"))["layout"] == (
        "full-width-hero"
    )


@pytest.mark.asyncio
async def test_sqlite_backend_round_trips_timestamps(
    tmp_path: Path, context: ApplicationContext, fixed_now: dt.datetime
) -> None:
    database = SqliteDatabase(tmp_path / "db" / "homepage.db")
    context.get_database = lambda: database
    store = ConfigurationStore(context, clock=lambda: fixed_now)

    assert await store.load() is None
    saved = await store.save({"sidebar": '[{"type": "search", "config": {}}]'})
    loaded = await store.load()

    assert loaded == saved
    assert loaded["updatedAt"] == fixed_now


@pytest.mark.asyncio
async def test_load_surfaces_missing_database(tmp_path: Path) -> None:
    store = ConfigurationStore(ApplicationContext(content_dir=tmp_path))
    with pytest.raises(RuntimeError, match="database"):
        await store.load()


def test_default_config_is_pure_and_fresh() -> None:
    first = get_default_config()
    second = get_default_config()
    assert first == second
    assert first is not second
    first["sidebar"].append({"type": "search"})
    assert get_default_config()["sidebar"] == second["sidebar"]
    assert second["layout"] == "two-column"
    assert [entry["type"] for entry in second["sections"]] == ["recent-posts"]
    assert len(second["sidebar"]) == 3


def test_public_projection_whitelists_fields(fixed_now: dt.datetime) -> None:
    document = {
        "_id": "homepage",
        "layout": "two-column",
        "hero": {},
        "sections": [],
        "sidebar": [],
        "blogPostSidebar": [{"type": "toc"}],
        "footer": [],
        "identity": None,
        "updatedAt": fixed_now,
    }
    projected = public_projection(document)
    assert projected is not None
    assert list(projected) == list(PUBLIC_FIELDS)
    assert public_projection(None) is None
