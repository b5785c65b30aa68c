"""Shared fixtures for homepage builder tests."""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from homepage_builder.context import ApplicationContext
from homepage_builder.presets import BUILTIN_PRESETS
from homepage_builder.storage import ConfigurationStore, MemoryDatabase

if typ.TYPE_CHECKING:
    from pathlib import Path

FIXED_NOW = dt.datetime(2026, 1, 2, 3, 4, 5, tzinfo=dt.UTC)


@pytest.fixture
def fixed_now() -> dt.datetime:
    return FIXED_NOW


@pytest.fixture
def database() -> MemoryDatabase:
    return MemoryDatabase()


@pytest.fixture
def context(tmp_path: Path, database: MemoryDatabase) -> ApplicationContext:
    """Context wired to an in-memory database and a temporary content root."""
    return ApplicationContext(
        content_dir=tmp_path / "content",
        layout_presets=BUILTIN_PRESETS,
        get_database=lambda: database,
    )


@pytest.fixture
def store(context: ApplicationContext) -> ConfigurationStore:
    return ConfigurationStore(context, clock=lambda: FIXED_NOW)
