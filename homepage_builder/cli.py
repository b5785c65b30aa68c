"""Cyclopts CLI entrypoint for running and maintaining the homepage builder.

The ``homepage`` console script boots the extension host with the homepage
endpoint, then either serves the editor and public API over HTTP or performs
a one-off maintenance task against the configured document store.

Examples
--------
Serve the editor on the default port:

>>> from homepage_builder.cli import main
>>> main()  # doctest: +SKIP

Rewrite the build mirror after it diverged from the database:

>>> from homepage_builder.cli import app
>>> app(["export", "--config", "config/homepage.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import DEFAULT_OPTIONS_PATH, load_endpoint_options
from .presets import detect_active_preset
from .registry import ExtensionHost, HomepageEndpoint
from .storage import ConfigurationStore, MemoryDatabase, SqliteDatabase
from .storage.config_store import get_default_config

app = App(name="homepage", config=cyclopts.config.Env("HOMEPAGE_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to endpoint options", env_var="HOMEPAGE_CONFIG")
]
LogLevelOption = typ.Annotated[str, Parameter(help="Logging level")]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def boot_endpoint(config: Path) -> HomepageEndpoint:
    """Register the homepage endpoint with a fresh host and run discovery."""
    options = load_endpoint_options(config)
    if options.database_path is not None:
        database = SqliteDatabase(options.database_path)
    else:
        database = MemoryDatabase()
    host = ExtensionHost(database=database)
    endpoint = HomepageEndpoint(options)
    host.register(endpoint)
    host.boot()
    return endpoint


@app.command(help="Serve the editor and public config API.")
def serve(
    *,
    config: ConfigOption = DEFAULT_OPTIONS_PATH,
    host: typ.Annotated[str, Parameter(help="Interface to bind")] = "127.0.0.1",
    port: typ.Annotated[int, Parameter(help="Port to listen on")] = 8000,
    log_level: LogLevelOption = "info",
) -> None:
    """Boot the endpoint and run it under uvicorn."""
    import uvicorn

    from .web import create_app

    _configure_logging(log_level)
    endpoint = boot_endpoint(config)
    uvicorn.run(create_app(endpoint.context), host=host, port=port, log_level=log_level)


@app.command(help="Rewrite the build mirror from the stored configuration.")
def export(
    *, config: ConfigOption = DEFAULT_OPTIONS_PATH, log_level: LogLevelOption = "warning"
) -> None:
    """Re-emit ``<content_dir>/.indiekit/homepage.json`` from the document store."""
    _configure_logging(log_level)
    endpoint = boot_endpoint(config)
    path = asyncio.run(ConfigurationStore(endpoint.context).write_mirror())
    if path is None:
        print("no configuration saved; nothing to export")
    else:
        print(f"wrote {path}")


@app.command(help="List layout presets, marking the active one.")
def presets(
    *, config: ConfigOption = DEFAULT_OPTIONS_PATH, log_level: LogLevelOption = "warning"
) -> None:
    """Print each preset and flag the one the stored configuration matches."""
    _configure_logging(log_level)
    endpoint = boot_endpoint(config)
    context = endpoint.context
    current = asyncio.run(ConfigurationStore(context).load()) or get_default_config()
    active = detect_active_preset(current, context.layout_presets)
    for preset in context.layout_presets:
        marker = "*" if preset.id == active else " "
        print(f"{marker} {preset.id}: {preset.label} ({preset.layout})")
    if active is None:
        print("* custom")


@app.command(help="Print the discovered section and widget types.")
def catalog(
    *, config: ConfigOption = DEFAULT_OPTIONS_PATH, log_level: LogLevelOption = "warning"
) -> None:
    """Print the catalog grouped by kind and source."""
    _configure_logging(log_level)
    endpoint = boot_endpoint(config)
    discovered = endpoint.context.catalog
    for kind, entries in (("sections", discovered.sections), ("widgets", discovered.widgets)):
        print(f"{kind}:")
        for entry in entries:
            source = f" [{entry.source_plugin}]" if entry.source_plugin else ""
            print(f"  {entry.id}: {entry.label}{source}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `homepage` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
