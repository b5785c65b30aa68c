"""Load homepage endpoint options from YAML and the environment."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import CONTENT_DIR_ENV, DEFAULT_CONTENT_DIR, DEFAULT_MOUNT_PATH
from .helpers import _normalize_mount_path, _optional_path
from .models import EndpointOptions, HomepageConfigError

DEFAULT_OPTIONS_PATH = Path("config/homepage.yaml")


def load_endpoint_options(path: Path | None = None) -> EndpointOptions:
    """Load endpoint options from a YAML file.

    Parameters
    ----------
    path : Path, optional
        Location of the options file. When ``None`` or missing on disk the
        built-in defaults are returned.

    Returns
    -------
    EndpointOptions
        Options with ``mount_path``, ``content_dir`` and ``database_path``
        resolved from the ``homepage`` mapping of the file.

    Raises
    ------
    HomepageConfigError
        If the file or its ``homepage`` entry is not a mapping.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> options = load_endpoint_options(Path("config/homepage.yaml"))  # doctest: +SKIP
    >>> options.mount_path  # doctest: +SKIP
    '/homepage'
    """
    if path is None or not path.exists():
        return EndpointOptions()

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    match loaded:
        case {"homepage": dict() as section}:
            return build_endpoint_options(section)
        case {"homepage": None}:
            return EndpointOptions()
        case dict():
            return build_endpoint_options(loaded)
        case _:
            msg = f"Options file '{path}' must contain a mapping."
            raise HomepageConfigError(msg)


def build_endpoint_options(payload: typ.Mapping[str, typ.Any]) -> EndpointOptions:
    """Build endpoint options from a mapping using either key spelling."""
    mount_path = payload.get("mount_path", payload.get("mountPath"))
    content_dir = payload.get("content_dir", payload.get("contentDir"))
    database_path = payload.get("database_path", payload.get("databasePath"))
    return EndpointOptions(
        mount_path=_normalize_mount_path(mount_path, DEFAULT_MOUNT_PATH),
        content_dir=_optional_path(content_dir),
        database_path=_optional_path(database_path),
    )


def resolve_content_dir(
    options: EndpointOptions, environ: typ.Mapping[str, str] | None = None
) -> Path:
    """Return the content root: explicit option, then ``CONTENT_DIR``, then default."""
    if options.content_dir is not None:
        return options.content_dir
    env = os.environ if environ is None else environ
    return Path(env.get(CONTENT_DIR_ENV) or DEFAULT_CONTENT_DIR)


__all__ = [
    "DEFAULT_OPTIONS_PATH",
    "build_endpoint_options",
    "load_endpoint_options",
    "resolve_content_dir",
]
