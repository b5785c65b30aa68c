"""Load and normalise homepage builder configuration.

This subpackage covers two kinds of configuration: the endpoint options the
host supplies when mounting the homepage builder (read from an optional
``config/homepage.yaml`` plus the ``CONTENT_DIR`` environment variable), and
the homepage arrangement itself, which editors submit and the store
persists. Payload builders apply field defaults and decode JSON-encoded form
fields so both submission styles produce the same canonical document.

Examples
--------
>>> from homepage_builder.config import normalize_payload
>>> normalize_payload({"sections": '[{"type": "hero", "config": {}}]'})
{'sections': [{'type': 'hero', 'config': {}}]}
"""

from .homepage import normalize_payload
from .loader import (
    DEFAULT_OPTIONS_PATH,
    build_endpoint_options,
    load_endpoint_options,
    resolve_content_dir,
)
from .models import EndpointOptions, HomepageConfig, HomepageConfigError, default_hero

__all__ = [
    "DEFAULT_OPTIONS_PATH",
    "EndpointOptions",
    "HomepageConfig",
    "HomepageConfigError",
    "build_endpoint_options",
    "default_hero",
    "load_endpoint_options",
    "normalize_payload",
    "resolve_content_dir",
]
