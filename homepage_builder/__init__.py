"""Homepage composition engine for a content-publishing platform.

This package lets an operator assemble a homepage from pluggable sections
(main column blocks) and widgets (sidebar blocks), persist the arrangement,
and expose it to both an authenticated editor and a public build pipeline.

Exports
-------
- ``ExtensionHost`` / ``HomepageEndpoint``: two-phase boot and discovery.
- ``ConfigurationStore``: load/save with the build-readable JSON mirror.
- ``detect_active_preset`` / ``apply_preset``: preset matching and switching.
- ``app`` / ``main``: Cyclopts CLI entry.

Examples
--------
>>> from homepage_builder import ExtensionHost, HomepageEndpoint
>>> host = ExtensionHost()
>>> endpoint = HomepageEndpoint()
>>> host.register(endpoint)
>>> host.boot()
>>> [widget.id for widget in endpoint.context.catalog.widgets][:2]
['author-card', 'recent-posts']
"""

from __future__ import annotations

from .cli import app, main
from .presets import BUILTIN_PRESETS, apply_preset, detect_active_preset
from .registry import ExtensionHost, HomepageEndpoint, discover_capabilities
from .storage import ConfigurationStore, get_default_config

__all__ = [
    "BUILTIN_PRESETS",
    "ConfigurationStore",
    "ExtensionHost",
    "HomepageEndpoint",
    "app",
    "apply_preset",
    "detect_active_preset",
    "discover_capabilities",
    "get_default_config",
    "main",
]
