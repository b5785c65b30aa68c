"""Homepage configuration builders.

Turn a submitted payload (JSON body or form fields) into the canonical
:class:`HomepageConfig`. Every structured field may arrive either as a
decoded value or as its JSON text. Absent fields take their defaults; the
whole document is rebuilt on every save, so nothing carries over from a
previous version.
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import datetime as dt
import typing as typ

from .._constants import DEFAULT_LAYOUT
from .helpers import STRUCTURED_FIELDS, _decode_json_field
from .models import HomepageConfig, HomepageConfigError, default_hero


def normalize_payload(payload: typ.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Return a copy of ``payload`` with JSON-encoded fields decoded."""
    match payload:
        case cabc.Mapping():
            data = dict(payload)
        case _:
            msg = "Homepage configuration must be a mapping."
            raise HomepageConfigError(msg)
    for name in STRUCTURED_FIELDS:
        if name in data:
            data[name] = _decode_json_field(name, data[name])
    return data


def _build_homepage_config(
    payload: typ.Mapping[str, typ.Any], *, updated_at: dt.datetime
) -> HomepageConfig:
    """Build the canonical homepage configuration from a submitted payload."""
    data = normalize_payload(payload)
    hero = data.get("hero")
    return HomepageConfig(
        layout=data.get("layout") or DEFAULT_LAYOUT,
        hero=copy.deepcopy(hero) if hero is not None else default_hero(),
        sections=_list_or_empty(data.get("sections")),
        sidebar=_list_or_empty(data.get("sidebar")),
        identity=copy.deepcopy(data.get("identity")),
        footer=_list_or_empty(data.get("footer")),
        blog_listing_sidebar=_list_or_empty(data.get("blogListingSidebar")),
        blog_post_sidebar=_list_or_empty(data.get("blogPostSidebar")),
        updated_at=updated_at,
    )


def _list_or_empty(value: object) -> typ.Any:
    """Return a deep copy of a supplied block list, or an empty list."""
    if value is None:
        return []
    return copy.deepcopy(value)


__all__ = ["_build_homepage_config", "normalize_payload"]
