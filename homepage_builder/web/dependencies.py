"""FastAPI dependencies resolving the homepage context from the app."""

from __future__ import annotations

import typing as typ

from fastapi import Depends, Request

from ..context import ApplicationContext
from ..storage.config_store import ConfigurationStore


def get_context(request: Request) -> ApplicationContext:
    """Return the context the host attached to ``app.state.homepage``."""
    return request.app.state.homepage


def get_store(
    context: typ.Annotated[ApplicationContext, Depends(get_context)],
) -> ConfigurationStore:
    return ConfigurationStore(context)


def wants_json(request: Request) -> bool:
    """Return True when the client asked for a JSON response."""
    return "application/json" in request.headers.get("accept", "")


__all__ = ["get_context", "get_store", "wants_json"]
