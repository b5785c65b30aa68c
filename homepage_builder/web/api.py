"""JSON endpoints for homepage configuration."""

from __future__ import annotations

import logging
import typing as typ

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..context import ApplicationContext
from ..storage.config_store import (
    ConfigurationStore,
    get_default_config,
    public_projection,
)
from .dependencies import get_context, get_store

logger = logging.getLogger(__name__)

router = APIRouter()
public_router = APIRouter()

ContextDep = typ.Annotated[ApplicationContext, Depends(get_context)]
StoreDep = typ.Annotated[ConfigurationStore, Depends(get_store)]


def _failure(exc: Exception) -> JSONResponse:
    return JSONResponse({"success": False, "error": str(exc)}, status_code=500)


@router.get("/api/sections")
async def list_sections(context: ContextDep):
    """List every discovered section type."""
    try:
        sections = [section.to_dict() for section in context.catalog.sections]
    except Exception as exc:
        logger.exception("Section listing error")
        return _failure(exc)
    return {"success": True, "sections": sections}


@router.get("/api/widgets")
async def list_widgets(context: ContextDep):
    """List every discovered widget type."""
    try:
        widgets = [widget.to_dict() for widget in context.catalog.widgets]
    except Exception as exc:
        logger.exception("Widget listing error")
        return _failure(exc)
    return {"success": True, "widgets": widgets}


@router.get("/api/config")
async def get_config(store: StoreDep):
    """Return the stored configuration, or the starter one."""
    try:
        config = await store.load() or get_default_config()
    except Exception as exc:
        logger.exception("Config read error")
        return _failure(exc)
    return {"success": True, "config": config}


@public_router.get("/api/config.json")
async def get_config_public(store: StoreDep):
    """Public config for the site build; ``null`` means "use built-in fallback".

    Never fails: any error is logged and answered with ``null``.
    """
    try:
        return public_projection(await store.load())
    except Exception:
        logger.exception("Config fetch error")
        return None


__all__ = ["public_router", "router"]
