"""Editor routes: dashboard page, save, and preset application."""

from __future__ import annotations

import json
import logging
import typing as typ
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .._constants import LAYOUTS
from ..context import ApplicationContext
from ..presets import UnknownPresetError, apply_preset, detect_active_preset
from ..storage.config_store import ConfigurationStore, get_default_config
from .dependencies import get_context, get_store, wants_json

logger = logging.getLogger(__name__)

router = APIRouter()

ContextDep = typ.Annotated[ApplicationContext, Depends(get_context)]
StoreDep = typ.Annotated[ConfigurationStore, Depends(get_store)]


class DashboardRenderer:
    """Render the editor dashboard and error pages."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``dashboard.jinja`` and ``error.jinja``.
            Defaults to the templates shipped beside this module.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["tojson_pretty"] = lambda value: json.dumps(
            value, indent=2, default=str
        )

    def dashboard(self, **context: typ.Any) -> str:
        return self.env.get_template("dashboard.jinja").render(**context)

    def error(self, *, title: str, message: str, error: str) -> str:
        return self.env.get_template("error.jinja").render(
            title=title, message=message, error=error
        )


renderer = DashboardRenderer()


def _error_page(message: str, exc: Exception) -> HTMLResponse:
    html = renderer.error(title="Error", message=message, error=str(exc))
    return HTMLResponse(html, status_code=500)


async def _read_submission(request: Request) -> typ.Any:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        return await request.json()
    form = await request.form()
    return {key: value for key, value in form.items()}


@router.get("/", response_class=HTMLResponse)
async def dashboard(context: ContextDep, store: StoreDep, request: Request):
    """Render the editor with the current (or starter) configuration."""
    try:
        config = await store.load() or get_default_config()
        catalog = context.catalog
        presets = context.layout_presets
        html = renderer.dashboard(
            title="Homepage Builder",
            config=config,
            sections=catalog.sections,
            widgets=catalog.widgets,
            presets=presets,
            active_preset_id=detect_active_preset(config, presets),
            sections_by_plugin=catalog.sections_by_source(),
            homepage_endpoint=context.mount_path,
            layouts=[{"id": key, "label": label} for key, label in LAYOUTS.items()],
            saved=request.query_params.get("saved") == "1",
            error=request.query_params.get("error"),
        )
    except Exception as exc:
        logger.exception("Dashboard error")
        return _error_page("Failed to load homepage configuration", exc)
    return HTMLResponse(html)


@router.post("/save")
async def save(context: ContextDep, store: StoreDep, request: Request):
    """Persist a submitted configuration (JSON or form-encoded)."""
    as_json = wants_json(request)
    try:
        payload = await _read_submission(request)
        await store.save(payload)
    except Exception as exc:
        logger.exception("Save error")
        if as_json:
            return JSONResponse({"success": False, "error": str(exc)}, status_code=500)
        return _error_page("Failed to save configuration", exc)
    if as_json:
        return {"success": True, "message": "Configuration saved"}
    return RedirectResponse(f"{context.mount_path}?saved=1", status_code=303)


@router.post("/apply-preset")
async def apply_preset_route(context: ContextDep, store: StoreDep, request: Request):
    """Switch the homepage to a preset, keeping the operator's footer."""
    try:
        payload = await _read_submission(request)
        await apply_preset(str(payload.get("presetId", "")), context.layout_presets, store)
    except UnknownPresetError:
        return RedirectResponse(
            f"{context.mount_path}?error=unknown-preset", status_code=400
        )
    except Exception as exc:
        logger.exception("Apply preset error")
        return _error_page("Failed to apply preset", exc)
    return RedirectResponse(f"{context.mount_path}?saved=1", status_code=303)


__all__ = ["DashboardRenderer", "renderer", "router"]
