"""HTTP surface of the homepage builder.

Two routers are exposed. ``protected_router`` carries the editor dashboard
and its JSON helpers; the host is expected to put authentication in front of
it. ``public_router`` serves the reduced configuration to the static-site
build. :func:`create_app` mounts both under the endpoint's mount path for
standalone use.

Examples
--------
>>> from homepage_builder.context import ApplicationContext
>>> from homepage_builder.web import create_app
>>> app = create_app(ApplicationContext())
>>> app.state.homepage.mount_path
'/homepage'
"""

from __future__ import annotations

from fastapi import APIRouter, FastAPI

from ..context import ApplicationContext
from . import api, dashboard

protected_router = APIRouter()
protected_router.include_router(dashboard.router)
protected_router.include_router(api.router)

public_router = APIRouter()
public_router.include_router(api.public_router)


def create_app(context: ApplicationContext) -> FastAPI:
    """Return a FastAPI app serving both routers under ``context.mount_path``."""
    app = FastAPI(title="Homepage Builder")
    app.state.homepage = context
    prefix = context.mount_path.rstrip("/")
    app.include_router(protected_router, prefix=prefix)
    app.include_router(public_router, prefix=prefix)
    return app


__all__ = ["create_app", "protected_router", "public_router"]
