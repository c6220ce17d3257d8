"""FastAPI application factory.

Routers
-------
    /scan      — scan a page URL, or extract fonts from posted CSS
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fontscan import __version__
from fontscan.api.routers import scan as scan_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Font Scan API",
        description=(
            "Extracts @font-face declarations and font-family usages from the "
            "inline and linked stylesheets of a web page."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(scan_router.router, prefix="/scan", tags=["scan"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn fontscan.api.app:app --reload
app = create_app()
