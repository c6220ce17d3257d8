"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from fontscan.api import app

    uvicorn fontscan.api:app --reload
"""

from fontscan.api.app import app

__all__ = ["app"]
