"""Scan endpoints.

Routes
------
POST /scan        Body: {"url": "https://...", "max_external": 10}  → scan_url
POST /scan/css    Body: {"css": "...", "source": "inline-style"}    → extract_fonts
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from fontscan.errors import InputError, ScanFatalError
from fontscan.scanner import collector
from fontscan.scanner.css import extract_fonts
from fontscan.scanner.models import INLINE_SOURCE

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScanRequest(BaseModel):
    url: str
    max_external: Optional[int] = Field(default=None, ge=0)


class CssExtractRequest(BaseModel):
    css: str
    source: str = INLINE_SOURCE


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("")
def scan_endpoint(body: ScanRequest) -> dict[str, Any]:
    """Scan a page and return the full report document.

    A stylesheet that cannot be fetched shows up as a failed entry in
    ``sourceStats``; only a page-level failure turns into a 502.
    """
    try:
        report = collector.scan_url(body.url, max_external=body.max_external)
    except InputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ScanFatalError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return report.to_dict()


@router.post("/css")
def extract_css_endpoint(body: CssExtractRequest) -> dict[str, Any]:
    """Run the extractor on posted stylesheet text."""
    faces, usages = extract_fonts(body.css, body.source)
    return {
        "fontFaces": [f.to_dict() for f in faces],
        "fontFamilyUsages": [u.to_dict() for u in usages],
    }
