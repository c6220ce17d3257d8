"""HTTP fetchers for page markup and stylesheet text.

``fetch_markup`` falls back to a headless Playwright browser when the page
looks like a JavaScript shell whose ``<link>``/``<style>`` tags are injected
at runtime.  ``fetch_text`` is a plain ``httpx`` GET.
"""

from __future__ import annotations

import re
import sys

import httpx

from fontscan.config import settings
from fontscan.errors import SourceFetchError

# ---------------------------------------------------------------------------
# SPA / JS-rendered page detection heuristics
# ---------------------------------------------------------------------------
_SPA_PATTERNS = [
    re.compile(r'<div[^>]+id=["\'](?:root|app)["\']', re.IGNORECASE),
    re.compile(r"window\.__NEXT_DATA__", re.IGNORECASE),
    re.compile(r"ng-version=", re.IGNORECASE),
    re.compile(r"data-reactroot", re.IGNORECASE),
]


def _headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def _is_spa(html: str) -> bool:
    """Return ``True`` if *html* looks like a JavaScript SPA that needs rendering."""
    for pattern in _SPA_PATTERNS:
        if pattern.search(html):
            return True
    # Very little visible text relative to total HTML size.  <script> and
    # <style> blocks are stripped first so their source doesn't count as text.
    no_scripts = re.sub(r"<(script|style)[^>]*>.*?</(script|style)>", "", html, flags=re.IGNORECASE | re.DOTALL)
    stripped = re.sub(r"<[^>]+>", "", no_scripts).strip()
    if len(html) > 2000 and len(stripped) < 200:
        return True
    return False


def _fetch_with_playwright(url: str) -> str:
    """Render *url* with a headless Chromium browser and return its HTML.

    Playwright is imported lazily so tests that don't exercise the SPA path
    don't need a browser installed.
    """
    from playwright.sync_api import sync_playwright  # noqa: PLC0415

    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=True)
        page = browser.new_page()
        page.goto(
            url,
            timeout=int(settings.request_timeout * 1000),
            wait_until="networkidle",
        )
        html = page.content()
        browser.close()

    return html


def _get(url: str) -> str:
    with httpx.Client(
        headers=_headers(),
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        return response.text


def fetch_text(url: str) -> str:
    """Fetch *url* and return its body as text.

    Raises:
        SourceFetchError: On network errors, 4xx/5xx responses or a body
            that cannot be decoded.
    """
    try:
        return _get(url)
    except httpx.HTTPStatusError as exc:
        raise SourceFetchError(url, f"HTTP {exc.response.status_code}") from exc
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeDecodeError, LookupError) as exc:
        raise SourceFetchError(url, str(exc) or type(exc).__name__) from exc


def fetch_markup(url: str) -> str:
    """Fetch the page at *url* and return its HTML.

    Uses ``httpx`` first and re-renders with Playwright when a SPA fingerprint
    is detected (unless ``settings.spa_fallback`` is off).  If the browser
    render fails the httpx markup is returned as-is.

    Raises:
        SourceFetchError: If the page itself cannot be retrieved.
    """
    html = fetch_text(url)
    if settings.spa_fallback and _is_spa(html):
        try:
            html = _fetch_with_playwright(url)
        except Exception as exc:
            print(f"[fetch] Playwright render failed for {url!r}, using raw HTML: {exc}", file=sys.stderr)
    return html
