"""Scan orchestration: page → stylesheets → extracted fonts → :class:`ScanReport`.

``scan_url`` drives the whole pipeline:

    fetch markup → discover links/styles → extract inline styles
    → fetch + extract external stylesheets (capped, in parallel)
    → aggregate

Every collaborator is injectable so the pipeline can be exercised without a
network.  A failing stylesheet only marks its own ``SourceStat`` as failed;
a failing page fetch or discovery step aborts the scan with
:class:`~fontscan.errors.ScanFatalError`.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from fontscan.config import settings
from fontscan.errors import InputError, ScanFatalError
from fontscan.scanner import fetcher, markup
from fontscan.scanner.css import extract_fonts
from fontscan.scanner.models import (
    INLINE_FILE_NAME,
    INLINE_SOURCE,
    STATUS_FAILED,
    FontFaceRecord,
    FontFamilyUsage,
    ScanReport,
    SourceStat,
)

FetchFn = Callable[[str], str]
DiscoverFn = Callable[[str], Tuple[Sequence[str], Sequence[str]]]


@dataclass
class _SourceResult:
    stat: SourceStat
    font_faces: List[FontFaceRecord] = field(default_factory=list)
    font_family_usages: List[FontFamilyUsage] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_source(source_id: str, file_name: str, css_text: str) -> _SourceResult:
    faces, usages = extract_fonts(css_text, source_id)
    stat = SourceStat(
        url=source_id,
        file_name=file_name,
        size=len(css_text),
        font_face_count=len(faces),
        font_family_count=len(usages),
    )
    return _SourceResult(stat=stat, font_faces=faces, font_family_usages=usages)


def _failed_source(url: str, error: str) -> _SourceResult:
    return _SourceResult(
        stat=SourceStat(
            url=url,
            file_name=markup.file_name_for(url),
            status=STATUS_FAILED,
            error=error,
        )
    )


def _process_external(href: str, base_url: str, fetch_text: FetchFn) -> _SourceResult:
    """Resolve, fetch and extract one linked stylesheet; never raises."""
    try:
        url = markup.resolve_stylesheet_url(href, base_url)
    except ValueError as exc:
        return _failed_source(href, str(exc))

    try:
        css_text = fetch_text(url) or ""
    except Exception as exc:
        return _failed_source(url, str(exc) or type(exc).__name__)

    return _extract_source(url, markup.file_name_for(url), css_text)


def _fetch_external(
    hrefs: Sequence[str], base_url: str, fetch_text: FetchFn, concurrency: int
) -> List[_SourceResult]:
    """Process *hrefs* on a thread pool and return results in *hrefs* order."""
    if not hrefs:
        return []

    results: List[Optional[_SourceResult]] = [None] * len(hrefs)
    workers = max(1, min(concurrency, len(hrefs)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        future_to_index = {
            pool.submit(_process_external, href, base_url, fetch_text): i
            for i, href in enumerate(hrefs)
        }
        for future in as_completed(future_to_index):
            results[future_to_index[future]] = future.result()

    return [r for r in results if r is not None]


def _describe(result: _SourceResult) -> str:
    stat = result.stat
    if not stat.ok:
        return f"[fetch] ✗ Failed {stat.url}: {stat.error}"
    return (
        f"[fetch] ✓ {stat.url} ({stat.size_kb}) → "
        f"{stat.font_face_count} @font-face, {stat.font_family_count} font-family"
    )


def _build_report(
    url: str,
    results: Sequence[_SourceResult],
    total_sources_discovered: int,
    debug: Sequence[str] = (),
) -> ScanReport:
    """Fold per-source results (already in processing order) into a report."""
    font_faces = [f for r in results for f in r.font_faces]
    usages = [u for r in results for u in r.font_family_usages]
    unique = tuple(dict.fromkeys(u.primary_font for u in usages))

    lines = list(debug)
    lines.append("[scan] === Summary ===")
    lines.append(f"[scan] Total @font-face: {len(font_faces)}")
    lines.append(f"[scan] Total font-family: {len(usages)}")
    lines.append(f"[scan] Unique primary fonts: {len(unique)}")

    return ScanReport(
        url=url,
        font_faces=tuple(font_faces),
        font_family_usages=tuple(usages),
        unique_primary_fonts=unique,
        source_stats=tuple(r.stat for r in results),
        total_sources_discovered=total_sources_discovered,
        debug=tuple(lines),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def scan_url(
    url: str,
    *,
    fetch_markup: FetchFn | None = None,
    fetch_text: FetchFn | None = None,
    discover: DiscoverFn | None = None,
    max_external: int | None = None,
    concurrency: int | None = None,
) -> ScanReport:
    """Scan the page at *url* and return a :class:`ScanReport`.

    Args:
        url: Absolute URL of the page to scan.
        fetch_markup: ``url -> html``; defaults to
            :func:`~fontscan.scanner.fetcher.fetch_markup`.
        fetch_text: ``url -> css``; defaults to
            :func:`~fontscan.scanner.fetcher.fetch_text`.
        discover: ``html -> (link_hrefs, inline_styles)``; defaults to
            :func:`~fontscan.scanner.markup.discover_stylesheets`.
        max_external: Maximum number of linked stylesheets to retrieve
            (``settings.max_external_stylesheets`` when omitted).
        concurrency: Thread-pool width for stylesheet retrieval
            (``settings.fetch_concurrency`` when omitted).

    Raises:
        InputError: If *url* is empty.
        ScanFatalError: If the page cannot be fetched or its markup cannot be
            searched for stylesheets.
    """
    if not url or not url.strip():
        raise InputError("Please enter a URL")
    url = url.strip()

    fetch_markup = fetch_markup or fetcher.fetch_markup
    fetch_text = fetch_text or fetcher.fetch_text
    discover = discover or markup.discover_stylesheets
    limit = settings.max_external_stylesheets if max_external is None else max(0, max_external)
    workers = settings.fetch_concurrency if concurrency is None else concurrency

    try:
        html = fetch_markup(url)
        links, styles = discover(html)
    except Exception as exc:
        raise ScanFatalError(f"Error scanning website: {exc}") from exc

    links, styles = list(links), list(styles)
    debug: List[str] = [
        f"[scan] Found {len(links)} external CSS links",
        f"[scan] Found {len(styles)} inline style tags",
    ]

    results: List[_SourceResult] = []
    for css_text in styles:
        result = _extract_source(INLINE_SOURCE, INLINE_FILE_NAME, css_text or "")
        results.append(result)
        debug.append(
            f"[inline] {result.stat.font_face_count} @font-face, "
            f"{result.stat.font_family_count} font-family"
        )

    debug.append(f"[fetch] Fetching external CSS files (max {limit}) …")
    external = _fetch_external(links[:limit], url, fetch_text, workers)
    debug.extend(_describe(r) for r in external)
    results.extend(external)

    return _build_report(url, results, total_sources_discovered=len(links), debug=debug)
