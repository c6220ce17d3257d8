"""Stylesheet discovery: finds ``<link rel="stylesheet">`` targets and
``<style>`` blocks in page markup, and resolves link targets to absolute URLs.
"""

from __future__ import annotations

from typing import List, Tuple
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag


def _is_stylesheet_link(tag: Tag) -> bool:
    rel = tag.get("rel") or []
    # bs4 treats rel as a multi-valued attribute
    if isinstance(rel, str):
        rel = rel.split()
    return any(r.lower() == "stylesheet" for r in rel)


def discover_stylesheets(html: str) -> Tuple[List[str], List[str]]:
    """Return ``(link_hrefs, inline_styles)`` found in *html*, in document order.

    Hrefs are returned exactly as written; see :func:`resolve_stylesheet_url`.
    Malformed markup yields whatever ``html.parser`` manages to recover.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    links: List[str] = []
    for tag in soup.find_all("link"):
        href = tag.get("href")
        if href and _is_stylesheet_link(tag):
            links.append(href.strip())

    styles = [tag.get_text() for tag in soup.find_all("style")]
    return links, styles


def resolve_stylesheet_url(href: str, base_url: str) -> str:
    """Resolve a stylesheet *href* against the page at *base_url*.

    - ``http(s)://…`` is returned unchanged.
    - ``//host/path`` becomes ``https://host/path``.
    - ``/path`` is resolved against the origin of *base_url*.
    - anything else is joined with the full *base_url*.

    Raises:
        ValueError: If *base_url* (or *href*) cannot be parsed.
    """
    if urlparse(href).scheme in ("http", "https"):
        return href
    if href.startswith("//"):
        return "https:" + href
    if href.startswith("/"):
        base = urlparse(base_url)
        if not base.scheme or not base.netloc:
            raise ValueError(f"Cannot resolve {href!r}: {base_url!r} has no origin")
        return f"{base.scheme}://{base.netloc}{href}"
    return urljoin(base_url, href)


def file_name_for(url: str) -> str:
    """Last path segment of *url*, or *url* itself when that segment is empty."""
    return url.split("/")[-1] or url
