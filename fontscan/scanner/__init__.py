"""Scanner package — stylesheet discovery, retrieval and font extraction."""

from fontscan.scanner.collector import scan_url
from fontscan.scanner.css import extract_fonts
from fontscan.scanner.fetcher import fetch_markup, fetch_text
from fontscan.scanner.markup import discover_stylesheets, resolve_stylesheet_url
from fontscan.scanner.models import FontFaceRecord, FontFamilyUsage, ScanReport, SourceStat

__all__ = [
    "scan_url",
    "extract_fonts",
    "fetch_markup",
    "fetch_text",
    "discover_stylesheets",
    "resolve_stylesheet_url",
    "FontFaceRecord",
    "FontFamilyUsage",
    "ScanReport",
    "SourceStat",
]
