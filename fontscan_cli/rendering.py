"""Utilities for rendering scan reports in the CLI."""

from __future__ import annotations

from typing import List

from fontscan.scanner.markup import file_name_for
from fontscan.scanner.models import INLINE_SOURCE, ScanReport, SourceStat


def source_label(source: str) -> str:
    """Short label for a record's source: ``Inline Style`` or the file name."""
    if source == INLINE_SOURCE:
        return "Inline Style"
    return file_name_for(source)


def _status_icon(stat: SourceStat) -> str:
    return "✓" if stat.ok else "✗"


def render_summary(report: ScanReport) -> str:
    """Headline counts for a report."""
    analysed = len(report.source_stats)
    lines = [
        f"Scanned          : {report.url}",
        f"@font-face       : {len(report.font_faces)}",
        f"font-family      : {len(report.font_family_usages)}",
        f"Unique fonts     : {len(report.unique_primary_fonts)}",
        f"CSS sources      : {analysed} analysed / {report.total_sources_discovered} linked",
    ]
    if report.unique_primary_fonts:
        lines.append("")
        lines.append("Unique primary fonts:")
        lines.extend(f"  • {name or '(empty)'}" for name in report.unique_primary_fonts)
    return "\n".join(lines)


def render_usages(report: ScanReport) -> str:
    lines: List[str] = [f"font-family declarations ({len(report.font_family_usages)} found)"]
    for usage in report.font_family_usages:
        lines.append(f"  {usage.primary_font or '(empty)'}  [{source_label(usage.source)}]")
        lines.append(f"    font-family: {usage.full_value};")
        lines.append(f"    selector   : {usage.selector or '(none)'}")
        if usage.fallbacks:
            lines.append(f"    fallbacks  : {', '.join(usage.fallbacks)}")
    return "\n".join(lines)


def render_font_faces(report: ScanReport) -> str:
    lines: List[str] = [f"@font-face declarations ({len(report.font_faces)} found)"]
    for face in report.font_faces:
        lines.append(f"  {face.family or 'Unknown'}  [{source_label(face.source)}]")
        hints = [
            f"{label}={value}"
            for label, value in (
                ("weight", face.weight),
                ("style", face.style),
                ("display", face.display),
            )
            if value is not None
        ]
        if hints:
            lines.append(f"    {'  '.join(hints)}")
        if face.unicode_range is not None:
            lines.append(f"    unicode-range: {face.unicode_range}")
        for file in face.files or ():
            lines.append(f"    → {file}")
    return "\n".join(lines)


def render_sources(report: ScanReport) -> str:
    lines: List[str] = [f"CSS files analysed ({len(report.source_stats)})"]
    for stat in report.source_stats:
        lines.append(
            f"  {_status_icon(stat)} {stat.file_name}  {stat.size_kb}  "
            f"{stat.font_face_count} @font-face  {stat.font_family_count} font-family"
        )
        if stat.error:
            lines.append(f"      error: {stat.error}")
    return "\n".join(lines)


def render_report(report: ScanReport) -> str:
    """Full plain-text rendering of *report*."""
    sections = [render_summary(report)]
    if report.font_family_usages:
        sections.append(render_usages(report))
    if report.font_faces:
        sections.append(render_font_faces(report))
    if report.source_stats:
        sections.append(render_sources(report))
    return "\n\n".join(sections)
