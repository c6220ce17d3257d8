"""Data models for the font scan pipeline.

These are plain immutable Python objects.  Each one knows how to turn itself
into a JSON-compatible dict (using the camelCase field names of the exported
report) and back again.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

INLINE_SOURCE = "inline-style"
INLINE_FILE_NAME = "Inline <style> tag"

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"

# (attribute, document key) pairs for the optional font-face fields
_FACE_SCALARS = (
    ("family", "family"),
    ("weight", "weight"),
    ("style", "style"),
    ("display", "display"),
    ("unicode_range", "unicodeRange"),
)


@dataclass(frozen=True)
class FontFaceRecord:
    """One parsed ``@font-face`` block.

    Optional fields stay ``None`` when the block does not declare them, and
    are left out of :meth:`to_dict` so "absent" never reads as "empty".
    """

    source: str
    family: Optional[str] = None
    files: Optional[tuple[str, ...]] = None
    weight: Optional[str] = None
    style: Optional[str] = None
    display: Optional[str] = None
    unicode_range: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"source": self.source}
        for attr, key in _FACE_SCALARS:
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        if self.files is not None:
            data["files"] = list(self.files)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FontFaceRecord:
        files = data.get("files")
        return cls(
            source=data["source"],
            files=tuple(files) if files is not None else None,
            **{attr: data.get(key) for attr, key in _FACE_SCALARS},
        )


@dataclass(frozen=True)
class FontFamilyUsage:
    """One ``font-family:`` declaration together with the rule it sits in."""

    source: str
    selector: str
    full_value: str
    font_stack: tuple[str, ...]

    @property
    def primary_font(self) -> str:
        return self.font_stack[0] if self.font_stack else ""

    @property
    def fallbacks(self) -> tuple[str, ...]:
        return self.font_stack[1:]

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "selector": self.selector,
            "fullValue": self.full_value,
            "fontStack": list(self.font_stack),
            "primaryFont": self.primary_font,
            "fallbacks": list(self.fallbacks),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FontFamilyUsage:
        # primaryFont / fallbacks are derived from fontStack
        return cls(
            source=data["source"],
            selector=data["selector"],
            full_value=data["fullValue"],
            font_stack=tuple(data["fontStack"]),
        )


@dataclass(frozen=True)
class SourceStat:
    """Per-source bookkeeping: size, record counts and fetch outcome."""

    url: str
    file_name: str
    size: int = 0
    font_face_count: int = 0
    font_family_count: int = 0
    status: str = STATUS_SUCCESS
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS

    @property
    def size_kb(self) -> str:
        """Human-readable size, ``N/A`` for sources that were never read."""
        if not self.ok:
            return "N/A"
        return f"{self.size / 1024:.2f} KB"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "url": self.url,
            "fileName": self.file_name,
            "size": self.size,
            "fontFaceCount": self.font_face_count,
            "fontFamilyCount": self.font_family_count,
            "status": self.status,
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceStat:
        return cls(
            url=data["url"],
            file_name=data["fileName"],
            size=data.get("size", 0),
            font_face_count=data.get("fontFaceCount", 0),
            font_family_count=data.get("fontFamilyCount", 0),
            status=data.get("status", STATUS_SUCCESS),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class ScanReport:
    """Aggregate result of one scan, rebuilt from scratch on every run."""

    url: str
    font_faces: tuple[FontFaceRecord, ...] = ()
    font_family_usages: tuple[FontFamilyUsage, ...] = ()
    unique_primary_fonts: tuple[str, ...] = ()
    source_stats: tuple[SourceStat, ...] = ()
    total_sources_discovered: int = 0
    debug: tuple[str, ...] = field(default=(), compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "fontFaces": [f.to_dict() for f in self.font_faces],
            "fontFamilyUsages": [u.to_dict() for u in self.font_family_usages],
            "uniquePrimaryFonts": list(self.unique_primary_fonts),
            "sourceStats": [s.to_dict() for s in self.source_stats],
            "totalSourcesDiscovered": self.total_sources_discovered,
            "debug": list(self.debug),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanReport:
        return cls(
            url=data.get("url", ""),
            font_faces=tuple(FontFaceRecord.from_dict(f) for f in data.get("fontFaces", [])),
            font_family_usages=tuple(
                FontFamilyUsage.from_dict(u) for u in data.get("fontFamilyUsages", [])
            ),
            unique_primary_fonts=tuple(data.get("uniquePrimaryFonts", [])),
            source_stats=tuple(SourceStat.from_dict(s) for s in data.get("sourceStats", [])),
            total_sources_discovered=data.get("totalSourcesDiscovered", 0),
            debug=tuple(data.get("debug", [])),
        )

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str) -> ScanReport:
        return cls.from_dict(json.loads(data))
