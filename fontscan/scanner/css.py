"""Font extraction: turns stylesheet text into font-face and font-family records.

The parser is deliberately textual.  ``@font-face`` bodies end at the first
``}`` and rules are found by splitting on ``}``, so nested blocks and braces
inside string literals are mis-parsed in the same way every time.  Nothing in
here raises on malformed input; the worst case is two empty lists.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from fontscan.scanner.models import FontFaceRecord, FontFamilyUsage

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------
_FONT_FACE_RE = re.compile(r"@font-face\s*\{([^}]*)\}")

_FACE_FAMILY_RE = re.compile(r"font-family:\s*['\"]?([^'\";]+)['\"]?", re.IGNORECASE)
_FACE_SRC_RE = re.compile(r"src:\s*([^;]+);?", re.IGNORECASE)
_URL_RE = re.compile(r"url\(['\"]?([^'\"()]+)['\"]?\)", re.IGNORECASE)

_FACE_SCALAR_RES = {
    "weight": re.compile(r"font-weight:\s*([^;]+);", re.IGNORECASE),
    "style": re.compile(r"font-style:\s*([^;]+);", re.IGNORECASE),
    "display": re.compile(r"font-display:\s*([^;]+);", re.IGNORECASE),
    "unicode_range": re.compile(r"unicode-range:\s*([^;]+);", re.IGNORECASE),
}

_USAGE_RE = re.compile(r"font-family:\s*([^;]+);?", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _search_value(pattern: re.Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    if match:
        return match.group(1).strip()
    return None


def _extract_files(block: str) -> Optional[tuple[str, ...]]:
    """Return every ``url(...)`` target of the block's ``src``, or ``None``."""
    src = _FACE_SRC_RE.search(block)
    if not src:
        return None
    files = tuple(m.group(1) for m in _URL_RE.finditer(src.group(1)))
    return files or None


def _parse_font_face(block: str, source_id: str) -> FontFaceRecord:
    return FontFaceRecord(
        source=source_id,
        family=_search_value(_FACE_FAMILY_RE, block),
        files=_extract_files(block),
        **{name: _search_value(pattern, block) for name, pattern in _FACE_SCALAR_RES.items()},
    )


def parse_font_stack(value: str) -> tuple[str, ...]:
    """Split a ``font-family`` value into its stack.

    Entries are trimmed and have quote characters removed.  Empty entries
    (``Arial,`` or an empty value) are kept so the stack mirrors the text.
    """
    return tuple(
        entry.strip().replace('"', "").replace("'", "")
        for entry in value.split(",")
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_font_faces(css_text: str, source_id: str) -> List[FontFaceRecord]:
    """Return one :class:`FontFaceRecord` per ``@font-face`` block in *css_text*."""
    return [
        _parse_font_face(match.group(1), source_id)
        for match in _FONT_FACE_RE.finditer(css_text)
    ]


def extract_font_family_usages(css_text: str, source_id: str) -> List[FontFamilyUsage]:
    """Return every ``font-family`` declaration in *css_text* with its selector.

    Repeated declarations in one rule each produce their own record.
    """
    usages: List[FontFamilyUsage] = []
    for fragment in css_text.split("}"):
        selector, brace, declarations = fragment.partition("{")
        if not brace:
            continue
        selector = selector.strip()
        for match in _USAGE_RE.finditer(declarations):
            full_value = match.group(1).strip()
            usages.append(
                FontFamilyUsage(
                    source=source_id,
                    selector=selector,
                    full_value=full_value,
                    font_stack=parse_font_stack(full_value),
                )
            )
    return usages


def extract_fonts(
    css_text: str | None, source_id: str
) -> Tuple[List[FontFaceRecord], List[FontFamilyUsage]]:
    """Extract font-face records and font-family usages from *css_text*.

    Args:
        css_text: Raw stylesheet text.  ``None`` is treated as empty.
        source_id: URL (or ``inline-style``) stamped on every record.

    Returns:
        ``(font_faces, font_family_usages)`` in document order.
    """
    text = css_text or ""
    return extract_font_faces(text, source_id), extract_font_family_usages(text, source_id)
