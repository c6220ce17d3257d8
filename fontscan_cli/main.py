"""Font Scan CLI — entry-point for scanning pages and stylesheets.

Usage:
    fontscan --help
    python fontscan_cli/main.py scan https://example.com --output font-metadata.json
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from fontscan.xxx import ...`
# works when the CLI is invoked as `python fontscan_cli/main.py`.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from fontscan.errors import InputError, ScanFatalError
from fontscan.scanner import collector
from fontscan.scanner.css import extract_fonts
from fontscan.scanner.models import INLINE_SOURCE
from fontscan_cli.rendering import render_report

app = typer.Typer(
    name="fontscan",
    help="Extract @font-face and font-family metadata from web pages.",
    no_args_is_help=True,
)


@app.command("scan")
def scan(
    url: str = typer.Argument(..., help="URL of the page to scan."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the JSON report to this file (e.g. font-metadata.json)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON report instead of text."),
    debug: bool = typer.Option(False, "--debug", help="Print the scan log."),
    max_external: Optional[int] = typer.Option(
        None, "--max-external", min=0, help="Maximum number of linked stylesheets to fetch."
    ),
) -> None:
    """Scan a page's inline and linked stylesheets for font metadata."""
    if not as_json:
        typer.echo(f"[scan] Scanning {url!r} …")
    try:
        report = collector.scan_url(url, max_external=max_external)
    except (InputError, ScanFatalError) as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)

    if debug:
        for line in report.debug:
            typer.echo(line)
        typer.echo("")

    if as_json:
        typer.echo(report.to_json())
    else:
        typer.echo(render_report(report))

    if output is not None:
        try:
            output.write_text(report.to_json(), encoding="utf-8")
        except OSError as exc:
            typer.echo(f"❌ Could not write report to {output}: {exc}")
            raise typer.Exit(code=1)
        if not as_json:
            typer.echo(f"\n✅ Report written to {output}")


@app.command("extract")
def extract(
    path: Path = typer.Argument(..., help="Local stylesheet to read."),
    source: str = typer.Option(INLINE_SOURCE, "--source", help="Source identifier stamped on each record."),
) -> None:
    """Run the extractor on a local CSS file and print the records as JSON."""
    if not path.is_file():
        typer.echo(f"❌ File not found: {path}")
        raise typer.Exit(code=1)

    try:
        css_text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        typer.echo(f"❌ Could not read {path}: {exc}")
        raise typer.Exit(code=1)
    faces, usages = extract_fonts(css_text, source)
    typer.echo(
        json.dumps(
            {
                "fontFaces": [f.to_dict() for f in faces],
                "fontFamilyUsages": [u.to_dict() for u in usages],
            },
            indent=2,
            ensure_ascii=False,
        )
    )


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
