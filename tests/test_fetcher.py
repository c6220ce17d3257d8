"""Tests for the HTTP fetchers.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.
- Playwright is *not* exercised (requires a browser install); the SPA path is
  covered by patching ``_fetch_with_playwright`` and by unit tests against
  ``_is_spa`` directly.
"""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
import respx

from fontscan.errors import SourceFetchError
from fontscan.scanner.fetcher import _is_spa, fetch_markup, fetch_text


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_CSS = "body { font-family: Inter, sans-serif; }"

_SIMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Test Page</title><link rel="stylesheet" href="/site.css"></head>
<body>
  <main>
    <p>This is the main content of the test page with enough text to look real.</p>
  </main>
</body>
</html>
"""

_SPA_HTML = """\
<!DOCTYPE html>
<html>
<head><title>React App</title></head>
<body>
  <div id="root"></div>
  <script src="/bundle.js"></script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# _is_spa unit tests
# ---------------------------------------------------------------------------

class TestIsSpa:
    def test_detects_react_root_div(self) -> None:
        assert _is_spa(_SPA_HTML) is True

    def test_detects_next_data(self) -> None:
        html = "<html><body><script>window.__NEXT_DATA__ = {}</script></body></html>"
        assert _is_spa(html) is True

    def test_normal_page_not_spa(self) -> None:
        assert _is_spa(_SIMPLE_HTML) is False

    def test_minimal_body_heuristic(self) -> None:
        big_style = "<style>" + "x" * 2500 + "</style>"
        html = f"<html><head>{big_style}</head><body><p> </p></body></html>"
        assert _is_spa(html) is True


# ---------------------------------------------------------------------------
# fetch_text tests
# ---------------------------------------------------------------------------

class TestFetchText:
    def test_returns_body(self) -> None:
        with respx.mock:
            respx.get("https://example.com/site.css").mock(
                return_value=httpx.Response(200, text=_CSS)
            )
            assert fetch_text("https://example.com/site.css") == _CSS

    def test_http_error_raises_source_fetch_error(self) -> None:
        with respx.mock:
            respx.get("https://example.com/missing.css").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            with pytest.raises(SourceFetchError) as exc_info:
                fetch_text("https://example.com/missing.css")

        assert exc_info.value.url == "https://example.com/missing.css"
        assert str(exc_info.value) == "HTTP 404"

    def test_network_error_raises_source_fetch_error(self) -> None:
        with respx.mock:
            respx.get("https://down.example.com/a.css").mock(
                side_effect=httpx.ConnectError("connection refused")
            )
            with pytest.raises(SourceFetchError, match="connection refused"):
                fetch_text("https://down.example.com/a.css")

    def test_sends_user_agent(self) -> None:
        with respx.mock:
            route = respx.get("https://example.com/site.css").mock(
                return_value=httpx.Response(200, text=_CSS)
            )
            fetch_text("https://example.com/site.css")

        assert "FontScan" in route.calls.last.request.headers["User-Agent"]


# ---------------------------------------------------------------------------
# fetch_markup tests
# ---------------------------------------------------------------------------

class TestFetchMarkup:
    def test_plain_page_skips_playwright(self) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            with patch("fontscan.scanner.fetcher._fetch_with_playwright") as mock_pw:
                html = fetch_markup("https://example.com/")

        mock_pw.assert_not_called()
        assert html == _SIMPLE_HTML

    def test_spa_triggers_playwright_fallback(self) -> None:
        with respx.mock:
            respx.get("https://spa-app.example.com/").mock(
                return_value=httpx.Response(200, text=_SPA_HTML)
            )
            with patch("fontscan.scanner.fetcher._fetch_with_playwright",
                       return_value=_SIMPLE_HTML) as mock_pw:
                html = fetch_markup("https://spa-app.example.com/")

        mock_pw.assert_called_once_with("https://spa-app.example.com/")
        assert html == _SIMPLE_HTML

    def test_playwright_failure_keeps_httpx_markup(self) -> None:
        """A broken browser install must not lose the page httpx already fetched."""
        with respx.mock:
            respx.get("https://spa-app.example.com/").mock(
                return_value=httpx.Response(200, text=_SPA_HTML)
            )
            with patch("fontscan.scanner.fetcher._fetch_with_playwright",
                       side_effect=RuntimeError("Executable doesn't exist")) as mock_pw:
                html = fetch_markup("https://spa-app.example.com/")

        mock_pw.assert_called_once_with("https://spa-app.example.com/")
        assert html == _SPA_HTML

    def test_spa_fallback_can_be_disabled(self, monkeypatch) -> None:
        monkeypatch.setattr("fontscan.scanner.fetcher.settings.spa_fallback", False)
        with respx.mock:
            respx.get("https://spa-app.example.com/").mock(
                return_value=httpx.Response(200, text=_SPA_HTML)
            )
            with patch("fontscan.scanner.fetcher._fetch_with_playwright") as mock_pw:
                html = fetch_markup("https://spa-app.example.com/")

        mock_pw.assert_not_called()
        assert html == _SPA_HTML

    def test_page_error_raises(self) -> None:
        with respx.mock:
            respx.get("https://example.com/gone").mock(return_value=httpx.Response(500))
            with pytest.raises(SourceFetchError):
                fetch_markup("https://example.com/gone")
