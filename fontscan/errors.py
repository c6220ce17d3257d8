"""Exception hierarchy for the scan pipeline."""

from __future__ import annotations


class FontScanError(Exception):
    """Base class for every error raised by Font Scan."""


class InputError(FontScanError):
    """No usable target was supplied; raised before any work starts."""


class SourceFetchError(FontScanError):
    """A single stylesheet (or page) could not be retrieved.

    The collector downgrades this to a failed ``SourceStat`` entry; it never
    aborts a scan on its own.
    """

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url
        self.message = message


class ScanFatalError(FontScanError):
    """The scan as a whole could not proceed (markup fetch or discovery failed)."""
