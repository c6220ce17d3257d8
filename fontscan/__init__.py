"""Font Scan — stylesheet font-usage extraction."""

__version__ = "0.1.0"
