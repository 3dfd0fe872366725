"""Command-line reminder: parse a time, wait, then show a desktop notification."""

__version__ = "1.0.0"
