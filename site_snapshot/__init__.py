"""Capture raw markup, outbound links, and full-page screenshots of web pages."""

__version__ = "0.1.0"
