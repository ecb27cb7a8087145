"""Notelytic - a local note-taking dashboard."""

__version__ = "1.0.0"
