"""Slash-command terminal for project-management data."""

__version__ = "0.1.0"
