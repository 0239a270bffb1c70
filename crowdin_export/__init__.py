"""Trigger a Crowdin export and unpack its translation bundle."""

__version__ = "0.1.0"
