"""Fetch open source licenses from a license registry and install them locally."""

__version__ = "0.3.0"
