"""Stockkeeper: account registration and per-account inventory over HTTP."""

__version__ = "0.1.0"
