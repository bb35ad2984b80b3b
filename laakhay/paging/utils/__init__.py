"""Utility modules."""

from .http import HTTPClient, HTTPPageSource

__all__ = ["HTTPClient", "HTTPPageSource"]
