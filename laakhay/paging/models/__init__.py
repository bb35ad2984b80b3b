"""Data models.

Models are pydantic ``BaseModel`` classes and immutable (``frozen=True``),
matching the data models of the sibling market-data library.
"""

from .page import Page

__all__ = ["Page"]
