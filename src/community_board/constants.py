"""Shared enumerations for the community board client."""

from enum import Enum


class SortMode(str, Enum):
    """Presentation order for the post list."""
    NEW = "new"
    TOP = "top"
