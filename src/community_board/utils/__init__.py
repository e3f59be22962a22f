"""Utility helpers for the community board client."""

from .logging import setup_logging

__all__ = ["setup_logging"]
