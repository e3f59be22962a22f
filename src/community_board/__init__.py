"""
Community Board - client for a community post board.

This package provides an HTTP client for the board API, an owned application
state with a declarative view, an event controller, and Streamlit and
command-line front ends built on them.
"""

__version__ = "1.0.0"
