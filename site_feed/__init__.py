"""Atom feed synthesis for a static personal website."""

__version__ = "0.1.0"
