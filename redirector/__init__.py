"""Slug-to-URL redirect service."""

__version__ = "0.1.0"
