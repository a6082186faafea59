"""Core module for the redirect service."""

from redirector.core.config import settings

__all__ = ["settings"]
