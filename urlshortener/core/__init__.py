"""Core module for the URL shortener application."""

from urlshortener.core.config import settings

__all__ = ["settings"]
