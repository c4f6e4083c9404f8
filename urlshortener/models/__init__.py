"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

from sqlmodel import SQLModel

from urlshortener.models.url import URLMapping, URLMappingBase

__all__ = [
    "SQLModel",
    "URLMapping",
    "URLMappingBase",
]
