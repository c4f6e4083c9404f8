"""Database module for the URL shortener application."""
from urlshortener.db.base import DatabaseHealthCheck, get_engine, get_engine_config, init_db

__all__ = [
    "DatabaseHealthCheck",
    "get_engine",
    "get_engine_config",
    "init_db",
]
