"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request schema for creating a shortened URL.

    ``url`` is a plain string: it is validated by the service and stored
    exactly as sent, so scheme-less input such as ``example.com`` is kept.
    """
    url: str = Field(..., max_length=8192, examples=["https://example.com/some/long/path"])


class ShortenResponse(BaseModel):
    """Response schema for a shortened URL."""
    code: str
    short_url: str  # Full URL including base domain


class ComponentHealth(BaseModel):
    status: str
    latency_ms: float = 0
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str
    timestamp: datetime
    components: Dict[str, ComponentHealth] = {}


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    errors: Optional[List[dict]] = None
