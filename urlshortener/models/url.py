"""URL mapping data models.

This module defines the URLMapping model for storing shortened URLs in the database.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

CODE_COLUMN_LENGTH = 64


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class URLMappingBase(SQLModel):
    """Base model for a code to URL mapping."""

    code: str = Field(
        description="Unique short code used in the redirect path",
        unique=True,  # Creates the unique index every insert races on
        index=True,
        nullable=False,
        max_length=CODE_COLUMN_LENGTH,
    )
    original_url: str = Field(
        description="The URL exactly as submitted by the client",
        nullable=False,
    )


class URLMapping(URLMappingBase, table=True):
    """
    Persisted mapping between a short code and the original URL.

    Rows are written once by the shortening service and only read afterwards.
    """

    __tablename__ = "urls"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="UTC timestamp when the mapping was created"
    )
