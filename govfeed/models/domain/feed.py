"""Domain models for category descriptors and feed documents."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryDescriptor(BaseModel):
    """Static configuration for one portal category.

    Attributes:
        key: Canonical category identifier
        aliases: Identifiers accepted for this category
        url: Listing page URL, also used as the feed link
        title: Display title of the feed
        api_url: JSON list endpoint; when set, items are fetched through the
            API and enriched with their detail page body
    """

    model_config = ConfigDict(frozen=True)

    key: str
    aliases: frozenset[str]
    url: str
    title: str
    api_url: Optional[str] = None


class RawListEntry(BaseModel):
    """A single listing entry before enrichment."""

    title: str
    link: str
    pub_date: datetime

    @field_validator("pub_date")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        """Reject naive datetimes."""
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("pub_date must be timezone-aware")
        return v


class FeedItem(RawListEntry):
    """Listing entry with an optional full-text body (raw HTML fragment)."""

    description: Optional[str] = None


class FeedDocument(BaseModel):
    """Feed-ready document returned for a category."""

    title: str
    link: str
    items: list[FeedItem] = Field(default_factory=list)
