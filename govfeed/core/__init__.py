"""Core functionality for the feed adapter."""

from govfeed.core.config import settings
from govfeed.core.exceptions import (
    FeedParseError,
    GovFeedError,
    InvalidParameterError,
    UpstreamFetchError,
)

__all__ = [
    "settings",
    "GovFeedError",
    "InvalidParameterError",
    "UpstreamFetchError",
    "FeedParseError",
]
