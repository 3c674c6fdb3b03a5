"""Feed source adapters."""

from govfeed.adapters.news_sources.base import FeedSourceAdapter
from govfeed.adapters.news_sources.listing import (
    ApiListingStrategy,
    HtmlListingStrategy,
    ListingStrategy,
)
from govfeed.adapters.news_sources.suzhou import SuzhouNewsAdapter

__all__ = [
    "FeedSourceAdapter",
    "ListingStrategy",
    "ApiListingStrategy",
    "HtmlListingStrategy",
    "SuzhouNewsAdapter",
]
