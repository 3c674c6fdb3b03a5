"""Suzhou government portal feed adapter.

This module implements the feed source adapter for www.suzhou.gov.cn, mapping
a category identifier to its listing, fetching entries, and for API-listed
categories attaching the full text of each entry's detail page.
"""

from typing import Mapping, Optional

from govfeed.adapters.cache import FetchCache, MemoryFetchCache
from govfeed.adapters.http_client import HttpFetcher
from govfeed.adapters.news_sources.base import FeedSourceAdapter
from govfeed.adapters.news_sources.listing import (
    ApiListingStrategy,
    HtmlListingStrategy,
    ListingStrategy,
)
from govfeed.adapters.news_sources.suzhou_categories import (
    build_alias_index,
    build_category_table,
    resolve_category,
)
from govfeed.core.config import settings
from govfeed.core.exceptions import GovFeedError
from govfeed.models.domain.feed import (
    CategoryDescriptor,
    FeedDocument,
    FeedItem,
    RawListEntry,
)
from govfeed.utils.logging import get_logger


class SuzhouNewsAdapter(FeedSourceAdapter):
    """Adapter for the Suzhou government news and topic categories.

    Each call to ``build_feed`` is a single pass: resolve the category, fetch
    its listing, enrich API-listed entries, and assemble the document. The
    only state shared between calls is the injected fetch cache.

    Attributes:
        fetcher: HTTP client shared by both listing strategies
        cache: Keyed cache for detail-page fetches
        root_url: Portal root used for URLs and relative links
        categories: Category table keyed by canonical identifier
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        cache: Optional[FetchCache] = None,
        root_url: Optional[str] = None,
    ) -> None:
        """Initialize the Suzhou adapter.

        Args:
            fetcher: HTTP client for listing and detail requests
            cache: Fetch cache (defaults to a fresh in-memory cache)
            root_url: Portal root (default from settings)
        """
        super().__init__(source_name="suzhou")
        self.fetcher = fetcher
        self.cache: FetchCache = cache if cache is not None else MemoryFetchCache()
        self.root_url = (root_url or settings.suzhou_root_url).rstrip("/")
        self.categories: Mapping[str, CategoryDescriptor] = build_category_table(self.root_url)
        self._aliases = build_alias_index(self.categories)

        self.api_strategy = ApiListingStrategy(fetcher, self.root_url, self.cache)
        self.html_strategy = HtmlListingStrategy(fetcher, self.root_url)

    def resolve(self, identifier: str) -> CategoryDescriptor:
        """Map a request identifier to its category.

        Raises:
            InvalidParameterError: If the identifier is not a known alias
        """
        return resolve_category(identifier, self._aliases)

    def strategy_for(self, descriptor: CategoryDescriptor) -> ListingStrategy:
        """Pick the listing strategy for a category."""
        if descriptor.api_url:
            return self.api_strategy
        return self.html_strategy

    async def fetch_list(self, descriptor: CategoryDescriptor) -> list[RawListEntry]:
        """Fetch the raw listing entries of a category in upstream order."""
        return await self.strategy_for(descriptor).fetch_list(descriptor)

    async def enrich(self, entries: list[RawListEntry]) -> list[FeedItem]:
        """Attach detail-page bodies to API-listed entries."""
        return await self.api_strategy.enrich(entries)

    async def build_feed(self, identifier: str) -> FeedDocument:
        """Build the feed document for a category identifier.

        Args:
            identifier: Category alias, e.g. ``"news"`` or ``"qxzt"``

        Returns:
            Feed document titled after the category, linked to its listing page

        Raises:
            InvalidParameterError: If the identifier is not a known alias
            UpstreamFetchError: If the listing or any detail request fails
            FeedParseError: If any payload has an unexpected shape
        """
        descriptor = self.resolve(identifier)
        strategy = self.strategy_for(descriptor)

        log = get_logger(__name__, {"category": descriptor.key, "listing": strategy.kind.value})
        log.info(f"Building feed for {identifier}")

        try:
            entries = await strategy.fetch_list(descriptor)
            items = await strategy.build_items(entries)
        except GovFeedError as e:
            log.error(f"Failed to build feed: {e}")
            raise

        log.info(f"Built feed with {len(items)} items")

        return FeedDocument(title=descriptor.title, link=descriptor.url, items=items)
