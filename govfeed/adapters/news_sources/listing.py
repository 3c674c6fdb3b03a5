"""Listing strategies for portal categories.

A category is listed either through the portal's JSON API or by scraping its
server-rendered HTML listing page. Both strategies produce ``RawListEntry``
objects in upstream order; only the API strategy enriches entries with the
full text of their detail pages.
"""

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from govfeed.adapters.cache import FetchCache
from govfeed.adapters.http_client import HttpFetcher
from govfeed.core.constants import (
    API_LIST_KEY,
    API_PUBTIME_FORMAT,
    DETAIL_CONTENT_SELECTOR,
    HTML_DATE_FORMAT,
    LISTING_DATE_SELECTOR,
    LISTING_ITEM_SELECTOR,
    PORTAL_TIMEZONE,
    ListingKind,
)
from govfeed.core.exceptions import FeedParseError
from govfeed.models.domain.feed import CategoryDescriptor, FeedItem, RawListEntry
from govfeed.utils.logging import get_logger

logger = get_logger(__name__)

HTML_PARSER = "html.parser"


def parse_portal_time(value: str, fmt: str) -> datetime:
    """Parse a portal date string as China Standard Time.

    Args:
        value: Date string as published by the portal
        fmt: ``strptime`` format the string must match exactly

    Returns:
        Timezone-aware datetime at UTC+8

    Raises:
        FeedParseError: If the string does not match the format
    """
    try:
        naive = datetime.strptime(value.strip(), fmt)
    except (AttributeError, ValueError) as e:
        raise FeedParseError(f"Unexpected date {value!r}, expected format {fmt}") from e
    return naive.replace(tzinfo=PORTAL_TIMEZONE)


def absolute_link(href: str, root_url: str) -> str:
    """Resolve ``href`` against the portal root unless it is already absolute."""
    if href.startswith("http"):
        return href
    return urljoin(f"{root_url}/", href)


class ListingStrategy(ABC):
    """Common interface of the listing strategies.

    Attributes:
        fetcher: HTTP client used for every request
        root_url: Portal root used to resolve relative links
    """

    kind: ListingKind

    def __init__(self, fetcher: HttpFetcher, root_url: str) -> None:
        self.fetcher = fetcher
        self.root_url = root_url

    @abstractmethod
    async def fetch_list(self, descriptor: CategoryDescriptor) -> list[RawListEntry]:
        """Fetch and parse the category listing.

        Raises:
            UpstreamFetchError: If the listing request fails
            FeedParseError: If the payload does not have the expected shape
        """
        pass

    async def build_items(self, entries: list[RawListEntry]) -> list[FeedItem]:
        """Turn listing entries into feed items. Entries pass through unchanged."""
        return [FeedItem(**entry.model_dump()) for entry in entries]


class HtmlListingStrategy(ListingStrategy):
    """Scrape ``ul.infolist`` on a server-rendered listing page."""

    kind = ListingKind.HTML

    async def fetch_list(self, descriptor: CategoryDescriptor) -> list[RawListEntry]:
        html = await self.fetcher.get_text(descriptor.url)
        entries = self.parse_listing(html)
        logger.debug(f"Parsed {len(entries)} entries from {descriptor.url}")
        return entries

    def parse_listing(self, html: str) -> list[RawListEntry]:
        soup = BeautifulSoup(html, HTML_PARSER)
        nodes = soup.select(LISTING_ITEM_SELECTOR)
        if not nodes:
            raise FeedParseError(f"No entries matched {LISTING_ITEM_SELECTOR!r}")
        return [self._parse_node(node) for node in nodes]

    def _parse_node(self, node: Tag) -> RawListEntry:
        anchor = node.find("a")
        if not isinstance(anchor, Tag):
            raise FeedParseError("Listing entry has no anchor")

        title = anchor.get("title")
        href = anchor.get("href")
        if not isinstance(title, str) or not isinstance(href, str):
            raise FeedParseError("Listing anchor is missing title or href")

        date_node = node.select_one(LISTING_DATE_SELECTOR)
        if date_node is None:
            raise FeedParseError(f"Listing entry has no {LISTING_DATE_SELECTOR!r} element")

        return RawListEntry(
            title=title,
            link=urljoin(f"{self.root_url}/", href),
            pub_date=parse_portal_time(date_node.get_text(), HTML_DATE_FORMAT),
        )


class ApiListingStrategy(ListingStrategy):
    """List a category through the JSON API and enrich each entry with its body.

    Attributes:
        cache: Keyed cache for detail-page fetches
    """

    kind = ListingKind.API

    def __init__(self, fetcher: HttpFetcher, root_url: str, cache: FetchCache) -> None:
        super().__init__(fetcher, root_url)
        self.cache = cache

    async def fetch_list(self, descriptor: CategoryDescriptor) -> list[RawListEntry]:
        if not descriptor.api_url:
            raise ValueError(f"Category {descriptor.key} has no API URL")
        payload = await self.fetcher.get_json(descriptor.api_url)
        entries = self.parse_payload(payload)
        logger.debug(f"Parsed {len(entries)} entries from {descriptor.api_url}")
        return entries

    def parse_payload(self, payload: Any) -> list[RawListEntry]:
        try:
            records = payload[API_LIST_KEY]
            return [
                RawListEntry(
                    title=record["title"],
                    link=absolute_link(record["link"], self.root_url),
                    pub_date=parse_portal_time(record["pubtime"], API_PUBTIME_FORMAT),
                )
                for record in records
            ]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise FeedParseError(f"Unexpected API payload: {e!r}") from e

    async def build_items(self, entries: list[RawListEntry]) -> list[FeedItem]:
        return await self.enrich(entries)

    async def enrich(self, entries: list[RawListEntry]) -> list[FeedItem]:
        """Attach the full text of every entry's detail page.

        All detail pages are fetched concurrently; the first failure fails the
        whole batch. Results are cached by link.
        """
        return list(await asyncio.gather(*(self._enrich_one(entry) for entry in entries)))

    async def _enrich_one(self, entry: RawListEntry) -> FeedItem:
        async def produce() -> FeedItem:
            html = await self.fetcher.get_text(entry.link)
            return FeedItem(**entry.model_dump(), description=self.extract_body(html, entry.link))

        return await self.cache.try_get(entry.link, produce)

    @staticmethod
    def extract_body(html: str, url: str = "") -> str:
        """Return the inner HTML of the detail page's content element."""
        content = BeautifulSoup(html, HTML_PARSER).select_one(DETAIL_CONTENT_SELECTOR)
        if content is None:
            raise FeedParseError(f"No {DETAIL_CONTENT_SELECTOR!r} element in {url}")
        return content.decode_contents()
