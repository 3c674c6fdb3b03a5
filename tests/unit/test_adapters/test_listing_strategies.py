"""Unit tests for the API and HTML listing strategies."""

from datetime import datetime, timedelta, timezone

import pytest

from govfeed.adapters.cache import MemoryFetchCache
from govfeed.adapters.news_sources.listing import (
    ApiListingStrategy,
    HtmlListingStrategy,
    absolute_link,
    parse_portal_time,
)
from govfeed.adapters.news_sources.suzhou_categories import resolve_category
from govfeed.core.constants import ListingKind
from govfeed.core.exceptions import FeedParseError, UpstreamFetchError
from govfeed.models.domain.feed import RawListEntry

ROOT_URL = "https://www.suzhou.gov.cn"
UTC8 = timezone(timedelta(hours=8))


def test_parse_portal_time_date_only():
    """A bare date normalizes to midnight UTC+8."""
    parsed = parse_portal_time("2023-05-01", "%Y-%m-%d")

    assert parsed == datetime(2023, 5, 1, 0, 0, tzinfo=UTC8)
    assert parsed.utcoffset() == timedelta(hours=8)


def test_parse_portal_time_with_time():
    parsed = parse_portal_time("2023-05-01 10:30:00", "%Y-%m-%d %H:%M:%S")

    assert parsed == datetime(2023, 5, 1, 10, 30, tzinfo=UTC8)
    assert parsed.astimezone(timezone.utc).hour == 2


@pytest.mark.parametrize("value", ["2023/05/01", "", "yesterday", None])
def test_parse_portal_time_rejects_bad_input(value):
    with pytest.raises(FeedParseError):
        parse_portal_time(value, "%Y-%m-%d")


@pytest.mark.parametrize(
    "href,expected",
    [
        ("/path/x.html", f"{ROOT_URL}/path/x.html"),
        ("http://other.example/a.html", "http://other.example/a.html"),
        (f"{ROOT_URL}/b.html", f"{ROOT_URL}/b.html"),
        ("c.html", f"{ROOT_URL}/c.html"),
    ],
)
def test_absolute_link(href, expected):
    assert absolute_link(href, ROOT_URL) == expected


class TestHtmlListingStrategy:
    """Tests for scraping server-rendered listings."""

    @pytest.mark.asyncio
    async def test_fetch_list(self, make_fetcher, listing_html):
        url = f"{ROOT_URL}/szsrmzf/qxzt/nav_list.shtml"
        fetcher = make_fetcher(texts={url: listing_html})
        strategy = HtmlListingStrategy(fetcher, ROOT_URL)

        entries = await strategy.fetch_list(resolve_category("qxzt"))

        assert strategy.kind is ListingKind.HTML
        fetcher.get_text.assert_awaited_once_with(url)
        assert [e.title for e in entries] == ["吴江区专题", "昆山市专题", "常熟市专题"]
        assert [e.link for e in entries] == [
            f"{ROOT_URL}/szsrmzf/qxzt/202305/z1.shtml",
            f"{ROOT_URL}/szsrmzf/qxzt/202304/z2.shtml",
            f"{ROOT_URL}/z3.shtml",
        ]
        assert entries[0].pub_date == datetime(2023, 5, 1, tzinfo=UTC8)
        assert entries[2].pub_date == datetime(2023, 3, 15, tzinfo=UTC8)

    @pytest.mark.asyncio
    async def test_build_items_has_no_description(self, make_fetcher, listing_html):
        strategy = HtmlListingStrategy(make_fetcher(), ROOT_URL)
        entries = strategy.parse_listing(listing_html)

        items = await strategy.build_items(entries)

        assert len(items) == 3
        assert all(item.description is None for item in items)

    def test_empty_listing_is_a_parse_error(self, make_fetcher):
        strategy = HtmlListingStrategy(make_fetcher(), ROOT_URL)

        with pytest.raises(FeedParseError):
            strategy.parse_listing("<html><body><ul class='infolist'></ul></body></html>")

    def test_entry_without_date_is_a_parse_error(self, make_fetcher):
        strategy = HtmlListingStrategy(make_fetcher(), ROOT_URL)
        html = "<ul class='infolist'><li><a href='/a.shtml' title='A'>A</a></li></ul>"

        with pytest.raises(FeedParseError):
            strategy.parse_listing(html)

    def test_entry_without_title_is_a_parse_error(self, make_fetcher):
        strategy = HtmlListingStrategy(make_fetcher(), ROOT_URL)
        html = (
            "<ul class='infolist'><li><a href='/a.shtml'>A</a>"
            "<span class='time'>2023-01-01</span></li></ul>"
        )

        with pytest.raises(FeedParseError):
            strategy.parse_listing(html)

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self, make_fetcher):
        strategy = HtmlListingStrategy(make_fetcher(), ROOT_URL)

        with pytest.raises(UpstreamFetchError):
            await strategy.fetch_list(resolve_category("rdzt"))


class TestApiListingStrategy:
    """Tests for the JSON API listing and detail enrichment."""

    @pytest.mark.asyncio
    async def test_fetch_list(self, make_fetcher, api_payload):
        descriptor = resolve_category("news")
        fetcher = make_fetcher(payloads={descriptor.api_url: api_payload})
        strategy = ApiListingStrategy(fetcher, ROOT_URL, MemoryFetchCache())

        entries = await strategy.fetch_list(descriptor)

        assert strategy.kind is ListingKind.API
        fetcher.get_json.assert_awaited_once_with(descriptor.api_url)
        assert [e.link for e in entries] == [
            f"{ROOT_URL}/szsrmzf/szyw/202305/a1.shtml",
            f"{ROOT_URL}/szsrmzf/szyw/202304/b2.shtml",
        ]
        assert entries[0].pub_date == datetime(2023, 5, 1, 10, 30, tzinfo=UTC8)
        assert entries[1].pub_date == datetime(2023, 4, 30, 8, 0, tzinfo=UTC8)

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"infolist": None},
            {"infolist": [{"title": "A", "link": "/a"}]},
            {"infolist": [{"title": "A", "link": "/a", "pubtime": "2023-05-01"}]},
            {"infolist": [{"title": None, "link": "/a", "pubtime": "2023-05-01 00:00:00"}]},
            [],
        ],
    )
    def test_parse_payload_rejects_bad_shapes(self, make_fetcher, payload):
        strategy = ApiListingStrategy(make_fetcher(), ROOT_URL, MemoryFetchCache())

        with pytest.raises(FeedParseError):
            strategy.parse_payload(payload)

    @pytest.mark.asyncio
    async def test_enrich_attaches_body(self, make_fetcher, api_payload, detail_pages):
        fetcher = make_fetcher(texts=detail_pages)
        strategy = ApiListingStrategy(fetcher, ROOT_URL, MemoryFetchCache())
        entries = strategy.parse_payload(api_payload)

        items = await strategy.enrich(entries)

        assert [item.link for item in items] == [entry.link for entry in entries]
        assert items[0].description == "<p>会议研究了有关工作。</p>"
        assert items[1].description == "<p>新举措自即日起施行。</p>"
        assert fetcher.get_text.await_count == 2

    @pytest.mark.asyncio
    async def test_enrich_is_cached_by_link(self, make_fetcher, api_payload, detail_pages):
        fetcher = make_fetcher(texts=detail_pages)
        strategy = ApiListingStrategy(fetcher, ROOT_URL, MemoryFetchCache(ttl=600))
        entries = strategy.parse_payload(api_payload)

        await strategy.enrich(entries)
        await strategy.enrich(entries)

        assert fetcher.get_text.await_count == 2

    @pytest.mark.asyncio
    async def test_single_detail_failure_fails_batch(self, make_fetcher, api_payload, detail_pages):
        pages = dict(detail_pages)
        pages.pop(f"{ROOT_URL}/szsrmzf/szyw/202304/b2.shtml")
        strategy = ApiListingStrategy(make_fetcher(texts=pages), ROOT_URL, MemoryFetchCache())
        entries = strategy.parse_payload(api_payload)

        with pytest.raises(UpstreamFetchError):
            await strategy.enrich(entries)

    @pytest.mark.asyncio
    async def test_missing_content_element_is_a_parse_error(self, make_fetcher):
        link = f"{ROOT_URL}/x.shtml"
        fetcher = make_fetcher(texts={link: "<html><body><p>no body</p></body></html>"})
        strategy = ApiListingStrategy(fetcher, ROOT_URL, MemoryFetchCache())
        entry = RawListEntry(title="X", link=link, pub_date=datetime(2023, 1, 1, tzinfo=UTC8))

        with pytest.raises(FeedParseError):
            await strategy.enrich([entry])

    def test_extract_body_keeps_inner_html(self):
        html = "<div><ucapcontent><p>A</p><img src='/a.png'></ucapcontent></div>"

        body = ApiListingStrategy.extract_body(html)

        assert body.startswith("<p>A</p>")
        assert "img" in body
        assert "ucapcontent" not in body

    @pytest.mark.asyncio
    async def test_fetch_list_requires_api_url(self, make_fetcher):
        strategy = ApiListingStrategy(make_fetcher(), ROOT_URL, MemoryFetchCache())

        with pytest.raises(ValueError):
            await strategy.fetch_list(resolve_category("qxzt"))


def test_extract_body_returns_inner_html_unchanged():
    html = "<ucapcontent>\n  <p>正文</p>\n</ucapcontent>"

    assert ApiListingStrategy.extract_body(html) == "\n  <p>正文</p>\n"
