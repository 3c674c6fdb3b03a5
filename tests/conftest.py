"""Pytest configuration and shared fixtures.

This module provides common fixtures for all tests, including canned portal
responses and a fake HTTP fetcher that serves them.
"""

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from govfeed.core.exceptions import UpstreamFetchError

ROOT_URL = "https://www.suzhou.gov.cn"

SZYW_API_URL = (
    f"{ROOT_URL}/szinf/info/getInfoCommon/"
    "?pagesize=15&currpage=1&channelid=5057aeffb1a84a7e8aeded87728da48c"
)
QXZT_URL = f"{ROOT_URL}/szsrmzf/qxzt/nav_list.shtml"
RDZT_URL = f"{ROOT_URL}/szsrmzf/rdzt/nav_list.shtml"

DETAIL_URL_1 = f"{ROOT_URL}/szsrmzf/szyw/202305/a1.shtml"
DETAIL_URL_2 = f"{ROOT_URL}/szsrmzf/szyw/202304/b2.shtml"


@pytest.fixture
def api_payload() -> dict:
    """JSON list payload with one relative and one absolute link."""
    return {
        "infolist": [
            {
                "title": "市政府召开常务会议",
                "link": "/szsrmzf/szyw/202305/a1.shtml",
                "pubtime": "2023-05-01 10:30:00",
            },
            {
                "title": "苏州发布促进消费新举措",
                "link": DETAIL_URL_2,
                "pubtime": "2023-04-30 08:00:00",
            },
        ]
    }


@pytest.fixture
def listing_html() -> str:
    """Server-rendered topic listing with three entries."""
    return """
    <html><body>
      <ul class="nav"><li><a href="/other.shtml" title="导航">导航</a></li></ul>
      <ul class="infolist">
        <li><a href="/szsrmzf/qxzt/202305/z1.shtml" title="吴江区专题">吴江区专题</a>
            <span class="time">2023-05-01</span></li>
        <li><a href="https://www.suzhou.gov.cn/szsrmzf/qxzt/202304/z2.shtml" title="昆山市专题">昆山市专题</a>
            <span class="time">2023-04-20</span></li>
        <li><a href="z3.shtml" title="常熟市专题">常熟市专题</a>
            <span class="time"> 2023-03-15 </span></li>
      </ul>
    </body></html>
    """


def detail_html(body: str) -> str:
    return (
        "<html><head><title>详情</title></head><body>"
        f"<div class=\"article\"><ucapcontent>{body}</ucapcontent></div>"
        "</body></html>"
    )


@pytest.fixture
def detail_pages() -> dict[str, str]:
    return {
        DETAIL_URL_1: detail_html("<p>会议研究了有关工作。</p>"),
        DETAIL_URL_2: detail_html("<p>新举措自即日起施行。</p>"),
    }


@pytest.fixture
def make_fetcher() -> Callable[..., MagicMock]:
    """Build a fake HttpFetcher serving canned responses by URL.

    Unknown URLs raise UpstreamFetchError, as a 404 from the portal would.
    """

    def _make(texts: dict[str, str] | None = None, payloads: dict[str, Any] | None = None) -> MagicMock:
        texts = texts or {}
        payloads = payloads or {}

        async def get_text(url: str) -> str:
            if url not in texts:
                raise UpstreamFetchError(f"Upstream returned 404 for {url}", url=url, status_code=404)
            return texts[url]

        async def get_json(url: str) -> Any:
            if url not in payloads:
                raise UpstreamFetchError(f"Upstream returned 404 for {url}", url=url, status_code=404)
            return payloads[url]

        fetcher = MagicMock()
        fetcher.get_text = AsyncMock(side_effect=get_text)
        fetcher.get_json = AsyncMock(side_effect=get_json)
        return fetcher

    return _make
