"""Category table for the Suzhou government portal.

Each category is keyed by its canonical identifier and lists the aliases
accepted in requests. Categories with a channel id are listed through the
portal's JSON API; the rest are scraped from their HTML listing page.
"""

from types import MappingProxyType
from typing import Mapping, Optional
from urllib.parse import urlencode

from govfeed.core.config import settings
from govfeed.core.constants import (
    API_FIRST_PAGE,
    API_PAGE_SIZE,
    API_PATH,
    PATTERN_NOT_MATCHED,
)
from govfeed.core.exceptions import InvalidParameterError
from govfeed.models.domain.feed import CategoryDescriptor

ROUTE_PATH = "/gov/suzhou/news/{uid}"
ROUTE_EXAMPLE = "/gov/suzhou/news/news"
ROUTE_NAME = "政府新闻"
ROUTE_RADAR_SOURCE = "www.suzhou.gov.cn/szsrmzf/:uid/nav_list.shtml"
ROUTE_MAINTAINERS = ("EsuRt", "luyuhuang")

TITLE_PREFIX = "苏州市政府 - "

# key: (aliases, display name, listing path, API channel id)
_CATEGORY_ROWS: tuple[tuple[str, tuple[str, ...], str, str, Optional[str]], ...] = (
    ("szyw", ("szyw", "news"), "苏州要闻", "/szsrmzf/szyw/nav_list.shtml", "5057aeffb1a84a7e8aeded87728da48c"),
    ("qxkx", ("qxkx", "district"), "区县快讯", "/szsrmzf/qxkx/nav_list.shtml", "75c636ea0efb487ea7e479e3cc0ff3e5"),
    ("bmdt", ("bmdt",), "部门动态", "/szsrmzf/bmdt/nav_list.shtml", "b3d097e3eb79421f88439ea381ce33c3"),
    ("xwsp", ("xwsp",), "新闻视频", "/szsrmzf/xwsp/nav_list.shtml", "507980d214c943ebb0a70853ec94b12e"),
    ("rdzt", ("rdzt",), "热点专题", "/szsrmzf/rdzt/nav_list.shtml", None),
    ("sbjzt", ("sbjzt",), "市本级专题", "/szsrmzf/sbjzt/nav_list.shtml", None),
    ("zxrdzt", ("zxrdzt",), "最新热点专题", "/szsrmzf/zxrdzt/nav_list.shtml", None),
    ("wqzt", ("wqzt",), "往期专题", "/szsrmzf/wqzt/nav_list.shtml", None),
    ("qxzt", ("qxzt",), "区县专题", "/szsrmzf/qxzt/nav_list.shtml", None),
    ("zwgg", ("zwgg",), "政务公告", "/szsrmzf/zwgg/nav_list.shtml", "260915178a1f4c4fac44c4bf6378c9b0"),
    ("mszx", ("mszx",), "便民公告", "/szsrmzf/mszx/nav_list.shtml", "dc60acecb0be46b89d42272dcb8bd32b"),
    ("bmzx", ("bmzx",), "民生资讯", "/szsrmzf/bmzx/bmzx_list.shtml", "b015bfa5e5514cc9a26cd9f956ef8e69"),
)


def build_api_url(root_url: str, channel_id: str) -> str:
    """Return the first-page JSON list URL for a channel."""
    query = urlencode(
        {"pagesize": API_PAGE_SIZE, "currpage": API_FIRST_PAGE, "channelid": channel_id}
    )
    return f"{root_url}{API_PATH}?{query}"


def build_category_table(root_url: str) -> Mapping[str, CategoryDescriptor]:
    """Build the read-only category table for a portal root.

    Args:
        root_url: Portal root without trailing slash

    Returns:
        Mapping of canonical key to descriptor

    Raises:
        ValueError: If two categories claim the same alias
    """
    table: dict[str, CategoryDescriptor] = {}
    seen: set[str] = set()
    for key, aliases, name, path, channel_id in _CATEGORY_ROWS:
        clash = seen.intersection(aliases)
        if clash:
            raise ValueError(f"Duplicate category aliases: {sorted(clash)}")
        seen.update(aliases)
        table[key] = CategoryDescriptor(
            key=key,
            aliases=frozenset(aliases),
            url=f"{root_url}{path}",
            title=f"{TITLE_PREFIX}{name}",
            api_url=build_api_url(root_url, channel_id) if channel_id else None,
        )
    return MappingProxyType(table)


def build_alias_index(
    table: Mapping[str, CategoryDescriptor],
) -> Mapping[str, CategoryDescriptor]:
    """Flatten a category table into an alias lookup."""
    return MappingProxyType(
        {alias: descriptor for descriptor in table.values() for alias in descriptor.aliases}
    )


CATEGORIES = build_category_table(settings.suzhou_root_url)
ALIASES = build_alias_index(CATEGORIES)


def resolve_category(
    identifier: str,
    aliases: Mapping[str, CategoryDescriptor] = ALIASES,
) -> CategoryDescriptor:
    """Resolve a request identifier to its category.

    Only exact alias matches are accepted.

    Raises:
        InvalidParameterError: If the identifier is not a known alias
    """
    try:
        return aliases[identifier]
    except (KeyError, TypeError):
        raise InvalidParameterError(PATTERN_NOT_MATCHED) from None


def list_categories(
    table: Mapping[str, CategoryDescriptor] = CATEGORIES,
) -> list[CategoryDescriptor]:
    """Return all categories in table order."""
    return list(table.values())
