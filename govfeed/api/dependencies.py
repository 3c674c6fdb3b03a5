"""Dependency injection for FastAPI routes.

This module provides the shared HTTP client, fetch cache and feed adapter,
enabling clean separation of concerns and easy testing.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from govfeed.adapters.cache import FetchCache, MemoryFetchCache
from govfeed.adapters.http_client import HttpFetcher
from govfeed.adapters.news_sources.suzhou import SuzhouNewsAdapter


@lru_cache
def get_http_fetcher() -> HttpFetcher:
    """Get the process-wide HTTP client."""
    return HttpFetcher()


@lru_cache
def get_fetch_cache() -> FetchCache:
    """Get the process-wide detail-page cache."""
    return MemoryFetchCache()


def get_suzhou_adapter(
    fetcher: Annotated[HttpFetcher, Depends(get_http_fetcher)],
    cache: Annotated[FetchCache, Depends(get_fetch_cache)],
) -> SuzhouNewsAdapter:
    """Get the Suzhou feed adapter.

    Returns:
        Adapter sharing the process-wide client and cache
    """
    return SuzhouNewsAdapter(fetcher=fetcher, cache=cache)


# Type aliases for dependency injection
HttpFetcherDep = Annotated[HttpFetcher, Depends(get_http_fetcher)]
FetchCacheDep = Annotated[FetchCache, Depends(get_fetch_cache)]
SuzhouAdapterDep = Annotated[SuzhouNewsAdapter, Depends(get_suzhou_adapter)]
