"""Suzhou government feed API router.

This module exposes the Suzhou portal categories as JSON feed documents.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Path, status

from govfeed.adapters.news_sources.suzhou_categories import (
    ROUTE_EXAMPLE,
    ROUTE_MAINTAINERS,
    ROUTE_NAME,
    ROUTE_RADAR_SOURCE,
)
from govfeed.api.dependencies import SuzhouAdapterDep
from govfeed.core.exceptions import (
    FeedParseError,
    InvalidParameterError,
    UpstreamFetchError,
)
from govfeed.models.domain.feed import FeedDocument
from govfeed.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/suzhou/news/{uid}",
    response_model=FeedDocument,
    status_code=status.HTTP_200_OK,
    summary=ROUTE_NAME,
    description=(
        "Fetch the latest entries of a Suzhou government portal category. "
        f"Example: {ROUTE_EXAMPLE}. News categories carry the full article "
        "body as description; topic categories do not."
    ),
)
async def get_suzhou_news(
    adapter: SuzhouAdapterDep,
    uid: str = Path(..., description="栏目名, e.g. news, szyw, qxzt"),
) -> FeedDocument:
    """Build the feed for one category.

    Raises:
        HTTPException: 400 for unknown categories, 502 for upstream failures
    """
    try:
        return await adapter.build_feed(uid)
    except InvalidParameterError as e:
        logger.warning(f"Rejected category {uid!r}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except (UpstreamFetchError, FeedParseError) as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Upstream error: {e}",
        ) from e


@router.get(
    "/suzhou/categories",
    status_code=status.HTTP_200_OK,
    summary="List supported categories",
)
async def list_suzhou_categories(adapter: SuzhouAdapterDep) -> Dict[str, Any]:
    """Describe every supported category and its accepted identifiers."""
    categories: List[Dict[str, Any]] = [
        {
            "key": descriptor.key,
            "aliases": sorted(descriptor.aliases),
            "title": descriptor.title,
            "link": descriptor.url,
            "listing": "api" if descriptor.api_url else "html",
        }
        for descriptor in adapter.categories.values()
    ]
    return {
        "name": ROUTE_NAME,
        "example": ROUTE_EXAMPLE,
        "radar": [ROUTE_RADAR_SOURCE],
        "maintainers": list(ROUTE_MAINTAINERS),
        "categories": categories,
    }
