"""System constants and enumerations.

This module defines constants used throughout the application for consistency
and maintainability.
"""

from datetime import timedelta, timezone
from enum import Enum


class ListingKind(str, Enum):
    """How a category listing is retrieved."""

    API = "api"
    HTML = "html"


# Portal publishes times in China Standard Time
PORTAL_TIMEZONE = timezone(timedelta(hours=8))

# Date formats
API_PUBTIME_FORMAT = "%Y-%m-%d %H:%M:%S"
HTML_DATE_FORMAT = "%Y-%m-%d"

# JSON API
API_PATH = "/szinf/info/getInfoCommon/"
API_PAGE_SIZE = 15
API_FIRST_PAGE = 1
API_LIST_KEY = "infolist"

# HTML selectors
LISTING_ITEM_SELECTOR = "ul.infolist li"
LISTING_DATE_SELECTOR = ".time"
DETAIL_CONTENT_SELECTOR = "ucapcontent"

# Error messages
PATTERN_NOT_MATCHED = "pattern not matched"
