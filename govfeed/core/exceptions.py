"""Custom exception hierarchy for the feed adapter.

This module defines all custom exceptions used throughout the application,
organized in a clear hierarchy for better error handling and reporting.
"""

from typing import Optional


class GovFeedError(Exception):
    """Base exception for all feed adapter errors.

    All custom exceptions in the system should inherit from this base class
    to allow for consistent error handling at the API boundary.
    """

    pass


class InvalidParameterError(GovFeedError):
    """Request parameter does not match any supported value.

    Raised when a category identifier is not one of the known aliases.
    Always raised before any network activity takes place.
    """

    pass


class UpstreamFetchError(GovFeedError):
    """Errors while fetching a listing or detail page.

    Raised on network errors, timeouts and non-success HTTP statuses
    returned by the portal.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FeedParseError(GovFeedError):
    """Unexpected upstream payload structure.

    Raised when a JSON payload or HTML document is malformed, misses required
    fields, or contains dates in an unexpected format.
    """

    pass
