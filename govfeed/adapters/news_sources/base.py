"""Base feed source adapter interface.

This module defines the abstract base class for all feed source adapters,
providing a consistent interface for building feeds from different portals.
"""

from abc import ABC, abstractmethod

from govfeed.models.domain.feed import FeedDocument


class FeedSourceAdapter(ABC):
    """Abstract base class for feed source adapters.

    All portal implementations must inherit from this class and implement
    the build_feed method to turn a request identifier into a feed document.

    Attributes:
        source_name: Identifier for the portal (e.g., "suzhou")
    """

    def __init__(self, source_name: str) -> None:
        """Initialize the feed source adapter.

        Args:
            source_name: Identifier for the portal
        """
        self.source_name = source_name

    @abstractmethod
    async def build_feed(self, identifier: str) -> FeedDocument:
        """Build the feed for one identifier.

        Returns:
            Feed document with items in upstream order

        Raises:
            InvalidParameterError: If the identifier is not supported
            UpstreamFetchError: If any request fails
            FeedParseError: If any payload has an unexpected shape
        """
        pass
