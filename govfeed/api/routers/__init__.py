"""API routers package.

This package contains all FastAPI routers for the application.
"""

from govfeed.api.routers import health, suzhou

__all__ = [
    "suzhou",
    "health",
]
