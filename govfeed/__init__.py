"""Suzhou Government News Feed.

Fetches category listings from the Suzhou municipal government portal and
normalizes them into feed-ready documents.
"""

__version__ = "1.0.0"
