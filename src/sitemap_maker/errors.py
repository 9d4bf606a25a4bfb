"""
Exceptions raised by sitemap-maker.

File write failures are not wrapped: ``Sitemap.save`` lets the ``OSError``
from the filesystem propagate as-is.
"""


class SitemapError(Exception):
    """Base class for sitemap-maker errors."""


class InvalidInput(SitemapError, ValueError):
    """A location, date or timezone that cannot be used in a sitemap."""
