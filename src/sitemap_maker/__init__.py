"""
sitemap-maker

Build sitemaps.org XML sitemaps from a list of URLs.
"""

from .errors import InvalidInput, SitemapError
from .response import BufferedResponse, ResponseWriter, make_wsgi_app
from .sitemap import Sitemap, normalize_lastmod
from .url import URL

__all__ = [
    "__version__",
    "BufferedResponse",
    "InvalidInput",
    "ResponseWriter",
    "Sitemap",
    "SitemapError",
    "URL",
    "make_wsgi_app",
    "normalize_lastmod",
]

__version__ = "0.1.0"
