"""
Catalog package for the books API.

This package holds the catalogue loader (remote source with a bundled
``books.json`` fallback, cached in memory), the substring search engine
that queries it, and the FastAPI routes exposing both under
``/api/books``.
"""

from .router import router as catalog_router  # noqa: F401
