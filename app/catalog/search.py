"""
Substring matching over the cached catalogue.

A book matches a needle when the lower-cased needle occurs in any of
its searchable fields: title, subtitle, author, description, publisher
and isbn. There is no tokenisation or scoring; results keep catalogue
order.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .schemas import Book
from .store import CatalogLoader


def _has_text(s: Optional[str]) -> bool:
    return bool(s and s.strip())


def searchable_fields(book: Book) -> List[str]:
    """Return the non-empty searchable fields of ``book``, lower-cased."""
    fields = (
        book.title, book.subtitle, book.author,
        book.description, book.publisher, book.isbn,
    )
    return [f.lower() for f in fields if f is not None]


def matches(book: Book, needle: str) -> bool:
    return any(needle in f for f in searchable_fields(book))


def search(loader: CatalogLoader, query: Optional[str] = None) -> List[Book]:
    """Free-text search.

    A missing or blank query returns the whole catalogue. Otherwise the
    query is lower-cased as-is (surrounding spaces are significant).
    """
    books = loader.ensure_loaded()
    if not _has_text(query):
        return books
    q = query.lower()
    return [b for b in books if matches(b, q)]


def search_keywords(
    loader: CatalogLoader,
    keywords: Optional[Iterable[Optional[str]]],
    match_all: bool = False,
) -> List[Book]:
    """Keyword search combining keywords with AND (``match_all``) or OR.

    Blank keywords are dropped; with none left, the whole catalogue is
    returned.
    """
    needles = [k.lower() for k in (keywords or []) if _has_text(k)]
    books = loader.ensure_loaded()
    if not needles:
        return books
    combine = all if match_all else any
    return [b for b in books if combine(matches(b, k) for k in needles)]


def split_keywords(raw: Optional[str]) -> List[str]:
    """Split a comma-separated keyword string, trimming each entry."""
    if not raw:
        return []
    return [k.strip() for k in raw.split(",") if k.strip()]


def is_match_all(mode: Optional[str]) -> bool:
    """``ALL`` (any case) selects AND semantics; everything else is ANY."""
    return (mode or "").strip().upper() == "ALL"
