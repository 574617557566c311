"""
In-memory data store for the book catalogue.

The catalogue is acquired lazily: the first caller that finds the cache
empty fetches the remote catalog and, if that yields nothing, reads the
bundled ``books.json`` dataset. The resolved list is then published as
an immutable snapshot together with the acquisition time. Readers grab
the snapshot in a single attribute read, so they never see a
half-updated catalogue.

Acquisition never raises. Every degraded step is logged and counted in
``LoaderStats`` so operators can tell "no books" apart from "both
sources failed", even though API callers cannot.
"""

from __future__ import annotations

import json
import logging
import re
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from .remote_source import DEFAULT_TIMEOUT, fetch_remote_bytes
from .schemas import Book


logger = logging.getLogger(__name__)

# Acquisition timestamp before the first cycle
NEVER = datetime.fromtimestamp(0, tz=timezone.utc)

BOOKS_FIELD = "books"
_STRING_FIELDS = (
    "isbn", "title", "subtitle", "author", "published",
    "publisher", "description", "website",
)
_INT_RE = re.compile(r"[+-]?[0-9]+")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_str(value: Any) -> Optional[str]:
    """Return ``value`` as a string, or ``None`` if it is not a scalar."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _coerce_int(value: Any) -> Optional[int]:
    """Return ``value`` as an int when it is integral, else ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # longer than the int/str conversion limit
                return None
    return None


def decode_book(entry: dict) -> Book:
    """Build a ``Book`` from one raw catalog entry.

    Decoding is field-by-field: unknown keys are ignored and missing or
    mismatched values become ``None`` instead of failing the entry.
    """
    values = {name: _coerce_str(entry.get(name)) for name in _STRING_FIELDS}
    values["pages"] = _coerce_int(entry.get("pages"))
    return Book(**values)


def parse_books(raw: Optional[Union[bytes, str]]) -> List[Book]:
    """Decode a catalog document into a list of books.

    Parameters
    ----------
    raw : Optional[Union[bytes, str]]
        The JSON document. It must be an object holding a ``books``
        array.

    Returns
    -------
    List[Book]
        The decoded books in document order. An empty list is returned
        for a blank payload, invalid JSON, a non-object root or a
        missing ``books`` array. Entries that are not JSON objects are
        skipped.
    """
    if raw is None:
        return []
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if not raw.strip():
        return []
    try:
        root = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("Catalog payload is not valid JSON: %s", exc)
        return []
    if not isinstance(root, dict):
        logger.warning("Catalog payload root is %s, expected an object", type(root).__name__)
        return []
    entries = root.get(BOOKS_FIELD)
    if not isinstance(entries, list):
        return []
    books: List[Book] = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object catalog entry: %r", entry)
            continue
        books.append(decode_book(entry))
    return books


def load_local_books(path: Union[Path, str]) -> List[Book]:
    """Load the bundled dataset.

    A missing, unreadable or malformed file yields an empty list.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        logger.warning("Local catalog %s could not be read: %s", path, exc)
        return []
    return parse_books(raw)


@dataclass(frozen=True)
class _Snapshot:
    books: Tuple[Book, ...]
    acquired_at: datetime
    generation: int


@dataclass
class LoaderStats:
    """Diagnostic counters for acquisition cycles."""

    acquisitions: int = 0
    remote_failures: int = 0
    local_failures: int = 0
    empty_acquisitions: int = 0
    last_source: str = "none"


class CatalogLoader:
    """Owns the cached catalogue and the acquisition strategy.

    Reads are lock-free: the cache is a single immutable ``_Snapshot``
    replaced in one assignment. Acquisition cycles are serialised by a
    lock; a caller that waited while another cycle ran reuses that
    cycle's result instead of fetching again.
    """

    def __init__(
        self,
        remote_url: str,
        local_path: Union[Path, str],
        timeout: float = DEFAULT_TIMEOUT,
        fetcher: Callable[[str, float], Optional[bytes]] = fetch_remote_bytes,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.remote_url = remote_url
        self.local_path = Path(local_path)
        self.timeout = timeout
        self._fetcher = fetcher
        self._clock = clock
        self._snapshot = _Snapshot(books=(), acquired_at=NEVER, generation=0)
        self._acquire_lock = threading.Lock()
        self._stats = LoaderStats()

    def ensure_loaded(self) -> List[Book]:
        """Return the cached catalogue, acquiring it first if empty."""
        snapshot = self._snapshot
        if snapshot.books:
            return list(snapshot.books)
        return list(self._acquire(seen_generation=snapshot.generation).books)

    def refresh(self) -> List[Book]:
        """Force an acquisition cycle regardless of the cached content."""
        return list(self._acquire(seen_generation=None).books)

    def cached(self) -> List[Book]:
        """Return the cached catalogue without triggering an acquisition."""
        return list(self._snapshot.books)

    def last_acquired(self) -> datetime:
        return self._snapshot.acquired_at

    def stats(self) -> LoaderStats:
        return replace(self._stats)

    def _acquire(self, seen_generation: Optional[int]) -> _Snapshot:
        with self._acquire_lock:
            current = self._snapshot
            # Another caller published while we were waiting for the lock.
            if seen_generation is not None and current.generation != seen_generation:
                return current

            books, source = self._resolve()
            snapshot = _Snapshot(
                books=tuple(books),
                acquired_at=self._clock(),
                generation=current.generation + 1,
            )
            self._snapshot = snapshot

            self._stats.acquisitions += 1
            self._stats.last_source = source
            if not books:
                self._stats.empty_acquisitions += 1
                logger.warning("Catalog acquisition produced no books")
            logger.info(
                "Catalog acquired from %s source: %d books", source, len(books)
            )
            return snapshot

    def _resolve(self) -> Tuple[List[Book], str]:
        books = parse_books(self._fetcher(self.remote_url, self.timeout))
        if books:
            return books, "remote"
        self._stats.remote_failures += 1
        logger.warning(
            "Remote catalog unavailable or empty, falling back to %s", self.local_path
        )
        books = load_local_books(self.local_path)
        if books:
            return books, "local"
        self._stats.local_failures += 1
        return [], "none"
