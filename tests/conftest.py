"""Shared fixtures for catalog tests."""
import json
from datetime import datetime, timezone

import pytest

from app.catalog.schemas import Book
from app.catalog.store import CatalogLoader


SAMPLE_BOOKS = [
    {
        "isbn": "9781491943533",
        "title": "Modern JavaScript",
        "author": "Nicolás Bevacqua",
        "publisher": "Press",
        "pages": 334,
    },
    {
        "isbn": "9781593277574",
        "title": "Understanding ECMAScript 6",
        "subtitle": "The Definitive Guide",
        "author": "Nicholas C. Zakas",
        "publisher": "No Starch Press",
    },
    {
        "isbn": "9781098110239",
        "title": "Fluent Python",
        "author": "Luciano Ramalho",
        "publisher": "O'Reilly Media",
        "description": "Clear, concise and effective programming",
    },
    {
        "isbn": "9781449365035",
        "title": "Speaking JavaScript",
        "author": "Axel Rauschmayer",
        "publisher": "O'Reilly Media",
    },
    {
        "isbn": "0000000000",
        "title": "Untitled draft",
    },
]

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def catalog_json(entries) -> bytes:
    return json.dumps({"books": entries}).encode("utf-8")


class FakeFetcher:
    """Stands in for ``fetch_remote_bytes`` and records calls."""

    def __init__(self, payload=None):
        self.payload = payload
        self.calls = 0

    def __call__(self, url, timeout):
        self.calls += 1
        return self.payload


@pytest.fixture
def local_file(tmp_path):
    path = tmp_path / "books.json"
    path.write_bytes(catalog_json(SAMPLE_BOOKS))
    return path


@pytest.fixture
def make_loader(tmp_path):
    def _make(payload=None, local_path=None, clock=lambda: FIXED_NOW):
        fetcher = FakeFetcher(payload)
        loader = CatalogLoader(
            remote_url="http://catalog.test/books",
            local_path=local_path or tmp_path / "missing.json",
            fetcher=fetcher,
            clock=clock,
        )
        return loader, fetcher
    return _make


@pytest.fixture
def loader(make_loader):
    """Loader whose remote source serves ``SAMPLE_BOOKS``."""
    loader, _ = make_loader(payload=catalog_json(SAMPLE_BOOKS))
    return loader


@pytest.fixture
def sample_books():
    return [Book(**entry) for entry in SAMPLE_BOOKS]
