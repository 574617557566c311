"""
Route definitions for the books API.

Endpoints under /api/books:
- GET  /                : free-text search (``?query=``)
- POST /search          : keyword search, JSON body
- GET  /search          : keyword search, comma-separated ``?keywords=``
- GET  /reload          : load the catalogue (``?force=true`` to refresh)
- GET  /health          : liveness probe
- GET  /debug/loader    : loader diagnostics
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..config import Config
from .schemas import Book, LoaderDebug, ReloadInfo, SearchRequest
from .search import is_match_all, search, search_keywords, split_keywords
from .store import CatalogLoader

router = APIRouter(prefix="/api/books", tags=["books"])

# Process-wide catalogue, shared by every request
default_loader = CatalogLoader(
    remote_url=Config.BOOKS_REMOTE_URL,
    local_path=Config.BOOKS_LOCAL_PATH,
    timeout=Config.BOOKS_REMOTE_TIMEOUT,
)


def get_loader() -> CatalogLoader:
    return default_loader


@router.get("", response_model=List[Book])
def search_books(
    query: Optional[str] = Query(default=None, description="Free-text search"),
    loader: CatalogLoader = Depends(get_loader),
) -> List[Book]:
    return search(loader, query)


@router.post("/search", response_model=List[Book])
def search_books_by_keywords(
    request: SearchRequest,
    loader: CatalogLoader = Depends(get_loader),
) -> List[Book]:
    return search_keywords(loader, request.keywords, is_match_all(request.match_mode))


@router.get("/search", response_model=List[Book])
def search_books_by_keyword_string(
    keywords: Optional[str] = Query(default=None, description="Comma-separated keywords"),
    match_mode: Optional[str] = Query(default="ANY", alias="matchMode", description="ANY or ALL"),
    loader: CatalogLoader = Depends(get_loader),
) -> List[Book]:
    return search_keywords(loader, split_keywords(keywords), is_match_all(match_mode))


@router.get("/reload", response_model=ReloadInfo)
def reload_books(
    force: bool = Query(default=False, description="Re-acquire even if already loaded"),
    loader: CatalogLoader = Depends(get_loader),
) -> ReloadInfo:
    """
    Without ``force`` this only loads the catalogue when the cache is
    empty; with ``force=true`` a fresh acquisition is always performed.
    """
    books = loader.refresh() if force else loader.ensure_loaded()
    return ReloadInfo(count=len(books), last_loaded=loader.last_acquired())


@router.get("/health")
def health():
    return {"status": "UP"}


@router.get("/debug/loader", response_model=LoaderDebug)
def debug_loader(loader: CatalogLoader = Depends(get_loader)) -> LoaderDebug:
    """
    Debug endpoint showing where the catalogue came from. Does not
    trigger an acquisition.
    Visit: http://127.0.0.1:8000/api/books/debug/loader
    """
    stats = loader.stats()
    books = loader.cached()
    return LoaderDebug(
        count=len(books),
        last_loaded=loader.last_acquired(),
        acquisitions=stats.acquisitions,
        remote_failures=stats.remote_failures,
        local_failures=stats.local_failures,
        empty_acquisitions=stats.empty_acquisitions,
        last_source=stats.last_source,
        sample=books[:5],
    )
