"""
Pydantic schema definitions for the catalog module.

The ``Book`` model mirrors the entries of the ``books`` array served by
the remote catalog and by the bundled ``books.json`` dataset. Every
field is optional: sources are free to omit anything, and unknown keys
are ignored. Instances are frozen so that a published catalog cannot be
altered by the code that searches it.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """A single book entry.

    ``isbn`` is the record identifier, but no uniqueness is enforced:
    duplicates coming from a source are kept as-is. ``published`` is
    the raw publication date string as provided by the source.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    isbn: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    author: Optional[str] = None
    published: Optional[str] = None
    publisher: Optional[str] = None
    pages: Optional[int] = None
    description: Optional[str] = None
    website: Optional[str] = None


class SearchRequest(BaseModel):
    """Body of ``POST /api/books/search``.

    ``keywords`` may be missing or null, which is treated the same as an
    empty list. ``matchMode`` is ``ALL`` or ``ANY`` (case-insensitive);
    any other value falls back to ``ANY``.
    """

    model_config = ConfigDict(populate_by_name=True)

    keywords: Optional[List[Optional[str]]] = None
    match_mode: Optional[str] = Field(default=None, alias="matchMode")


class ReloadInfo(BaseModel):
    """Result of a reload: catalog size and acquisition time."""

    count: int
    last_loaded: datetime = Field(serialization_alias="lastLoaded")


class LoaderDebug(BaseModel):
    """Diagnostic view of the catalog loader."""

    count: int
    last_loaded: datetime = Field(serialization_alias="lastLoaded")
    acquisitions: int
    remote_failures: int
    local_failures: int
    empty_acquisitions: int
    last_source: str
    sample: List[Book]
