from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE, FIELD_ID, MAX_PAGE_SIZE
from ..core.result import ErrorCode, Result
from ..documents.model import Document, QueryOptions, parse_order_by
from ..documents.service import DocumentService
from .criteria import ListingCriteria

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Rows scanned per round trip when text/range criteria are evaluated locally.
SCAN_CHUNK = 100


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    next_cursor: Optional[str] = None

    def to_dict(self, serialize=None) -> dict:
        items = [serialize(i) for i in self.items] if serialize else list(self.items)
        return {"items": items, "nextCursor": self.next_cursor}


def fetch_page(
    documents: DocumentService,
    collection: str,
    criteria: Optional[ListingCriteria] = None,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    cursor: Optional[str] = None,
    order_by: Any = None,
) -> Result[Page[Document]]:
    """Read one page of matching documents using store-side cursors.

    Exact criteria go to the store as ``==`` filters. Search and range criteria
    are checked here, so the store is read in chunks until the page is full or
    the collection runs out. ``next_cursor`` is the id of the last returned
    document and ``None`` once nothing matching is left.
    """

    try:
        size = int(page_size)
    except (TypeError, ValueError):
        return Result.fail("pageSize must be an integer", ErrorCode.VALIDATION)
    if size < 1 or size > MAX_PAGE_SIZE:
        return Result.fail(f"pageSize must be between 1 and {MAX_PAGE_SIZE}", ErrorCode.VALIDATION)

    criteria = criteria or ListingCriteria()
    base = QueryOptions(
        filters=tuple(criteria.store_filters()),
        order_by=tuple(parse_order_by(order_by)),
    )
    # One extra match tells whether another page exists.
    chunk = max(size + 1, SCAN_CHUNK) if criteria.has_local_predicates else size + 1

    matched: list[Document] = []
    after = cursor or None
    while len(matched) <= size:
        result = documents.get_all(collection, base.with_page(limit=chunk, start_after=after))
        if not result.success:
            return Result(success=False, error=result.error, code=result.code)
        docs = result.data or []
        for doc in docs:
            if criteria.matches(doc):
                matched.append(doc)
                if len(matched) > size:
                    break
        if len(docs) < chunk:
            break
        after = str(docs[-1][FIELD_ID])

    items = matched[:size]
    next_cursor = str(items[-1][FIELD_ID]) if len(matched) > size else None
    logger.debug("Listed %s items from %s (more=%s)", len(items), collection, next_cursor is not None)
    return Result.ok(Page(items=items, next_cursor=next_cursor))
