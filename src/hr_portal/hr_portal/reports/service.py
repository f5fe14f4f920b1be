from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import DomainError
from ..core.result import ErrorCode, Result
from ..documents.model import QueryOptions
from ..documents.service import DocumentService
from ..listing.criteria import ListingCriteria
from .export import REPORT_COLLECTIONS, export_csv

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, documents: DocumentService):
        self._documents = documents

    def export(self, report: str, criteria: Optional[ListingCriteria] = None) -> Result[str]:
        """Build the CSV text for ``report`` over every matching document."""

        collection = REPORT_COLLECTIONS.get(report)
        if collection is None:
            return Result.fail(f"Unknown report: {report!r}", ErrorCode.VALIDATION)

        criteria = criteria or ListingCriteria()
        fetched = self._documents.get_all(collection, QueryOptions(filters=tuple(criteria.store_filters())))
        if not fetched.success:
            return Result(success=False, error=fetched.error, code=fetched.code)

        rows = [doc for doc in fetched.data or [] if criteria.matches(doc)]
        try:
            content = export_csv(report, rows)
        except DomainError as exc:
            return Result.from_exception(exc)
        logger.info("Exported %s report with %s rows", report, len(rows))
        return Result.ok(content)
