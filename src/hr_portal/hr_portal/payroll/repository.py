from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import PAYROLL, PAYROLL_SETTINGS, PAYROLL_SETTINGS_DOC
from ..core.enums import FilterOperator, WriteType
from ..core.result import ErrorCode, Result
from ..documents.accessor import CollectionAccessor
from ..documents.model import Filter, QueryOptions
from ..documents.service import DocumentService
from .model import PayrollRecord, PayrollSettings

logger = logging.getLogger(__name__)


class PayrollRepository(CollectionAccessor[PayrollRecord]):
    def __init__(self, documents: DocumentService):
        super().__init__(documents, PAYROLL, PayrollRecord)

    def for_period(self, month: int, year: int, *, employee_id: Optional[str] = None) -> Result[list[PayrollRecord]]:
        filters = [
            Filter("month", FilterOperator.EQ, int(month)),
            Filter("year", FilterOperator.EQ, int(year)),
        ]
        if employee_id:
            filters.append(Filter("employeeId", FilterOperator.EQ, employee_id))
        return self.list(QueryOptions(filters=tuple(filters)))


class PayrollSettingsRepository:
    """The singleton ``payrollSettings/percentages`` document."""

    def __init__(self, documents: DocumentService):
        self._documents = documents

    def load(self) -> Result[PayrollSettings]:
        result = self._documents.get_by_id(PAYROLL_SETTINGS, PAYROLL_SETTINGS_DOC)
        if result.success:
            return Result.ok(PayrollSettings.from_document(result.data))
        if result.code == ErrorCode.NOT_FOUND:
            logger.info("No payroll settings stored, using defaults")
            return Result.ok(PayrollSettings())
        return Result(success=False, error=result.error, code=result.code)

    def save(self, settings: PayrollSettings) -> Result[PayrollSettings]:
        # ``update`` never creates, so the singleton is written with a set.
        result = self._documents.batch_write(
            [
                {
                    "collection": PAYROLL_SETTINGS,
                    "id": PAYROLL_SETTINGS_DOC,
                    "type": WriteType.SET.value,
                    "data": settings.to_document(),
                }
            ]
        )
        return result.map(lambda _ids: settings)
