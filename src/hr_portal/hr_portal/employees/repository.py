from __future__ import annotations

from ..core.constants import EMPLOYEES
from ..core.enums import FilterOperator
from ..core.result import Result
from ..documents.accessor import CollectionAccessor
from ..documents.model import Filter, QueryOptions
from ..documents.service import DocumentService
from .model import Employee


class EmployeeRepository(CollectionAccessor[Employee]):
    def __init__(self, documents: DocumentService):
        super().__init__(documents, EMPLOYEES, Employee)

    def list_active(self) -> Result[list[Employee]]:
        return self.list(QueryOptions(filters=(Filter("isActive", FilterOperator.EQ, True),)))
