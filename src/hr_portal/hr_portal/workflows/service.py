from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import coerce_date, now_utc
from ..common.validators import require_fields, require_non_empty, require_non_negative
from ..core.constants import DEFAULT_PAGE_SIZE, FIELD_VERSION
from ..core.exceptions import DomainError, ValidationError
from ..core.result import Result
from ..documents.model import Document
from ..documents.service import DocumentService
from ..listing.criteria import ListingCriteria
from ..listing.pager import Page, fetch_page
from .model import DEFINITIONS, WorkflowDefinition, get_definition

logger = logging.getLogger(__name__)


def _prepare_leave(data: dict) -> None:
    try:
        start, end = coerce_date(data["startDate"]), coerce_date(data["endDate"])
    except (TypeError, ValueError):
        raise ValidationError("startDate and endDate must be ISO dates")
    if end < start:
        raise ValidationError("endDate cannot be before startDate")
    data["days"] = (end - start).days + 1


def _prepare_expense(data: dict) -> None:
    data["amount"] = require_non_negative(data.get("amount"), "amount")


_PREPARE: dict[str, Callable[[dict], None]] = {
    "leave": _prepare_leave,
    "expense": _prepare_expense,
}


class WorkflowService:
    """Submission and status changes for records that move through a lifecycle."""

    def __init__(
        self,
        documents: DocumentService,
        *,
        clock: Callable = now_utc,
        definitions: Mapping[str, WorkflowDefinition] = DEFINITIONS,
    ):
        self._documents = documents
        self._clock = clock
        self._definitions = definitions

    def _definition(self, kind: str) -> WorkflowDefinition:
        if kind in self._definitions:
            return self._definitions[kind]
        return get_definition(kind)

    def submit(self, kind: str, data: Mapping[str, Any]) -> Result[Document]:
        """Validate a new record and store it in its initial status."""

        try:
            definition = self._definition(kind)
            if definition.created_via:
                raise ValidationError(f"New {definition.kind} records are created through {definition.created_via}")
            if not isinstance(data, Mapping):
                raise ValidationError("Record data must be an object")
            require_fields(data, definition.required_fields)
            record = dict(data)
            prepare = _PREPARE.get(definition.kind)
            if prepare:
                prepare(record)
        except DomainError as exc:
            return Result.from_exception(exc)

        record["status"] = definition.initial
        created = self._documents.create(definition.collection, record)
        if created.success:
            logger.info("%s %s submitted", definition.kind, created.data["id"])  # type: ignore[index]
        return created

    def transition(
        self,
        kind: str,
        doc_id: str,
        status: str,
        *,
        actor: str,
        note: str = "",
        expected_version: Optional[int] = None,
    ) -> Result[Document]:
        """Move a record to ``status``.

        The write is conditional on the version read (or ``expected_version``
        when the caller supplies the one it displayed), so two reviewers
        deciding at once cannot both win.
        """

        try:
            definition = self._definition(kind)
            actor = require_non_empty(actor, "decidedBy")
        except DomainError as exc:
            return Result.from_exception(exc)

        current = self._documents.get_by_id(definition.collection, doc_id)
        if not current.success:
            return current
        doc: Document = current.data  # type: ignore[assignment]

        try:
            definition.check_transition(str(doc.get("status") or definition.initial), str(status))
        except ValidationError as exc:
            return Result.from_exception(exc)

        version = expected_version if expected_version is not None else doc.get(FIELD_VERSION)
        updated = self._documents.update(
            definition.collection,
            doc_id,
            {
                "status": str(status),
                "decidedBy": actor,
                "decidedAt": self._clock(),
                "decisionNote": note or "",
            },
            expected_version=version,
        )
        if updated.success:
            logger.info("%s %s moved %s -> %s by %s", definition.kind, doc_id, doc.get("status"), status, actor)
        return updated

    def list(
        self,
        kind: str,
        criteria: Optional[ListingCriteria] = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        cursor: Optional[str] = None,
        order_by: Any = None,
    ) -> Result[Page[Document]]:
        try:
            definition = self._definition(kind)
        except DomainError as exc:
            return Result.from_exception(exc)
        return fetch_page(
            self._documents,
            definition.collection,
            criteria,
            page_size=page_size,
            cursor=cursor,
            order_by=order_by,
        )

    def criteria_from_args(self, kind: str, args: Mapping[str, Any]) -> ListingCriteria:
        definition = self._definition(kind)
        return ListingCriteria.from_args(
            args,
            text_fields=definition.text_fields,
            exact_fields=definition.exact_fields,
            range_fields=definition.range_fields,
        )
