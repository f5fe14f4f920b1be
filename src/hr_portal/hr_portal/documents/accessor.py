from __future__ import annotations

import logging
from typing import Any, Generic, Mapping, Optional, Protocol, Type, TypeVar

from ..core.exceptions import ValidationError
from ..core.result import ErrorCode, Result
from .model import Document
from .service import DocumentService

logger = logging.getLogger(__name__)


class Record(Protocol):
    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Record":
        raise NotImplementedError

    def to_document(self) -> Document:
        raise NotImplementedError


R = TypeVar("R", bound=Record)


class CollectionAccessor(Generic[R]):
    """Typed view of one collection.

    Documents are validated and coerced into ``record_type`` when read; a
    document that cannot be converted comes back as a validation failure
    instead of a half-filled record.
    """

    def __init__(self, documents: DocumentService, collection: str, record_type: Type[R]):
        self._documents = documents
        self.collection = collection
        self._record_type = record_type

    def _convert(self, doc: Document) -> R:
        return self._record_type.from_document(doc)  # type: ignore[return-value]

    def _to_record(self, result: Result[Document]) -> Result[R]:
        if not result.success:
            return Result(success=False, error=result.error, code=result.code)
        try:
            return Result.ok(self._convert(result.data))  # type: ignore[arg-type]
        except ValidationError as exc:
            logger.warning("Invalid %s document %s: %s", self.collection, (result.data or {}).get("id"), exc)
            return Result.fail(str(exc), ErrorCode.VALIDATION)

    def create(self, record: R) -> Result[R]:
        return self._to_record(self._documents.create(self.collection, record.to_document()))

    def get(self, doc_id: str) -> Result[R]:
        return self._to_record(self._documents.get_by_id(self.collection, doc_id))

    def list(self, options: Any = None) -> Result[list[R]]:
        result = self._documents.get_all(self.collection, options)
        if not result.success:
            return Result(success=False, error=result.error, code=result.code)
        records: list[R] = []
        for doc in result.data or []:
            try:
                records.append(self._convert(doc))
            except ValidationError as exc:
                # One malformed document must not hide the rest of the listing.
                logger.warning("Skipping invalid %s document %s: %s", self.collection, doc.get("id"), exc)
        return Result.ok(records)

    def update(self, doc_id: str, partial: Mapping[str, Any], *, expected_version: Optional[int] = None) -> Result[R]:
        return self._to_record(
            self._documents.update(self.collection, doc_id, partial, expected_version=expected_version)
        )

    def delete(self, doc_id: str) -> Result[None]:
        return self._documents.delete(self.collection, doc_id)
