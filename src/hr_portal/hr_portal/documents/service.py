from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, TypeVar

from ..common.validators import require_collection
from ..core.constants import COLLECTIONS, MAX_BATCH_OPERATIONS, MSG_NOT_FOUND, MSG_STORE_UNAVAILABLE
from ..core.exceptions import StoreUnavailableError, ValidationError
from ..core.result import ErrorCode, Result
from .model import Document, QueryOptions, WriteOperation
from .store import DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DocumentService:
    """Uniform CRUD over named collections.

    Every operation returns a :class:`Result`; no exception escapes, so
    callers never need ``try``/``except`` around data access. A service built
    without a store (credentials not configured) answers every call with a
    ``store_unavailable`` failure.
    """

    def __init__(self, store: Optional[DocumentStore], *, collections: Iterable[str] = COLLECTIONS):
        self._store = store
        self._collections = frozenset(collections)

    @property
    def available(self) -> bool:
        return self._store is not None

    def _run(self, action: str, collection: str, fn: Callable[[DocumentStore], T]) -> Result[T]:
        if self._store is None:
            logger.warning("%s on %s skipped: document store not configured", action, collection)
            return Result.fail(MSG_STORE_UNAVAILABLE, ErrorCode.STORE_UNAVAILABLE)
        try:
            return Result.ok(fn(self._store))
        except (ValidationError, StoreUnavailableError) as exc:
            logger.warning("%s on %s rejected: %s", action, collection, exc)
            return Result.from_exception(exc)
        except Exception as exc:
            result: Result[T] = Result.from_exception(exc)
            if result.code == ErrorCode.OPERATION_FAILED:
                logger.exception("Error %s %s", action, collection)
            else:
                logger.info("%s on %s failed: %s", action, collection, exc)
            return result

    def _check_collection(self, collection: Any) -> str:
        return require_collection(collection, self._collections)

    def create(self, collection: str, data: Mapping[str, Any], *, doc_id: Optional[str] = None) -> Result[Document]:
        def _create(store: DocumentStore) -> Document:
            name = self._check_collection(collection)
            if not isinstance(data, Mapping):
                raise ValidationError("Document data must be an object")
            return store.insert(name, dict(data), doc_id=doc_id)

        return self._run("creating in", str(collection), _create)

    def get_by_id(self, collection: str, doc_id: str) -> Result[Document]:
        def _get(store: DocumentStore) -> Optional[Document]:
            name = self._check_collection(collection)
            if not doc_id:
                raise ValidationError("Document id is required")
            return store.get(name, str(doc_id))

        result = self._run("getting from", str(collection), _get)
        if result.success and result.data is None:
            return Result.fail(MSG_NOT_FOUND, ErrorCode.NOT_FOUND)
        return result

    def get_all(self, collection: str, options: Any = None) -> Result[list[Document]]:
        def _get_all(store: DocumentStore) -> list[Document]:
            name = self._check_collection(collection)
            return list(store.query(name, QueryOptions.from_mapping(options)))

        return self._run("querying", str(collection), _get_all)

    def update(
        self,
        collection: str,
        doc_id: str,
        partial: Mapping[str, Any],
        *,
        expected_version: Optional[int] = None,
    ) -> Result[Document]:
        def _update(store: DocumentStore) -> Document:
            name = self._check_collection(collection)
            if not doc_id:
                raise ValidationError("Document id is required")
            if not isinstance(partial, Mapping):
                raise ValidationError("Update data must be an object")
            return store.update(name, str(doc_id), dict(partial), expected_version=expected_version)

        return self._run("updating", str(collection), _update)

    def delete(self, collection: str, doc_id: str) -> Result[None]:
        def _delete(store: DocumentStore) -> None:
            name = self._check_collection(collection)
            if not doc_id:
                raise ValidationError("Document id is required")
            store.delete(name, str(doc_id))

        return self._run("deleting from", str(collection), _delete)

    def batch_write(self, operations: Sequence[Any]) -> Result[list[str]]:
        """Submit set/update/delete operations atomically. No partial application."""

        def _batch(store: DocumentStore) -> list[str]:
            if not isinstance(operations, Sequence) or isinstance(operations, (str, bytes)):
                raise ValidationError("Batch operations must be a list")
            if not operations:
                return []
            if len(operations) > MAX_BATCH_OPERATIONS:
                raise ValidationError(f"A batch is limited to {MAX_BATCH_OPERATIONS} operations")
            ops = [WriteOperation.from_mapping(op) for op in operations]
            for op in ops:
                self._check_collection(op.collection)
            return store.commit_batch(ops)

        return self._run("batch writing", "batch", _batch)
