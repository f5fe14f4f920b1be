from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Document, QueryOptions, WriteOperation


class DocumentStore(Protocol):
    """Backend contract for schemaless collections.

    Implementations raise ``NotFoundError`` / ``ConflictError`` /
    ``ValidationError`` for domain failures and let driver errors propagate;
    the document service turns both into results.
    """

    def insert(self, collection: str, data: Document, *, doc_id: Optional[str] = None) -> Document:
        """Create a document, stamping ``createdAt``/``updatedAt``/``version``."""

        raise NotImplementedError

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def query(self, collection: str, options: QueryOptions) -> Sequence[Document]:
        raise NotImplementedError

    def update(
        self,
        collection: str,
        doc_id: str,
        partial: Document,
        *,
        expected_version: Optional[int] = None,
    ) -> Document:
        """Merge fields into an existing document; never creates one."""

        raise NotImplementedError

    def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError

    def commit_batch(self, operations: Sequence[WriteOperation]) -> list[str]:
        """Apply every operation or none; returns the affected ids in order."""

        raise NotImplementedError
