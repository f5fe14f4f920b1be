from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import FilterOperator, SortDirection, WriteType
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

Document = dict[str, Any]


@dataclass(frozen=True)
class Filter:
    field: str
    operator: FilterOperator
    value: Any


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class QueryOptions:
    """Options accepted by ``get_all``.

    ``start_after`` is the id of the last document of the previous page.
    """

    filters: tuple[Filter, ...] = ()
    order_by: tuple[OrderBy, ...] = ()
    limit: Optional[int] = None
    start_after: Optional[str] = None

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "QueryOptions":
        """Build options from a loosely-typed mapping (JSON body, query args).

        Unset or empty filter lists mean "no predicate". Malformed individual
        filters are skipped with a warning instead of failing the read.
        """

        if raw is None:
            return cls()
        if isinstance(raw, QueryOptions):
            return raw
        if not isinstance(raw, Mapping):
            logger.warning("Ignoring query options of type %s", type(raw).__name__)
            return cls()

        raw_filters = raw.get("filters", raw.get("where"))
        filters = tuple(parse_filters(raw_filters))
        order_by = tuple(parse_order_by(raw.get("orderBy")))

        limit = raw.get("limit")
        if limit is not None:
            try:
                limit = int(limit)
            except (TypeError, ValueError):
                raise ValidationError("limit must be an integer")
            if limit <= 0:
                limit = None

        start_after = raw.get("startAfter")
        if start_after is not None:
            if isinstance(start_after, Mapping):
                start_after = start_after.get("id")
            start_after = str(start_after) if start_after else None

        return cls(filters=filters, order_by=order_by, limit=limit, start_after=start_after)

    def with_page(self, *, limit: Optional[int], start_after: Optional[str]) -> "QueryOptions":
        return QueryOptions(filters=self.filters, order_by=self.order_by, limit=limit, start_after=start_after)


def parse_filters(raw: Any) -> list[Filter]:
    if not raw:
        return []
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        logger.warning("Ignoring filters that are not a list: %r", raw)
        return []

    out: list[Filter] = []
    for index, item in enumerate(raw):
        if isinstance(item, Filter):
            out.append(item)
            continue
        if not isinstance(item, Mapping) or not item.get("field") or not item.get("operator"):
            logger.warning("Invalid filter object at index %s: %r", index, item)
            continue
        if item.get("value") is None:
            logger.warning("Skipping filter on %s with empty value", item.get("field"))
            continue
        try:
            op = FilterOperator(str(item["operator"]))
        except ValueError:
            logger.warning("Unknown filter operator at index %s: %r", index, item.get("operator"))
            continue
        out.append(Filter(field=str(item["field"]), operator=op, value=item["value"]))
    return out


def parse_order_by(raw: Any) -> list[OrderBy]:
    if not raw:
        return []
    items = raw if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)) else [raw]
    out: list[OrderBy] = []
    for item in items:
        if isinstance(item, OrderBy):
            out.append(item)
        elif isinstance(item, str):
            out.append(OrderBy(field=item))
        elif isinstance(item, Mapping) and item.get("field"):
            try:
                direction = SortDirection(str(item.get("direction") or "asc").lower())
            except ValueError:
                raise ValidationError(f"Invalid sort direction: {item.get('direction')!r}")
            out.append(OrderBy(field=str(item["field"]), direction=direction))
        else:
            logger.warning("Ignoring invalid orderBy entry: %r", item)
    return out


@dataclass(frozen=True)
class WriteOperation:
    collection: str
    type: WriteType
    id: Optional[str] = None
    data: Document = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "WriteOperation":
        if isinstance(raw, WriteOperation):
            return raw
        if not isinstance(raw, Mapping):
            raise ValidationError("Batch operation must be an object")
        collection = raw.get("collection")
        if not collection:
            raise ValidationError("Batch operation is missing a collection")
        try:
            op_type = WriteType(str(raw.get("type")))
        except ValueError:
            raise ValidationError(f"Unsupported batch operation type: {raw.get('type')!r}")
        doc_id = raw.get("id")
        if op_type != WriteType.SET and not doc_id:
            raise ValidationError(f"Batch {op_type.value} requires a document id")
        data = raw.get("data") or {}
        if not isinstance(data, Mapping):
            raise ValidationError("Batch operation data must be an object")
        return cls(collection=str(collection), type=op_type, id=str(doc_id) if doc_id else None, data=dict(data))
