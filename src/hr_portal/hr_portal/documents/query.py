"""In-process query evaluation shared by the memory and MySQL stores.

Mirrors the Firestore rules the application relies on: values of different
types never compare equal or ordered against each other, documents missing a
filtered (or ordered) field are excluded, and ties are broken by document id.
"""
from __future__ import annotations

from numbers import Number
from typing import Any, Iterable, Sequence

from ..core.constants import FIELD_ID
from ..core.enums import FilterOperator, SortDirection
from ..core.exceptions import ValidationError
from .model import Document, Filter, OrderBy, QueryOptions

_MISSING = object()


def get_field(doc: Document, path: str) -> Any:
    """Resolve a dotted field path (``employee.department``)."""
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def lookup(doc: Document, path: str, default: Any = None) -> Any:
    value = get_field(doc, path)
    return default if value is _MISSING else value


def _type_rank(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        return 1
    if isinstance(value, Number):
        return 2
    if isinstance(value, str):
        return 4
    if isinstance(value, (list, tuple)):
        return 6
    if isinstance(value, dict):
        return 7
    # datetimes and anything else with an ordering
    return 3


def _comparable(a: Any, b: Any) -> bool:
    return _type_rank(a) == _type_rank(b)


def _compare(op: FilterOperator, actual: Any, expected: Any) -> bool:
    if not _comparable(actual, expected):
        return False
    try:
        if op == FilterOperator.LT:
            return actual < expected
        if op == FilterOperator.LE:
            return actual <= expected
        if op == FilterOperator.GT:
            return actual > expected
        return actual >= expected
    except TypeError:
        return False


def _as_list(value: Any, op: FilterOperator) -> list:
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValidationError(f"Operator '{op.value}' requires a list value")
    return list(value)


def _equal(a: Any, b: Any) -> bool:
    return _comparable(a, b) and a == b


def matches(doc: Document, flt: Filter) -> bool:
    actual = get_field(doc, flt.field)
    if actual is _MISSING:
        return False

    op = flt.operator
    if op == FilterOperator.EQ:
        return _equal(actual, flt.value)
    if op == FilterOperator.NE:
        return actual is not None and not _equal(actual, flt.value)
    if op in (FilterOperator.LT, FilterOperator.LE, FilterOperator.GT, FilterOperator.GE):
        return _compare(op, actual, flt.value)
    if op == FilterOperator.IN:
        return any(_equal(actual, v) for v in _as_list(flt.value, op))
    if op == FilterOperator.NOT_IN:
        return actual is not None and not any(_equal(actual, v) for v in _as_list(flt.value, op))
    if op == FilterOperator.ARRAY_CONTAINS:
        return isinstance(actual, list) and any(_equal(item, flt.value) for item in actual)
    if op == FilterOperator.ARRAY_CONTAINS_ANY:
        wanted = _as_list(flt.value, op)
        return isinstance(actual, list) and any(_equal(item, v) for item in actual for v in wanted)
    raise ValidationError(f"Unsupported operator: {op!r}")


def _sort_key(value: Any) -> tuple:
    if value is _MISSING:
        return (-1, 0)
    rank = _type_rank(value)
    if rank in (6, 7):
        return (rank, repr(value))
    return (rank, value)


def _apply_order(docs: list[Document], order_by: Sequence[OrderBy]) -> list[Document]:
    # Stable sorts applied from the least significant key. The id tiebreak
    # follows the direction of the last ordering, as Firestore does.
    id_desc = bool(order_by) and order_by[-1].direction == SortDirection.DESC
    ordered = sorted(docs, key=lambda d: str(d.get(FIELD_ID, "")), reverse=id_desc)
    for ob in reversed(order_by):
        ordered = sorted(
            ordered,
            key=lambda d, f=ob.field: _sort_key(get_field(d, f)),
            reverse=ob.direction == SortDirection.DESC,
        )
    return ordered


def apply_query(docs: Iterable[Document], options: QueryOptions) -> list[Document]:
    """Filter, order, and page documents according to ``options``.

    The cursor is positional: the cursor document does not have to match the
    filters, only to exist, so a page boundary survives edits made to it.
    """
    docs = list(docs)
    selected = [d for d in docs if all(matches(d, f) for f in options.filters)]

    for ob in options.order_by:
        selected = [d for d in selected if get_field(d, ob.field) is not _MISSING]

    if options.start_after:
        cursor = next((d for d in docs if str(d.get(FIELD_ID)) == options.start_after), None)
        if cursor is None:
            raise ValidationError(f"Unknown cursor: {options.start_after}")
        if not any(d is cursor for d in selected):
            selected.append(cursor)
        selected = _apply_order(selected, options.order_by)
        index = next(i for i, d in enumerate(selected) if d is cursor)
        selected = selected[index + 1:]
    else:
        selected = _apply_order(selected, options.order_by)

    if options.limit:
        selected = selected[: options.limit]
    return selected
