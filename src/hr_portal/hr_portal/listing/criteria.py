from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import FilterOperator
from ..documents.model import Document, Filter
from ..documents.query import lookup

# Select-box value meaning "no filter".
ALL = "all"


def _is_unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in ("", ALL))


def _normalize(value: Any) -> Any:
    """Bring range bounds and field values to a comparable form."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return parse_iso_date(text[:10])
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text.lower()


@dataclass(frozen=True)
class Range:
    """Inclusive range on one field. Either bound may be omitted."""

    field: str
    low: Any = None
    high: Any = None

    def contains(self, doc: Document) -> bool:
        raw = lookup(doc, self.field)
        value = _normalize(raw)
        low, high = _normalize(self.low), _normalize(self.high)
        if low is None and high is None:
            return True
        if value is None:
            return False
        for bound in (low, high):
            if bound is not None and type(bound) is not type(value):
                return False
        if low is not None and value < low:
            return False
        if high is not None and value > high:
            return False
        return True


@dataclass(frozen=True)
class ListingCriteria:
    """What a list screen asks for: free-text search, select filters, ranges."""

    search: str = ""
    text_fields: tuple[str, ...] = ()
    exact: Mapping[str, Any] = field(default_factory=dict)
    ranges: tuple[Range, ...] = ()

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, Any],
        *,
        text_fields: Iterable[str] = (),
        exact_fields: Iterable[str] = (),
        range_fields: Iterable[str] = (),
    ) -> "ListingCriteria":
        """Read ``search``, ``<field>`` and ``<field>From``/``<field>To`` request args."""

        exact = {name: args.get(name) for name in exact_fields if not _is_unset(args.get(name))}
        ranges = tuple(
            Range(name, args.get(f"{name}From"), args.get(f"{name}To"))
            for name in range_fields
            if args.get(f"{name}From") or args.get(f"{name}To")
        )
        return cls(
            search=str(args.get("search") or ""),
            text_fields=tuple(text_fields),
            exact=exact,
            ranges=ranges,
        )

    @property
    def has_local_predicates(self) -> bool:
        return bool(self.search.strip() and self.text_fields) or bool(self.ranges)

    def store_filters(self) -> list[Filter]:
        """Exact-match criteria, which every store can evaluate itself."""
        return [
            Filter(field=name, operator=FilterOperator.EQ, value=value)
            for name, value in self.exact.items()
            if not _is_unset(value)
        ]

    def _matches_search(self, doc: Document) -> bool:
        needle = self.search.strip().lower()
        if not needle or not self.text_fields:
            return True
        for name in self.text_fields:
            value = lookup(doc, name)
            if isinstance(value, str) and needle in value.lower():
                return True
        return False

    def matches(self, doc: Document) -> bool:
        return self._matches_search(doc) and all(r.contains(doc) for r in self.ranges)

    def matches_all(self, doc: Document) -> bool:
        """Full check including exact criteria; used on already fetched data."""
        for name, value in self.exact.items():
            if _is_unset(value):
                continue
            if lookup(doc, name) != value:
                return False
        return self.matches(doc)


def apply_criteria(docs: Iterable[Document], criteria: Optional[ListingCriteria]) -> list[Document]:
    if criteria is None:
        return list(docs)
    return [d for d in docs if criteria.matches_all(d)]
