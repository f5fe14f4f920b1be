from __future__ import annotations

import pytest

from src.hr_portal.hr_portal.core.enums import FilterOperator, SortDirection
from src.hr_portal.hr_portal.core.exceptions import ValidationError
from src.hr_portal.hr_portal.documents.model import Filter, OrderBy, QueryOptions
from src.hr_portal.hr_portal.documents.query import apply_query

DOCS = [
    {"id": "a", "name": "Asha", "dept": "Eng", "salary": 30000, "skills": ["python", "sql"]},
    {"id": "b", "name": "Bina", "dept": "Finance", "salary": 45000, "skills": ["excel"]},
    {"id": "c", "name": "Chitra", "dept": "Eng", "salary": 30000},
    {"id": "d", "name": "Dev", "salary": "unknown"},
]


def _ids(docs):
    return [d["id"] for d in docs]


def test_no_options_orders_by_id():
    assert _ids(apply_query(reversed(DOCS), QueryOptions())) == ["a", "b", "c", "d"]


def test_equality_and_missing_fields():
    eng = apply_query(DOCS, QueryOptions(filters=(Filter("dept", FilterOperator.EQ, "Eng"),)))
    not_eng = apply_query(DOCS, QueryOptions(filters=(Filter("dept", FilterOperator.NE, "Eng"),)))

    assert _ids(eng) == ["a", "c"]
    # "d" has no dept at all and is left out of both.
    assert _ids(not_eng) == ["b"]


def test_range_comparisons_never_cross_types():
    rich = apply_query(DOCS, QueryOptions(filters=(Filter("salary", FilterOperator.GE, 30000),)))

    assert _ids(rich) == ["a", "b", "c"]


def test_in_and_array_operators():
    in_filter = QueryOptions(filters=(Filter("dept", FilterOperator.IN, ["Finance", "Ops"]),))
    contains = QueryOptions(filters=(Filter("skills", FilterOperator.ARRAY_CONTAINS, "sql"),))
    contains_any = QueryOptions(filters=(Filter("skills", FilterOperator.ARRAY_CONTAINS_ANY, ["excel", "go"]),))

    assert _ids(apply_query(DOCS, in_filter)) == ["b"]
    assert _ids(apply_query(DOCS, contains)) == ["a"]
    assert _ids(apply_query(DOCS, contains_any)) == ["b"]


def test_in_requires_a_list():
    with pytest.raises(ValidationError):
        apply_query(DOCS, QueryOptions(filters=(Filter("dept", FilterOperator.IN, "Eng"),)))


def test_descending_order_breaks_ties_by_id():
    options = QueryOptions(
        filters=(Filter("salary", FilterOperator.GE, 0),),
        order_by=(OrderBy("salary", SortDirection.DESC),),
    )

    assert _ids(apply_query(DOCS, options)) == ["b", "c", "a"]


def test_ordering_drops_documents_without_the_field():
    options = QueryOptions(order_by=(OrderBy("dept"),))

    assert _ids(apply_query(DOCS, options)) == ["a", "c", "b"]


def test_cursor_and_limit_page_through_results():
    first = apply_query(DOCS, QueryOptions(limit=2))
    second = apply_query(DOCS, QueryOptions(limit=2, start_after=first[-1]["id"]))

    assert _ids(first) == ["a", "b"]
    assert _ids(second) == ["c", "d"]


def test_unknown_cursor_is_rejected():
    with pytest.raises(ValidationError):
        apply_query(DOCS, QueryOptions(start_after="zzz"))


def test_dotted_paths_reach_nested_fields():
    docs = [{"id": "p1", "employee": {"department": "Eng"}}, {"id": "p2", "employee": {"department": "HR"}}]

    found = apply_query(docs, QueryOptions(filters=(Filter("employee.department", FilterOperator.EQ, "HR"),)))

    assert _ids(found) == ["p2"]


def test_malformed_filters_are_skipped():
    options = QueryOptions.from_mapping(
        {
            "filters": [
                {"field": "dept", "operator": "==", "value": "Eng"},
                {"field": "dept", "operator": "~=", "value": "x"},
                {"operator": "=="},
                {"field": "name", "operator": "==", "value": None},
            ]
        }
    )

    assert options.filters == (Filter("dept", FilterOperator.EQ, "Eng"),)


def test_non_integer_limit_is_rejected():
    with pytest.raises(ValidationError):
        QueryOptions.from_mapping({"limit": "ten"})
