from __future__ import annotations

import pytest

from src.hr_portal.hr_portal.core.result import ErrorCode
from src.hr_portal.hr_portal.documents.memory_store import MemoryDocumentStore
from src.hr_portal.hr_portal.documents.service import DocumentService
from src.hr_portal.hr_portal.listing.criteria import ListingCriteria, Range
from src.hr_portal.hr_portal.listing.pager import fetch_page


@pytest.fixture()
def documents() -> DocumentService:
    service = DocumentService(MemoryDocumentStore())
    rows = [
        ("e01", "Asha Rao", "Engineering", "2021-01-10", 30000),
        ("e02", "Bina Shah", "Finance", "2021-06-01", 45000),
        ("e03", "Chitra Rao", "Engineering", "2022-03-15", 52000),
        ("e04", "Dev Iyer", "Engineering", "2023-07-01", 28000),
        ("e05", "Esha Raman", "Finance", "2024-02-20", 61000),
        ("e06", "Farah Khan", "Sales", "2024-09-09", 33000),
    ]
    for doc_id, name, dept, joined, salary in rows:
        first, last = name.split()
        service.create(
            "employees",
            {"firstName": first, "lastName": last, "department": dept, "joinDate": joined, "baseSalary": salary},
            doc_id=doc_id,
        )
    return service


def _ids(page):
    return [d["id"] for d in page.items]


def test_pages_follow_the_cursor_to_the_end(documents):
    first = fetch_page(documents, "employees", page_size=4).data
    second = fetch_page(documents, "employees", page_size=4, cursor=first.next_cursor).data

    assert _ids(first) == ["e01", "e02", "e03", "e04"]
    assert first.next_cursor == "e04"
    assert _ids(second) == ["e05", "e06"]
    assert second.next_cursor is None


def test_exact_page_size_has_no_next_cursor(documents):
    page = fetch_page(documents, "employees", page_size=6).data

    assert len(page.items) == 6
    assert page.next_cursor is None


def test_exact_criteria_and_all_sentinel(documents):
    eng = fetch_page(documents, "employees", ListingCriteria(exact={"department": "Engineering"})).data
    everyone = fetch_page(documents, "employees", ListingCriteria(exact={"department": "all"})).data

    assert _ids(eng) == ["e01", "e03", "e04"]
    assert len(everyone.items) == 6


def test_search_is_case_insensitive_substring(documents):
    criteria = ListingCriteria(search="RAO", text_fields=("firstName", "lastName"))

    page = fetch_page(documents, "employees", criteria).data

    assert _ids(page) == ["e01", "e03"]


def test_ranges_are_inclusive_and_open_ended(documents):
    joined = ListingCriteria(ranges=(Range("joinDate", "2021-06-01", "2023-07-01"),))
    paid = ListingCriteria(ranges=(Range("baseSalary", low=50000),))

    assert _ids(fetch_page(documents, "employees", joined).data) == ["e02", "e03", "e04"]
    assert _ids(fetch_page(documents, "employees", paid).data) == ["e03", "e05"]


def test_local_filtering_keeps_pages_full(documents):
    criteria = ListingCriteria(search="a", text_fields=("firstName",))

    first = fetch_page(documents, "employees", criteria, page_size=2).data
    second = fetch_page(documents, "employees", criteria, page_size=2, cursor=first.next_cursor).data
    third = fetch_page(documents, "employees", criteria, page_size=2, cursor=second.next_cursor).data

    assert _ids(first) == ["e01", "e02"]
    assert _ids(second) == ["e03", "e05"]
    assert _ids(third) == ["e06"]
    assert third.next_cursor is None


def test_order_by_is_passed_to_the_store(documents):
    page = fetch_page(
        documents, "employees", page_size=3, order_by={"field": "baseSalary", "direction": "desc"}
    ).data

    assert _ids(page) == ["e05", "e03", "e02"]


def test_criteria_from_request_args():
    criteria = ListingCriteria.from_args(
        {"search": "rao", "department": "all", "status": "active", "joinDateFrom": "2022-01-01"},
        text_fields=("firstName",),
        exact_fields=("department", "status"),
        range_fields=("joinDate", "baseSalary"),
    )

    assert criteria.exact == {"status": "active"}
    assert criteria.ranges == (Range("joinDate", "2022-01-01", None),)
    assert criteria.search == "rao"


@pytest.mark.parametrize("size", [0, -1, 10_000, "x"])
def test_invalid_page_size(documents, size):
    assert fetch_page(documents, "employees", page_size=size).code == ErrorCode.VALIDATION


def test_unknown_cursor(documents):
    assert fetch_page(documents, "employees", cursor="zzz").code == ErrorCode.VALIDATION
