from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.hr_portal.hr_portal.core.result import ErrorCode
from src.hr_portal.hr_portal.documents.memory_store import MemoryDocumentStore
from src.hr_portal.hr_portal.documents.service import DocumentService
from src.hr_portal.hr_portal.workflows.model import DEFINITIONS
from src.hr_portal.hr_portal.workflows.service import WorkflowService

DECIDED_AT = datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)

LEAVE = {"employeeId": "EMP001", "employeeName": "Asha Rao", "type": "sick", "startDate": "2025-03-03", "endDate": "2025-03-05"}


@pytest.fixture()
def documents() -> DocumentService:
    return DocumentService(MemoryDocumentStore())


@pytest.fixture()
def workflows(documents) -> WorkflowService:
    return WorkflowService(documents, clock=lambda: DECIDED_AT)


def test_submit_stamps_initial_status_and_counts_days(workflows):
    result = workflows.submit("leave", dict(LEAVE, status="approved"))

    assert result.success
    assert result.data["status"] == "pending"
    assert result.data["days"] == 3


def test_submit_requires_fields(workflows):
    result = workflows.submit("leave", {"employeeId": "EMP001"})

    assert result.code == ErrorCode.VALIDATION
    assert "startDate" in result.error


def test_submit_rejects_reversed_dates(workflows):
    result = workflows.submit("leave", dict(LEAVE, endDate="2025-03-01"))

    assert result.code == ErrorCode.VALIDATION


def test_unknown_kind(workflows):
    assert workflows.submit("vacation", LEAVE).code == ErrorCode.VALIDATION


def test_approval_records_decision(workflows, documents):
    leave_id = workflows.submit("leave", LEAVE).data["id"]

    result = workflows.transition("leave", leave_id, "approved", actor="manager-1", note="Get well soon")

    assert result.success
    stored = documents.get_by_id("leaves", leave_id).data
    assert stored["status"] == "approved"
    assert stored["decidedBy"] == "manager-1"
    assert stored["decidedAt"] == DECIDED_AT
    assert stored["decisionNote"] == "Get well soon"


def test_terminal_status_cannot_change(workflows):
    leave_id = workflows.submit("leave", LEAVE).data["id"]
    workflows.transition("leave", leave_id, "rejected", actor="manager-1")

    result = workflows.transition("leave", leave_id, "approved", actor="manager-2")

    assert result.code == ErrorCode.VALIDATION


def test_disallowed_and_unknown_targets(workflows):
    expense_id = workflows.submit(
        "expense", {"employeeId": "EMP001", "category": "travel", "amount": 1200, "date": "2025-03-02"}
    ).data["id"]

    assert workflows.transition("expense", expense_id, "reimbursed", actor="fin").code == ErrorCode.VALIDATION
    assert workflows.transition("expense", expense_id, "lost", actor="fin").code == ErrorCode.VALIDATION
    assert workflows.transition("expense", expense_id, "approved", actor="fin").success
    assert workflows.transition("expense", expense_id, "reimbursed", actor="fin").success


def test_transition_requires_actor(workflows):
    leave_id = workflows.submit("leave", LEAVE).data["id"]

    assert workflows.transition("leave", leave_id, "approved", actor="").code == ErrorCode.VALIDATION


def test_missing_record(workflows):
    assert workflows.transition("leave", "missing", "approved", actor="m").code == ErrorCode.NOT_FOUND


def test_concurrent_decisions_conflict(workflows):
    leave_id = workflows.submit("leave", LEAVE).data["id"]
    shown_version = 1

    first = workflows.transition("leave", leave_id, "approved", actor="a", expected_version=shown_version)
    second = workflows.transition("leave", leave_id, "cancelled", actor="b", expected_version=shown_version)

    assert first.success
    # The second reviewer saw a pending leave, but it is no longer pending.
    assert second.code == ErrorCode.VALIDATION


def test_stale_version_on_allowed_move_is_conflict(workflows):
    asset_id = workflows.submit("asset", {"name": "Laptop 7", "category": "laptop"}).data["id"]
    workflows.transition("asset", asset_id, "assigned", actor="it")

    result = workflows.transition("asset", asset_id, "maintenance", actor="it", expected_version=1)

    assert result.code == ErrorCode.CONFLICT


def test_asset_cycle_and_retirement(workflows):
    asset_id = workflows.submit("asset", {"name": "Laptop 7", "category": "laptop"}).data["id"]

    for status in ("assigned", "available", "maintenance", "assigned", "retired"):
        assert workflows.transition("asset", asset_id, status, actor="it").success
    assert workflows.transition("asset", asset_id, "available", actor="it").code == ErrorCode.VALIDATION


def test_payroll_lifecycle(workflows, documents):
    payroll_id = documents.create("payroll", {"employeeId": "EMP001", "month": 3, "year": 2025, "status": "draft"}).data["id"]

    assert workflows.transition("payroll", payroll_id, "paid", actor="fin").code == ErrorCode.VALIDATION
    for status in ("pending", "rejected", "draft", "pending", "approved", "paid"):
        assert workflows.transition("payroll", payroll_id, status, actor="fin").success


def test_payroll_cannot_be_submitted_generically(workflows, documents):
    result = workflows.submit("payroll", {"employeeId": "GHOST", "month": 3, "year": 2025})

    assert result.code == ErrorCode.VALIDATION
    assert "/api/payroll/generate" in result.error
    assert documents.get_all("payroll").data == []


def test_every_definition_is_consistent():
    for definition in DEFINITIONS.values():
        assert definition.initial in definition.statuses
        assert set(definition.transitions) == set(definition.statuses)
        for targets in definition.transitions.values():
            assert targets <= definition.statuses


def test_list_filters_by_status(workflows):
    first = workflows.submit("leave", LEAVE).data["id"]
    workflows.submit("leave", dict(LEAVE, employeeName="Bina Shah"))
    workflows.transition("leave", first, "approved", actor="m")

    criteria = workflows.criteria_from_args("leave", {"status": "pending"})
    page = workflows.list("leave", criteria).data

    assert [d["employeeName"] for d in page.items] == ["Bina Shah"]
    assert page.next_cursor is None
