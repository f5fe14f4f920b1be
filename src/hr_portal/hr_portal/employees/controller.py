from __future__ import annotations

from flask import Flask, request

from ..common.http import int_arg, json_body, json_error, json_result
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE, EMPLOYEES
from ..core.exceptions import ValidationError
from ..listing.criteria import ListingCriteria
from ..listing.pager import fetch_page
from .model import Employee

_TEXT_FIELDS = ("firstName", "lastName", "email", "employeeId")
_EXACT_FIELDS = ("department", "position")
_RANGE_FIELDS = ("joinDate", "baseSalary")


def register(app: Flask, container: Container) -> None:
    employees = container.employee_repo
    default_page_size = container.default_page_size or DEFAULT_PAGE_SIZE

    @app.route("/api/employees", methods=["GET"], endpoint="employee_list")
    def employee_list():
        criteria = ListingCriteria.from_args(
            request.args,
            text_fields=_TEXT_FIELDS,
            exact_fields=_EXACT_FIELDS,
            range_fields=_RANGE_FIELDS,
        )
        page = fetch_page(
            container.document_service,
            EMPLOYEES,
            criteria,
            page_size=int_arg("pageSize", default_page_size),
            cursor=request.args.get("cursor") or None,
            order_by=request.args.get("orderBy") or None,
        )
        return json_result(page, lambda p: p.to_dict())

    @app.route("/api/employees", methods=["POST"], endpoint="employee_create")
    def employee_create():
        body = json_body()
        if not isinstance(body, dict):
            return json_error("Request body must be a JSON object")
        try:
            employee = Employee.from_document({k: v for k, v in body.items() if k != "id"})
        except ValidationError as e:
            return json_error(str(e))
        return json_result(employees.create(employee), lambda e: e.to_dict(), status=201)

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="employee_detail")
    def employee_detail(employee_id: str):
        return json_result(employees.get(employee_id), lambda e: e.to_dict())
