from __future__ import annotations

from flask import Flask, request

from ..common.http import int_arg, json_body, json_error, json_result
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    workflows = container.workflow_service
    default_page_size = container.default_page_size or DEFAULT_PAGE_SIZE

    @app.route("/api/workflows/<kind>", methods=["GET"], endpoint="workflow_list")
    def workflow_list(kind: str):
        try:
            criteria = workflows.criteria_from_args(kind, request.args)
        except ValidationError as e:
            return json_error(str(e))
        order_by = request.args.get("orderBy")
        if order_by:
            order_by = {"field": order_by, "direction": request.args.get("direction", "asc")}
        page = workflows.list(
            kind,
            criteria,
            page_size=int_arg("pageSize", default_page_size),
            cursor=request.args.get("cursor") or None,
            order_by=order_by,
        )
        return json_result(page, lambda p: p.to_dict())

    @app.route("/api/workflows/<kind>", methods=["POST"], endpoint="workflow_submit")
    def workflow_submit(kind: str):
        return json_result(workflows.submit(kind, json_body()), status=201)

    @app.route("/api/workflows/<kind>/<doc_id>/transition", methods=["POST"], endpoint="workflow_transition")
    def workflow_transition(kind: str, doc_id: str):
        body = json_body()
        if not isinstance(body, dict):
            return json_error("Request body must be a JSON object")
        expected = body.get("expectedVersion")
        try:
            expected_version = int(expected) if expected not in (None, "") else None
        except (TypeError, ValueError):
            return json_error("expectedVersion must be an integer")
        return json_result(
            workflows.transition(
                kind,
                doc_id,
                str(body.get("status") or ""),
                actor=str(body.get("decidedBy") or ""),
                note=str(body.get("note") or ""),
                expected_version=expected_version,
            )
        )
