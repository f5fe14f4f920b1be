from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request

from ..common.http import json_body, json_error, json_result
from ..common.validators import require_month
from ..container import Container
from ..core.exceptions import ValidationError
from ..core.result import Result
from .payslip import render_payslip


def _records(records) -> list[dict]:
    return [r.to_dict() for r in records]


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/payroll/preview", methods=["POST"], endpoint="payroll_preview")
    def payroll_preview():
        return json_result(payroll.preview(json_body()), lambda r: r.to_dict())

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    def payroll_generate():
        return json_result(payroll.generate(json_body()), lambda r: r.to_dict(), status=201)

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    def payroll_list():
        try:
            month, year = require_month(request.args.get("month"), request.args.get("year"))
        except ValidationError as e:
            return json_error(str(e))

        listed = payroll.list_for_period(month, year)
        if not listed.success:
            return json_result(listed)
        records = listed.data or []
        return json_result(
            Result.ok({"items": _records(records), "summary": asdict(payroll.summarize(records))})
        )

    @app.route("/api/payroll/settings", methods=["GET"], endpoint="payroll_settings")
    def payroll_settings():
        return json_result(payroll.load_settings(), lambda s: s.to_document())

    @app.route("/api/payroll/settings", methods=["PUT"], endpoint="save_payroll_settings")
    def save_payroll_settings():
        return json_result(payroll.save_settings(json_body()), lambda s: s.to_document())

    @app.route("/api/payroll/<payroll_id>", methods=["GET"], endpoint="payroll_detail")
    def payroll_detail(payroll_id: str):
        return json_result(payroll.get(payroll_id), lambda r: r.to_dict())

    @app.route("/api/payroll/<payroll_id>/payslip", methods=["GET"], endpoint="payroll_payslip")
    def payroll_payslip(payroll_id: str):
        found = payroll.get(payroll_id)
        if not found.success:
            return json_result(found)
        html = render_payslip(found.data, company_name=app.config.get("COMPANY_NAME", "HR Portal"))
        return app.response_class(html, mimetype="text/html")
