from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.http import json_error, json_result
from ..container import Container
from ..listing.criteria import ListingCriteria
from .export import REPORTS

# Filters accepted on every export: ?status=...&dateFrom=...&dateTo=...
_EXACT_ARGS = ("status", "department", "employeeId", "type", "category")
_RANGE_ARGS = ("date", "startDate")


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _write_csv(content: str, filename: str):
        # Excel needs the BOM to detect UTF-8.
        return app.response_class(
            content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/<report>.csv", methods=["GET"], endpoint="report_csv")
    def report_csv(report: str):
        if report not in REPORTS:
            return json_error(f"Unknown report: {report!r}")
        criteria = ListingCriteria.from_args(
            request.args,
            text_fields=("employeeName", "name", "title", "description"),
            exact_fields=_EXACT_ARGS,
            range_fields=_RANGE_ARGS,
        )
        exported = reports.export(report, criteria)
        if not exported.success:
            return json_result(exported)
        filename = f"{report}_report_{date.today().strftime('%Y%m%d')}.csv"
        return _write_csv(exported.data or "", filename)
