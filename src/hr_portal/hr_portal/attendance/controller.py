from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, request

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..common.http import json_body, json_error, json_result
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def _record_dict(rec: AttendanceRecord) -> dict:
    out = rec.to_document()
    out["id"] = rec.id
    return out


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    def _parse_date(v: str) -> date:
        try:
            return parse_iso_date(v)
        except ValueError:
            raise ValidationError(f"Invalid date: {v!r}")

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        today = date.today()
        try:
            start = _parse_date(request.args.get("start") or format_iso_date(today.replace(day=1)))
            end = _parse_date(request.args.get("end") or format_iso_date(today))
        except ValidationError as e:
            return json_error(str(e))
        result = attendance.records_between(request.args.get("employeeId") or "", start, end)
        return json_result(result, lambda rows: [_record_dict(r) for r in rows])

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    def attendance_create():
        body = json_body()
        if not isinstance(body, dict):
            return json_error("Request body must be a JSON object")
        try:
            record = AttendanceRecord.from_document({k: v for k, v in body.items() if k != "id"})
        except ValidationError as e:
            return json_error(str(e))
        return json_result(container.attendance_repo.create(record), _record_dict, status=201)

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    def attendance_summary():
        result = attendance.month_summary(
            request.args.get("employeeId") or "",
            request.args.get("month"),
            request.args.get("year"),
        )
        return json_result(result, asdict)
