from __future__ import annotations

from typing import Any, Callable, Optional

from flask import jsonify, request

from ..core.result import ErrorCode, Result

STATUS_BY_CODE = {
    ErrorCode.VALIDATION: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.OPERATION_FAILED: 500,
    ErrorCode.STORE_UNAVAILABLE: 503,
}


def json_result(result: Result, serialize: Optional[Callable[[Any], Any]] = None, *, status: int = 200):
    if result.success:
        return jsonify(result.to_dict(serialize)), status
    return jsonify(result.to_dict()), STATUS_BY_CODE.get(result.code, 500)


def json_error(message: str, code: ErrorCode = ErrorCode.VALIDATION):
    return json_result(Result.fail(message, code))


def json_body() -> Any:
    """Request JSON body, or ``None`` when it is missing or not valid JSON."""
    return request.get_json(silent=True)


def int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        return default
