from __future__ import annotations

import re
from typing import Any

from flask import Flask, request

from ..common.http import json_body, json_error, json_result
from ..container import Container

# Query-string keys that are not field filters.
_RESERVED_ARGS = {"limit", "startAfter", "orderBy", "direction"}
_NUMBER = re.compile(r"-?\d+(\.\d+)?")


def _arg_value(raw: str) -> Any:
    """Type a query-string value: ``true``/``false`` become booleans and numeric
    literals numbers. A double-quoted value stays a string, so ``?code="007"``
    matches the text ``007``.
    """

    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        return raw[1:-1]
    if raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    if _NUMBER.fullmatch(raw):
        return float(raw) if "." in raw else int(raw)
    return raw


def _options_from_args(args) -> dict:
    """``?status=active&limit=10&orderBy=name&direction=desc`` to query options."""
    filters = [
        {"field": key, "operator": "==", "value": _arg_value(value)}
        for key, value in args.items()
        if key not in _RESERVED_ARGS and value != ""
    ]
    options: dict = {"filters": filters}
    if args.get("orderBy"):
        options["orderBy"] = [{"field": args["orderBy"], "direction": args.get("direction", "asc")}]
    if args.get("limit"):
        options["limit"] = args["limit"]
    if args.get("startAfter"):
        options["startAfter"] = args["startAfter"]
    return options


def register(app: Flask, container: Container) -> None:
    documents = container.document_service

    @app.route("/api/collections/<name>", methods=["GET"], endpoint="list_documents")
    def list_documents(name: str):
        return json_result(documents.get_all(name, _options_from_args(request.args)))

    @app.route("/api/collections/<name>/query", methods=["POST"], endpoint="query_documents")
    def query_documents(name: str):
        body = json_body()
        if body is not None and not isinstance(body, dict):
            return json_error("Query options must be an object")
        return json_result(documents.get_all(name, body or {}))

    @app.route("/api/collections/<name>", methods=["POST"], endpoint="create_document")
    def create_document(name: str):
        body = json_body()
        if not isinstance(body, dict):
            return json_error("Request body must be a JSON object")
        doc_id = body.pop("id", None)
        return json_result(documents.create(name, body, doc_id=doc_id), status=201)

    @app.route("/api/collections/<name>/<doc_id>", methods=["GET"], endpoint="get_document")
    def get_document(name: str, doc_id: str):
        return json_result(documents.get_by_id(name, doc_id))

    @app.route("/api/collections/<name>/<doc_id>", methods=["PATCH"], endpoint="update_document")
    def update_document(name: str, doc_id: str):
        body = json_body()
        if not isinstance(body, dict):
            return json_error("Request body must be a JSON object")
        expected = body.pop("expectedVersion", None)
        if request.headers.get("If-Match"):
            expected = request.headers["If-Match"].strip('"')
        try:
            expected_version = int(expected) if expected not in (None, "") else None
        except (TypeError, ValueError):
            return json_error("expectedVersion must be an integer")
        return json_result(documents.update(name, doc_id, body, expected_version=expected_version))

    @app.route("/api/collections/<name>/<doc_id>", methods=["DELETE"], endpoint="delete_document")
    def delete_document(name: str, doc_id: str):
        return json_result(documents.delete(name, doc_id))

    @app.route("/api/batch", methods=["POST"], endpoint="batch_write")
    def batch_write():
        body = json_body()
        operations = body.get("operations") if isinstance(body, dict) else body
        if not isinstance(operations, list):
            return json_error("Batch body must be a list of operations")
        return json_result(documents.batch_write(operations))
