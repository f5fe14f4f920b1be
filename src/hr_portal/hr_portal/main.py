from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import build_container
from .database.bootstrap import apply_schema
from .database.seed import seed_demo_data
from .documents.controller import register as register_documents
from .documents.store import DocumentStore
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .workflows.controller import register as register_workflows

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Any] = None, *, store: Optional[DocumentStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings_module = get_settings_module(__package__)
        settings = importlib.import_module(settings_module)
    else:
        settings_module = getattr(settings, "__name__", type(settings).__name__)

    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), format=LOG_FORMAT)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["COMPANY_NAME"] = getattr(settings, "COMPANY_NAME", "HR Portal")

    backend = str(getattr(settings, "STORE_BACKEND", "firestore")).lower()
    logger.info("Starting HR portal (settings=%s, store=%s)", settings_module, backend)

    if backend == "mysql" and store is None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(getattr(settings, "DB_CONFIG"))

    container = build_container(settings, store=store)
    if not container.document_service.available:
        logger.error("Document store not available; data endpoints will answer 503")

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seeded = seed_demo_data(container.document_service)
        if not seeded.success:
            logger.warning("Demo seed skipped: %s", seeded.error)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        status = 200 if container.document_service.available else 503
        return {"success": status == 200, "store": backend}, status

    register_documents(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_workflows(app, container)
    register_reports(app, container)

    return app
