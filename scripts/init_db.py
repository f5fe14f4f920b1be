from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.hr_portal.hr_portal.config import get_settings_module
from src.hr_portal.hr_portal.database.bootstrap import apply_schema
from src.hr_portal.hr_portal.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module("src.hr_portal.hr_portal"))
    if str(settings.STORE_BACKEND).lower() != "mysql":
        print(f"SKIP: STORE_BACKEND is {settings.STORE_BACKEND!r}, nothing to create")
        return

    tables = apply_schema(settings.DB_CONFIG)
    print(f"OK: documents table ready in {DBConfig.from_mapping(settings.DB_CONFIG).describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
