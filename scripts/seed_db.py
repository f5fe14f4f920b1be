from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.hr_portal.hr_portal.config import get_settings_module
from src.hr_portal.hr_portal.database.seed import seed_demo_data
from src.hr_portal.hr_portal.documents.factory import build_store
from src.hr_portal.hr_portal.documents.service import DocumentService


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module("src.hr_portal.hr_portal"))

    result = seed_demo_data(DocumentService(build_store(settings)))
    if not result.success:
        print(f"FAILED: {result.error}")
        raise SystemExit(1)
    print(f"OK: Seeded {len(result.data or [])} documents into the {settings.STORE_BACKEND} store")


if __name__ == "__main__":
    main()
