"""Insert empty DTR rows for approved interns with no scan today.

Run from cron on weekdays after the cutoff hour, e.g.::

    5 8 * * 1-5  cd /srv/ojt_tracker && python scripts/absent_sweep.py
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.ojt_tracker.ojt_tracker.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)
    inserted = container.dtr_service.insert_absent_entries()
    print(f"OK: absent sweep inserted {len(inserted)} rows")


if __name__ == "__main__":
    main()
