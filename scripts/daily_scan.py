#!/usr/bin/env python3
"""Daily AI deployment inventory.

Run via cron or manually:
    python scripts/daily_scan.py

Scans every configured subscription, enriches deployments with published
retirement data, and saves data/daily_reports/<date>.json. Deployments
retiring within RETIREMENT_WARNING_DAYS are printed to stdout.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv()

from config.settings import DAILY_REPORTS_DIR, LOG_FORMAT, LOG_LEVEL, RETIREMENT_WARNING_DAYS
from web.services import get_scan_store, run_and_store_scan

logger = logging.getLogger("daily_scan")


def save_daily_report(report, reports_dir: Path = DAILY_REPORTS_DIR) -> Path:
    """Write the report to ``<reports_dir>/<YYYY-MM-DD>.json``."""
    reports_dir.mkdir(parents=True, exist_ok=True)
    path = reports_dir / f"{datetime.now(timezone.utc).strftime('%Y-%m-%d')}.json"
    path.write_text(json.dumps(report.to_dict(), indent=2, default=str))
    return path


def main() -> int:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    report = run_and_store_scan()
    path = save_daily_report(report)

    summary = report.summary
    print(f"Deployments: {summary['total']}")
    print(f"Report:      {path}")
    print(f"Dashboard:   {get_scan_store().path}")

    if not report.enriched:
        print("Retirement data unavailable; see log for details.")
        return 0

    soon = summary.get("retiring_soon", [])
    print(f"Retiring within {RETIREMENT_WARNING_DAYS} days: {len(soon)}")
    for item in soon:
        print(
            f"  [{item['days_remaining']:5d}d] {item['subscription_name']} / "
            f"{item['resource_name']} / {item['deployment_name']}: "
            f"{item['model']} {item['version']} retires {item['retirement_date']} "
            f"-> {item['replacement_model']}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
