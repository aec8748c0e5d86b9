"""Backend service initialization for the web dashboard."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from config.settings import (
    AZURE_CLIENT_ID,
    AZURE_CLIENT_SECRET,
    AZURE_SUBSCRIPTION_IDS,
    AZURE_TENANT_ID,
    LIFECYCLE_DOC_URL,
    SCAN_STORE_PATH,
)

logger = logging.getLogger(__name__)


def get_scanner():
    from inventory.azure_scanner import DeploymentScanner
    return DeploymentScanner(
        subscription_ids=AZURE_SUBSCRIPTION_IDS,
        tenant_id=AZURE_TENANT_ID,
        client_id=AZURE_CLIENT_ID,
        client_secret=AZURE_CLIENT_SECRET,
    )


def get_fetcher():
    from lifecycle.fetcher import DocumentFetcher
    return DocumentFetcher()


def get_lifecycle_url() -> str:
    return LIFECYCLE_DOC_URL


class ScanStore:
    """Persist the latest inventory scan (all deployments, unfiltered) to JSON."""

    def __init__(self, path: Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, report) -> None:
        data = report.to_dict()
        data["stored_at"] = datetime.now(timezone.utc).isoformat()
        self._path.write_text(json.dumps(data, indent=2, default=str))

    def load(self) -> Optional[dict]:
        if not self._path.exists():
            return None
        try:
            return json.loads(self._path.read_text())
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable scan store %s", self._path)
            return None

    def load_report(self):
        from report.assembler import Report
        data = self.load()
        return Report.from_dict(data) if data else None

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()


def get_scan_store():
    return ScanStore(SCAN_STORE_PATH)


def run_and_store_scan():
    """Run a full, unfiltered inventory and persist it for the dashboard."""
    from inventory.pipeline import run_inventory

    report = run_inventory(get_scanner(), fetcher=get_fetcher(), url=get_lifecycle_url(), show_all=True)
    get_scan_store().save(report)
    return report
