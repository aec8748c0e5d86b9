"""Tests for the REST API v1 and report export endpoints."""

import csv
import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from openpyxl import load_workbook

from inventory.deployment import DeploymentRecord, EnrichedDeploymentRecord
from lifecycle.fetcher import FetchError, FetchResult
from report.assembler import ReportAssembler
from web import create_app
from web.services import ScanStore

DOC = "\n".join([
    "### Text generation",
    "| Model | Version | Status | Deprecation | Retirement | Replacement |",
    "|---|---|---|---|---|---|",
    "| gpt-4 | 0613 | Deprecated | 2024-01-01 | 2024-06-01 | gpt-4o |",
    "",
    "### Audio",
    "| Model | Version | Status | Deprecation | Retirement | Replacement |",
    "|---|---|---|---|---|---|",
    "| whisper | 001 | GA | | | |",
])


def _stored_report():
    records = [
        EnrichedDeploymentRecord.from_deployment(
            DeploymentRecord(subscription_id="s1", subscription_name="Prod",
                             deployment_name="chat", model="gpt-4", version="0613"),
            "2024-06-01", "gpt-4o",
        ),
        EnrichedDeploymentRecord.from_deployment(
            DeploymentRecord(subscription_id="s1", subscription_name="Prod",
                             deployment_name="embed", model="text-embedding-3-small", version="1"),
        ),
    ]
    return ReportAssembler().assemble(records)


class _ApiTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store_path = Path(self._tmp.name) / "inventory_scan.json"
        patcher = patch("web.services.SCAN_STORE_PATH", self.store_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

        self.app = create_app(testing=True)
        self.client = self.app.test_client()

    def _store(self, report=None):
        ScanStore(self.store_path).save(report or _stored_report())


class TestDeploymentsAPI(_ApiTestCase):

    def test_no_scan_yet(self):
        response = self.client.get("/api/v1/deployments")
        self.assertEqual(response.status_code, 404)
        self.assertIn("error", response.get_json())

    def test_list_deployments(self):
        self._store()
        data = self.client.get("/api/v1/deployments").get_json()
        self.assertTrue(data["enriched"])
        self.assertEqual(data["total"], 2)
        self.assertEqual(data["columns"][-1], "replacement_model")
        self.assertEqual(data["deployments"][0]["retirement_date"], "2024-06-01")

    def test_model_filter(self):
        self._store()
        data = self.client.get("/api/v1/deployments?model=EMBED").get_json()
        self.assertEqual([d["deployment_name"] for d in data["deployments"]], ["embed"])

    def test_all_ignores_filter(self):
        self._store()
        data = self.client.get("/api/v1/deployments?model=embed&all=1").get_json()
        self.assertEqual(data["total"], 2)

    def test_invalid_sort_field(self):
        self._store()
        response = self.client.get("/api/v1/deployments?sort=colour")
        self.assertEqual(response.status_code, 400)

    def test_summary(self):
        self._store()
        data = self.client.get("/api/v1/summary").get_json()
        self.assertEqual(data["total"], 2)
        self.assertEqual(data["by_subscription"], [["Prod", 2]])
        self.assertIn("scanned_at", data)

    def test_scan_now_is_csrf_exempt(self):
        self.app.config["WTF_CSRF_ENABLED"] = True
        report = MagicMock(enriched=False, summary={"total": 0})
        report.generated_at.isoformat.return_value = "2025-01-01T00:00:00+00:00"
        with patch("web.routes.api.run_and_store_scan", return_value=report) as run:
            response = self.client.post("/api/v1/scan")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()["total"], 0)
        run.assert_called_once_with()


class TestLifecycleAPI(_ApiTestCase):

    def _fetcher(self, result):
        fetcher = MagicMock()
        fetcher.fetch.return_value = result
        return fetcher

    def test_lifecycle_records(self):
        fetcher = self._fetcher(FetchResult(url="u", text=DOC))
        with patch("web.routes.api.get_fetcher", return_value=fetcher):
            data = self.client.get("/api/v1/lifecycle").get_json()
        self.assertEqual([r["model_name"] for r in data], ["gpt-4", "whisper"])

    def test_lifecycle_filtered_by_type(self):
        fetcher = self._fetcher(FetchResult(url="u", text=DOC))
        with patch("web.routes.api.get_fetcher", return_value=fetcher):
            data = self.client.get("/api/v1/lifecycle?model_type=audio").get_json()
        self.assertEqual([r["model_name"] for r in data], ["whisper"])

    def test_invalid_model_type(self):
        response = self.client.get("/api/v1/lifecycle?model_type=robots")
        self.assertEqual(response.status_code, 400)

    def test_fetch_failure_returns_502(self):
        fetcher = self._fetcher(FetchResult(url="u", error=FetchError("u", OSError("down"))))
        with patch("web.routes.api.get_fetcher", return_value=fetcher):
            response = self.client.get("/api/v1/lifecycle")
        self.assertEqual(response.status_code, 502)


class TestReportExport(_ApiTestCase):

    def test_export_without_scan(self):
        response = self.client.get("/reports/export")
        self.assertEqual(response.status_code, 404)

    def test_export_csv(self):
        self._store()
        response = self.client.get("/reports/export?format=csv")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.mimetype, "text/csv")
        self.assertIn("attachment; filename=ai_deployments_", response.headers["Content-Disposition"])
        rows = list(csv.reader(io.StringIO(response.get_data(as_text=True))))
        self.assertEqual(len(rows), 3)

    def test_export_xlsx(self):
        self._store()
        response = self.client.get("/reports/export?format=xlsx&model=gpt")
        self.assertEqual(response.status_code, 200)
        wb = load_workbook(io.BytesIO(response.data))
        ws = wb["Deployments"]
        self.assertEqual(ws.cell(row=3, column=5).value, "chat")
        self.assertIsNone(ws.cell(row=4, column=5).value)

    def test_export_json(self):
        self._store()
        data = self.client.get("/reports/export?format=json").get_json()
        self.assertEqual(data["summary"]["total"], 2)

    def test_unknown_format(self):
        response = self.client.get("/reports/export?format=pdf")
        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
