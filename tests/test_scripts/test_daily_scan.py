"""Tests for the daily inventory script."""

import importlib.util
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from inventory.deployment import DeploymentRecord
from report.assembler import ReportAssembler

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "daily_scan.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("daily_scan", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestSaveDailyReport(unittest.TestCase):

    def setUp(self):
        self.daily_scan = _load_script()
        self.report = ReportAssembler().assemble([
            DeploymentRecord(subscription_id="sub-1", subscription_name="Prod", model="gpt-4"),
        ])

    def test_writes_dated_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            reports_dir = Path(tmp) / "daily"
            path = self.daily_scan.save_daily_report(self.report, reports_dir)

            self.assertTrue(path.exists())
            self.assertEqual(path.parent, reports_dir)
            self.assertRegex(path.name, r"^\d{4}-\d{2}-\d{2}\.json$")
            data = json.loads(path.read_text())
            self.assertEqual(data["summary"]["total"], 1)
            self.assertFalse(data["enriched"])

    def test_main_without_retirement_data(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "out.json"
            with patch.object(self.daily_scan, "run_and_store_scan", return_value=self.report), \
                 patch.object(self.daily_scan, "save_daily_report", return_value=out), \
                 patch.object(self.daily_scan, "get_scan_store"), \
                 patch("builtins.print") as mock_print:
                self.assertEqual(self.daily_scan.main(), 0)

        printed = [c.args[0] for c in mock_print.call_args_list]
        self.assertIn("Deployments: 1", printed)
        self.assertIn("Retirement data unavailable; see log for details.", printed)


if __name__ == "__main__":
    unittest.main()
