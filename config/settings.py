"""Project-wide settings and defaults."""

import os
from pathlib import Path

# Base paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("INVENTORY_DATA_DIR", str(PROJECT_ROOT / "data")))
EXPORT_DIR = Path(os.environ.get("EXPORT_DIR", str(PROJECT_ROOT / "exports")))

# Azure scanning (comma-separated ids or display names; empty = all visible)
AZURE_SUBSCRIPTION_IDS = [
    s.strip() for s in os.environ.get("AZURE_SUBSCRIPTION_IDS", "").split(",") if s.strip()
]
AZURE_TENANT_ID = os.environ.get("AZURE_TENANT_ID", "")
AZURE_CLIENT_ID = os.environ.get("AZURE_CLIENT_ID", "")
AZURE_CLIENT_SECRET = os.environ.get("AZURE_CLIENT_SECRET", "")

# Account kinds that host model deployments
AI_ACCOUNT_KINDS = ("OpenAI", "AIServices")

# Model lifecycle / retirement document
LIFECYCLE_DOC_URL = os.environ.get(
    "LIFECYCLE_DOC_URL",
    "https://raw.githubusercontent.com/MicrosoftDocs/azure-ai-docs/main/"
    "articles/ai-foundry/openai/concepts/model-retirements.md",
)
LIFECYCLE_FETCH_TIMEOUT = int(os.environ.get("LIFECYCLE_FETCH_TIMEOUT", "30"))
RETIREMENT_WARNING_DAYS = int(os.environ.get("RETIREMENT_WARNING_DAYS", "90"))

# Reports
TOP_RESOURCE_GROUPS = 5
EXPORT_DISCLAIMER = (
    "Retirement data is scraped from public documentation and may be "
    "incomplete or out of date. Verify dates before acting on them."
)

# Web dashboard
SCAN_STORE_PATH = DATA_DIR / "inventory_scan.json"
DAILY_REPORTS_DIR = DATA_DIR / "daily_reports"

# Scheduler
SCHEDULER_ENABLED = os.environ.get("SCHEDULER_ENABLED", "true").lower() == "true"
INVENTORY_SCAN_INTERVAL_HOURS = int(os.environ.get("INVENTORY_SCAN_INTERVAL_HOURS", "24"))

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
