#!/usr/bin/env python3
"""
AI Model Deployment Inventory - Main Entry Point.

Usage:
    python main.py scan [--model <substr>] [--all] [--no-retirement]
                        [--export csv|xlsx|json|both|none] [--output-dir <dir>]
                        [--subscriptions <id-or-name> ...] [--sort <field>]
    python main.py lifecycle [--url <url>] [--model-type <type>] [--output file.json]
    python main.py subscriptions
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from config.settings import (
    AZURE_CLIENT_ID,
    AZURE_CLIENT_SECRET,
    AZURE_SUBSCRIPTION_IDS,
    AZURE_TENANT_ID,
    EXPORT_DIR,
    LIFECYCLE_DOC_URL,
    LOG_FORMAT,
    LOG_LEVEL,
)
from inventory.azure_scanner import DeploymentScanner
from inventory.deployment import DEPLOYMENT_FIELDS, ENRICHMENT_FIELDS
from inventory.pipeline import run_inventory
from lifecycle.fetcher import DocumentFetcher
from lifecycle.parser import LifecycleTableParser
from lifecycle.record import ModelType
from report.exporters import EXPORTERS, default_export_path, format_table

logger = logging.getLogger(__name__)


def _get_scanner(subscriptions=None):
    return DeploymentScanner(
        subscription_ids=subscriptions or AZURE_SUBSCRIPTION_IDS,
        tenant_id=AZURE_TENANT_ID,
        client_id=AZURE_CLIENT_ID,
        client_secret=AZURE_CLIENT_SECRET,
    )


def _export_formats(choice: str) -> list[str]:
    if choice == "none":
        return []
    if choice == "both":
        return ["csv", "xlsx"]
    return [choice]


# ============================================================
# Commands
# ============================================================

def cmd_scan(args):
    """Scan deployments and print / export the inventory report."""
    scanner = _get_scanner(args.subscriptions)
    report = run_inventory(
        scanner,
        url=args.url,
        include_lifecycle=not args.no_retirement,
        model_filter=args.model,
        show_all=args.all,
        sort_by=args.sort,
    )

    if not scanner.scanned_subscriptions:
        print("No subscriptions reachable (check Azure login / credentials or --subscriptions).")
        sys.exit(1)

    if not report.records:
        print("No deployments found.")
    else:
        print(format_table(report))

    for fmt in _export_formats(args.export):
        path = default_export_path(args.output_dir, fmt)
        EXPORTERS[fmt](report, path)
        print(f"{fmt.upper()} report saved to: {path}")


def cmd_lifecycle(args):
    """Show the parsed model lifecycle records."""
    result = DocumentFetcher().fetch(args.url)
    if not result.ok:
        print(f"Lifecycle data unavailable: {result.error}")
        sys.exit(1)

    records = LifecycleTableParser().parse(result.text)
    if args.model_type:
        records = [r for r in records if r.model_type == ModelType(args.model_type)]

    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        Path(args.output).write_text(json.dumps([r.to_dict() for r in records], indent=2))
        print(f"{len(records)} lifecycle record(s) saved to: {args.output}")
        return

    if not records:
        print("No lifecycle records found.")
        return

    print(f"\n{'Type':16s} {'Model':28s} {'Version':14s} {'Stage':14s} {'Retirement':14s} {'Replacement'}")
    print("-" * 110)
    for r in records:
        print(
            f"{r.display_type():16s} {r.model_name:28s} {r.version:14s} "
            f"{r.lifecycle_stage:14s} {r.retirement_date:14s} {r.replacement_model}"
        )
    print(f"\nTotal: {len(records)} record(s)")


def cmd_subscriptions(args):
    """List subscriptions visible to the current credential."""
    subs = _get_scanner().list_subscriptions()
    if not subs:
        print("No subscriptions found (check Azure login / credentials).")
        sys.exit(1)
    for s in subs:
        print(f"  {s['subscription_id']:38s}  {s['display_name']}")


# ============================================================
# Parser
# ============================================================

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="AI model deployment inventory with retirement tracking"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    scan = subparsers.add_parser("scan", help="Inventory model deployments")
    scan.add_argument("--model", help="Only deployments whose model contains this text (case-insensitive)")
    scan.add_argument("--all", action="store_true", help="Show all deployments (ignores --model)")
    scan.add_argument("--no-retirement", action="store_true", help="Skip retirement data lookup")
    scan.add_argument(
        "--export", choices=["csv", "xlsx", "json", "both", "none"], default="none",
        help="Export format ('both' = csv + xlsx)",
    )
    scan.add_argument("--output-dir", default=str(EXPORT_DIR), help="Directory for exported files")
    scan.add_argument("--subscriptions", nargs="*", help="Subscription ids or names to scan")
    scan.add_argument("--sort", choices=list(DEPLOYMENT_FIELDS + ENRICHMENT_FIELDS), help="Sort field")
    scan.add_argument("--url", default=LIFECYCLE_DOC_URL, help="Lifecycle document URL")
    scan.set_defaults(func=cmd_scan)

    lc = subparsers.add_parser("lifecycle", help="Show published model retirement data")
    lc.add_argument("--url", default=LIFECYCLE_DOC_URL, help="Lifecycle document URL")
    lc.add_argument("--model-type", choices=[t.value for t in ModelType])
    lc.add_argument("--output", help="Save records to a JSON file")
    lc.set_defaults(func=cmd_lifecycle)

    subs = subparsers.add_parser("subscriptions", help="List accessible subscriptions")
    subs.set_defaults(func=cmd_subscriptions)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else LOG_LEVEL,
        format=LOG_FORMAT,
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
