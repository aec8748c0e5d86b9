"""Inventory run: scan deployments, enrich with retirement data, assemble the report."""

import logging
from typing import Optional, Sequence

from config.settings import LIFECYCLE_DOC_URL
from inventory.deployment import DeploymentRecord
from lifecycle.fetcher import DocumentFetcher
from lifecycle.joiner import ReconciliationJoiner
from lifecycle.parser import LifecycleTableParser
from lifecycle.record import LifecycleRecord
from report.assembler import Report, ReportAssembler

logger = logging.getLogger(__name__)


def load_lifecycle_records(
    fetcher: Optional[DocumentFetcher] = None,
    parser: Optional[LifecycleTableParser] = None,
    url: str = LIFECYCLE_DOC_URL,
) -> list[LifecycleRecord]:
    """Fetch and parse the lifecycle document; empty list when unavailable."""
    fetcher = fetcher or DocumentFetcher()
    parser = parser or LifecycleTableParser()

    result = fetcher.fetch(url)
    if not result.ok:
        logger.warning("Lifecycle data unavailable, proceeding without it: %s", result.error)
        return []

    records = parser.parse(result.text)
    if not records:
        logger.warning("No lifecycle records found in %s, proceeding without them", url)
    else:
        logger.info("Loaded %d lifecycle record(s) from %s", len(records), url)
    return records


def build_report(
    deployments: Sequence[DeploymentRecord],
    lifecycle: Sequence[LifecycleRecord],
    model_filter: Optional[str] = None,
    show_all: bool = False,
    sort_by: Optional[str] = None,
    assembler: Optional[ReportAssembler] = None,
) -> Report:
    """Join (when lifecycle data exists) and assemble.

    With no lifecycle records the join is skipped and the report uses the
    plain deployment schema, without retirement columns.
    """
    assembler = assembler or ReportAssembler()
    if lifecycle:
        records = ReconciliationJoiner().join(deployments, lifecycle)
        enriched = True
    else:
        records = list(deployments)
        enriched = False
    return assembler.assemble(
        records,
        model_filter=model_filter,
        show_all=show_all,
        sort_by=sort_by,
        enriched=enriched,
    )


def run_inventory(
    scanner,
    fetcher: Optional[DocumentFetcher] = None,
    parser: Optional[LifecycleTableParser] = None,
    url: str = LIFECYCLE_DOC_URL,
    include_lifecycle: bool = True,
    model_filter: Optional[str] = None,
    show_all: bool = False,
    sort_by: Optional[str] = None,
) -> Report:
    """Run a full inventory with the given deployment scanner."""
    deployments = scanner.scan_all()
    lifecycle: list[LifecycleRecord] = []
    if include_lifecycle:
        lifecycle = load_lifecycle_records(fetcher, parser, url)
    else:
        logger.info("Retirement enrichment disabled")
    return build_report(deployments, lifecycle, model_filter, show_all, sort_by)
