"""
Report assembly for the deployment inventory.

Filters and orders deployment records and computes the summary aggregates
the renderers display:
- Total deployments
- Counts by subscription and by model
- Top resource groups
- Upcoming retirements (enriched reports only)
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, Sequence

from config.settings import RETIREMENT_WARNING_DAYS, TOP_RESOURCE_GROUPS
from inventory.deployment import (
    DEPLOYMENT_FIELDS,
    ENRICHMENT_FIELDS,
    NOT_AVAILABLE,
    DeploymentRecord,
    EnrichedDeploymentRecord,
)

ISO_DATE_RE = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")

# Fields that identify one deployment across subscriptions and resource groups
DEPLOYMENT_KEY = ("subscription_id", "resource_group", "resource_name", "deployment_name")


def deployment_key(item: dict) -> tuple:
    return tuple(item.get(f, "") for f in DEPLOYMENT_KEY)


def parse_retirement_date(text: str) -> Optional[date]:
    """Earliest ISO date found in a retirement cell, if any."""
    found = []
    for m in ISO_DATE_RE.findall(text or ""):
        try:
            found.append(datetime.strptime(m, "%Y-%m-%d").date())
        except ValueError:
            continue
    return min(found) if found else None


def count_by(records: Sequence[DeploymentRecord], attr: str, limit: Optional[int] = None) -> list[tuple[str, int]]:
    """(label, count) pairs, largest first; ties keep first-seen order."""
    counter = Counter(getattr(r, attr) or "" for r in records)
    return counter.most_common(limit)


@dataclass
class Report:
    """Filtered deployments plus summary, ready for rendering."""

    records: list[DeploymentRecord]
    enriched: bool
    summary: dict
    model_filter: str = ""
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def columns(self) -> tuple[str, ...]:
        if self.enriched:
            return DEPLOYMENT_FIELDS + ENRICHMENT_FIELDS
        return DEPLOYMENT_FIELDS

    def rows(self) -> list[dict]:
        """Records as dicts restricted to the report's columns, in column order."""
        return [{c: getattr(r, c, "") for c in self.columns} for r in self.records]

    def to_dict(self) -> dict:
        return {
            "generated_at": self.generated_at.isoformat(),
            "enriched": self.enriched,
            "model_filter": self.model_filter,
            "columns": list(self.columns),
            "summary": self.summary,
            "deployments": self.rows(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Report":
        enriched = data.get("enriched", False)
        record_cls = EnrichedDeploymentRecord if enriched else DeploymentRecord
        generated = data.get("generated_at")
        return cls(
            records=[record_cls.from_dict(d) for d in data.get("deployments", [])],
            enriched=enriched,
            summary=data.get("summary", {}),
            model_filter=data.get("model_filter", ""),
            generated_at=datetime.fromisoformat(generated) if generated else datetime.now(timezone.utc),
        )


class ReportAssembler:
    """Filter, order, and summarise deployment records. No I/O."""

    def __init__(
        self,
        top_n: int = TOP_RESOURCE_GROUPS,
        warning_days: int = RETIREMENT_WARNING_DAYS,
        today: Optional[date] = None,
    ):
        self.top_n = top_n
        self.warning_days = warning_days
        self._today = today

    def assemble(
        self,
        records: Sequence[DeploymentRecord],
        model_filter: Optional[str] = None,
        show_all: bool = False,
        sort_by: Optional[str] = None,
        enriched: Optional[bool] = None,
    ) -> Report:
        """Build a report.

        Args:
            records: Deployments, enriched or plain.
            model_filter: Case-insensitive substring matched against ``model``.
                Ignored when empty or when ``show_all`` is set.
            show_all: Return every record regardless of ``model_filter``.
            sort_by: Optional deployment field to sort by (stable). Input
                order is kept when omitted.
            enriched: Force the schema; inferred from the records otherwise.
        """
        if enriched is None:
            enriched = bool(records) and all(
                isinstance(r, EnrichedDeploymentRecord) for r in records
            )

        selected = self.filter(records, model_filter, show_all)
        if sort_by:
            selected = self.sort(selected, sort_by)

        return Report(
            records=selected,
            enriched=enriched,
            summary=self.summarize(selected, enriched),
            model_filter="" if show_all else (model_filter or ""),
        )

    @staticmethod
    def filter(
        records: Sequence[DeploymentRecord],
        model_filter: Optional[str] = None,
        show_all: bool = False,
    ) -> list[DeploymentRecord]:
        if show_all or not model_filter:
            return list(records)
        needle = model_filter.lower()
        return [r for r in records if needle in (r.model or "").lower()]

    @staticmethod
    def sort(records: Sequence[DeploymentRecord], sort_by: str) -> list[DeploymentRecord]:
        if sort_by not in DEPLOYMENT_FIELDS + ENRICHMENT_FIELDS:
            raise ValueError(f"Unknown sort field: {sort_by}")
        return sorted(records, key=lambda r: str(getattr(r, sort_by, "") or "").lower())

    def summarize(self, records: Sequence[DeploymentRecord], enriched: bool = False) -> dict:
        summary = {
            "total": len(records),
            "by_subscription": count_by(records, "subscription_name"),
            "by_model": count_by(records, "model"),
            "top_resource_groups": count_by(records, "resource_group", self.top_n),
        }
        if enriched:
            summary["with_retirement_date"] = sum(
                1 for r in records
                if getattr(r, "retirement_date", NOT_AVAILABLE) != NOT_AVAILABLE
            )
            summary["retiring_soon"] = self.retiring_soon(records)
        return summary

    def retiring_soon(self, records: Sequence[DeploymentRecord]) -> list[dict]:
        """Deployments retiring within the warning window, soonest first."""
        today = self._today or datetime.now(timezone.utc).date()
        soon = []
        for r in records:
            retire = parse_retirement_date(getattr(r, "retirement_date", ""))
            if retire is None:
                continue
            days = (retire - today).days
            if days <= self.warning_days:
                soon.append({
                    "subscription_id": r.subscription_id,
                    "subscription_name": r.subscription_name,
                    "resource_group": r.resource_group,
                    "resource_name": r.resource_name,
                    "deployment_name": r.deployment_name,
                    "model": r.model,
                    "version": r.version,
                    "retirement_date": retire.isoformat(),
                    "days_remaining": days,
                    "replacement_model": getattr(r, "replacement_model", NOT_AVAILABLE),
                })
        soon.sort(key=lambda s: s["days_remaining"])
        return soon
