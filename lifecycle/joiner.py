"""Reconcile scanned deployments with published lifecycle records."""

from typing import Any, Sequence

from inventory.deployment import NOT_AVAILABLE, DeploymentRecord, EnrichedDeploymentRecord
from lifecycle.record import LifecycleRecord


def normalize_field(value: Any) -> str:
    """Reduce a lifecycle field to display text, or ``N/A`` when empty.

    Lists are joined with ``"; "``; a list of only blank items is empty.
    """
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, (list, tuple)):
        value = "; ".join(str(v).strip() for v in value if v is not None and str(v).strip())
    text = str(value).strip()
    return text or NOT_AVAILABLE


class ReconciliationJoiner:
    """Left outer join of deployments to lifecycle records on (model, version).

    Matching is exact and case-sensitive. When the same model/version is
    published more than once, the first record in document order wins.
    """

    def join(
        self,
        deployments: Sequence[DeploymentRecord],
        lifecycle: Sequence[LifecycleRecord],
    ) -> list[EnrichedDeploymentRecord]:
        index: dict[tuple[str, str], LifecycleRecord] = {}
        for record in lifecycle:
            index.setdefault((record.model_name, record.version), record)

        enriched = []
        for dep in deployments:
            match = index.get((dep.model, dep.version))
            if match is None:
                enriched.append(EnrichedDeploymentRecord.from_deployment(dep))
                continue
            enriched.append(EnrichedDeploymentRecord.from_deployment(
                dep,
                retirement_date=normalize_field(match.retirement_date),
                replacement_model=normalize_field(match.replacement_model),
            ))
        return enriched

    @staticmethod
    def matches(
        deployment: DeploymentRecord,
        lifecycle: Sequence[LifecycleRecord],
    ) -> list[LifecycleRecord]:
        """All lifecycle records for a deployment, in document order."""
        return [
            r for r in lifecycle
            if r.model_name == deployment.model and r.version == deployment.version
        ]
