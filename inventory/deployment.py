"""Deployment record data model."""

from dataclasses import dataclass, fields
from typing import Any

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class DeploymentRecord:
    """A model deployment, flattened with its resource and subscription."""

    subscription_id: str
    subscription_name: str = ""
    resource_group: str = ""
    resource_name: str = ""
    deployment_name: str = ""
    model: str = ""
    version: str = ""
    status: str = ""
    sku: str = ""
    capacity: Any = None
    endpoint: str = ""
    model_format: str = ""
    created_date: str = ""
    version_upgrade_option: str = ""

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "DeploymentRecord":
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


@dataclass(frozen=True)
class EnrichedDeploymentRecord(DeploymentRecord):
    """A deployment with the retirement data of its matching lifecycle record."""

    retirement_date: str = NOT_AVAILABLE
    replacement_model: str = NOT_AVAILABLE

    @classmethod
    def from_deployment(
        cls,
        deployment: DeploymentRecord,
        retirement_date: str = NOT_AVAILABLE,
        replacement_model: str = NOT_AVAILABLE,
    ) -> "EnrichedDeploymentRecord":
        base = {f.name: getattr(deployment, f.name) for f in fields(DeploymentRecord)}
        return cls(**base, retirement_date=retirement_date, replacement_model=replacement_model)


DEPLOYMENT_FIELDS = tuple(f.name for f in fields(DeploymentRecord))
ENRICHMENT_FIELDS = ("retirement_date", "replacement_model")

COLUMN_LABELS = {
    "subscription_id": "Subscription ID",
    "subscription_name": "Subscription",
    "resource_group": "Resource Group",
    "resource_name": "Resource",
    "deployment_name": "Deployment",
    "model": "Model",
    "version": "Version",
    "status": "Status",
    "sku": "SKU",
    "capacity": "Capacity",
    "endpoint": "Endpoint",
    "model_format": "Format",
    "created_date": "Created",
    "version_upgrade_option": "Upgrade Option",
    "retirement_date": "Retirement Date",
    "replacement_model": "Replacement Model",
}
