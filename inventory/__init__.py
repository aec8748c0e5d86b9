"""
Deployment Inventory Module.

Discovers AI model deployments across Azure subscriptions and flattens them
into one record per deployment.
"""

from inventory.deployment import DeploymentRecord, EnrichedDeploymentRecord
from inventory.azure_scanner import DeploymentScanner

__all__ = ["DeploymentRecord", "EnrichedDeploymentRecord", "DeploymentScanner"]
