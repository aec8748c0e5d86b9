"""Azure deployment scanner: discover model deployments on AI accounts."""

import logging
from typing import Optional

from config.settings import AI_ACCOUNT_KINDS
from inventory.deployment import DeploymentRecord

logger = logging.getLogger(__name__)


def _text(value) -> str:
    """Plain text for SDK enum or string values."""
    if value is None:
        return ""
    return str(getattr(value, "value", value))


class DeploymentScanner:
    """Scan Azure subscriptions for OpenAI / AI Services model deployments."""

    def __init__(
        self,
        subscription_ids: Optional[list[str]] = None,
        tenant_id: str = "",
        client_id: str = "",
        client_secret: str = "",
        account_kinds: tuple[str, ...] = AI_ACCOUNT_KINDS,
    ):
        self.subscription_ids = list(subscription_ids or [])
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.account_kinds = account_kinds
        self.scanned_subscriptions: list[dict] = []

    def _get_credential(self):
        """Return an Azure credential; service principal when fully configured."""
        if self.tenant_id and self.client_id and self.client_secret:
            from azure.identity import ClientSecretCredential
            return ClientSecretCredential(
                tenant_id=self.tenant_id,
                client_id=self.client_id,
                client_secret=self.client_secret,
            )
        from azure.identity import DefaultAzureCredential
        return DefaultAzureCredential()

    def is_configured(self) -> bool:
        try:
            self._get_credential()
            return True
        except Exception:
            return False

    def list_subscriptions(self) -> list[dict]:
        """All subscriptions visible to the credential."""
        try:
            from azure.mgmt.subscription import SubscriptionClient
            client = SubscriptionClient(self._get_credential())
            return [
                {"subscription_id": s.subscription_id, "display_name": s.display_name or ""}
                for s in client.subscriptions.list()
            ]
        except Exception as e:
            logger.error("Failed to list subscriptions: %s", e)
            return []

    def _get_subscriptions(self) -> list[dict]:
        """Subscriptions to scan, restricted to ``subscription_ids`` when given.

        Entries in ``subscription_ids`` match a subscription id or display
        name, case-insensitively.
        """
        available = self.list_subscriptions()
        if not self.subscription_ids:
            return available

        wanted = {s.lower() for s in self.subscription_ids}
        selected = [
            s for s in available
            if s["subscription_id"].lower() in wanted or s["display_name"].lower() in wanted
        ]
        matched = {s["subscription_id"].lower() for s in selected} | {
            s["display_name"].lower() for s in selected
        }
        for name in sorted(wanted - matched):
            logger.warning("Subscription not found or not accessible: %s", name)
        return selected

    def scan_all(self) -> list[DeploymentRecord]:
        """Scan every selected subscription and return one record per deployment."""
        subscriptions = self._get_subscriptions()
        self.scanned_subscriptions = subscriptions
        if not subscriptions:
            logger.warning("No Azure subscriptions available for scanning")
            return []

        credential = self._get_credential()
        results: list[DeploymentRecord] = []
        for sub in subscriptions:
            sub_id = sub["subscription_id"]
            sub_name = sub.get("display_name", "")
            logger.info("Scanning subscription %s (%s)", sub_name, sub_id)
            try:
                results.extend(self.scan_subscription(credential, sub_id, sub_name))
            except Exception as e:
                logger.error("Error scanning subscription %s: %s", sub_id, e)
        logger.info("Found %d deployment(s) across %d subscription(s)", len(results), len(subscriptions))
        return results

    def scan_subscription(self, credential, sub_id: str, sub_name: str = "") -> list[DeploymentRecord]:
        """List AI accounts in a subscription and the deployments on each."""
        from azure.mgmt.cognitiveservices import CognitiveServicesManagementClient
        client = CognitiveServicesManagementClient(credential, sub_id)
        results = []

        for account in client.accounts.list():
            if (account.kind or "") not in self.account_kinds:
                continue
            rg = self._extract_resource_group(account.id)
            endpoint = getattr(account.properties, "endpoint", "") if account.properties else ""
            try:
                deployments = list(client.deployments.list(rg, account.name))
            except Exception as e:
                logger.warning("Failed to list deployments for %s: %s", account.name, e)
                continue

            for dep in deployments:
                results.append(self._to_record(dep, sub_id, sub_name, rg, account.name, endpoint or ""))

        return results

    @staticmethod
    def _to_record(dep, sub_id, sub_name, rg, account_name, endpoint) -> DeploymentRecord:
        props = dep.properties
        model = getattr(props, "model", None) if props else None
        sku = dep.sku
        system_data = getattr(dep, "system_data", None)
        created = getattr(system_data, "created_at", None) if system_data else None
        return DeploymentRecord(
            subscription_id=sub_id,
            subscription_name=sub_name,
            resource_group=rg,
            resource_name=account_name,
            deployment_name=dep.name or "",
            model=(model.name if model else "") or "",
            version=(model.version if model else "") or "",
            status=_text(getattr(props, "provisioning_state", None)),
            sku=(sku.name if sku else "") or "",
            capacity=sku.capacity if sku else None,
            endpoint=endpoint,
            model_format=(model.format if model else "") or "",
            created_date=created.strftime("%Y-%m-%d") if created else "",
            version_upgrade_option=_text(getattr(props, "version_upgrade_option", None)),
        )

    @staticmethod
    def _extract_resource_group(resource_id: str) -> str:
        """Extract resource group name from an Azure resource ID."""
        parts = (resource_id or "").split("/")
        for i, part in enumerate(parts):
            if part.lower() == "resourcegroups" and i + 1 < len(parts):
                return parts[i + 1]
        return ""
