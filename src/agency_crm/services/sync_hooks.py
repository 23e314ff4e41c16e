"""
Entry points the route layer calls after a primary write has committed.

None of these raise because of a synchronization failure; the primary
write is what the caller can rely on.
"""
from typing import Any, Dict, Mapping, Optional

from agency_crm.database.models import Lead, Policy
from agency_crm.repositories.crm_repository import CRMRepository
from agency_crm.services.conversion import ConversionService
from agency_crm.services.lead_client_sync import LeadClientSyncService
from agency_crm.services.policy_client_sync import PolicyClientSyncService


class SyncHooks:
    """Lead/Client/Policy synchronization, bound to one repository."""

    def __init__(self, repository: CRMRepository, eager_conversion: Optional[bool] = None):
        self.repository = repository
        self.lead_sync = LeadClientSyncService(repository)
        self.policy_sync = PolicyClientSyncService(repository)
        self.conversion = ConversionService(repository, eager=eager_conversion)

    def on_lead_updated(self, lead_id: int, updated_lead: Lead, changed_fields: Mapping[str, Any]) -> None:
        """After any partial or full lead update (PATCH and PUT alike)."""
        self.lead_sync.sync_lead_to_client(lead_id, updated_lead, changed_fields)

    def on_policy_created(self, policy: Policy) -> Policy:
        """After a policy insert, before responding. Returns the linked policy."""
        return self.policy_sync.associate_policy_with_client(policy)

    def on_policy_created_or_updated(
        self,
        policy_id: int,
        policy: Policy,
        changed_fields: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """After a policy create or update, (re)verify its client link."""
        self.policy_sync.sync_policy_to_client(policy_id, policy, changed_fields)

    def on_lead_created(self, lead: Lead) -> Dict[str, Any]:
        """After a lead insert. Creates a client only with eager conversion."""
        return self.conversion.on_lead_created(lead)

    def backfill_lead_client_links(self) -> Dict[str, int]:
        """Operator job: create the missing clients for existing leads."""
        return self.conversion.backfill_lead_client_links()
