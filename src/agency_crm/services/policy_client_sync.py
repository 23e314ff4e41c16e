"""
Policy to Client linking.

A policy may be written against a lead before (or after) that lead was
converted. These functions fill in policy.client_id by following
policy.lead_id to the client created from that lead.
"""
from typing import Any, Mapping, Optional

from agency_crm.database.models import Policy
from agency_crm.repositories.crm_repository import CRMRepository
from agency_crm.utils.logging import get_logger

logger = get_logger(__name__)


class PolicyClientSyncService:
    """Resolves and persists a policy's client association, best effort."""

    def __init__(self, repository: CRMRepository):
        self.repository = repository

    def _link_through_lead(self, policy: Policy) -> Optional[Policy]:
        """
        Persist client_id from the first client referencing policy.lead_id.
        Returns the updated policy, or None when no client was found.
        Repository errors propagate.
        """
        clients = self.repository.get_clients_by_lead_id(policy.lead_id)
        if not clients:
            return None

        client = clients[0]
        updated = self.repository.update_policy(policy.id, {"client_id": client.id})
        logger.info(
            f"[green]✅ Associated policy #{policy.id} with client #{client.id}[/green] "
            f"[dim]via lead #{policy.lead_id}[/dim]"
        )
        return updated

    def associate_policy_with_client(self, policy: Policy) -> Policy:
        """
        Make sure a freshly created policy carries the best client_id
        currently derivable.

        Idempotent: a policy that already has a client_id is returned
        untouched. On any repository failure the input policy is returned.
        """
        if policy.client_id or not policy.lead_id:
            return policy

        try:
            updated = self._link_through_lead(policy)
        except Exception as e:
            self.repository.rollback()
            logger.error(
                f"[red]❌ Failed to associate policy #{policy.id} with a client:[/red] {e}"
            )
            return policy

        return updated or policy

    def sync_policy_to_client(
        self,
        policy_id: int,
        policy: Policy,
        changed_fields: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Verify a created or updated policy is linked to a client, linking
        it through its lead when possible.

        The client itself is never modified from policy fields.
        changed_fields is accepted so create and update call sites share
        one signature. Never raises.
        """
        try:
            client_id = policy.client_id

            if not client_id and policy.lead_id:
                linked = self._link_through_lead(policy)
                if linked is not None:
                    client_id = linked.client_id

            if not client_id:
                logger.info(
                    f"[cyan]Policy #{policy_id} has no client (directly or through a lead); "
                    f"nothing to link[/cyan]"
                )
                return

            if self.repository.get_client(client_id) is None:
                logger.warning(
                    f"[yellow]⚠️  Policy #{policy_id} references client #{client_id}, "
                    f"but that client was not found[/yellow]"
                )
                return

            logger.debug(f"[dim]Verified policy #{policy_id} is linked to client #{client_id}[/dim]")
        except Exception as e:
            self.repository.rollback()
            logger.error(
                f"[red]❌ Failed to synchronize policy #{policy_id} with its client:[/red] {e}"
            )
