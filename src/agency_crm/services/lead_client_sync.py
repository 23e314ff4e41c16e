"""
Lead to Client reconciliation.

When a lead is updated, the fields that were part of the update request
are projected onto the client created from that lead. Only the fields
the caller touched are propagated: clearing a lead field clears the
client field only if the clear was in the request.
"""
from typing import Any, Dict, Mapping, Optional, Tuple

from agency_crm.database.models import Client, Lead
from agency_crm.repositories.crm_repository import CRMRepository
from agency_crm.utils.helpers import display_name, placeholder_email
from agency_crm.utils.logging import get_logger

logger = get_logger(__name__)


# Lead field -> client field, copied as-is
PASS_THROUGH_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("phone_number", "phone"),
    ("address", "address"),
    ("city", "city"),
    ("state", "state"),
    ("zip_code", "zip_code"),
    ("sex", "sex"),
    ("date_of_birth", "date_of_birth"),
    ("existing_coverage", "insurance_info"),
    ("insurance_type_interest", "insurance_type"),
    ("notes", "notes"),
    ("assigned_agent_id", "assigned_agent_id"),
    ("status", "status"),
)

NAME_FIELDS = ("first_name", "last_name")

# Every lead field that can reach the client
MAPPED_LEAD_FIELDS = frozenset(
    NAME_FIELDS + ("email",) + tuple(lead_field for lead_field, _ in PASS_THROUGH_FIELDS)
)


def project_lead_changes(lead: Lead, changed_fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build the client update for a lead update.

    Args:
        lead: The lead as persisted after the update
        changed_fields: Fields present in the update request

    Returns:
        Client field -> value; empty when nothing mapped changed
    """
    client_update: Dict[str, Any] = {}

    if any(field in changed_fields for field in NAME_FIELDS):
        client_update["name"] = display_name(lead.first_name, lead.last_name)

    if "email" in changed_fields:
        client_update["email"] = changed_fields["email"] or placeholder_email(lead.id)

    for lead_field, client_field in PASS_THROUGH_FIELDS:
        if lead_field in changed_fields:
            client_update[client_field] = changed_fields[lead_field]

    return client_update


class LeadClientSyncService:
    """Propagates lead updates onto the linked client, best effort."""

    def __init__(self, repository: CRMRepository):
        self.repository = repository

    def sync_lead_to_client(
        self,
        lead_id: int,
        updated_lead: Lead,
        changed_fields: Mapping[str, Any],
    ) -> Optional[Client]:
        """
        Update the client linked to a lead after the lead was updated.

        Never raises: a missing client is logged and ignored, a failed
        client write is logged and swallowed. The lead update that
        triggered this has already been committed.

        Args:
            lead_id: ID of the lead that was updated
            updated_lead: The lead after the update
            changed_fields: The partial update that was applied

        Returns:
            The updated client, or None if nothing was written
        """
        try:
            clients = self.repository.get_clients_by_lead_id(lead_id)
        except Exception as e:
            self.repository.rollback()
            logger.error(f"[red]❌ Failed to look up client for lead #{lead_id}:[/red] {e}")
            return None

        if not clients:
            logger.warning(
                f"[yellow]⚠️  Lead #{lead_id} was updated but no client record is linked to it[/yellow]"
            )
            return None

        # Duplicates are possible; the oldest client wins
        client = clients[0]
        client_update = project_lead_changes(updated_lead, changed_fields)

        if not client_update:
            logger.debug(f"[dim]Lead #{lead_id} update touched no client fields[/dim]")
            return None

        try:
            updated_client = self.repository.update_client(client.id, client_update)
        except Exception as e:
            self.repository.rollback()
            logger.error(
                f"[red]❌ Failed to update client #{client.id} from lead #{lead_id}:[/red] {e}"
            )
            return None

        logger.info(
            f"[green]✅ Updated client #{client.id} from lead #{lead_id}[/green] "
            f"[dim]fields: {', '.join(client_update)}[/dim]"
        )
        return updated_client
