"""
Lead to Client conversion.

By default a new lead stays a lead: clients are created explicitly
(convert_lead) or in bulk by the backfill job. With
sync.eager_conversion enabled, on_lead_created also creates the
client straight away.
"""
from typing import Any, Dict, Optional

from agency_crm.core.config import settings
from agency_crm.database.models import Client, Lead
from agency_crm.repositories.crm_repository import CRMRepository
from agency_crm.utils.exceptions import ConflictError
from agency_crm.utils.helpers import display_name, placeholder_email
from agency_crm.utils.logging import get_logger, app_logger

logger = get_logger(__name__)


def client_data_from_lead(lead: Lead) -> Dict[str, Any]:
    """Field values for a new client created from a lead."""
    return {
        "name": display_name(lead.first_name, lead.last_name),
        "email": lead.email or placeholder_email(lead.id),
        "phone": lead.phone_number,
        "address": lead.address,
        "city": lead.city,
        "state": lead.state,
        "zip_code": lead.zip_code,
        "sex": lead.sex,
        "date_of_birth": lead.date_of_birth,
        "insurance_info": lead.existing_coverage,
        "insurance_type": lead.insurance_type_interest,
        "status": "active",
        "notes": lead.notes,
        "assigned_agent_id": lead.assigned_agent_id,
        "lead_id": lead.id,
    }


def is_convertible(lead: Lead) -> bool:
    """A lead needs both name parts before it can become a client."""
    return bool((lead.first_name or "").strip() and (lead.last_name or "").strip())


class ConversionService:
    """Materializes clients from leads."""

    def __init__(self, repository: CRMRepository, eager: Optional[bool] = None):
        self.repository = repository
        self.eager = settings.sync.eager_conversion if eager is None else eager

    def ensure_lead_not_converted(self, lead_id: int) -> None:
        """Raise ConflictError if a client already references the lead."""
        existing = self.repository.get_clients_by_lead_id(lead_id)
        if existing:
            raise ConflictError(
                f"Lead #{lead_id} is already linked to client #{existing[0].id}"
            )

    def convert_lead(self, lead: Lead) -> Client:
        """
        Create the client for a lead.

        Raises:
            ConflictError: The lead already has a client
        """
        self.ensure_lead_not_converted(lead.id)
        client = self.repository.create_client(client_data_from_lead(lead))
        logger.info(f"[green]✅ Created client #{client.id} from lead #{lead.id}[/green]")
        return client

    def on_lead_created(self, lead: Lead) -> Dict[str, Any]:
        """
        Run after a lead insert has committed.

        Returns:
            {"lead", "client", "client_error"}. client is only set with
            eager conversion; client_error carries the reason the eager
            client could not be created. The lead stands either way.
        """
        result: Dict[str, Any] = {"lead": lead, "client": None, "client_error": None}
        if not self.eager:
            return result

        try:
            result["client"] = self.convert_lead(lead)
        except ConflictError as e:
            result["client_error"] = e.detail
        except Exception as e:
            self.repository.rollback()
            logger.error(f"[red]❌ Eager client creation failed for lead #{lead.id}:[/red] {e}")
            result["client_error"] = f"Lead created, but the client record could not be created: {e}"
        return result

    def backfill_lead_client_links(self) -> Dict[str, int]:
        """
        Create clients for every lead that does not have one yet.

        Leads already linked to a client, and leads missing a first or
        last name, are skipped. A failure on one lead is logged and the
        job moves on; earlier clients are kept. Safe to rerun.

        Returns:
            {"created", "skipped", "errors"}
        """
        app_logger.info("[cyan]Starting lead to client backfill...[/cyan]")

        leads = self.repository.get_leads()
        linked_lead_ids = {
            client.lead_id
            for client in self.repository.get_clients()
            if client.lead_id is not None
        }
        app_logger.info(
            f"[cyan]Found {len(leads)} leads, {len(linked_lead_ids)} already linked to clients[/cyan]"
        )

        summary = {"created": 0, "skipped": 0, "errors": 0}
        for lead in leads:
            if lead.id in linked_lead_ids:
                summary["skipped"] += 1
                continue

            if not is_convertible(lead):
                logger.warning(f"[yellow]⚠️  Lead #{lead.id} has no full name, skipping[/yellow]")
                summary["skipped"] += 1
                continue

            try:
                client = self.repository.create_client(client_data_from_lead(lead))
            except Exception as e:
                self.repository.rollback()
                logger.error(f"[red]❌ Failed to create client from lead #{lead.id}:[/red] {e}")
                summary["errors"] += 1
                continue

            linked_lead_ids.add(lead.id)
            summary["created"] += 1
            logger.info(f"[green]Created client #{client.id} from lead #{lead.id}[/green]")

        app_logger.info(
            f"[green]Backfill completed:[/green] "
            f"[cyan]{summary['created']}[/cyan] created, "
            f"[yellow]{summary['skipped']}[/yellow] skipped, "
            f"[red]{summary['errors']}[/red] errors"
        )
        return summary
