"""
Lead service: lead CRUD, access rules, and the hooks that keep the
linked client in step.
"""
from typing import Any, Dict, List, Optional

from agency_crm.database.models import Client, Lead
from agency_crm.schemas.leads import LeadCreate, LeadUpdate
from agency_crm.services.base_service import BaseService
from agency_crm.utils.exceptions import NotFoundError, PermissionDeniedError
from agency_crm.utils.logging import get_logger

logger = get_logger(__name__)


class LeadService(BaseService):
    """Service for managing leads"""

    def get_all_leads(self, agent_id: Optional[int] = None) -> List[Lead]:
        """
        Leads visible to the caller.

        Admins and team leaders get every lead, or one agent's leads when
        agent_id is given. Agents only ever get the leads assigned to them.
        """
        if self.is_privileged:
            if agent_id is not None:
                return self.repository.get_leads_by_agent(agent_id)
            return self.repository.get_leads()

        agent = self.current_agent()
        if agent is None:
            logger.info(
                f"[yellow]User {self.current_user.id} has no agent record, returning no leads[/yellow]"
            )
            return []
        return self.repository.get_leads_by_agent(agent.id)

    def get_lead(self, lead_id: int) -> Lead:
        """Get a lead the caller may view"""
        lead = self._get_existing(lead_id)
        if not self.is_privileged:
            agent = self.current_agent()
            if agent is None or lead.assigned_agent_id != agent.id:
                raise PermissionDeniedError("Access denied: You don't have permission to view this lead")
        return lead

    def create_lead(self, data: LeadCreate) -> Dict[str, Any]:
        """
        Create a lead, then run the conversion hook.

        Returns:
            {"lead", "client", "client_error"}; client is only present
            with eager conversion enabled
        """
        lead = self.repository.create_lead(data.model_dump())
        logger.info(f"[green]✅ Created lead #{lead.id}[/green] {lead.first_name} {lead.last_name}")
        return self.hooks.on_lead_created(lead)

    def update_lead(self, lead_id: int, data: LeadUpdate) -> Lead:
        """
        Apply a partial update to a lead and propagate it to the linked
        client. PATCH and PUT both come through here.
        """
        existing = self._get_existing(lead_id)
        self._check_can_modify(existing)

        changed_fields = data.model_dump(exclude_unset=True)
        updated = self.repository.update_lead(lead_id, changed_fields)
        if updated is None:
            raise NotFoundError("Lead", lead_id)

        self.hooks.on_lead_updated(lead_id, updated, changed_fields)
        return updated

    def delete_lead(self, lead_id: int) -> None:
        """Delete a lead and, before it, every policy written against it"""
        lead = self._get_existing(lead_id)
        self._check_can_modify(lead)

        policies = self.repository.get_policies_by_lead(lead_id)
        if policies:
            logger.info(f"[cyan]Deleting {len(policies)} policies related to lead #{lead_id}[/cyan]")
            for policy in policies:
                self.repository.delete_policy(policy.id)

        if not self.repository.delete_lead(lead_id):
            raise NotFoundError("Lead", lead_id)
        logger.info(f"[green]Deleted lead #{lead_id}[/green]")

    def convert_lead(self, lead_id: int) -> Client:
        """Explicitly create the client for a lead"""
        lead = self._get_existing(lead_id)
        self._check_can_modify(lead)
        return self.hooks.conversion.convert_lead(lead)

    def _get_existing(self, lead_id: int) -> Lead:
        lead = self.repository.get_lead(lead_id)
        if lead is None:
            raise NotFoundError("Lead", lead_id)
        return lead

    def _check_can_modify(self, lead: Lead) -> None:
        """Agents may change unassigned leads and leads assigned to them"""
        if self.is_privileged:
            return
        agent = self.current_agent()
        if agent is None or (lead.assigned_agent_id is not None and lead.assigned_agent_id != agent.id):
            logger.info(
                f"[yellow]Access denied: user {self.current_user.id} is not assigned to lead #{lead.id}[/yellow]"
            )
            raise PermissionDeniedError("Access denied: You can only update leads assigned to you")
