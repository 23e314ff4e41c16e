"""
Agent service: directory and direct deposit corrections.
"""
from typing import List

from agency_crm.database.models import Agent
from agency_crm.schemas.agents import AgentCreate, BankingInfoUpdate
from agency_crm.services.base_service import BaseService
from agency_crm.utils.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from agency_crm.utils.logging import get_logger

logger = get_logger(__name__)

DIRECT_DEPOSIT = "direct_deposit"


class AgentService(BaseService):
    """Service for managing agents"""

    def get_all_agents(self) -> List[Agent]:
        return self.repository.get_agents()

    def get_agent(self, agent_id: int) -> Agent:
        agent = self.repository.get_agent(agent_id)
        if agent is None:
            raise NotFoundError("Agent", agent_id)
        return agent

    def create_agent(self, data: AgentCreate) -> Agent:
        self.require_privileged("create agents")
        agent = self.repository.create_agent(data.model_dump())
        logger.info(f"[green]✅ Created agent #{agent.id}[/green] {agent.first_name} {agent.last_name}")
        return agent

    def update_banking_info(self, agent_id: int, data: BankingInfoUpdate) -> Agent:
        """
        Patch an agent's banking fields. Allowed for admins and for the
        user the agent record belongs to. Payments are always direct deposit.
        """
        agent = self.get_agent(agent_id)

        is_owner = (
            self.current_user is not None
            and agent.user_id is not None
            and agent.user_id == self.current_user.id
        )
        if not (self.is_admin or is_owner):
            raise PermissionDeniedError("Not authorized to update this agent's banking information")

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No banking information fields provided", status_code=400)
        changes["bank_payment_method"] = DIRECT_DEPOSIT

        updated = self.repository.update_agent(agent_id, changes)
        if updated is None:
            raise NotFoundError("Agent", agent_id)
        logger.info(f"[green]Updated banking information for agent #{agent_id}[/green]")
        return updated
