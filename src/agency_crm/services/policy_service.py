"""
Policy service: policy CRUD plus client association on every write.
"""
from typing import List, Optional

from agency_crm.database.models import Policy
from agency_crm.schemas.policies import PolicyCreate, PolicyUpdate
from agency_crm.services.base_service import BaseService
from agency_crm.utils.exceptions import NotFoundError
from agency_crm.utils.logging import get_logger

logger = get_logger(__name__)


class PolicyService(BaseService):
    """Service for managing policies"""

    def get_policies(
        self,
        client_id: Optional[int] = None,
        lead_id: Optional[int] = None,
        agent_id: Optional[int] = None,
    ) -> List[Policy]:
        """All policies, or those of one client, lead or agent (in that order of precedence)"""
        if client_id is not None:
            return self.repository.get_policies_by_client(client_id)
        if lead_id is not None:
            return self.repository.get_policies_by_lead(lead_id)
        if agent_id is not None:
            return self.repository.get_policies_by_agent(agent_id)
        return self.repository.get_policies()

    def get_policy(self, policy_id: int) -> Policy:
        policy = self.repository.get_policy(policy_id)
        if policy is None:
            raise NotFoundError("Policy", policy_id)
        return policy

    def create_policy(self, data: PolicyCreate) -> Policy:
        """
        Create a policy and link it to a client.
        A policy written against a converted lead picks up that lead's client.
        """
        policy = self.repository.create_policy(data.model_dump())
        logger.info(f"[green]✅ Created policy #{policy.id}[/green] for agent #{policy.agent_id}")

        policy = self.hooks.on_policy_created(policy)
        self.hooks.on_policy_created_or_updated(policy.id, policy)
        return policy

    def update_policy(self, policy_id: int, data: PolicyUpdate) -> Policy:
        self.get_policy(policy_id)

        changed_fields = data.model_dump(exclude_unset=True)
        updated = self.repository.update_policy(policy_id, changed_fields)
        if updated is None:
            raise NotFoundError("Policy", policy_id)

        self.hooks.on_policy_created_or_updated(policy_id, updated, changed_fields)
        return self.repository.get_policy(policy_id) or updated

    def delete_policy(self, policy_id: int) -> None:
        self.require_privileged("delete policies")
        if not self.repository.delete_policy(policy_id):
            raise NotFoundError("Policy", policy_id)
        logger.info(f"[green]Deleted policy #{policy_id}[/green]")
