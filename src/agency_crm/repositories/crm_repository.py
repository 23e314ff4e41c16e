"""
Entity repository for the CRM: the persistence primitives the
services and the sync engine depend on.
"""
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from agency_crm.database.models import User, Agent, Lead, Client, Policy
from agency_crm.repositories.base_repository import BaseRepository


class CRMRepository:
    """
    get/list/create/update/delete per entity plus the list-by-reference
    lookups (clients by lead, policies by lead/client/agent).

    update_* returns None when the id does not exist. Storage errors
    propagate as SQLAlchemyError; the sync services catch them.
    """

    def __init__(self, db: Session):
        self.db = db
        self.users = BaseRepository(db, User)
        self.agents = BaseRepository(db, Agent)
        self.leads = BaseRepository(db, Lead)
        self.clients = BaseRepository(db, Client)
        self.policies = BaseRepository(db, Policy)

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.find_by_id(user_id)

    def create_user(self, data: Dict[str, Any]) -> User:
        return self.users.create(**data)

    # Agents

    def get_agent(self, agent_id: int) -> Optional[Agent]:
        return self.agents.find_by_id(agent_id)

    def get_agents(self) -> List[Agent]:
        return self.agents.find_all()

    def get_agent_by_user_id(self, user_id: int) -> Optional[Agent]:
        return self.agents.find_one_by(user_id=user_id)

    def create_agent(self, data: Dict[str, Any]) -> Agent:
        return self.agents.create(**data)

    def update_agent(self, agent_id: int, data: Dict[str, Any]) -> Optional[Agent]:
        return self.agents.update_by_id(agent_id, data)

    # Leads

    def get_lead(self, lead_id: int) -> Optional[Lead]:
        return self.leads.find_by_id(lead_id)

    def get_leads(self) -> List[Lead]:
        return self.leads.find_all()

    def get_leads_by_agent(self, agent_id: int) -> List[Lead]:
        return self.leads.find_by(assigned_agent_id=agent_id)

    def create_lead(self, data: Dict[str, Any]) -> Lead:
        return self.leads.create(**data)

    def update_lead(self, lead_id: int, data: Dict[str, Any]) -> Optional[Lead]:
        return self.leads.update_by_id(lead_id, data)

    def delete_lead(self, lead_id: int) -> bool:
        return self.leads.delete_by_id(lead_id)

    # Clients

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.clients.find_by_id(client_id)

    def get_clients(self) -> List[Client]:
        return self.clients.find_all()

    def get_clients_by_lead_id(self, lead_id: int) -> List[Client]:
        """Clients referencing a lead, oldest first."""
        return self.clients.find_by(lead_id=lead_id)

    def create_client(self, data: Dict[str, Any]) -> Client:
        return self.clients.create(**data)

    def update_client(self, client_id: int, data: Dict[str, Any]) -> Optional[Client]:
        return self.clients.update_by_id(client_id, data)

    def delete_client(self, client_id: int) -> bool:
        return self.clients.delete_by_id(client_id)

    # Policies

    def get_policy(self, policy_id: int) -> Optional[Policy]:
        return self.policies.find_by_id(policy_id)

    def get_policies(self) -> List[Policy]:
        return self.policies.find_all()

    def get_policies_by_lead(self, lead_id: int) -> List[Policy]:
        return self.policies.find_by(lead_id=lead_id)

    def get_policies_by_client(self, client_id: int) -> List[Policy]:
        return self.policies.find_by(client_id=client_id)

    def get_policies_by_agent(self, agent_id: int) -> List[Policy]:
        return self.policies.find_by(agent_id=agent_id)

    def create_policy(self, data: Dict[str, Any]) -> Policy:
        return self.policies.create(**data)

    def update_policy(self, policy_id: int, data: Dict[str, Any]) -> Optional[Policy]:
        return self.policies.update_by_id(policy_id, data)

    def delete_policy(self, policy_id: int) -> bool:
        return self.policies.delete_by_id(policy_id)

    def rollback(self) -> None:
        """Discard a failed transaction so the session can be reused."""
        self.db.rollback()
