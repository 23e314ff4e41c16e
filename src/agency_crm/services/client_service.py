"""
Client service
"""
from typing import List

from agency_crm.database.models import Client
from agency_crm.schemas.clients import ClientCreate, ClientUpdate
from agency_crm.services.base_service import BaseService
from agency_crm.utils.exceptions import NotFoundError
from agency_crm.utils.logging import get_logger

logger = get_logger(__name__)


class ClientService(BaseService):
    """Service for managing clients"""

    def get_all_clients(self) -> List[Client]:
        return self.repository.get_clients()

    def get_client(self, client_id: int) -> Client:
        client = self.repository.get_client(client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    def create_client(self, data: ClientCreate) -> Client:
        """Create a client; a lead may back at most one client"""
        if data.lead_id is not None:
            self.hooks.conversion.ensure_lead_not_converted(data.lead_id)
        client = self.repository.create_client(data.model_dump())
        logger.info(f"[green]✅ Created client #{client.id}[/green] {client.name}")
        return client

    def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        updated = self.repository.update_client(client_id, data.model_dump(exclude_unset=True))
        if updated is None:
            raise NotFoundError("Client", client_id)
        return updated

    def delete_client(self, client_id: int) -> None:
        """Delete a client and, before it, the policies linked to it"""
        self.require_privileged("delete clients")
        self.get_client(client_id)

        policies = self.repository.get_policies_by_client(client_id)
        for policy in policies:
            self.repository.delete_policy(policy.id)
        if policies:
            logger.info(f"[cyan]Deleted {len(policies)} policies of client #{client_id}[/cyan]")

        self.repository.delete_client(client_id)
        logger.info(f"[green]Deleted client #{client_id}[/green]")
