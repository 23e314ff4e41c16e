"""
Base service class for common service functionality
"""
from sqlalchemy.orm import Session
from typing import Optional

from agency_crm.database.models import Agent, User
from agency_crm.repositories.crm_repository import CRMRepository
from agency_crm.services.sync_hooks import SyncHooks
from agency_crm.utils.exceptions import PermissionDeniedError

PRIVILEGED_ROLES = frozenset({"admin", "team_leader"})


class BaseService:
    """
    Base service class shared by the entity services.

    Holds the repository for the request's session, the sync hooks bound
    to it, and the calling user for role checks. current_user is None
    for internal callers (jobs, tests), which are treated as admin.
    """

    def __init__(self, db: Session, current_user: Optional[User] = None):
        self.db = db
        self.current_user = current_user
        self.repository = CRMRepository(db)
        self.hooks = SyncHooks(self.repository)

    @property
    def is_admin(self) -> bool:
        return self.current_user is None or self.current_user.role == "admin"

    @property
    def is_privileged(self) -> bool:
        """Admins and team leaders see and manage every record"""
        return self.current_user is None or self.current_user.role in PRIVILEGED_ROLES

    def current_agent(self) -> Optional[Agent]:
        """The agent record of the calling user, if any"""
        if self.current_user is None:
            return None
        return self.repository.get_agent_by_user_id(self.current_user.id)

    def require_privileged(self, action: str) -> None:
        if not self.is_privileged:
            raise PermissionDeniedError(f"Access denied: only admins and team leaders can {action}")
