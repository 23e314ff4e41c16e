"""
Pydantic schemas for request/response validation
"""
from agency_crm.schemas.base import (
    BaseSchema,
    TimestampSchema,
    IDSchema,
    BaseResponseSchema
)
from agency_crm.schemas.clients import (
    ClientCreate,
    ClientUpdate,
    ClientDetail
)
from agency_crm.schemas.leads import (
    LeadCreate,
    LeadUpdate,
    LeadDetail,
    LeadCreateResponse
)
from agency_crm.schemas.policies import (
    PolicyCreate,
    PolicyUpdate,
    PolicyDetail
)
from agency_crm.schemas.agents import (
    AgentCreate,
    AgentDetail,
    BankingInfoUpdate
)
from agency_crm.schemas.admin import BackfillResponse

__all__ = [
    # Base schemas
    "BaseSchema",
    "TimestampSchema",
    "IDSchema",
    "BaseResponseSchema",
    # Client schemas
    "ClientCreate",
    "ClientUpdate",
    "ClientDetail",
    # Lead schemas
    "LeadCreate",
    "LeadUpdate",
    "LeadDetail",
    "LeadCreateResponse",
    # Policy schemas
    "PolicyCreate",
    "PolicyUpdate",
    "PolicyDetail",
    # Agent schemas
    "AgentCreate",
    "AgentDetail",
    "BankingInfoUpdate",
    # Admin schemas
    "BackfillResponse",
]
