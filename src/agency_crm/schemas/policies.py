"""
Policy API request and response schemas
"""
from typing import Optional
from datetime import date
from decimal import Decimal
from pydantic import field_validator
from agency_crm.schemas.base import BaseResponseSchema, BlankDatesMixin


class PolicyFields(BlankDatesMixin):
    """Optional policy fields shared by create, update and detail"""
    policy_number: Optional[str] = None
    carrier: Optional[str] = None
    policy_type: Optional[str] = None

    face_amount: Optional[Decimal] = None
    premium: Optional[Decimal] = None
    premium_frequency: Optional[str] = None

    application_date: Optional[date] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None

    client_id: Optional[int] = None
    lead_id: Optional[int] = None


class PolicyCreate(PolicyFields):
    """Payload for creating a policy; agent_id is required"""
    agent_id: int
    status: str = "pending"


class PolicyUpdate(PolicyFields):
    """Partial policy update"""
    agent_id: Optional[int] = None
    status: Optional[str] = None

    @field_validator("agent_id", "status")
    @classmethod
    def cannot_be_cleared(cls, v):
        if v is None:
            raise ValueError("cannot be cleared")
        return v


class PolicyDetail(PolicyFields, BaseResponseSchema):
    """Policy as returned by the API"""
    agent_id: int
    status: str
