"""
Client API request and response schemas
"""
from typing import Optional
from datetime import date
from pydantic import field_validator
from agency_crm.schemas.base import BaseResponseSchema, BlankDatesMixin


class ClientFields(BlankDatesMixin):
    """Optional client fields shared by create, update and detail"""
    company: Optional[str] = None
    phone: Optional[str] = None

    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None

    sex: Optional[str] = None
    date_of_birth: Optional[date] = None
    insurance_info: Optional[str] = None
    insurance_type: Optional[str] = None

    notes: Optional[str] = None
    assigned_agent_id: Optional[int] = None


class ClientCreate(ClientFields):
    """Payload for creating a client directly (not from a lead)"""
    name: str
    email: str
    status: str = "active"
    lead_id: Optional[int] = None


class ClientUpdate(ClientFields):
    """Partial client update"""
    name: Optional[str] = None
    email: Optional[str] = None
    status: Optional[str] = None

    @field_validator("name", "email")
    @classmethod
    def cannot_be_cleared(cls, v):
        if v is None or not v.strip():
            raise ValueError("cannot be cleared")
        return v


class ClientDetail(ClientFields, BaseResponseSchema):
    """Client as returned by the API"""
    name: str
    email: str
    status: Optional[str] = None
    has_portal_access: bool = False
    lead_id: Optional[int] = None
