"""
Lead API request and response schemas
"""
from typing import Literal, Optional
from datetime import date, datetime
from pydantic import field_validator
from agency_crm.schemas.base import BaseSchema, BaseResponseSchema, BlankDatesMixin
from agency_crm.schemas.clients import ClientDetail

LeadStatus = Literal["new", "contacted", "qualified", "unqualified", "converted", "lost"]


class LeadFields(BlankDatesMixin):
    """Optional lead fields shared by create, update and detail"""
    email: Optional[str] = None
    phone_number: Optional[str] = None

    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None

    date_of_birth: Optional[date] = None
    sex: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    smoker_status: Optional[str] = None
    medical_conditions: Optional[str] = None
    family_medical_history: Optional[str] = None

    income_range: Optional[str] = None
    existing_coverage: Optional[str] = None
    coverage_needs: Optional[str] = None
    insurance_type_interest: Optional[str] = None
    lead_source: Optional[str] = None

    assigned_agent_id: Optional[int] = None
    notes: Optional[str] = None
    last_contacted_at: Optional[datetime] = None


class LeadCreate(LeadFields):
    """Payload for creating a lead"""
    first_name: str
    last_name: str
    status: LeadStatus = "new"

    @field_validator("first_name", "last_name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class LeadUpdate(LeadFields):
    """
    Partial lead update, used by both PATCH and PUT.
    Only fields present in the request are applied (exclude_unset).
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: Optional[LeadStatus] = None

    @field_validator("first_name", "last_name", "status")
    @classmethod
    def cannot_be_cleared(cls, v):
        # Omit the field to leave it unchanged
        if v is None or not v.strip():
            raise ValueError("cannot be cleared")
        return v


class LeadDetail(LeadFields, BaseResponseSchema):
    """Lead as returned by the API"""
    first_name: str
    last_name: str
    status: str


class LeadCreateResponse(BaseSchema):
    """Response for lead creation; client is only set with eager conversion"""
    lead: LeadDetail
    client: Optional[ClientDetail] = None
    client_error: Optional[str] = None
