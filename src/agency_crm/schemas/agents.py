"""
Agent API request and response schemas
"""
from typing import Optional
from decimal import Decimal
from agency_crm.schemas.base import BaseSchema, BaseResponseSchema


class AgentCreate(BaseSchema):
    """Payload for creating an agent"""
    first_name: str
    last_name: str
    user_id: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    license_number: Optional[str] = None
    upline_agent_id: Optional[int] = None
    commission_percentage: Optional[Decimal] = None


class BankingInfoUpdate(BaseSchema):
    """Direct deposit fields an agent (or an admin) may correct"""
    bank_name: Optional[str] = None
    bank_account_type: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_routing_number: Optional[str] = None


class AgentDetail(AgentCreate, BaseResponseSchema):
    """Agent as returned by the API"""
    bank_name: Optional[str] = None
    bank_account_type: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_routing_number: Optional[str] = None
    bank_payment_method: Optional[str] = None
