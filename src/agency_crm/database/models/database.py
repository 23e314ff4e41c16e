"""
Database models for the agency CRM tables.

Client.lead_id, Policy.client_id and Policy.lead_id are soft references:
plain indexed integer columns with no foreign key or uniqueness
constraint. The sync services keep them consistent at the application
level.
"""
from sqlalchemy import Column, String, Text, Boolean, Date, DateTime, Integer, Numeric, ForeignKey
from agency_crm.database.models.base import BaseModel


class User(BaseModel):
    """
    Staff account. Only the role is used here; passwords and sessions
    live in the authentication service.
    """
    __tablename__ = "users"

    username = Column(String(100), unique=True, nullable=False, index=True)
    full_name = Column(String(200), nullable=True)
    email = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default="agent")


class Agent(BaseModel):
    """Licensed agent record, optionally linked to a staff user."""
    __tablename__ = "agents"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    license_number = Column(String(100), nullable=True)
    upline_agent_id = Column(Integer, nullable=True, index=True)
    commission_percentage = Column(Numeric(5, 2), nullable=True)

    # Direct deposit details
    bank_name = Column(String(200), nullable=True)
    bank_account_type = Column(String(50), nullable=True)
    bank_account_number = Column(String(100), nullable=True)
    bank_routing_number = Column(String(100), nullable=True)
    bank_payment_method = Column(String(50), nullable=True)


class Lead(BaseModel):
    """
    A prospective customer captured before a sale.
    Maps to the 'leads' table.
    """
    __tablename__ = "leads"

    # Identity and contact
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone_number = Column(String(50), nullable=True)

    # Address
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)

    # Underwriting
    date_of_birth = Column(Date, nullable=True)
    sex = Column(String(20), nullable=True)
    height = Column(String(20), nullable=True)
    weight = Column(String(20), nullable=True)
    smoker_status = Column(String(20), nullable=True)
    medical_conditions = Column(Text, nullable=True)
    family_medical_history = Column(Text, nullable=True)

    # Commercial
    income_range = Column(String(50), nullable=True)
    existing_coverage = Column(Text, nullable=True)
    coverage_needs = Column(Text, nullable=True)
    insurance_type_interest = Column(String(100), nullable=True)
    lead_source = Column(String(100), nullable=True)

    # Workflow
    assigned_agent_id = Column(Integer, ForeignKey("agents.id"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default="new", index=True)
    notes = Column(Text, nullable=True)
    last_contacted_at = Column(DateTime, nullable=True)


class Client(BaseModel):
    """
    A converted, billable customer.
    lead_id points back at the originating lead without a constraint,
    so nothing at the storage level stops two clients sharing one lead.
    """
    __tablename__ = "clients"

    name = Column(String(200), nullable=False)
    company = Column(String(200), nullable=True)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)

    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)

    sex = Column(String(20), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    insurance_info = Column(Text, nullable=True)
    insurance_type = Column(String(100), nullable=True)

    status = Column(String(20), nullable=True, default="active")
    notes = Column(Text, nullable=True)
    assigned_agent_id = Column(Integer, ForeignKey("agents.id"), nullable=True, index=True)
    has_portal_access = Column(Boolean, nullable=False, default=False)

    lead_id = Column(Integer, nullable=True, index=True)


class Policy(BaseModel):
    """
    An insurance contract. agent_id is required; the customer may be
    known as a client, a lead, both, or neither yet.
    """
    __tablename__ = "policies"

    policy_number = Column(String(100), nullable=True, index=True)
    carrier = Column(String(200), nullable=True)
    policy_type = Column(String(100), nullable=True)
    status = Column(String(50), nullable=False, default="pending")

    face_amount = Column(Numeric(14, 2), nullable=True)
    premium = Column(Numeric(10, 2), nullable=True)
    premium_frequency = Column(String(20), nullable=True)

    application_date = Column(Date, nullable=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True)

    agent_id = Column(Integer, ForeignKey("agents.id"), nullable=False, index=True)
    client_id = Column(Integer, nullable=True, index=True)
    lead_id = Column(Integer, nullable=True, index=True)
