"""
Database models module
"""
from agency_crm.database.models.base import Base, BaseModel
from agency_crm.database.models.database import User, Agent, Lead, Client, Policy  # Import all models here

__all__ = ["Base", "BaseModel", "User", "Agent", "Lead", "Client", "Policy"]
