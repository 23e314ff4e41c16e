"""
General helper functions
"""
from typing import Optional

from agency_crm.core.config import settings


def display_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """Client display name built from a lead's name parts: "FIRST LAST"."""
    return f"{first_name or ''} {last_name or ''}".strip().upper()


def placeholder_email(lead_id: int) -> str:
    """
    Synthetic address for clients whose lead has no email.
    clients.email is NOT NULL, so one of these is always stored instead.
    """
    return f"lead{lead_id}@{settings.sync.placeholder_email_domain}"
