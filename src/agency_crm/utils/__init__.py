"""
Utility functions and helpers
"""
from agency_crm.utils.logging import get_logger, app_logger, get_shared_logger
from agency_crm.utils.helpers import display_name, placeholder_email

__all__ = ["get_logger", "app_logger", "get_shared_logger", "display_name", "placeholder_email"]
