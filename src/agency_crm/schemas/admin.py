"""
Admin job schemas
"""
from agency_crm.schemas.base import BaseSchema


class BackfillResponse(BaseSchema):
    """Summary of a lead to client backfill run"""
    message: str
    created: int
    skipped: int
    errors: int
