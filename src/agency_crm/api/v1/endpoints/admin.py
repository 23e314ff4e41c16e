"""
Admin job endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from agency_crm.api.v1.dependencies import require_admin
from agency_crm.core.dependencies import get_db
from agency_crm.database.models import User
from agency_crm.repositories.crm_repository import CRMRepository
from agency_crm.services.sync_hooks import SyncHooks
from agency_crm.utils.logging import get_logger
from agency_crm.schemas.admin import BackfillResponse

logger = get_logger(__name__)
router = APIRouter()


@router.post("/admin/backfill-lead-clients", response_model=BackfillResponse)
async def backfill_lead_clients(
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """
    Create clients for every lead that does not have one.
    Safe to run repeatedly: leads that already have a client are skipped.
    """
    try:
        summary = SyncHooks(CRMRepository(db)).backfill_lead_client_links()
        return {"message": "Lead to client backfill completed", **summary}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error running lead to client backfill:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to run backfill")
