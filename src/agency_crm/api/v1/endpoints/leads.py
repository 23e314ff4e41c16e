"""
Leads API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from agency_crm.api.v1.dependencies import get_current_user
from agency_crm.core.dependencies import get_db
from agency_crm.database.models import User
from agency_crm.services.lead_service import LeadService
from agency_crm.utils.logging import get_logger
from agency_crm.schemas.clients import ClientDetail
from agency_crm.schemas.leads import LeadCreate, LeadCreateResponse, LeadDetail, LeadUpdate

logger = get_logger(__name__)
router = APIRouter()


@router.get("/leads", response_model=List[LeadDetail])
async def get_leads(
    agent_id: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    List leads visible to the caller.

    Admins and team leaders may filter by agent_id; agents only ever
    see their own leads.
    """
    try:
        return LeadService(db, user).get_all_leads(agent_id=agent_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error fetching leads:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch leads")


@router.get("/leads/{lead_id}", response_model=LeadDetail)
async def get_lead(
    lead_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Get a specific lead by ID"""
    try:
        return LeadService(db, user).get_lead(lead_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error fetching lead {lead_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch lead")


@router.post("/leads", response_model=LeadCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_lead(
    payload: LeadCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Create a lead.

    With eager conversion enabled the response also carries the client
    created from it, or client_error if that failed. The lead is created
    either way.
    """
    try:
        return LeadService(db, user).create_lead(payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error creating lead:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to create lead")


async def _update_lead(lead_id: int, payload: LeadUpdate, db: Session, user: User):
    try:
        return LeadService(db, user).update_lead(lead_id, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error updating lead {lead_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to update lead")


@router.patch("/leads/{lead_id}", response_model=LeadDetail)
async def patch_lead(
    lead_id: int,
    payload: LeadUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Partially update a lead; changes are copied onto its client"""
    return await _update_lead(lead_id, payload, db, user)


@router.put("/leads/{lead_id}", response_model=LeadDetail)
async def put_lead(
    lead_id: int,
    payload: LeadUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Same as PATCH; kept for clients that send PUT"""
    return await _update_lead(lead_id, payload, db, user)


@router.delete("/leads/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lead(
    lead_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a lead together with its policies"""
    try:
        LeadService(db, user).delete_lead(lead_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error deleting lead {lead_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to delete lead")


@router.post("/leads/{lead_id}/convert", response_model=ClientDetail, status_code=status.HTTP_201_CREATED)
async def convert_lead(
    lead_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Convert a lead into a client.

    Returns 409 if the lead already has a client.
    """
    try:
        return LeadService(db, user).convert_lead(lead_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error converting lead {lead_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to convert lead")
