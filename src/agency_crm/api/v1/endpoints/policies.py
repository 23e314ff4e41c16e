"""
Policies API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from agency_crm.api.v1.dependencies import get_current_user
from agency_crm.core.dependencies import get_db
from agency_crm.database.models import User
from agency_crm.services.policy_service import PolicyService
from agency_crm.utils.logging import get_logger
from agency_crm.schemas.policies import PolicyCreate, PolicyDetail, PolicyUpdate

logger = get_logger(__name__)
router = APIRouter()


@router.get("/policies", response_model=List[PolicyDetail])
async def get_policies(
    client_id: Optional[int] = Query(None, ge=1),
    lead_id: Optional[int] = Query(None, ge=1),
    agent_id: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List policies, optionally for one client, lead or agent"""
    try:
        return PolicyService(db, user).get_policies(client_id=client_id, lead_id=lead_id, agent_id=agent_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error fetching policies:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch policies")


@router.get("/policies/{policy_id}", response_model=PolicyDetail)
async def get_policy(
    policy_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return PolicyService(db, user).get_policy(policy_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error fetching policy {policy_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch policy")


@router.post("/policies", response_model=PolicyDetail, status_code=status.HTTP_201_CREATED)
async def create_policy(
    payload: PolicyCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Create a policy.

    A policy created with only a lead_id is linked to that lead's client
    when one exists; the response shows the resulting client_id.
    """
    try:
        return PolicyService(db, user).create_policy(payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error creating policy:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to create policy")


@router.patch("/policies/{policy_id}", response_model=PolicyDetail)
async def update_policy(
    policy_id: int,
    payload: PolicyUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return PolicyService(db, user).update_policy(policy_id, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error updating policy {policy_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to update policy")


@router.delete("/policies/{policy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_policy(
    policy_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a policy (admins and team leaders only)"""
    try:
        PolicyService(db, user).delete_policy(policy_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error deleting policy {policy_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to delete policy")
