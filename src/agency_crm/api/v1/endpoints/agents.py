"""
Agents API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from agency_crm.api.v1.dependencies import get_current_user
from agency_crm.core.dependencies import get_db
from agency_crm.database.models import User
from agency_crm.services.agent_service import AgentService
from agency_crm.utils.logging import get_logger
from agency_crm.schemas.agents import AgentCreate, AgentDetail, BankingInfoUpdate

logger = get_logger(__name__)
router = APIRouter()


@router.get("/agents", response_model=List[AgentDetail])
async def get_agents(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return AgentService(db, user).get_all_agents()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error fetching agents:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch agents")


@router.get("/agents/{agent_id}", response_model=AgentDetail)
async def get_agent(
    agent_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return AgentService(db, user).get_agent(agent_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error fetching agent {agent_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch agent")


@router.post("/agents", response_model=AgentDetail, status_code=status.HTTP_201_CREATED)
async def create_agent(
    payload: AgentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return AgentService(db, user).create_agent(payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error creating agent:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to create agent")


@router.patch("/agents/{agent_id}/banking-info", response_model=AgentDetail)
async def update_banking_info(
    agent_id: int,
    payload: BankingInfoUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Update an agent's direct deposit details.
    Allowed for admins and for the agent's own user account.
    """
    try:
        return AgentService(db, user).update_banking_info(agent_id, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error updating banking information for agent {agent_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to update banking information")
