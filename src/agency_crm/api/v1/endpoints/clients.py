"""
Clients API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List

from agency_crm.api.v1.dependencies import get_current_user
from agency_crm.core.dependencies import get_db
from agency_crm.database.models import User
from agency_crm.services.client_service import ClientService
from agency_crm.utils.logging import get_logger
from agency_crm.schemas.clients import ClientCreate, ClientDetail, ClientUpdate

logger = get_logger(__name__)
router = APIRouter()


@router.get("/clients", response_model=List[ClientDetail])
async def get_clients(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return ClientService(db, user).get_all_clients()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error fetching clients:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch clients")


@router.get("/clients/{client_id}", response_model=ClientDetail)
async def get_client(
    client_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return ClientService(db, user).get_client(client_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error fetching client {client_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch client")


@router.post("/clients", response_model=ClientDetail, status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a client; 409 if lead_id already belongs to another client"""
    try:
        return ClientService(db, user).create_client(payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error creating client:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to create client")


@router.patch("/clients/{client_id}", response_model=ClientDetail)
async def update_client(
    client_id: int,
    payload: ClientUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return ClientService(db, user).update_client(client_id, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error updating client {client_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to update client")


@router.delete("/clients/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a client and its policies (admins and team leaders only)"""
    try:
        ClientService(db, user).delete_client(client_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[red]Error deleting client {client_id}:[/red] {e}")
        raise HTTPException(status_code=500, detail="Failed to delete client")
