"""
Main API router for v1 endpoints
"""
from fastapi import APIRouter

from agency_crm.api.v1.endpoints import admin, agents, clients, leads, policies

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(leads.router, tags=["leads"])
api_router.include_router(clients.router, tags=["clients"])
api_router.include_router(policies.router, tags=["policies"])
api_router.include_router(agents.router, tags=["agents"])
api_router.include_router(admin.router, tags=["admin"])
