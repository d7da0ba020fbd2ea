"""
API v1 Router - Marmoraria Control
"""
from fastapi import APIRouter
from marmoraria.api.v1.endpoints import (
    auth,
    slabs,
    supplies,
    team,
    reports,
    platform,
)

router = APIRouter()

# Authentication
router.include_router(auth.router)

# Slabs and remnants
router.include_router(slabs.router)

# Consumables
router.include_router(supplies.router)

# Company team
router.include_router(team.router)

# Dashboard, history, project search
router.include_router(reports.router)

# Platform console (super admin)
router.include_router(platform.router)
