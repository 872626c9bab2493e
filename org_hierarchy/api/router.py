"""
Main API router
"""
from fastapi import APIRouter

from org_hierarchy.api.v1 import (
    health,
    branches,
    departments,
    managers,
    audit_logs,
    organization,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(branches.router, prefix="/branches", tags=["branches"])
api_router.include_router(departments.router, prefix="/departments", tags=["departments"])
api_router.include_router(managers.router, prefix="/managers", tags=["managers"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])
api_router.include_router(organization.router, prefix="/organization", tags=["organization"])
