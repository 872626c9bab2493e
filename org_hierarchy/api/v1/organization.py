"""
Organization hierarchy endpoints
"""
from typing import Callable
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from org_hierarchy.core.deps import get_db, get_session_factory
from org_hierarchy.schemas.hierarchy import (
    OrganizationHierarchy,
    HierarchyValidationRequest,
    HierarchyValidationResult,
)
from org_hierarchy.services.hierarchy_service import load_organization_hierarchy
from org_hierarchy.services.hierarchy_validator import validate_hierarchy

router = APIRouter()


@router.get("/hierarchy", response_model=OrganizationHierarchy)
async def get_hierarchy_endpoint(
    session_factory: Callable[[], Session] = Depends(get_session_factory)
):
    """
    Branch -> Department -> Manager tree with data-quality statistics

    Responds 503 when any level cannot be loaded.
    """
    return await load_organization_hierarchy(session_factory)


@router.post("/validate", response_model=HierarchyValidationResult, response_model_exclude_none=True)
async def validate_hierarchy_endpoint(
    request: HierarchyValidationRequest,
    db: Session = Depends(get_db)
):
    """Check that the department belongs to the branch and the manager to the department"""
    return validate_hierarchy(db, request.branch_id, request.department_id, request.manager_id)
