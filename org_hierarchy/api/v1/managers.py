"""
Line manager endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from org_hierarchy.core.deps import get_db, get_current_actor
from org_hierarchy.schemas.manager import ManagerCreate, ManagerUpdate, ManagerOut
from org_hierarchy.services.manager_store import list_managers
from org_hierarchy.services.organization_service import (
    create_manager,
    update_manager,
    delete_manager,
)

router = APIRouter()


@router.get("", response_model=List[ManagerOut])
async def list_managers_endpoint(
    branch_id: Optional[str] = Query(None),
    department_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List managers, optionally filtered by branch and/or department"""
    return list_managers(db, branch_id=branch_id, department_id=department_id)


@router.post("", response_model=ManagerOut, status_code=201)
async def create_manager_endpoint(
    manager_data: ManagerCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Create a manager record"""
    return create_manager(db, manager_data, actor_id)


@router.patch("/{manager_id}", response_model=ManagerOut)
async def update_manager_endpoint(
    manager_id: str,
    manager_data: ManagerUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Update a manager"""
    return update_manager(db, manager_id, manager_data, actor_id)


@router.delete("/{manager_id}", status_code=204)
async def delete_manager_endpoint(
    manager_id: str,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Delete a manager record"""
    delete_manager(db, manager_id, actor_id)
    return None
