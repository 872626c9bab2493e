"""
Department endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from org_hierarchy.core.deps import get_db, get_current_actor
from org_hierarchy.schemas.department import DepartmentCreate, DepartmentUpdate, DepartmentOut
from org_hierarchy.services.department_store import list_departments
from org_hierarchy.services.organization_service import (
    create_department,
    update_department,
    delete_department,
)

router = APIRouter()


@router.get("", response_model=List[DepartmentOut])
async def list_departments_endpoint(
    branch_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List departments, optionally for one branch, with branch and manager names"""
    return list_departments(db, branch_id=branch_id)


@router.post("", response_model=DepartmentOut, status_code=201)
async def create_department_endpoint(
    department_data: DepartmentCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Create a new department"""
    return create_department(db, department_data, actor_id)


@router.patch("/{department_id}", response_model=DepartmentOut)
async def update_department_endpoint(
    department_id: str,
    department_data: DepartmentUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Update a department"""
    return update_department(db, department_id, department_data, actor_id)


@router.delete("/{department_id}", status_code=204)
async def delete_department_endpoint(
    department_id: str,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Delete a department"""
    delete_department(db, department_id, actor_id)
    return None
