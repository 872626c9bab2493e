"""
Branch endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from org_hierarchy.core.deps import get_db, get_current_actor
from org_hierarchy.schemas.branch import BranchCreate, BranchUpdate, BranchOut
from org_hierarchy.services.branch_store import list_branches
from org_hierarchy.services.organization_service import (
    create_branch,
    update_branch,
    delete_branch,
)

router = APIRouter()


@router.get("", response_model=List[BranchOut])
async def list_branches_endpoint(db: Session = Depends(get_db)):
    """List branches ordered by name"""
    return list_branches(db)


@router.post("", response_model=BranchOut, status_code=201)
async def create_branch_endpoint(
    branch_data: BranchCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Create a new branch"""
    return create_branch(db, branch_data, actor_id)


@router.patch("/{branch_id}", response_model=BranchOut)
async def update_branch_endpoint(
    branch_id: str,
    branch_data: BranchUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Update a branch"""
    return update_branch(db, branch_id, branch_data, actor_id)


@router.delete("/{branch_id}", status_code=204)
async def delete_branch_endpoint(
    branch_id: str,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor)
):
    """Delete a branch; its departments become orphaned"""
    delete_branch(db, branch_id, actor_id)
    return None
