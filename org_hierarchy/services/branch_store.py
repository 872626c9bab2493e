"""
Branch accessors

Reads are public; the write helpers are only called by organization_service,
which audits every change.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from org_hierarchy.models.branch import Branch
from org_hierarchy.services.store_base import store_operation

TABLE = Branch.__tablename__


def list_branches(db: Session) -> List[Branch]:
    """All branches ordered by name; an empty list when there are none"""
    with store_operation(db, TABLE, "list branches"):
        return db.query(Branch).order_by(Branch.name).all()


def get_branch(db: Session, branch_id: str) -> Optional[Branch]:
    """Get a branch by ID"""
    with store_operation(db, TABLE, "read branch"):
        return db.query(Branch).filter(Branch.id == branch_id).first()


def find_branch_by_name(db: Session, name: str, exclude_id: Optional[str] = None) -> Optional[Branch]:
    """Case-insensitive name lookup, used for the uniqueness check"""
    with store_operation(db, TABLE, "read branch"):
        query = db.query(Branch).filter(func.lower(Branch.name) == func.lower(name))
        if exclude_id is not None:
            query = query.filter(Branch.id != exclude_id)
        return query.first()


def insert_branch(db: Session, values: Dict[str, Any]) -> Branch:
    with store_operation(db, TABLE, "create branch", unique=("name", values.get("name"))):
        branch = Branch(**values)
        db.add(branch)
        db.commit()
        db.refresh(branch)
        return branch


def apply_branch_changes(db: Session, branch: Branch, changes: Dict[str, Any]) -> Branch:
    unique = ("name", changes["name"]) if "name" in changes else None
    with store_operation(db, TABLE, "update branch", unique=unique):
        for field, value in changes.items():
            setattr(branch, field, value)
        db.commit()
        db.refresh(branch)
        return branch


def delete_branch_row(db: Session, branch: Branch) -> None:
    with store_operation(db, TABLE, "delete branch"):
        db.delete(branch)
        db.commit()
