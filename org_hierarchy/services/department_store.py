"""
Department accessors

list_departments fetches the departments first and then resolves branch and
manager names in separate lookups. A failed lookup leaves the name empty and
is logged; it never fails the listing.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from org_hierarchy.models.branch import Branch
from org_hierarchy.models.department import Department
from org_hierarchy.models.employee import Employee
from org_hierarchy.schemas.department import DepartmentOut
from org_hierarchy.services.store_base import store_operation
from org_hierarchy.services.store_capabilities import relation_available, recheck_relation

logger = logging.getLogger(__name__)

TABLE = Department.__tablename__


def list_departments(db: Session, branch_id: Optional[str] = None) -> List[DepartmentOut]:
    """
    List departments ordered by name, optionally only those of one branch

    Args:
        db: Database session
        branch_id: If given, return only departments whose branch_id matches

    Returns:
        List of DepartmentOut with branch_name/manager_name filled where resolvable

    Raises:
        StoreError: If the departments themselves cannot be read
    """
    with store_operation(db, TABLE, "list departments"):
        query = db.query(Department)
        if branch_id:
            query = query.filter(Department.branch_id == branch_id)
        rows = query.order_by(Department.name).all()

    departments = [DepartmentOut.model_validate(row) for row in rows]
    _attach_branch_names(db, departments)
    _attach_manager_names(db, departments)
    return departments


def _attach_branch_names(db: Session, departments: List[DepartmentOut]) -> None:
    branch_ids = {d.branch_id for d in departments if d.branch_id}
    if not branch_ids or not relation_available(db, Branch.__tablename__):
        return

    try:
        rows = db.query(Branch.id, Branch.name).filter(Branch.id.in_(branch_ids)).all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Failed to fetch branch names for departments: {e}")
        recheck_relation(db, Branch.__tablename__)
        return

    names = {row.id: row.name for row in rows}
    for department in departments:
        department.branch_name = names.get(department.branch_id)


def _attach_manager_names(db: Session, departments: List[DepartmentOut]) -> None:
    manager_ids = {d.manager_id for d in departments if d.manager_id}
    if not manager_ids or not relation_available(db, Employee.__tablename__):
        return

    try:
        rows = db.query(Employee.id, Employee.first_name, Employee.last_name).filter(
            Employee.id.in_(manager_ids)
        ).all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Failed to fetch manager details for departments: {e}")
        recheck_relation(db, Employee.__tablename__)
        return

    names = {row.id: f"{row.first_name} {row.last_name}" for row in rows}
    for department in departments:
        department.manager_name = names.get(department.manager_id)


def get_department(db: Session, department_id: str) -> Optional[Department]:
    """Get a department by ID"""
    with store_operation(db, TABLE, "read department"):
        return db.query(Department).filter(Department.id == department_id).first()


def insert_department(db: Session, values: Dict[str, Any]) -> Department:
    with store_operation(db, TABLE, "create department"):
        department = Department(**values)
        db.add(department)
        db.commit()
        db.refresh(department)
        return department


def apply_department_changes(db: Session, department: Department, changes: Dict[str, Any]) -> Department:
    with store_operation(db, TABLE, "update department"):
        for field, value in changes.items():
            setattr(department, field, value)
        db.commit()
        db.refresh(department)
        return department


def delete_department_row(db: Session, department: Department) -> None:
    with store_operation(db, TABLE, "delete department"):
        db.delete(department)
        db.commit()
