"""
Manager accessors

Managers are employees selected by manager_role_filter(). Listing prefers a
shape joined against departments (adds department_name and branch_id); when
that relation is unavailable the basic employee shape is returned instead.
Only a failure of the basic shape is an error.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from org_hierarchy.models.department import Department
from org_hierarchy.models.employee import Employee, manager_role_filter
from org_hierarchy.schemas.manager import ManagerOut
from org_hierarchy.services.store_base import store_operation
from org_hierarchy.services.store_capabilities import (
    relation_available,
    recheck_relation,
)

logger = logging.getLogger(__name__)

TABLE = Employee.__tablename__


def _to_out(
    employee: Employee,
    department_name: Optional[str] = None,
    branch_id: Optional[str] = None,
) -> ManagerOut:
    return ManagerOut(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        full_name=employee.full_name,
        email=employee.email,
        role=employee.role,
        department_id=employee.department_id,
        department_name=department_name,
        branch_id=branch_id,
    )


def _list_with_departments(db: Session) -> Optional[List[ManagerOut]]:
    """Rich shape; None when it cannot be used"""
    if not relation_available(db, Department.__tablename__):
        return None

    try:
        rows = (
            db.query(Employee, Department.name, Department.branch_id)
            .outerjoin(Department, Department.id == Employee.department_id)
            .filter(manager_role_filter())
            .order_by(Employee.first_name, Employee.last_name)
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Error fetching managers with department details: {e}")
        recheck_relation(db, Department.__tablename__)
        return None

    return [_to_out(employee, dept_name, branch_id) for employee, dept_name, branch_id in rows]


def list_managers(
    db: Session,
    branch_id: Optional[str] = None,
    department_id: Optional[str] = None,
) -> List[ManagerOut]:
    """
    List managers, optionally restricted to a branch and/or department

    The branch filter matches on the branch of the manager's department, so
    in the basic shape (no department details) it matches nothing.

    Raises:
        StoreError: If the employees themselves cannot be read
    """
    managers = _list_with_departments(db)

    if managers is None:
        with store_operation(db, TABLE, "list managers"):
            employees = (
                db.query(Employee)
                .filter(manager_role_filter())
                .order_by(Employee.first_name, Employee.last_name)
                .all()
            )
        managers = [_to_out(employee) for employee in employees]

    if branch_id:
        managers = [m for m in managers if m.branch_id == branch_id]
    if department_id:
        managers = [m for m in managers if m.department_id == department_id]
    return managers


def get_manager(db: Session, manager_id: str) -> Optional[Employee]:
    """Get an employee by ID, only if they count as a manager"""
    with store_operation(db, TABLE, "read manager"):
        return db.query(Employee).filter(
            Employee.id == manager_id,
            manager_role_filter(),
        ).first()


def find_employee_by_email(db: Session, email: str, exclude_id: Optional[str] = None) -> Optional[Employee]:
    with store_operation(db, TABLE, "read employee"):
        query = db.query(Employee).filter(Employee.email == email)
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        return query.first()


def insert_employee(db: Session, values: Dict[str, Any]) -> Employee:
    with store_operation(db, TABLE, "create manager", unique=("email", values.get("email"))):
        employee = Employee(**values)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee


def apply_employee_changes(db: Session, employee: Employee, changes: Dict[str, Any]) -> Employee:
    unique = ("email", changes["email"]) if "email" in changes else None
    with store_operation(db, TABLE, "update manager", unique=unique):
        for field, value in changes.items():
            setattr(employee, field, value)
        db.commit()
        db.refresh(employee)
        return employee


def delete_employee_row(db: Session, employee: Employee) -> None:
    with store_operation(db, TABLE, "delete manager"):
        db.delete(employee)
        db.commit()
