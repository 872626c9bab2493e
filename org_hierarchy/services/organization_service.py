"""
Organization service - the only entry point that mutates branches,
departments and managers

Every successful change is followed by exactly one audit entry. The audit
write happens after the change has committed and is best-effort, so a
mutation can succeed without an entry when the audit table is unavailable.
A failed change raises and writes no entry.
"""
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from org_hierarchy.core.exceptions import RecordNotFoundError, DuplicateRecordError
from org_hierarchy.models.audit_log import AuditAction
from org_hierarchy.models.branch import Branch
from org_hierarchy.models.department import Department
from org_hierarchy.models.employee import Employee, Role, MANAGER_ACCESS_ROLE
from org_hierarchy.schemas.branch import BranchCreate, BranchUpdate
from org_hierarchy.schemas.department import DepartmentCreate, DepartmentUpdate
from org_hierarchy.schemas.manager import ManagerCreate, ManagerUpdate
from org_hierarchy.services import branch_store, department_store, manager_store
from org_hierarchy.services.audit_service import log_action
from org_hierarchy.utils.json_serializer import snapshot

BRANCHES = branch_store.TABLE
DEPARTMENTS = department_store.TABLE
EMPLOYEES = manager_store.TABLE

# Columns that cannot be cleared through a partial update
_REQUIRED_FIELDS = {"name", "first_name", "last_name"}


def _changes(update_data: Any) -> Dict[str, Any]:
    """Fields sent by the caller; explicit nulls on required fields are ignored"""
    return {
        field: value
        for field, value in update_data.model_dump(exclude_unset=True).items()
        if not (field in _REQUIRED_FIELDS and value is None)
    }


# --- Branches ---

def create_branch(db: Session, branch_data: BranchCreate, actor_id: Optional[str]) -> Branch:
    """
    Create a new branch

    Args:
        db: Database session
        branch_data: Branch creation data
        actor_id: ID of the user creating the branch

    Returns:
        Created Branch instance

    Raises:
        DuplicateRecordError: If a branch with the same name (case-insensitive) exists
        StoreError: If the insert fails
    """
    if branch_store.find_branch_by_name(db, branch_data.name):
        raise DuplicateRecordError(BRANCHES, "name", branch_data.name)

    branch = branch_store.insert_branch(db, branch_data.model_dump())
    new_data = snapshot(branch)

    log_action(db, BRANCHES, branch.id, AuditAction.INSERT, None, new_data, actor_id)
    return branch


def update_branch(
    db: Session,
    branch_id: str,
    branch_data: BranchUpdate,
    actor_id: Optional[str]
) -> Branch:
    """
    Update a branch

    Raises:
        RecordNotFoundError: If the branch does not exist
        DuplicateRecordError: If the new name is taken by another branch
        StoreError: If the update fails
    """
    branch = branch_store.get_branch(db, branch_id)
    if branch is None:
        raise RecordNotFoundError(BRANCHES, branch_id)
    old_data = snapshot(branch)

    changes = _changes(branch_data)
    if "name" in changes and branch_store.find_branch_by_name(db, changes["name"], exclude_id=branch_id):
        raise DuplicateRecordError(BRANCHES, "name", changes["name"])

    branch = branch_store.apply_branch_changes(db, branch, changes)
    new_data = snapshot(branch)

    log_action(db, BRANCHES, branch_id, AuditAction.UPDATE, old_data, new_data, actor_id)
    return branch


def delete_branch(db: Session, branch_id: str, actor_id: Optional[str]) -> None:
    """
    Delete a branch

    Departments pointing at the branch are left in place and show up as
    orphaned departments in the hierarchy statistics.

    Raises:
        RecordNotFoundError: If the branch does not exist
        StoreError: If the delete fails
    """
    branch = branch_store.get_branch(db, branch_id)
    if branch is None:
        raise RecordNotFoundError(BRANCHES, branch_id)
    old_data = snapshot(branch)

    branch_store.delete_branch_row(db, branch)

    log_action(db, BRANCHES, branch_id, AuditAction.DELETE, old_data, None, actor_id)


# --- Departments ---

def create_department(
    db: Session,
    department_data: DepartmentCreate,
    actor_id: Optional[str]
) -> Department:
    """
    Create a new department

    The branch reference is stored as given; a department without a branch is
    allowed and is reported as orphaned by the hierarchy loader.

    Raises:
        StoreError: If the insert fails
    """
    department = department_store.insert_department(db, department_data.model_dump())
    new_data = snapshot(department)

    log_action(db, DEPARTMENTS, department.id, AuditAction.INSERT, None, new_data, actor_id)
    return department


def update_department(
    db: Session,
    department_id: str,
    department_data: DepartmentUpdate,
    actor_id: Optional[str]
) -> Department:
    """
    Update a department

    Raises:
        RecordNotFoundError: If the department does not exist
        StoreError: If the update fails
    """
    department = department_store.get_department(db, department_id)
    if department is None:
        raise RecordNotFoundError(DEPARTMENTS, department_id)
    old_data = snapshot(department)

    department = department_store.apply_department_changes(db, department, _changes(department_data))
    new_data = snapshot(department)

    log_action(db, DEPARTMENTS, department_id, AuditAction.UPDATE, old_data, new_data, actor_id)
    return department


def delete_department(db: Session, department_id: str, actor_id: Optional[str]) -> None:
    """
    Delete a department

    Raises:
        RecordNotFoundError: If the department does not exist
        StoreError: If the delete fails
    """
    department = department_store.get_department(db, department_id)
    if department is None:
        raise RecordNotFoundError(DEPARTMENTS, department_id)
    old_data = snapshot(department)

    department_store.delete_department_row(db, department)

    log_action(db, DEPARTMENTS, department_id, AuditAction.DELETE, old_data, None, actor_id)


# --- Managers (employees with a manager role) ---

def create_manager(db: Session, manager_data: ManagerCreate, actor_id: Optional[str]) -> Employee:
    """
    Create an employee record with the Manager role

    Login accounts are provisioned by the authentication service, not here.

    Raises:
        DuplicateRecordError: If the email is already used by an employee
        StoreError: If the insert fails
    """
    if manager_store.find_employee_by_email(db, manager_data.email):
        raise DuplicateRecordError(EMPLOYEES, "email", manager_data.email)

    values = manager_data.model_dump()
    values["role"] = Role.MANAGER.value
    values["system_access_role"] = MANAGER_ACCESS_ROLE

    manager = manager_store.insert_employee(db, values)
    new_data = snapshot(manager)

    log_action(db, EMPLOYEES, manager.id, AuditAction.INSERT, None, new_data, actor_id)
    return manager


def update_manager(
    db: Session,
    manager_id: str,
    manager_data: ManagerUpdate,
    actor_id: Optional[str]
) -> Employee:
    """
    Update a manager's name or department

    Raises:
        RecordNotFoundError: If no manager has this ID
        StoreError: If the update fails
    """
    manager = manager_store.get_manager(db, manager_id)
    if manager is None:
        raise RecordNotFoundError(EMPLOYEES, manager_id)
    old_data = snapshot(manager)

    manager = manager_store.apply_employee_changes(db, manager, _changes(manager_data))
    new_data = snapshot(manager)

    log_action(db, EMPLOYEES, manager_id, AuditAction.UPDATE, old_data, new_data, actor_id)
    return manager


def delete_manager(db: Session, manager_id: str, actor_id: Optional[str]) -> None:
    """
    Delete a manager's employee record

    Raises:
        RecordNotFoundError: If no manager has this ID
        StoreError: If the delete fails
    """
    manager = manager_store.get_manager(db, manager_id)
    if manager is None:
        raise RecordNotFoundError(EMPLOYEES, manager_id)
    old_data = snapshot(manager)

    manager_store.delete_employee_row(db, manager)

    log_action(db, EMPLOYEES, manager_id, AuditAction.DELETE, old_data, None, actor_id)
