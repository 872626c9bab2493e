"""
Hierarchy consistency validator

Checks that a (branch, department, manager) placement is structurally
contained before the caller commits it. Containment failures are normal
results, not exceptions. Store failures produce a SERVER_ERROR result so the
caller can tell "invalid" apart from "could not check".
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from org_hierarchy.core.exceptions import StoreError
from org_hierarchy.schemas.hierarchy import HierarchyValidationResult, ValidationErrorCode
from org_hierarchy.services.department_store import get_department
from org_hierarchy.services.manager_store import get_manager

logger = logging.getLogger(__name__)


def _invalid(code: ValidationErrorCode, message: str) -> HierarchyValidationResult:
    return HierarchyValidationResult(valid=False, message=message, error_code=code)


def validate_hierarchy(
    db: Session,
    branch_id: str,
    department_id: str,
    manager_id: Optional[str] = None,
) -> HierarchyValidationResult:
    """
    Validate consistency across the three hierarchy levels

    The manager must be a member of the department (department_id match),
    not merely a manager somewhere in the same branch.
    """
    try:
        department = get_department(db, department_id)
        if department is None:
            return _invalid(ValidationErrorCode.DEPARTMENT_NOT_FOUND, "Department not found")

        if department.branch_id != branch_id:
            return _invalid(
                ValidationErrorCode.BRANCH_MISMATCH,
                "Selected Department does not belong to the selected Branch",
            )

        if manager_id:
            manager = get_manager(db, manager_id)
            if manager is None:
                return _invalid(ValidationErrorCode.MANAGER_NOT_FOUND, "Manager not found")

            if manager.department_id != department_id:
                return _invalid(
                    ValidationErrorCode.DEPARTMENT_MISMATCH,
                    "Selected Line Manager does not belong to the selected Department",
                )
    except StoreError as e:
        logger.error(f"Validation error: {e}")
        return _invalid(ValidationErrorCode.SERVER_ERROR, "Validation failed due to server error")

    return HierarchyValidationResult(valid=True)
