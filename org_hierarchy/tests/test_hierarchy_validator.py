"""
Tests for the hierarchy consistency validator
"""
from org_hierarchy.models import Department, Employee, Role
from org_hierarchy.schemas.hierarchy import ValidationErrorCode
from org_hierarchy.services.hierarchy_validator import validate_hierarchy
from org_hierarchy.tests.helpers import drop_table

NIL_UUID = "00000000-0000-0000-0000-000000000000"


def test_valid_branch_department_manager(db, org):
    """Scenario: Sydney / Engineering / Maya is consistent"""
    result = validate_hierarchy(db, org["sydney"].id, org["engineering"].id, org["maya"].id)

    assert result.valid is True
    assert result.message is None
    assert result.error_code is None


def test_valid_without_manager(db, org):
    result = validate_hierarchy(db, org["melbourne"].id, org["finance"].id)
    assert result.valid is True


def test_unknown_manager(db, org):
    result = validate_hierarchy(db, org["sydney"].id, org["engineering"].id, NIL_UUID)

    assert result.valid is False
    assert result.message == "Manager not found"
    assert result.error_code == ValidationErrorCode.MANAGER_NOT_FOUND


def test_unknown_department(db, org):
    result = validate_hierarchy(db, org["sydney"].id, NIL_UUID)

    assert result.valid is False
    assert result.message == "Department not found"
    assert result.error_code == ValidationErrorCode.DEPARTMENT_NOT_FOUND


def test_department_in_other_branch(db, org):
    result = validate_hierarchy(db, org["sydney"].id, org["finance"].id)

    assert result.valid is False
    assert result.message == "Selected Department does not belong to the selected Branch"
    assert result.error_code == ValidationErrorCode.BRANCH_MISMATCH


def test_orphaned_department_never_matches_a_branch(db, org):
    orphan = Department(name="Floating", branch_id=None)
    db.add(orphan)
    db.commit()

    result = validate_hierarchy(db, org["sydney"].id, orphan.id)

    assert result.error_code == ValidationErrorCode.BRANCH_MISMATCH


def test_manager_from_sibling_department_is_rejected(db, org):
    """Same branch is not enough: the manager must belong to the department"""
    platform = Department(name="Platform", branch_id=org["sydney"].id)
    db.add(platform)
    db.commit()

    result = validate_hierarchy(db, org["sydney"].id, platform.id, org["maya"].id)

    assert result.valid is False
    assert result.message == "Selected Line Manager does not belong to the selected Department"
    assert result.error_code == ValidationErrorCode.DEPARTMENT_MISMATCH


def test_non_manager_employee_is_not_found(db, org):
    staff = Employee(
        first_name="Sam",
        last_name="Lee",
        email="sam.lee@example.com",
        role=Role.EMPLOYEE.value,
        department_id=org["engineering"].id,
    )
    db.add(staff)
    db.commit()

    result = validate_hierarchy(db, org["sydney"].id, org["engineering"].id, staff.id)

    assert result.error_code == ValidationErrorCode.MANAGER_NOT_FOUND


def test_store_failure_is_reported_as_server_error(db, org):
    """Callers can tell 'could not check' apart from 'invalid'"""
    branch_id = org["sydney"].id
    department_id = org["engineering"].id
    drop_table(db, "departments")

    result = validate_hierarchy(db, branch_id, department_id)

    assert result.valid is False
    assert result.message == "Validation failed due to server error"
    assert result.error_code == ValidationErrorCode.SERVER_ERROR
    assert result.is_server_error
