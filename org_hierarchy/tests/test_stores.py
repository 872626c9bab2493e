"""
Tests for the branch, department and manager accessors
"""
import pytest

from org_hierarchy.core.exceptions import StoreError
from org_hierarchy.db.base import Base
from org_hierarchy.models import Branch, Department, Employee, Role
from org_hierarchy.services.branch_store import list_branches
from org_hierarchy.services.department_store import list_departments
from org_hierarchy.services.manager_store import list_managers, get_manager
from org_hierarchy.services.store_capabilities import relation_available, reset_capabilities
from org_hierarchy.tests.helpers import drop_table, fail_next_query


def test_list_branches_empty(db):
    assert list_branches(db) == []


def test_list_branches_ordered_by_name(db):
    db.add_all([Branch(name="Sydney"), Branch(name="Adelaide"), Branch(name="Melbourne")])
    db.commit()

    assert [b.name for b in list_branches(db)] == ["Adelaide", "Melbourne", "Sydney"]


def test_list_branches_store_error_names_table(db):
    drop_table(db, "branches")

    with pytest.raises(StoreError) as exc_info:
        list_branches(db)
    assert exc_info.value.table == "branches"


def test_list_departments_enriched(db, org):
    departments = list_departments(db)

    assert [d.name for d in departments] == ["Engineering", "Finance"]
    engineering, finance = departments
    assert engineering.branch_name == "Sydney"
    assert engineering.manager_name == "Maya Chen"
    assert engineering.location == "Level 3"
    assert finance.branch_name == "Melbourne"
    assert finance.manager_name is None


def test_list_departments_filtered_by_branch(db, org):
    departments = list_departments(db, branch_id=org["melbourne"].id)
    assert [d.name for d in departments] == ["Finance"]


def test_list_departments_dangling_branch_has_no_name(db, org):
    db.add(Department(name="Archive", branch_id="closed-branch"))
    db.commit()

    archive = next(d for d in list_departments(db) if d.name == "Archive")
    assert archive.branch_id == "closed-branch"
    assert archive.branch_name is None


def test_list_departments_survives_manager_lookup_failure(db, org, caplog):
    """Manager names are dropped, departments are still returned"""
    list_departments(db)  # employees relation known to exist
    drop_table(db, "employees")

    departments = list_departments(db)

    assert [d.name for d in departments] == ["Engineering", "Finance"]
    assert departments[0].branch_name == "Sydney"
    assert departments[0].manager_name is None
    assert "Failed to fetch manager details" in caplog.text


def test_list_departments_primary_failure(db):
    drop_table(db, "departments")

    with pytest.raises(StoreError) as exc_info:
        list_departments(db)
    assert exc_info.value.table == "departments"


@pytest.fixture
def managers(db, org):
    """Extra managers across both branches"""
    rows = [
        Employee(first_name="Noah", last_name="Patel", email="noah.patel@example.com",
                 role=Role.HR_MANAGER.value, department_id=org["finance"].id),
        Employee(first_name="Ivy", last_name="Ng", email="ivy.ng@example.com",
                 role=Role.SUPER_ADMIN.value, department_id=None),
        Employee(first_name="Ola", last_name="Nowak", email="ola.nowak@example.com",
                 role=Role.EMPLOYEE.value, system_access_role="Manager", department_id=org["engineering"].id),
        Employee(first_name="Sam", last_name="Lee", email="sam.lee@example.com",
                 role=Role.EMPLOYEE.value, department_id=org["engineering"].id),
    ]
    db.add_all(rows)
    db.commit()
    return rows


def test_list_managers_role_filter(db, org, managers, actor):
    result = list_managers(db)

    assert [m.full_name for m in result] == ["Ivy Ng", "Maya Chen", "Noah Patel", "Ola Nowak"]
    maya = next(m for m in result if m.first_name == "Maya")
    assert maya.department_name == "Engineering"
    assert maya.branch_id == org["sydney"].id


def test_list_managers_filtered(db, org, managers):
    sydney = list_managers(db, branch_id=org["sydney"].id)
    assert [m.first_name for m in sydney] == ["Maya", "Ola"]

    finance = list_managers(db, department_id=org["finance"].id)
    assert [m.first_name for m in finance] == ["Noah"]

    both = list_managers(db, branch_id=org["melbourne"].id, department_id=org["engineering"].id)
    assert both == []


def test_list_managers_without_departments_relation(db, org, managers):
    """Basic shape: still role-filtered, no department details"""
    department_id = org["engineering"].id
    drop_table(db, "departments")

    result = list_managers(db)

    assert len(result) == 4
    assert all(m.department_name is None and m.branch_id is None for m in result)
    assert [m.first_name for m in list_managers(db, department_id=department_id)] == ["Maya", "Ola"]
    assert list_managers(db, branch_id="any-branch") == []


def test_list_managers_downgrades_after_failed_join(db, org, managers):
    assert list_managers(db)[0].department_name is None  # Ivy has no department
    assert relation_available(db, "departments") is True

    drop_table(db, "departments")

    result = list_managers(db)
    assert len(result) == 4
    assert relation_available(db, "departments") is False


def test_list_managers_basic_failure_is_fatal(db):
    drop_table(db, "departments")
    drop_table(db, "employees")
    reset_capabilities()

    with pytest.raises(StoreError) as exc_info:
        list_managers(db)
    assert exc_info.value.table == "employees"


def test_get_manager_applies_role_filter(db, org, managers):
    sam = next(m for m in managers if m.first_name == "Sam")
    assert get_manager(db, org["maya"].id) is not None
    assert get_manager(db, sam.id) is None


def test_list_departments_survives_branch_lookup_failure(db, org, caplog):
    """Branch names are dropped, departments are still returned"""
    list_departments(db)  # branches relation known to exist
    drop_table(db, "branches")

    departments = list_departments(db)

    assert [d.name for d in departments] == ["Engineering", "Finance"]
    assert all(d.branch_name is None for d in departments)
    assert departments[0].manager_name == "Maya Chen"
    assert "Failed to fetch branch names for departments" in caplog.text


def test_list_managers_transient_error_is_not_remembered(db, org, managers, monkeypatch, caplog):
    """A one-off join failure reduces only that call; the branch filter keeps working"""
    sydney_id = org["sydney"].id
    fail_next_query(monkeypatch, db, entity_count=3)

    list_managers(db, branch_id=sydney_id)

    assert "database is locked" in caplog.text
    assert relation_available(db, "departments") is True
    result = list_managers(db, branch_id=sydney_id)
    assert [m.first_name for m in result] == ["Maya", "Ola"]
    assert all(m.department_name == "Engineering" for m in result)


def test_list_managers_picks_up_departments_created_later(db, engine, org, managers):
    department_id = org["engineering"].id
    drop_table(db, "departments")
    assert list_managers(db)[0].department_name is None

    Base.metadata.create_all(bind=engine)
    db.expunge_all()
    db.add(Department(id=department_id, name="Engineering", branch_id="b-1"))
    db.commit()

    maya = next(m for m in list_managers(db) if m.first_name == "Maya")
    assert maya.department_name == "Engineering"
    assert maya.branch_id == "b-1"
