"""
Organization hierarchy loader

Builds the Branch -> Department -> Manager tree from three independent
fetches. The fetches run concurrently, each on its own session and worker
thread with its own timeout, and all of them are allowed to settle before
any result is inspected. A level that fails to load makes the whole
hierarchy unavailable; a tree with a missing level is not returned.
"""
import asyncio
import logging
import time
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from org_hierarchy.core.config import settings
from org_hierarchy.core.exceptions import HierarchyLoadError
from org_hierarchy.models.branch import Branch
from org_hierarchy.models.department import Department
from org_hierarchy.models.employee import Employee, manager_role_filter
from org_hierarchy.schemas.hierarchy import (
    BranchNode,
    DepartmentNode,
    ManagerNode,
    HierarchyStats,
    OrganizationHierarchy,
)

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


def fetch_branch_rows(db: Session) -> List[Any]:
    return db.query(Branch.id, Branch.name).order_by(Branch.name).all()


def fetch_department_rows(db: Session) -> List[Any]:
    return db.query(Department.id, Department.name, Department.branch_id).order_by(Department.name).all()


def fetch_manager_rows(db: Session) -> List[Any]:
    return (
        db.query(
            Employee.id,
            Employee.first_name,
            Employee.last_name,
            Employee.role,
            Employee.department_id,
        )
        .filter(manager_role_filter())
        .order_by(Employee.first_name)
        .all()
    )


# Order matters only for error reporting: the first failed level is raised
LEVEL_FETCHES = (
    ("branches", fetch_branch_rows),
    ("departments", fetch_department_rows),
    ("managers", fetch_manager_rows),
)


def _run_in_session(session_factory: SessionFactory, fetch: Callable[[Session], List[Any]]) -> List[Any]:
    db = session_factory()
    try:
        return fetch(db)
    finally:
        db.close()


async def _fetch_level(
    session_factory: SessionFactory,
    fetch: Callable[[Session], List[Any]],
    timeout: float,
) -> List[Any]:
    return await asyncio.wait_for(
        asyncio.to_thread(_run_in_session, session_factory, fetch),
        timeout=timeout,
    )


def _describe(error: BaseException, timeout: float) -> str:
    if isinstance(error, asyncio.TimeoutError):
        return f"timed out after {timeout}s"
    return str(error) or error.__class__.__name__


def _manager_node(row: Any) -> ManagerNode:
    return ManagerNode(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        full_name=f"{row.first_name} {row.last_name}",
        role=row.role,
    )


def build_hierarchy(
    branches: Sequence[Any],
    departments: Sequence[Any],
    managers: Sequence[Any],
) -> OrganizationHierarchy:
    """
    Join one snapshot of the three levels into a tree plus statistics

    A department is listed under a branch only when its branch_id equals the
    branch id, and a manager under a department only when its department_id
    equals the department id. Rows failing containment appear nowhere in the
    tree; the orphan counts account for those with a null or dangling parent.

    Args:
        branches: rows with id, name
        departments: rows with id, name, branch_id
        managers: rows with id, first_name, last_name, role, department_id

    Returns:
        OrganizationHierarchy
    """
    departments_by_branch: Dict[str, List[Any]] = defaultdict(list)
    for department in departments:
        if department.branch_id:
            departments_by_branch[department.branch_id].append(department)

    managers_by_department: Dict[str, List[Any]] = defaultdict(list)
    for manager in managers:
        if manager.department_id:
            managers_by_department[manager.department_id].append(manager)

    hierarchy = [
        BranchNode(
            id=branch.id,
            name=branch.name,
            departments=[
                DepartmentNode(
                    id=department.id,
                    name=department.name,
                    managers=[_manager_node(m) for m in managers_by_department.get(department.id, [])],
                )
                for department in departments_by_branch.get(branch.id, [])
            ],
        )
        for branch in branches
    ]

    valid_branch_ids = {branch.id for branch in branches}
    valid_department_ids = {department.id for department in departments}

    orphaned_departments = sum(
        1 for d in departments if not d.branch_id or d.branch_id not in valid_branch_ids
    )
    orphaned_managers = sum(
        1 for m in managers if not m.department_id or m.department_id not in valid_department_ids
    )

    return OrganizationHierarchy(
        hierarchy=hierarchy,
        stats=HierarchyStats(
            branches=len(branches),
            departments=len(departments),
            managers=len(managers),
            orphaned_departments=orphaned_departments,
            orphaned_managers=orphaned_managers,
        ),
    )


async def load_organization_hierarchy(
    session_factory: SessionFactory,
    timeout: Optional[float] = None,
) -> OrganizationHierarchy:
    """
    Load the whole organization as one consistent tree

    Args:
        session_factory: Callable returning a new Session; one is opened per level
        timeout: Per-level timeout in seconds (defaults to
            settings.HIERARCHY_FETCH_TIMEOUT_SECONDS)

    Returns:
        OrganizationHierarchy with the tree and data-quality statistics

    Raises:
        HierarchyLoadError: If any of the three levels failed or timed out
    """
    if timeout is None:
        timeout = settings.HIERARCHY_FETCH_TIMEOUT_SECONDS

    logger.info("Starting hierarchical data load...")
    started = time.perf_counter()

    results = await asyncio.gather(
        *(_fetch_level(session_factory, fetch, timeout) for _, fetch in LEVEL_FETCHES),
        return_exceptions=True,
    )

    failures = [
        (level, result)
        for (level, _), result in zip(LEVEL_FETCHES, results)
        if isinstance(result, BaseException)
    ]
    if failures:
        for level, error in failures:
            logger.error(f"Failed to load {level}: {_describe(error, timeout)}")
        level, error = failures[0]
        raise HierarchyLoadError(level, _describe(error, timeout))

    branches, departments, managers = results
    result = build_hierarchy(branches, departments, managers)

    if result.stats.orphaned_departments:
        logger.warning(
            f"Found {result.stats.orphaned_departments} orphaned departments (missing valid branch_id)"
        )
    if result.stats.orphaned_managers:
        logger.warning(
            f"Found {result.stats.orphaned_managers} orphaned managers (missing valid department_id)"
        )

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"Hierarchy loaded in {elapsed_ms:.2f}ms")
    return result
