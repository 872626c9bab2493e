"""
Database models
"""
from org_hierarchy.models.branch import Branch
from org_hierarchy.models.department import Department
from org_hierarchy.models.employee import Employee, Role, MANAGER_ROLES, manager_role_filter
from org_hierarchy.models.audit_log import AuditLog, AuditAction

__all__ = [
    "Branch",
    "Department",
    "Employee",
    "Role",
    "MANAGER_ROLES",
    "manager_role_filter",
    "AuditLog",
    "AuditAction",
]
