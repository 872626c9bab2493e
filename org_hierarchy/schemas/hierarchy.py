"""
Organization hierarchy and validation schemas
"""
import enum
from typing import List, Optional
from pydantic import BaseModel, Field


class ManagerNode(BaseModel):
    id: str
    first_name: str
    last_name: str
    full_name: str
    role: str


class DepartmentNode(BaseModel):
    id: str
    name: str
    managers: List[ManagerNode] = Field(default_factory=list)


class BranchNode(BaseModel):
    id: str
    name: str
    departments: List[DepartmentNode] = Field(default_factory=list)


class HierarchyStats(BaseModel):
    """Counts over one fetched snapshot; orphans are included in the totals"""
    branches: int
    departments: int
    managers: int
    orphaned_departments: int
    orphaned_managers: int


class OrganizationHierarchy(BaseModel):
    hierarchy: List[BranchNode]
    stats: HierarchyStats


class ValidationErrorCode(str, enum.Enum):
    DEPARTMENT_NOT_FOUND = "DEPARTMENT_NOT_FOUND"
    BRANCH_MISMATCH = "BRANCH_MISMATCH"
    MANAGER_NOT_FOUND = "MANAGER_NOT_FOUND"
    DEPARTMENT_MISMATCH = "DEPARTMENT_MISMATCH"
    SERVER_ERROR = "SERVER_ERROR"


class HierarchyValidationRequest(BaseModel):
    """Schema for a candidate (branch, department, manager) placement"""
    branch_id: str = Field(..., description="Branch the department should belong to")
    department_id: str = Field(..., description="Department to check")
    manager_id: Optional[str] = Field(None, description="Line manager that should belong to the department")


class HierarchyValidationResult(BaseModel):
    """
    Outcome of a containment check

    error_code SERVER_ERROR means the check could not be completed; every
    other code means the placement is structurally invalid.
    """
    valid: bool
    message: Optional[str] = None
    error_code: Optional[ValidationErrorCode] = None

    @property
    def is_server_error(self) -> bool:
        return self.error_code == ValidationErrorCode.SERVER_ERROR
