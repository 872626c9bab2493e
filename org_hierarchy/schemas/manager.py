"""
Manager (employee projection) schemas
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class ManagerCreate(BaseModel):
    """Schema for creating a manager record"""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    department_id: Optional[str] = Field(None, description="Department the manager belongs to")


class ManagerUpdate(BaseModel):
    """Schema for updating a manager; only fields sent are written"""
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    department_id: Optional[str] = Field(None, description="Department the manager belongs to")


class ManagerOut(BaseModel):
    """
    Schema for manager output

    department_name and branch_id come from the manager's department and are
    None when that lookup is unavailable.
    """
    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    role: str
    department_id: Optional[str] = None
    department_name: Optional[str] = None
    branch_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
