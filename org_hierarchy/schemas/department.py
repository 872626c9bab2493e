"""
Department schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class DepartmentCreate(BaseModel):
    """Schema for creating a department"""
    name: str = Field(..., min_length=1, description="Department name")
    branch_id: Optional[str] = Field(None, description="Owning branch")
    manager_id: Optional[str] = Field(None, description="Employee heading the department")
    location: Optional[str] = Field(None, description="Location")


class DepartmentUpdate(BaseModel):
    """Schema for updating a department; only fields sent are written"""
    name: Optional[str] = Field(None, min_length=1, description="Department name")
    branch_id: Optional[str] = Field(None, description="Owning branch")
    manager_id: Optional[str] = Field(None, description="Employee heading the department")
    location: Optional[str] = Field(None, description="Location")


class DepartmentOut(BaseModel):
    """
    Schema for department output

    branch_name and manager_name are filled by list_departments when the
    lookups succeed; they stay None otherwise.
    """
    id: str
    name: str
    branch_id: Optional[str] = None
    branch_name: Optional[str] = None
    manager_id: Optional[str] = None
    manager_name: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
