"""
Branch schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class BranchCreate(BaseModel):
    """Schema for creating a branch"""
    name: str = Field(..., min_length=1, description="Branch name (unique)")
    address: Optional[str] = Field(None, description="Postal address")
    contact_number: Optional[str] = Field(None, description="Contact phone number")


class BranchUpdate(BaseModel):
    """Schema for updating a branch; only fields sent are written"""
    name: Optional[str] = Field(None, min_length=1, description="Branch name (unique)")
    address: Optional[str] = Field(None, description="Postal address")
    contact_number: Optional[str] = Field(None, description="Contact phone number")


class BranchOut(BaseModel):
    """Schema for branch output"""
    id: str
    name: str
    address: Optional[str] = None
    contact_number: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
