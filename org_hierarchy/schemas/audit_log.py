"""
Audit log schemas
"""
import enum
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict

UNKNOWN_ACTOR = "Unknown"


class ActorResolution(str, enum.Enum):
    RESOLVED = "resolved"
    ACTOR_MISSING = "actor_missing"  # no actor recorded, or the employee no longer exists
    RELATION_UNAVAILABLE = "relation_unavailable"  # employees table could not be queried


class AuditLogOut(BaseModel):
    """Schema for audit log output"""
    id: str
    table_name: str
    record_id: str
    action: str
    old_data: Optional[Any] = None
    new_data: Optional[Any] = None
    performed_by: Optional[str] = None
    performed_by_email: str = UNKNOWN_ACTOR
    actor_resolution: ActorResolution = ActorResolution.ACTOR_MISSING
    performed_at: datetime
    details: str

    model_config = ConfigDict(from_attributes=True)
