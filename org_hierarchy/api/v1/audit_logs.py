"""
Audit log endpoints (read-only)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from org_hierarchy.core.deps import get_db
from org_hierarchy.models.audit_log import AuditAction
from org_hierarchy.schemas.audit_log import AuditLogOut
from org_hierarchy.services.audit_service import get_audit_logs

router = APIRouter()


@router.get("", response_model=List[AuditLogOut])
async def list_audit_logs_endpoint(
    table_name: Optional[str] = Query(None),
    action: Optional[AuditAction] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db)
):
    """List audit entries, newest first"""
    return get_audit_logs(
        db,
        table_name=table_name,
        action=action.value if action else None,
        limit=limit,
    )
