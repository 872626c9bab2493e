"""
Audit logging service

Writes are append-only and best-effort: log_action runs after the audited
change has committed, so a failed write is logged and swallowed rather than
reported as a failure of the change.
"""
import logging
from datetime import datetime
from typing import Any, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, Query

from org_hierarchy.core.config import settings
from org_hierarchy.models.audit_log import AuditLog, AuditAction
from org_hierarchy.models.employee import Employee
from org_hierarchy.schemas.audit_log import AuditLogOut, ActorResolution, UNKNOWN_ACTOR
from org_hierarchy.services.store_base import store_operation
from org_hierarchy.services.store_capabilities import (
    relation_available,
    recheck_relation,
)
from org_hierarchy.utils.json_serializer import to_json_safe

logger = logging.getLogger(__name__)


def log_action(
    db: Session,
    table_name: str,
    record_id: str,
    action: Union[AuditAction, str],
    old_data: Optional[Any],
    new_data: Optional[Any],
    actor_id: Optional[str],
) -> Optional[AuditLog]:
    """
    Append an audit log entry

    Args:
        db: Database session
        table_name: Table of the changed record (e.g. "branches", "employees")
        record_id: ID of the changed record
        action: INSERT, UPDATE or DELETE
        old_data: Snapshot before the change (None for INSERT)
        new_data: Snapshot after the change (None for DELETE)
        actor_id: ID of the user performing the change, from the request

    Returns:
        The created AuditLog, or None if the write failed
    """
    action_value = AuditAction(action).value

    try:
        # Explicitly set performed_at to avoid SQLite issues with server_default
        entry = AuditLog(
            table_name=table_name,
            record_id=str(record_id),
            action=action_value,
            old_data=to_json_safe(old_data),
            new_data=to_json_safe(new_data),
            performed_by=actor_id,
            performed_at=datetime.utcnow(),
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error logging audit action {action_value} on {table_name}/{record_id}: {e}")
        return None


def _resolve_limit(limit: Optional[int]) -> int:
    if limit is None or limit < 1:
        return settings.AUDIT_LOG_DEFAULT_LIMIT
    return min(limit, settings.AUDIT_LOG_MAX_LIMIT)


def _filtered(query: Query, table_name: Optional[str], action: Optional[str], limit: int) -> Query:
    if table_name:
        query = query.filter(AuditLog.table_name == table_name)
    if action:
        query = query.filter(AuditLog.action == action)
    return query.order_by(AuditLog.performed_at.desc()).limit(limit)


def _to_out(entry: AuditLog, email: Optional[str], resolution: ActorResolution) -> AuditLogOut:
    return AuditLogOut(
        id=entry.id,
        table_name=entry.table_name,
        record_id=entry.record_id,
        action=entry.action,
        old_data=entry.old_data,
        new_data=entry.new_data,
        performed_by=entry.performed_by,
        performed_by_email=email or UNKNOWN_ACTOR,
        actor_resolution=resolution,
        performed_at=entry.performed_at,
        details=f"{entry.action} on {entry.table_name}",
    )


def get_audit_logs(
    db: Session,
    table_name: Optional[str] = None,
    action: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[AuditLogOut]:
    """
    List audit entries, newest first

    Each entry carries the actor's email when it can be resolved. When the
    employees relation is unavailable every entry is labelled "Unknown" with
    actor_resolution=relation_unavailable; an actor that is simply gone is
    reported as actor_missing.

    Raises:
        StoreError: If the audit entries themselves cannot be read
    """
    limit = _resolve_limit(limit)

    if not relation_available(db, AuditLog.__tablename__):
        logger.warning("Audit logs table does not exist. Run alembic upgrade head")
        return []

    if relation_available(db, Employee.__tablename__):
        try:
            query = db.query(AuditLog, Employee.email).outerjoin(
                Employee, Employee.id == AuditLog.performed_by
            )
            rows = _filtered(query, table_name, action, limit).all()
            return [
                _to_out(
                    entry,
                    email,
                    ActorResolution.RESOLVED if email else ActorResolution.ACTOR_MISSING,
                )
                for entry, email in rows
            ]
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Error resolving audit log actors: {e}")
            recheck_relation(db, Employee.__tablename__)

    with store_operation(db, AuditLog.__tablename__, "read audit logs"):
        entries = _filtered(db.query(AuditLog), table_name, action, limit).all()
    return [_to_out(entry, None, ActorResolution.RELATION_UNAVAILABLE) for entry in entries]
