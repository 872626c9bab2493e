"""
Audit log model

Rows are append-only; nothing in this package updates or deletes them.
"""
import enum
import uuid
from sqlalchemy import Column, String, DateTime, JSON, Index
from org_hierarchy.db.base import Base


class AuditAction(str, enum.Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    table_name = Column(String, nullable=False)  # e.g. "branches", "departments", "employees"
    record_id = Column(String(36), nullable=False)
    action = Column(String, nullable=False)
    old_data = Column(JSON, nullable=True)  # null for INSERT
    new_data = Column(JSON, nullable=True)  # null for DELETE
    performed_by = Column(String(36), nullable=True)  # actor id, not a foreign key
    # Set explicitly on insert to avoid SQLite issues with server_default
    performed_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_audit_logs_table_action", "table_name", "action"),
        Index("ix_audit_logs_performed_at", "performed_at"),
    )
