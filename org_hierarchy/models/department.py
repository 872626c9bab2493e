"""
Department model

branch_id and manager_id are plain columns, not foreign keys: departments can
outlive their branch, and a dangling reference is reported as an orphan by the
hierarchy loader instead of being rejected by the database.
"""
import uuid
from sqlalchemy import Column, String, DateTime, text
from org_hierarchy.db.base import Base


class Department(Base):
    __tablename__ = "departments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, index=True)
    branch_id = Column(String(36), nullable=True, index=True)
    manager_id = Column(String(36), nullable=True)  # department head (an employee)
    location = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )
