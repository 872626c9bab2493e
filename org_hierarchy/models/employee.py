"""
Employee model

Managers are not a table of their own: they are employees matching
manager_role_filter().
"""
import enum
import uuid
from sqlalchemy import Column, String, DateTime, or_
from sqlalchemy.sql import func
from org_hierarchy.db.base import Base


class Role(str, enum.Enum):
    EMPLOYEE = "Employee"
    MANAGER = "Manager"
    HR_MANAGER = "HR Manager"
    SUPER_ADMIN = "Super Admin"


MANAGER_ROLES = (Role.MANAGER.value, Role.HR_MANAGER.value, Role.SUPER_ADMIN.value)
MANAGER_ACCESS_ROLE = Role.MANAGER.value


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    role = Column(String, nullable=False, default=Role.EMPLOYEE.value)
    system_access_role = Column(String, nullable=True)
    department_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


def manager_role_filter():
    """SQL predicate selecting employees that count as managers"""
    return or_(
        Employee.role.in_(MANAGER_ROLES),
        Employee.system_access_role == MANAGER_ACCESS_ROLE,
    )
