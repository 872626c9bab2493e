"""
Domain exceptions raised by the store accessors, mutation façade and hierarchy loader
"""
from typing import Optional


class StoreError(Exception):
    """A read or write against an entity table failed"""

    def __init__(self, table: str, message: str, cause: Optional[BaseException] = None):
        self.table = table
        self.message = message
        self.cause = cause
        super().__init__(f"[{table}] {message}")


class RecordNotFoundError(StoreError):
    """The record targeted by an update or delete does not exist"""

    def __init__(self, table: str, record_id: str):
        self.record_id = record_id
        super().__init__(table, f"Record {record_id} not found")


class DuplicateRecordError(StoreError):
    """A unique field (branch name, employee email) is already taken"""

    def __init__(self, table: str, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(table, f"A record with {field} '{value}' already exists")


class HierarchyLoadError(Exception):
    """One level of the organization hierarchy could not be fetched"""

    def __init__(self, level: str, reason: str):
        self.level = level
        self.reason = reason
        super().__init__(f"Failed to load {level}: {reason}")
