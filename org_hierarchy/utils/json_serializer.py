"""
JSON serializer utility for converting Python objects to JSON-safe values
"""
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from uuid import UUID
from typing import Any, Dict, Optional

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect


def to_json_safe(value: Any) -> Any:
    """
    Recursively convert Python objects to JSON-safe values

    Args:
        value: Any Python object to convert

    Returns:
        JSON-safe equivalent of the input value
    """
    if value is None:
        return None
    elif isinstance(value, (str, int, float, bool)):
        return value
    elif isinstance(value, (date, datetime, time)):
        return value.isoformat()
    elif isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, UUID):
        return str(value)
    elif isinstance(value, dict):
        return {k: to_json_safe(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple, set)):
        return [to_json_safe(item) for item in value]
    elif isinstance(value, BaseModel):
        return to_json_safe(value.model_dump())
    return str(value)


def snapshot(record: Optional[Any]) -> Optional[Dict[str, Any]]:
    """
    Full column snapshot of an ORM row, JSON-safe, for audit old/new data.

    Reads column attributes only, so it never triggers relationship loads.
    """
    if record is None:
        return None
    mapper = sa_inspect(record).mapper
    return {
        attr.key: to_json_safe(getattr(record, attr.key))
        for attr in mapper.column_attrs
    }
