"""
Shared helpers for the entity store accessors
"""
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from org_hierarchy.core.exceptions import StoreError, DuplicateRecordError


@contextmanager
def store_operation(
    db: Session,
    table: str,
    action: str,
    unique: Optional[Tuple[str, str]] = None,
) -> Iterator[None]:
    """
    Run a store call, turning SQLAlchemy failures into StoreError

    The session is rolled back first so it stays usable for the caller.
    When unique is a (field, value) pair, an IntegrityError is reported as
    DuplicateRecordError on that field: the unique index caught a write
    that raced past the caller's own duplicate check.

    Usage:
        with store_operation(db, "branches", "create branch", unique=("name", name)):
            db.add(branch)
            db.commit()
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        if unique is not None:
            field, value = unique
            raise DuplicateRecordError(table, field, value) from e
        raise StoreError(table, f"Failed to {action}: {e}", cause=e) from e
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(table, f"Failed to {action}: {e}", cause=e) from e
