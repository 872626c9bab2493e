"""
Relation availability checks for the store accessors

Some list operations have a rich shape (joins against a related table) and a
basic shape. Instead of inspecting the schema on every call, a relation that
exists is remembered per database. A missing relation is never remembered:
it is inspected again on the next call, so a table created by a later
migration is picked up without a restart.

A rich query that fails at runtime does not by itself make the relation
unavailable. recheck_relation() drops the remembered answer and inspects
again; only a relation that is really gone stops being used.
"""
import logging
from typing import Dict, Tuple

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_available_relations: Dict[Tuple[str, str], bool] = {}


def _cache_key(db: Session, table_name: str) -> Tuple[str, str]:
    bind = db.get_bind()
    return (bind.url.render_as_string(hide_password=True), table_name)


def relation_available(db: Session, table_name: str) -> bool:
    """
    Whether table_name exists in the database behind db

    Only True is cached. Inspection errors are reported as unavailable.
    """
    key = _cache_key(db, table_name)
    if _available_relations.get(key):
        return True

    try:
        available = sa_inspect(db.get_bind()).has_table(table_name)
    except SQLAlchemyError as e:
        logger.warning(f"Could not inspect relation '{table_name}': {e}")
        return False

    if available:
        _available_relations[key] = True
    else:
        logger.warning(f"Relation '{table_name}' is not available; using reduced query shape")
    return available


def recheck_relation(db: Session, table_name: str) -> bool:
    """
    Forget the cached answer for table_name and inspect again

    Called after a query joining table_name failed. Returns True when the
    relation still exists, i.e. the failure was not caused by a missing table.
    """
    _available_relations.pop(_cache_key(db, table_name), None)
    return relation_available(db, table_name)


def reset_capabilities() -> None:
    """Forget all cached answers"""
    _available_relations.clear()
