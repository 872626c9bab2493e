"""
Shared test helpers
"""
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session


def drop_table(db: Session, table_name: str) -> None:
    """Drop a table through the test session to simulate an unprovisioned relation"""
    db.commit()
    db.execute(text(f"DROP TABLE {table_name}"))
    db.commit()


def fail_next_query(monkeypatch, db: Session, entity_count: int) -> None:
    """
    Make the next db.query() with entity_count entities raise a transient
    OperationalError; every other query runs normally
    """
    real_query = db.query
    failed = []

    def query(*entities, **kwargs):
        if len(entities) == entity_count and not failed:
            failed.append(True)
            raise OperationalError("SELECT", {}, Exception("database is locked"))
        return real_query(*entities, **kwargs)

    monkeypatch.setattr(db, "query", query)
