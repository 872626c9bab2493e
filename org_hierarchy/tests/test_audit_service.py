"""
Tests for the audit log writer and reader
"""
from datetime import datetime, timedelta

from org_hierarchy.db.base import Base
from org_hierarchy.models import AuditLog, AuditAction
from org_hierarchy.schemas.branch import BranchCreate
from org_hierarchy.services import organization_service
from org_hierarchy.schemas.audit_log import ActorResolution, UNKNOWN_ACTOR
from org_hierarchy.services.audit_service import log_action, get_audit_logs
from org_hierarchy.tests.helpers import drop_table, fail_next_query


def _entry(table_name, action, performed_at, performed_by=None, record_id="rec-1"):
    return AuditLog(
        table_name=table_name,
        record_id=record_id,
        action=action,
        old_data=None,
        new_data={"id": record_id},
        performed_by=performed_by,
        performed_at=performed_at,
    )


def test_log_action_appends_entry(db, actor):
    entry = log_action(
        db,
        "branches",
        "b-1",
        AuditAction.UPDATE,
        {"name": "Old"},
        {"name": "New"},
        actor.id,
    )

    assert entry is not None
    assert entry.action == "UPDATE"
    assert entry.old_data == {"name": "Old"}
    assert entry.new_data == {"name": "New"}
    assert entry.performed_by == actor.id
    assert entry.performed_at is not None
    assert db.query(AuditLog).count() == 1


def test_log_action_serializes_snapshots(db, actor):
    moment = datetime(2026, 3, 1, 9, 30)
    entry = log_action(db, "departments", "d-1", "INSERT", None, {"created_at": moment}, actor.id)

    assert entry.old_data is None
    assert entry.new_data == {"created_at": "2026-03-01T09:30:00"}


def test_log_action_failure_is_swallowed(db, actor, caplog):
    drop_table(db, "audit_logs")

    entry = log_action(db, "branches", "b-1", AuditAction.DELETE, {"name": "Gone"}, None, actor.id)

    assert entry is None
    assert "Error logging audit action DELETE on branches/b-1" in caplog.text


def test_get_audit_logs_newest_first_with_filters(db, actor):
    now = datetime.utcnow()
    db.add_all([
        _entry("branches", "INSERT", now - timedelta(minutes=3), actor.id, "b-1"),
        _entry("branches", "UPDATE", now - timedelta(minutes=2), actor.id, "b-1"),
        _entry("departments", "INSERT", now - timedelta(minutes=1), actor.id, "d-1"),
    ])
    db.commit()

    all_logs = get_audit_logs(db)
    assert [log.record_id for log in all_logs] == ["d-1", "b-1", "b-1"]
    assert [log.action for log in all_logs] == ["INSERT", "UPDATE", "INSERT"]

    branch_logs = get_audit_logs(db, table_name="branches")
    assert [log.action for log in branch_logs] == ["UPDATE", "INSERT"]

    inserts = get_audit_logs(db, table_name="branches", action="INSERT")
    assert len(inserts) == 1
    assert inserts[0].details == "INSERT on branches"

    assert len(get_audit_logs(db, limit=2)) == 2


def test_get_audit_logs_resolves_actor_email(db, actor):
    db.add(_entry("branches", "INSERT", datetime.utcnow(), actor.id))
    db.commit()

    [log] = get_audit_logs(db)

    assert log.performed_by == actor.id
    assert log.performed_by_email == "hannah.reyes@example.com"
    assert log.actor_resolution == ActorResolution.RESOLVED


def test_get_audit_logs_unknown_actor(db):
    db.add(_entry("branches", "INSERT", datetime.utcnow(), "deleted-user"))
    db.add(_entry("branches", "UPDATE", datetime.utcnow(), None))
    db.commit()

    logs = get_audit_logs(db)

    assert len(logs) == 2
    for log in logs:
        assert log.performed_by_email == UNKNOWN_ACTOR
        assert log.actor_resolution == ActorResolution.ACTOR_MISSING


def test_get_audit_logs_without_employees_relation(db, actor):
    """Entries are still returned, labelled Unknown"""
    actor_id = actor.id
    db.add(_entry("branches", "INSERT", datetime.utcnow(), actor_id))
    db.commit()
    drop_table(db, "employees")

    [log] = get_audit_logs(db)

    assert log.performed_by == actor_id
    assert log.performed_by_email == UNKNOWN_ACTOR
    assert log.actor_resolution == ActorResolution.RELATION_UNAVAILABLE


def test_get_audit_logs_downgrades_after_failed_join(db, actor):
    """A join that fails at runtime falls back to the basic shape and stays there"""
    db.add(_entry("branches", "INSERT", datetime.utcnow(), actor.id))
    db.commit()
    assert get_audit_logs(db)[0].actor_resolution == ActorResolution.RESOLVED

    drop_table(db, "employees")

    [log] = get_audit_logs(db)
    assert log.actor_resolution == ActorResolution.RELATION_UNAVAILABLE
    [log] = get_audit_logs(db)
    assert log.actor_resolution == ActorResolution.RELATION_UNAVAILABLE


def test_get_audit_logs_without_audit_table(db):
    drop_table(db, "audit_logs")
    assert get_audit_logs(db) == []


def test_get_audit_logs_transient_actor_lookup_error(db, actor, monkeypatch):
    """A one-off join failure labels that read only; the next read resolves again"""
    db.add(_entry("branches", "INSERT", datetime.utcnow(), actor.id))
    db.commit()
    fail_next_query(monkeypatch, db, entity_count=2)

    [log] = get_audit_logs(db)
    assert log.actor_resolution == ActorResolution.RELATION_UNAVAILABLE

    [log] = get_audit_logs(db)
    assert log.actor_resolution == ActorResolution.RESOLVED
    assert log.performed_by_email == "hannah.reyes@example.com"


def test_get_audit_logs_sees_table_created_later(db, engine, actor):
    """Entries written after the audit table is migrated are readable without a restart"""
    actor_id = actor.id
    drop_table(db, "audit_logs")
    assert get_audit_logs(db) == []

    Base.metadata.create_all(bind=engine)
    branch = organization_service.create_branch(db, BranchCreate(name="Sydney"), actor_id)

    [log] = get_audit_logs(db)
    assert log.action == "INSERT"
    assert log.record_id == branch.id
    assert log.performed_by == actor_id
