"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "local")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from org_hierarchy.main import app
from org_hierarchy.db.base import Base
from org_hierarchy.core.deps import get_db, get_session_factory
from org_hierarchy.core.security import create_access_token
from org_hierarchy.models import Branch, Department, Employee, Role
from org_hierarchy.services.store_capabilities import reset_capabilities


@pytest.fixture(scope="function")
def engine(tmp_path):
    """
    Fresh file-backed SQLite database per test

    File-backed rather than in-memory so the concurrent hierarchy fetches
    each get their own connection.
    """
    eng = create_engine(
        f"sqlite:///{tmp_path / 'org_hierarchy.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=eng)
    reset_capabilities()
    yield eng
    reset_capabilities()
    eng.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Database session for a test"""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db, session_factory):
    """Test client fixture with database override"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def actor(db):
    """HR user performing the changes under test"""
    hr = Employee(
        first_name="Hannah",
        last_name="Reyes",
        email="hannah.reyes@example.com",
        role=Role.EMPLOYEE.value,
        system_access_role="HR",
    )
    db.add(hr)
    db.commit()
    db.refresh(hr)
    return hr


@pytest.fixture
def auth_headers(actor):
    token = create_access_token({"sub": actor.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def org(db):
    """
    Sydney -> Engineering -> Maya Chen, plus Melbourne -> Finance with no managers
    """
    sydney = Branch(name="Sydney", address="1 George St", contact_number="02 9000 0000")
    melbourne = Branch(name="Melbourne")
    db.add_all([sydney, melbourne])
    db.commit()

    engineering = Department(name="Engineering", branch_id=sydney.id, location="Level 3")
    finance = Department(name="Finance", branch_id=melbourne.id)
    db.add_all([engineering, finance])
    db.commit()

    maya = Employee(
        first_name="Maya",
        last_name="Chen",
        email="maya.chen@example.com",
        role=Role.MANAGER.value,
        department_id=engineering.id,
    )
    db.add(maya)
    db.commit()

    engineering.manager_id = maya.id
    db.commit()

    return {
        "sydney": sydney,
        "melbourne": melbourne,
        "engineering": engineering,
        "finance": finance,
        "maya": maya,
    }
