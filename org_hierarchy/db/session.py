"""
Database session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from org_hierarchy.core.config import settings
from org_hierarchy.db.base import Base
import org_hierarchy.models  # noqa: F401  (registers tables on Base.metadata)

connect_args = {}
if "sqlite" in settings.DATABASE_URL:
    # Hierarchy fetches run on worker threads
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=connect_args,
)

# Create all tables automatically on startup for SQLite
if "sqlite" in settings.DATABASE_URL:
    Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
