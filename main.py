# FastAPI application entry point
# Re-exports the app from the org_hierarchy package so uvicorn can run from the root directory:
#   uvicorn main:app --host 0.0.0.0 --port 8001

from org_hierarchy.main import app  # noqa: F401
