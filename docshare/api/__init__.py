"""HTTP API (FastAPI routers, dependencies)."""
