"""Application use cases (orchestration over repositories and services)."""
