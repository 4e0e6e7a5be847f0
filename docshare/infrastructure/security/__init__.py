"""Security adapters (JWT)."""
