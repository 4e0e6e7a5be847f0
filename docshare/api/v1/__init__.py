"""API v1: router aggregation."""

from docshare.api.v1.router import api_router

__all__ = ["api_router"]
