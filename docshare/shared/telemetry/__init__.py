"""Telemetry: logging configuration."""

from docshare.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
