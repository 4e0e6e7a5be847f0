"""Shared utilities: datetime and id generators."""

from docshare.shared.utils.datetime import ensure_utc, utc_now
from docshare.shared.utils.generators import generate_cuid

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
