"""Shared utilities for the backend."""
from utils.logging import setup_logging
from utils.timestamps import ensure_utc, isoformat, utc_now, utc_today

__all__ = [
    "ensure_utc",
    "isoformat",
    "setup_logging",
    "utc_now",
    "utc_today",
]
