"""Utility functions for ELB log analysis."""

from .http_utils import get_status_category, parse_status_code, strip_port
from .logging_utils import setup_logging

__all__ = [
    # HTTP utilities
    "get_status_category",
    "parse_status_code",
    "strip_port",
    # Logging
    "setup_logging",
]
