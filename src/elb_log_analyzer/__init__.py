"""
ELB log analyzer.

Parses AWS load-balancer access and connection logs into normalized
records and provides filtering, grouping and statistics over them.
"""

from .parsing import (
    AccessLogRecord,
    ConnectionLogRecord,
    LogProcessor,
    LogRecord,
    LogSchema,
    ProcessingResult,
    iter_records,
    parse_access,
    parse_connection,
    process_logs,
)

__version__ = "0.1.0"

__all__ = [
    "AccessLogRecord",
    "ConnectionLogRecord",
    "LogProcessor",
    "LogRecord",
    "LogSchema",
    "ProcessingResult",
    "iter_records",
    "parse_access",
    "parse_connection",
    "process_logs",
]
