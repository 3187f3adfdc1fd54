"""
Parsing layer for load-balancer access and connection logs.

Turns raw log text into immutable, string-valued records using a
caller-selected schema.

Usage:
    from elb_log_analyzer.parsing import process_logs, LogProcessor

    records = process_logs(text, "access")

    result = LogProcessor("connection").process_file("conn.log.gz")
    print(result.parsed_lines, result.skipped_lines)
"""

from .base import (
    AccessLogRecord,
    ConnectionLogRecord,
    LogLineParser,
    LogRecord,
    LogSchema,
    record_type_for,
)
from .exceptions import (
    InvalidFieldError,
    LogParsingError,
    ParseError,
    UnknownSchemaError,
    UnterminatedQuoteError,
)
from .registry import SchemaRegistry, get_parser, list_schemas

# Import parsers (auto-register via decorator)
from .access import AccessLogParser, parse_access, split_request_line  # noqa: E402
from .connection import ConnectionLogParser, parse_connection  # noqa: E402
from .file_utils import open_log_file
from .processor import LogProcessor, ProcessingResult, iter_records, process_logs
from .tokenizer import (
    QuotedSegment,
    TokenCursor,
    find_quoted_segment,
    split_lines,
    tokenize,
)

__all__ = [
    # Data models
    "AccessLogRecord",
    "ConnectionLogRecord",
    "LogRecord",
    "LogSchema",
    "record_type_for",
    # Parsers
    "LogLineParser",
    "AccessLogParser",
    "ConnectionLogParser",
    "parse_access",
    "parse_connection",
    "split_request_line",
    # Registry
    "SchemaRegistry",
    "get_parser",
    "list_schemas",
    # Tokenizer
    "QuotedSegment",
    "TokenCursor",
    "find_quoted_segment",
    "split_lines",
    "tokenize",
    # Batch processing
    "LogProcessor",
    "ProcessingResult",
    "iter_records",
    "process_logs",
    # File utilities
    "open_log_file",
    # Exceptions
    "LogParsingError",
    "UnknownSchemaError",
    "ParseError",
    "UnterminatedQuoteError",
    "InvalidFieldError",
]
