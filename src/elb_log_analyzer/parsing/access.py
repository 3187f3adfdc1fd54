"""
Access log parser for HTTP request-level load-balancer logs.

Field Mapping (0-indexed tokens, canonical layout ``alb-access-v2``):
    Tokens 0-11 (fixed)              -> protocol .. response_size
    First quoted field from token 12 -> request (method, url, http_version)
    Next quoted field                -> user_agent
    Offsets +0..+15 after user_agent -> tls_cipher .. conn_trace_id

The request and user agent may contain spaces, so everything after them
is addressed relative to where the user agent ended rather than by
absolute position.
"""

import logging
from typing import Optional

from ..config.constants import (
    ACCESS_FIXED_POSITIONS,
    ACCESS_REQUEST_SEARCH_START,
    ACCESS_TRAILING_OFFSETS,
    MIN_TOKENS_ACCESS,
)
from .base import AccessLogRecord, LogLineParser, LogSchema
from .exceptions import UnterminatedQuoteError
from .registry import SchemaRegistry
from .tokenizer import TokenCursor, tokenize, unquote

logger = logging.getLogger(__name__)


def split_request_line(request: str) -> tuple[str, str, str]:
    """
    Split a request line into method, URL and HTTP version.

    Format: "METHOD URL HTTP/VERSION"
    Example: "GET https://example.com:443/api/data?key=value HTTP/1.1"

    When the line has more than three parts the URL itself contained
    spaces: the first part is the method, the last the version, and
    everything in between is the URL. Missing parts are empty strings.

    Args:
        request: Reassembled request field

    Returns:
        Tuple of (method, url, http_version)
    """
    if not request:
        return ("", "", "")

    parts = request.split(" ")
    if len(parts) == 1:
        return (parts[0], "", "")
    if len(parts) == 2:
        return (parts[0], parts[1], "")
    return (parts[0], " ".join(parts[1:-1]), parts[-1])


@SchemaRegistry.register(LogSchema.ACCESS)
class AccessLogParser(LogLineParser):
    """
    Parser for load-balancer HTTP access logs.

    Example:
        parser = AccessLogParser()
        record = parser.parse_line(line)
        if record is not None:
            print(record.method, record.url, record.status_code)
    """

    @property
    def schema(self) -> LogSchema:
        """Return the schema handled by this parser."""
        return LogSchema.ACCESS

    @property
    def min_token_count(self) -> int:
        """Return the minimum token count of a parseable access line."""
        return MIN_TOKENS_ACCESS

    def parse_line(self, line: str) -> Optional[AccessLogRecord]:
        """
        Parse a single access log line.

        Args:
            line: Raw access log line

        Returns:
            AccessLogRecord or None if line is invalid/malformed
        """
        tokens = tokenize(line)

        # Validate minimum token count
        if len(tokens) < self.min_token_count:
            logger.debug(
                f"Line has {len(tokens)} tokens, expected at least {self.min_token_count}"
            )
            return None

        fixed = {
            name: tokens[index] for name, index in ACCESS_FIXED_POSITIONS.items()
        }

        cursor = TokenCursor(tokens, position=ACCESS_REQUEST_SEARCH_START)
        try:
            request = cursor.take_quoted()
            user_agent = cursor.take_quoted()
        except UnterminatedQuoteError as e:
            logger.debug(f"Skipping access line: {e}")
            return None

        method, url, http_version = split_request_line(request)

        trailing = {
            name: unquote(cursor.field_at(offset))
            for name, offset in ACCESS_TRAILING_OFFSETS.items()
        }

        return AccessLogRecord(
            **fixed,
            request=request,
            method=method,
            url=url,
            http_version=http_version,
            user_agent=user_agent,
            **trailing,
            raw_log=line,
        )


_default_parser = AccessLogParser()


def parse_access(line: str) -> Optional[AccessLogRecord]:
    """
    Parse one access log line.

    Returns:
        AccessLogRecord, or None if the line is too short or malformed
    """
    return _default_parser.parse_line(line)
