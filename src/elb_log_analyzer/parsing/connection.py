"""
Connection log parser for TLS handshake-level load-balancer logs.

Field Mapping (0-indexed tokens, canonical layout ``alb-connection-v1``):
    0 timestamp, 1 client_ip, 2 client_port, 3 listener_port,
    4 tls_protocol, 5 tls_cipher, 6 tls_handshake_latency,
    7 leaf_client_cert_subject, 8 leaf_client_cert_validity,
    9 leaf_client_cert_serial_number, 10 tls_verify_status (optional),
    11 conn_trace_id (optional)
"""

import logging
from typing import Optional

from ..config.constants import (
    ABSENT_SENTINEL,
    CONNECTION_POSITIONS,
    MIN_TOKENS_CONNECTION,
)
from .base import ConnectionLogRecord, LogLineParser, LogSchema
from .registry import SchemaRegistry
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def normalize_sentinel(value: str) -> str:
    """Map the ``-`` "not applicable" token to empty string."""
    return "" if value == ABSENT_SENTINEL else value


@SchemaRegistry.register(LogSchema.CONNECTION)
class ConnectionLogParser(LogLineParser):
    """Parser for load-balancer TLS connection logs."""

    @property
    def schema(self) -> LogSchema:
        """Return the schema handled by this parser."""
        return LogSchema.CONNECTION

    @property
    def min_token_count(self) -> int:
        """Return the minimum token count of a parseable connection line."""
        return MIN_TOKENS_CONNECTION

    def parse_line(self, line: str) -> Optional[ConnectionLogRecord]:
        """
        Parse a single connection log line.

        Args:
            line: Raw connection log line

        Returns:
            ConnectionLogRecord or None if line is too short
        """
        tokens = tokenize(line)

        if len(tokens) < self.min_token_count:
            logger.debug(
                f"Line has {len(tokens)} tokens, expected at least {self.min_token_count}"
            )
            return None

        values = {}
        for name, index in CONNECTION_POSITIONS.items():
            token = tokens[index] if index < len(tokens) else ""
            values[name] = normalize_sentinel(token)

        return ConnectionLogRecord(**values, elb="", raw_log=line)


_default_parser = ConnectionLogParser()


def parse_connection(line: str) -> Optional[ConnectionLogRecord]:
    """
    Parse one connection log line.

    Returns:
        ConnectionLogRecord, or None if the line is too short
    """
    return _default_parser.parse_line(line)
