"""
Abstract base class and data models for log line parsers.

Provides the schema selector, the two normalized record types, and the
interface every schema-specific parser implements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from ..config.constants import (
    ACCESS_LAYOUT_VERSION,
    CONNECTION_LAYOUT_VERSION,
    SCHEMA_ACCESS,
    SCHEMA_CONNECTION,
)
from ..utils.http_utils import strip_port
from .exceptions import UnknownSchemaError


class LogSchema(str, Enum):
    """Schema selector choosing which record shape and parser to apply."""

    ACCESS = SCHEMA_ACCESS
    CONNECTION = SCHEMA_CONNECTION

    @classmethod
    def parse(cls, value: Union["LogSchema", str]) -> "LogSchema":
        """
        Resolve a schema selector.

        Args:
            value: A LogSchema member or its name (case-insensitive)

        Returns:
            The matching LogSchema member

        Raises:
            UnknownSchemaError: If the value names no schema
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise UnknownSchemaError(
            schema=value,
            available_schemas=[member.value for member in cls],
        )


class _RecordMixin:
    """Serialization helpers shared by both record types."""

    @classmethod
    def field_names(cls) -> list[str]:
        """Return all field names in declaration order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def display_field_names(cls) -> list[str]:
        """Return field names shown to users (everything but raw_log)."""
        return [name for name in cls.field_names() if name != "raw_log"]

    def to_dict(self) -> dict[str, str]:
        """
        Convert to dictionary representation.

        Returns:
            Dictionary of field name to string value, in declaration order
        """
        return {name: getattr(self, name) for name in self.field_names()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        """
        Create a record from a dictionary.

        Unknown keys are ignored and missing keys default to empty string,
        so records stored by an older layout still load.

        Args:
            data: Dictionary with record fields

        Returns:
            Record instance
        """
        values = {}
        for name in cls.field_names():
            value = data.get(name)
            values[name] = "" if value is None else str(value)
        return cls(**values)


@dataclass(frozen=True)
class AccessLogRecord(_RecordMixin):
    """
    Normalized HTTP access log entry.

    Every field is a string; fields absent from the source line are empty
    strings. Client and target addresses keep the literal ``ip:port`` form.

    Fixed block (token positions):
        protocol (0), timestamp (1), elb (2), client_address (3),
        target_address (4), processing times (5-7), status_code (8),
        target_status_code (9), request_size (10), response_size (11)

    Quoted fields (variable positions):
        request (split into method, url, http_version), user_agent

    Trailing block (offsets from the end of the user agent):
        tls_cipher through conn_trace_id
    """

    SCHEMA: ClassVar[str] = SCHEMA_ACCESS
    LAYOUT_VERSION: ClassVar[str] = ACCESS_LAYOUT_VERSION

    protocol: str = ""
    timestamp: str = ""
    elb: str = ""
    client_address: str = ""
    target_address: str = ""
    request_processing_time: str = ""
    target_processing_time: str = ""
    response_processing_time: str = ""
    status_code: str = ""
    target_status_code: str = ""
    request_size: str = ""
    response_size: str = ""
    request: str = ""
    method: str = ""
    url: str = ""
    http_version: str = ""
    user_agent: str = ""
    tls_cipher: str = ""
    tls_protocol: str = ""
    target_group_arn: str = ""
    trace_id: str = ""
    domain_name: str = ""
    chosen_cert_arn: str = ""
    matched_rule_priority: str = ""
    request_creation_time: str = ""
    actions_executed: str = ""
    redirect_url: str = ""
    error_reason: str = ""
    target_port_list: str = ""
    target_status_code_list: str = ""
    classification: str = ""
    classification_reason: str = ""
    conn_trace_id: str = ""
    raw_log: str = ""

    @property
    def client_ip(self) -> str:
        """Client address without the port."""
        return strip_port(self.client_address)


@dataclass(frozen=True)
class ConnectionLogRecord(_RecordMixin):
    """
    Normalized TLS connection log entry.

    The ``-`` sentinel is normalized to empty string for every field.
    ``elb`` is always empty: connection logs carry no load balancer id.
    """

    SCHEMA: ClassVar[str] = SCHEMA_CONNECTION
    LAYOUT_VERSION: ClassVar[str] = CONNECTION_LAYOUT_VERSION

    timestamp: str = ""
    client_ip: str = ""
    client_port: str = ""
    listener_port: str = ""
    tls_protocol: str = ""
    tls_cipher: str = ""
    tls_handshake_latency: str = ""
    leaf_client_cert_subject: str = ""
    leaf_client_cert_validity: str = ""
    leaf_client_cert_serial_number: str = ""
    tls_verify_status: str = ""
    conn_trace_id: str = ""
    elb: str = ""
    raw_log: str = ""


LogRecord = Union[AccessLogRecord, ConnectionLogRecord]

RECORD_TYPES: dict[LogSchema, type] = {
    LogSchema.ACCESS: AccessLogRecord,
    LogSchema.CONNECTION: ConnectionLogRecord,
}


def record_type_for(schema: Union[LogSchema, str]) -> type:
    """Return the record class produced for a schema."""
    return RECORD_TYPES[LogSchema.parse(schema)]


class LogLineParser(ABC):
    """
    Abstract base class for schema-specific line parsers.

    Each parser maps one non-blank log line to a record of its schema,
    or returns None when the line cannot be parsed. Parsers hold no
    state between calls.

    Subclasses must implement:
        - schema: Property returning the LogSchema handled
        - min_token_count: Property returning the minimum token count
        - parse_line(): Map one line to a record or None

    Example Implementation:
        @SchemaRegistry.register(LogSchema.ACCESS)
        class AccessLogParser(LogLineParser):
            @property
            def schema(self) -> LogSchema:
                return LogSchema.ACCESS

            @property
            def min_token_count(self) -> int:
                return 15

            def parse_line(self, line):
                ...
    """

    @property
    @abstractmethod
    def schema(self) -> LogSchema:
        """
        Return the schema handled by this parser.

        Returns:
            LogSchema member
        """
        pass

    @property
    @abstractmethod
    def min_token_count(self) -> int:
        """
        Return the minimum number of tokens a parseable line must have.

        Returns:
            Token count threshold
        """
        pass

    @abstractmethod
    def parse_line(self, line: str) -> Optional[LogRecord]:
        """
        Parse a single log line.

        Must never raise for malformed input.

        Args:
            line: One non-blank log line

        Returns:
            A record of this parser's schema, or None if the line is invalid
        """
        pass

    @property
    def record_type(self) -> type:
        """Record class produced by this parser."""
        return RECORD_TYPES[self.schema]
