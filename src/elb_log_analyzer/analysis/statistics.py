"""
Summary statistics over parsed records.

Provides status-class counts, the most frequent client IPs, and latency
percentiles for a result set.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import numpy as np

from ..config.constants import (
    DEFAULT_TOP_CLIENT_IPS,
    LATENCY_PERCENTILES,
    PROCESSING_TIME_UNAVAILABLE,
)
from ..parsing.base import AccessLogRecord, ConnectionLogRecord, LogRecord, LogSchema
from ..utils.http_utils import (
    STATUS_CLIENT_ERROR,
    STATUS_REDIRECT,
    STATUS_SERVER_ERROR,
    STATUS_SUCCESS,
    get_status_category,
    parse_status_code,
    strip_port,
)

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


@dataclass
class LatencyStats:
    """Statistics for request or handshake latencies, in seconds."""

    count: int
    mean: float
    median: float
    minimum: float
    maximum: float
    percentiles: dict[str, float]  # p50, p75, p90, p95, p99

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "count": self.count,
            "mean": self.mean,
            "median": self.median,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "percentiles": dict(self.percentiles),
        }


@dataclass
class LogStatistics:
    """Summary of a result set."""

    total: int = 0
    success: int = 0
    redirection: int = 0
    client_error: int = 0
    server_error: int = 0
    top_client_ips: list[tuple[str, int]] = field(default_factory=list)
    latency: Optional[LatencyStats] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "total": self.total,
            "success": self.success,
            "redirection": self.redirection,
            "client_error": self.client_error,
            "server_error": self.server_error,
            "top_client_ips": [
                {"ip": ip, "count": count} for ip, count in self.top_client_ips
            ],
            "latency": self.latency.to_dict() if self.latency else None,
        }


def _to_float(value: str) -> Optional[float]:
    if not value or value in ("-", PROCESSING_TIME_UNAVAILABLE):
        return None
    try:
        return float(value)
    except ValueError:
        return None


def record_latency(record: LogRecord) -> Optional[float]:
    """
    Latency of one record in seconds.

    Access records sum the request, target and response processing times,
    ignoring parts logged as -1 (no response from the target).
    Connection records use the TLS handshake latency.

    Returns:
        Latency in seconds, or None if the record has no usable value
    """
    if isinstance(record, ConnectionLogRecord):
        return _to_float(record.tls_handshake_latency)

    parts = [
        _to_float(record.request_processing_time),
        _to_float(record.target_processing_time),
        _to_float(record.response_processing_time),
    ]
    usable = [part for part in parts if part is not None]
    if not usable:
        return None
    return sum(usable)


def compute_latency_stats(latencies: Sequence[float]) -> Optional[LatencyStats]:
    """
    Compute latency statistics.

    Args:
        latencies: Latency values in seconds

    Returns:
        LatencyStats, or None if there are no values
    """
    if len(latencies) == 0:
        return None

    values = np.asarray(latencies, dtype=float)
    percentiles = {
        f"p{p}": float(np.percentile(values, p)) for p in LATENCY_PERCENTILES
    }

    return LatencyStats(
        count=int(values.size),
        mean=float(np.mean(values)),
        median=float(np.median(values)),
        minimum=float(np.min(values)),
        maximum=float(np.max(values)),
        percentiles=percentiles,
    )


def client_ip_of(record: LogRecord) -> str:
    """Client IP of a record without the port, or "unknown"."""
    if isinstance(record, AccessLogRecord):
        ip = strip_port(record.client_address)
    else:
        ip = record.client_ip
    return ip or UNKNOWN_CLIENT


def top_client_ips(
    records: Sequence[LogRecord], top_n: int = DEFAULT_TOP_CLIENT_IPS
) -> list[tuple[str, int]]:
    """
    Most frequent client IPs.

    Returns:
        Up to top_n (ip, count) pairs, most frequent first; ties keep
        the order in which the IPs first appear
    """
    counts = Counter(client_ip_of(record) for record in records)
    return counts.most_common(top_n)


def compute_statistics(
    records: Sequence[LogRecord],
    schema: Union[LogSchema, str],
    top_n: int = DEFAULT_TOP_CLIENT_IPS,
) -> LogStatistics:
    """
    Summarize a result set.

    Status classes are counted from ``status_code`` for access records;
    connection records carry no HTTP status and report zeros.

    Args:
        records: Parsed records
        schema: Schema of the records
        top_n: Number of client IPs to report

    Returns:
        LogStatistics
    """
    schema = LogSchema.parse(schema)
    stats = LogStatistics(total=len(records))

    if schema is LogSchema.ACCESS:
        categories = Counter(
            get_status_category(parse_status_code(record.status_code))
            for record in records
        )
        stats.success = categories[STATUS_SUCCESS]
        stats.redirection = categories[STATUS_REDIRECT]
        stats.client_error = categories[STATUS_CLIENT_ERROR]
        stats.server_error = categories[STATUS_SERVER_ERROR]

    stats.top_client_ips = top_client_ips(records, top_n)

    latencies = [
        latency
        for latency in (record_latency(record) for record in records)
        if latency is not None
    ]
    stats.latency = compute_latency_stats(latencies)

    logger.debug(f"Computed statistics for {stats.total} {schema.value} records")
    return stats
