"""
Filtering, grouping and statistics over parsed log records.
"""

from .filters import (
    apply_filters,
    filter_contains,
    filter_equals,
    filter_number_range,
    filter_timestamp_range,
    global_search,
)
from .grouping import group_records, groupable_fields, records_to_dataframe
from .statistics import (
    LatencyStats,
    LogStatistics,
    compute_latency_stats,
    compute_statistics,
    record_latency,
    top_client_ips,
)

__all__ = [
    # Filters
    "apply_filters",
    "filter_contains",
    "filter_equals",
    "filter_number_range",
    "filter_timestamp_range",
    "global_search",
    # Grouping
    "group_records",
    "groupable_fields",
    "records_to_dataframe",
    # Statistics
    "LatencyStats",
    "LogStatistics",
    "compute_latency_stats",
    "compute_statistics",
    "record_latency",
    "top_client_ips",
]
