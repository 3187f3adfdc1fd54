"""
Constants for load-balancer log schemas and field layouts.
"""

# =============================================================================
# Schema Selectors
# =============================================================================

SCHEMA_ACCESS = "access"
SCHEMA_CONNECTION = "connection"

# Lines with fewer tokens than this are skipped outright
MIN_TOKENS_ACCESS = 15
MIN_TOKENS_CONNECTION = 10

# Canonical layout tags. Lines are never matched against older dialects.
ACCESS_LAYOUT_VERSION = "alb-access-v2"
CONNECTION_LAYOUT_VERSION = "alb-connection-v1"

# Literal "field not applicable" token
ABSENT_SENTINEL = "-"

# =============================================================================
# Access Log Layout (0-indexed; AWS docs are 1-indexed)
# =============================================================================

# Fixed block at the start of every access log line
ACCESS_FIXED_POSITIONS = {
    "protocol": 0,
    "timestamp": 1,
    "elb": 2,
    "client_address": 3,
    "target_address": 4,
    "request_processing_time": 5,
    "target_processing_time": 6,
    "response_processing_time": 7,
    "status_code": 8,
    "target_status_code": 9,
    "request_size": 10,
    "response_size": 11,
}

# Search for the quoted request starts where the fixed block ends
ACCESS_REQUEST_SEARCH_START = 12

# Offsets from the end of the quoted user agent
ACCESS_TRAILING_OFFSETS = {
    "tls_cipher": 0,
    "tls_protocol": 1,
    "target_group_arn": 2,
    "trace_id": 3,
    "domain_name": 4,
    "chosen_cert_arn": 5,
    "matched_rule_priority": 6,
    "request_creation_time": 7,
    "actions_executed": 8,
    "redirect_url": 9,
    "error_reason": 10,
    "target_port_list": 11,
    "target_status_code_list": 12,
    "classification": 13,
    "classification_reason": 14,
    "conn_trace_id": 15,
}

# =============================================================================
# Connection Log Layout
# =============================================================================

CONNECTION_POSITIONS = {
    "timestamp": 0,
    "client_ip": 1,
    "client_port": 2,
    "listener_port": 3,
    "tls_protocol": 4,
    "tls_cipher": 5,
    "tls_handshake_latency": 6,
    "leaf_client_cert_subject": 7,
    "leaf_client_cert_validity": 8,
    "leaf_client_cert_serial_number": 9,
    "tls_verify_status": 10,
    "conn_trace_id": 11,
}

# =============================================================================
# Analysis
# =============================================================================

# Columns offered for grouping, per schema
GROUPABLE_FIELDS = {
    SCHEMA_ACCESS: ("protocol", "method", "status_code", "tls_protocol"),
    SCHEMA_CONNECTION: (
        "client_ip",
        "listener_port",
        "tls_protocol",
        "tls_cipher",
        "tls_verify_status",
    ),
}

# Number of client IPs reported by the statistics summary
DEFAULT_TOP_CLIENT_IPS = 5

# Percentiles reported for latency statistics
LATENCY_PERCENTILES = (50, 75, 90, 95, 99)

# Processing time value written by the load balancer when a target
# could not be reached
PROCESSING_TIME_UNAVAILABLE = "-1"
