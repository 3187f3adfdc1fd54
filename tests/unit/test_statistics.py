"""
Unit tests for summary statistics.
"""

import pytest

from elb_log_analyzer.analysis import (
    LogStatistics,
    compute_latency_stats,
    compute_statistics,
    record_latency,
    top_client_ips,
)
from elb_log_analyzer.parsing import (
    AccessLogRecord,
    ConnectionLogRecord,
    LogProcessor,
    process_logs,
)
from sample_lines import make_access_line, make_connection_line

pytestmark = pytest.mark.usefixtures("register_parsers")


class TestComputeStatistics:
    """Tests for compute_statistics."""

    def test_access_sample(self, access_sample_path):
        records = LogProcessor("access").process_file(access_sample_path).records
        stats = compute_statistics(records, "access")

        assert stats.total == 3
        assert stats.success == 1
        assert stats.redirection == 0
        assert stats.client_error == 1
        assert stats.server_error == 1
        assert stats.top_client_ips == [("192.168.131.39", 2), ("10.0.5.7", 1)]
        # The 502 line has no target response and no latency
        assert stats.latency.count == 2
        assert stats.latency.maximum == pytest.approx(0.171)
        assert stats.latency.minimum == pytest.approx(0.021)

    def test_status_classes(self):
        text = "\n".join(
            make_access_line(status=status)
            for status in ["200", "201", "301", "404", "460", "503"]
        )
        stats = compute_statistics(process_logs(text, "access"), "access")

        assert (stats.success, stats.redirection) == (2, 1)
        assert (stats.client_error, stats.server_error) == (2, 1)

    def test_connection_has_no_status_counts(self, connection_sample_path):
        records = LogProcessor("connection").process_file(connection_sample_path).records
        stats = compute_statistics(records, "connection")

        assert stats.total == 3
        assert stats.success == stats.server_error == 0
        assert stats.top_client_ips[0] == ("192.168.131.39", 2)
        assert stats.latency.count == 2

    def test_empty(self):
        stats = compute_statistics([], "access")

        assert stats == LogStatistics()
        assert stats.latency is None

    def test_to_dict(self):
        records = process_logs(make_access_line(client="1.2.3.4:80"), "access")
        data = compute_statistics(records, "access").to_dict()

        assert data["total"] == 1
        assert data["top_client_ips"] == [{"ip": "1.2.3.4", "count": 1}]
        assert set(data["latency"]["percentiles"]) == {"p50", "p75", "p90", "p95", "p99"}


class TestTopClientIps:
    """Tests for top_client_ips."""

    def test_limit_and_order(self):
        records = [
            ConnectionLogRecord(client_ip=ip)
            for ip in ["a", "b", "b", "c", "c", "c", "d", "e", "f", "g"]
        ]
        top = top_client_ips(records, top_n=3)
        assert top == [("c", 3), ("b", 2), ("a", 1)]

    def test_ties_keep_first_seen_order(self):
        records = [ConnectionLogRecord(client_ip=ip) for ip in ["x", "y", "y", "x", "z"]]
        assert top_client_ips(records) == [("x", 2), ("y", 2), ("z", 1)]

    def test_port_stripped_for_access(self):
        records = [
            AccessLogRecord(client_address="10.0.0.1:1000"),
            AccessLogRecord(client_address="10.0.0.1:2000"),
            AccessLogRecord(client_address="[2001:db8::1]:443"),
        ]
        assert top_client_ips(records) == [("10.0.0.1", 2), ("2001:db8::1", 1)]

    def test_unbracketed_ipv6_clients_stay_distinct(self):
        records = [
            AccessLogRecord(client_address="2001:db8::1:443"),
            AccessLogRecord(client_address="2001:db8::2:443"),
            AccessLogRecord(client_address="2001:db8::2:8443"),
        ]
        assert top_client_ips(records) == [("2001:db8::2", 2), ("2001:db8::1", 1)]

    def test_unknown_for_empty_address(self):
        records = [AccessLogRecord(client_address=""), ConnectionLogRecord()]
        assert top_client_ips(records) == [("unknown", 2)]


class TestLatency:
    """Tests for latency extraction and statistics."""

    def test_access_latency_sums_processing_times(self):
        record = AccessLogRecord(
            request_processing_time="0.001",
            target_processing_time="0.010",
            response_processing_time="0.002",
        )
        assert record_latency(record) == pytest.approx(0.013)

    def test_access_latency_ignores_unavailable_parts(self):
        record = AccessLogRecord(
            request_processing_time="0.001",
            target_processing_time="-1",
            response_processing_time="-1",
        )
        assert record_latency(record) == pytest.approx(0.001)

    def test_access_latency_all_unavailable(self):
        record = AccessLogRecord(
            request_processing_time="-1",
            target_processing_time="-1",
            response_processing_time="-1",
        )
        assert record_latency(record) is None

    def test_connection_latency(self):
        assert record_latency(ConnectionLogRecord(tls_handshake_latency="0.25")) == 0.25
        assert record_latency(ConnectionLogRecord(tls_handshake_latency="")) is None

    def test_latency_stats(self):
        stats = compute_latency_stats([0.1, 0.2, 0.3, 0.4])

        assert stats.count == 4
        assert stats.mean == pytest.approx(0.25)
        assert stats.median == pytest.approx(0.25)
        assert stats.minimum == pytest.approx(0.1)
        assert stats.maximum == pytest.approx(0.4)
        assert stats.percentiles["p50"] == pytest.approx(0.25)
        assert stats.percentiles["p99"] <= 0.4

    def test_latency_stats_empty(self):
        assert compute_latency_stats([]) is None

    def test_connection_statistics_from_lines(self):
        records = process_logs(
            "\n".join(
                [
                    make_connection_line(latency="0.010"),
                    make_connection_line(latency="-"),
                    make_connection_line(latency="0.030"),
                ]
            ),
            "connection",
        )
        stats = compute_statistics(records, "connection")

        assert stats.latency.count == 2
        assert stats.latency.mean == pytest.approx(0.020)
