"""
Unit tests for DataFrame conversion and grouping.
"""

import pytest

from elb_log_analyzer.analysis import group_records, groupable_fields, records_to_dataframe
from elb_log_analyzer.parsing import (
    AccessLogRecord,
    ConnectionLogRecord,
    InvalidFieldError,
    process_logs,
)
from sample_lines import make_access_line, make_connection_line

pytestmark = pytest.mark.usefixtures("register_parsers")


@pytest.fixture
def access_records():
    lines = [
        make_access_line(status="200"),
        make_access_line(status="404", request="POST /form HTTP/1.1"),
        make_access_line(status="200"),
        make_access_line(status="500", request="POST /form HTTP/1.1"),
        make_access_line(status="200", protocol="h2"),
    ]
    return process_logs("\n".join(lines), "access")


class TestRecordsToDataFrame:
    """Tests for records_to_dataframe."""

    def test_columns_in_field_order(self, access_records):
        df = records_to_dataframe(access_records)

        assert list(df.columns) == AccessLogRecord.field_names()
        assert len(df) == 5
        assert df.iloc[1]["method"] == "POST"

    def test_empty_with_schema(self):
        df = records_to_dataframe([], "connection")

        assert df.empty
        assert list(df.columns) == ConnectionLogRecord.field_names()

    def test_empty_without_schema(self):
        assert records_to_dataframe([]).empty


class TestGroupRecords:
    """Tests for group_records."""

    def test_single_level(self, access_records):
        grouped = group_records(access_records, ["method"], "access")

        assert list(grouped.columns) == ["method", "count"]
        assert grouped.to_dict(orient="records") == [
            {"method": "GET", "count": 3},
            {"method": "POST", "count": 2},
        ]

    def test_nested_levels_in_order(self, access_records):
        grouped = group_records(access_records, ["method", "status_code"], "access")

        assert list(grouped.columns) == ["method", "status_code", "count"]
        rows = [tuple(row) for row in grouped.itertuples(index=False)]
        assert rows == [
            ("GET", "200", 3),
            ("POST", "404", 1),
            ("POST", "500", 1),
        ]

    def test_counts_sum_to_total(self, access_records):
        grouped = group_records(access_records, ["protocol", "tls_protocol"], "access")
        assert grouped["count"].sum() == len(access_records)

    def test_duplicate_fields_collapsed(self, access_records):
        grouped = group_records(access_records, ["method", "method"], "access")
        assert list(grouped.columns) == ["method", "count"]

    def test_connection_fields(self):
        records = process_logs(
            "\n".join(
                [
                    make_connection_line(verify_status="Success"),
                    make_connection_line(verify_status="Failed:UnmappedConnectionError"),
                    make_connection_line(verify_status="Success"),
                ]
            ),
            "connection",
        )
        grouped = group_records(records, ["tls_verify_status"], "connection")

        assert dict(zip(grouped["tls_verify_status"], grouped["count"])) == {
            "Failed:UnmappedConnectionError": 1,
            "Success": 2,
        }

    def test_empty_records(self):
        grouped = group_records([], ["method"], "access")

        assert grouped.empty
        assert list(grouped.columns) == ["method", "count"]

    def test_non_groupable_field(self, access_records):
        with pytest.raises(InvalidFieldError) as exc_info:
            group_records(access_records, ["url"], "access")

        assert exc_info.value.field == "url"

    def test_field_of_other_schema(self, access_records):
        with pytest.raises(InvalidFieldError):
            group_records(access_records, ["tls_verify_status"], "access")

    def test_empty_by(self, access_records):
        with pytest.raises(InvalidFieldError):
            group_records(access_records, [], "access")

    def test_groupable_fields(self):
        assert groupable_fields("access") == (
            "protocol",
            "method",
            "status_code",
            "tls_protocol",
        )
        assert "client_ip" in groupable_fields("connection")
