"""
Pytest configuration and shared fixtures for unit tests.
"""

from pathlib import Path

import pytest

from sample_lines import ACCESS_LINE, CONNECTION_LINE

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def access_line() -> str:
    """A canonical, fully populated access log line."""
    return ACCESS_LINE


@pytest.fixture
def connection_line() -> str:
    """A connection log line without a client certificate."""
    return CONNECTION_LINE


@pytest.fixture
def access_sample_path() -> Path:
    """Sample access log with one truncated line."""
    return FIXTURES_DIR / "access" / "sample.log"


@pytest.fixture
def connection_sample_path() -> Path:
    """Sample connection log with one blank and one truncated line."""
    return FIXTURES_DIR / "connection" / "sample.log"


@pytest.fixture
def register_parsers():
    """
    Fixture to ensure parsers are registered before tests that need them.

    Since SchemaRegistry.clear() may have been called, we explicitly
    re-register the parser classes.
    """
    from elb_log_analyzer.parsing import (
        AccessLogParser,
        ConnectionLogParser,
        SchemaRegistry,
    )

    if not SchemaRegistry.is_schema_registered("access"):
        SchemaRegistry.register_parser("access", AccessLogParser)
    if not SchemaRegistry.is_schema_registered("connection"):
        SchemaRegistry.register_parser("connection", ConnectionLogParser)
