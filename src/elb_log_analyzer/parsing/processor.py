"""
Batch processing of raw log text into records.

Applies the tokenizer and the schema's parser line by line, skipping
lines that cannot be parsed, and returns the parsed records in input
order. One bad line never aborts a batch; the counts on
ProcessingResult show how many lines were lost.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .base import LogRecord, LogSchema
from .exceptions import ParseError
from .file_utils import open_log_file
from .registry import get_parser
from .tokenizer import iter_numbered_lines

logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    """Result of processing one batch of log text."""

    schema: LogSchema
    records: list = field(default_factory=list)
    total_lines: int = 0

    @property
    def parsed_lines(self) -> int:
        """Number of lines that produced a record."""
        return len(self.records)

    @property
    def skipped_lines(self) -> int:
        """Number of non-blank lines that could not be parsed."""
        return self.total_lines - self.parsed_lines

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "schema": self.schema.value,
            "total_lines": self.total_lines,
            "parsed_lines": self.parsed_lines,
            "skipped_lines": self.skipped_lines,
            "records": [record.to_dict() for record in self.records],
        }


class LogProcessor:
    """
    Parses batches of log lines with one schema.

    The processor keeps no state between calls and can be reused.

    Example:
        processor = LogProcessor("access")
        result = processor.process(text)
        print(f"{result.parsed_lines} of {result.total_lines} lines parsed")
    """

    def __init__(self, schema: Union[LogSchema, str], strict: bool = False):
        """
        Initialize the processor.

        Args:
            schema: Schema selector ("access" or "connection")
            strict: If True, raise ParseError on the first unparseable
                line instead of skipping it

        Raises:
            UnknownSchemaError: If schema names no registered parser
        """
        self._parser = get_parser(schema)
        self.schema = self._parser.schema
        self.strict = strict

    def _parse_numbered(self, line_number: int, line: str) -> Optional[LogRecord]:
        record = self._parser.parse_line(line)
        if record is None:
            if self.strict:
                raise ParseError(
                    f"Failed to parse {self.schema.value} log line",
                    line_number=line_number,
                    line_content=line,
                )
            logger.debug(f"Skipping unparseable line {line_number}")
        return record

    def iter_records(self, lines: Iterable[str]) -> Iterator[LogRecord]:
        """
        Parse lines lazily, yielding records as they are produced.

        Blank lines are ignored. Suitable for inputs too large to hold
        as a single string.

        Args:
            lines: Raw lines (trailing newlines are tolerated)

        Yields:
            Parsed records in input order

        Raises:
            ParseError: In strict mode, for the first unparseable line
        """
        for line_number, line in iter_numbered_lines(lines):
            record = self._parse_numbered(line_number, line)
            if record is not None:
                yield record

    def _collect(self, raw_lines: Iterable[str]) -> ProcessingResult:
        result = ProcessingResult(schema=self.schema)
        for line_number, line in iter_numbered_lines(raw_lines):
            result.total_lines += 1
            record = self._parse_numbered(line_number, line)
            if record is not None:
                result.records.append(record)

        logger.info(
            f"Parsed {result.parsed_lines} of {result.total_lines} "
            f"{self.schema.value} log lines ({result.skipped_lines} skipped)"
        )
        return result

    def process(self, text: str) -> ProcessingResult:
        """
        Parse a block of log text.

        Args:
            text: Raw multi-line log text

        Returns:
            ProcessingResult with records in input order and line counts

        Raises:
            ParseError: In strict mode, for the first unparseable line
        """
        return self._collect(text.split("\n"))

    def process_file(
        self, file_path: Union[str, Path], encoding: str = "utf-8"
    ) -> ProcessingResult:
        """
        Parse a plain or gzip-compressed log file.

        Args:
            file_path: Path to the log file
            encoding: Text encoding (default: utf-8)

        Returns:
            ProcessingResult for the whole file

        Raises:
            FileNotFoundError: If the file doesn't exist
            ParseError: In strict mode, for the first unparseable line
        """
        logger.info(f"Parsing {self.schema.value} logs from file: {file_path}")
        with open_log_file(file_path, encoding=encoding) as f:
            return self._collect(f)


# =============================================================================
# Convenience Functions
# =============================================================================


def process_logs(text: str, schema: Union[LogSchema, str]) -> list[LogRecord]:
    """
    Parse log text with the selected schema.

    Unparseable lines are skipped silently; records keep input order and
    duplicates are preserved.

    Args:
        text: Raw multi-line log text
        schema: "access" or "connection" (or a LogSchema member)

    Returns:
        List of parsed records

    Raises:
        UnknownSchemaError: If schema is not a registered schema
    """
    return LogProcessor(schema).process(text).records


def iter_records(
    lines: Iterable[str], schema: Union[LogSchema, str], strict: bool = False
) -> Iterator[LogRecord]:
    """
    Parse lines lazily with the selected schema.

    The schema is resolved before the first line is read, so an unknown
    schema fails immediately rather than on first iteration.

    Raises:
        UnknownSchemaError: If schema is not a registered schema
    """
    return LogProcessor(schema, strict=strict).iter_records(lines)
