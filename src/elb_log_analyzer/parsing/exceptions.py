"""
Custom exceptions for the parsing module.

Provides specialized exception classes for the error conditions that can
occur while selecting a schema, parsing log lines, and querying records.
"""


class LogParsingError(Exception):
    """
    Base exception for all parsing-related errors.

    All other exceptions in this package inherit from this class,
    allowing for broad exception catching when needed.
    """

    pass


class UnknownSchemaError(LogParsingError, ValueError):
    """
    Raised when a schema selector does not name a registered schema.

    There is no default schema: callers must pick one explicitly.

    Attributes:
        schema: The selector that was supplied
        available_schemas: List of registered schema names
    """

    def __init__(
        self,
        schema: object,
        available_schemas: list[str] | None = None,
    ):
        self.schema = schema
        self.available_schemas = available_schemas or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with the available schemas."""
        if self.available_schemas:
            available = ", ".join(sorted(self.available_schemas))
            return f"Unknown schema: {self.schema!r}. Available schemas: {available}"
        return f"Unknown schema: {self.schema!r}. No schemas registered."


class ParseError(LogParsingError):
    """
    Raised when a log line cannot be parsed.

    Only surfaced in strict mode; the default batch policy skips such
    lines silently.

    Attributes:
        line_number: The line number where parsing failed (optional)
        line_content: The content of the problematic line (optional)
        message: Detailed error message
    """

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        line_content: str | None = None,
    ):
        self.line_number = line_number
        self.line_content = line_content
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with line context."""
        if self.line_number is not None and self.line_content:
            # Truncate long lines for readability
            content = (
                self.line_content[:100] + "..."
                if len(self.line_content) > 100
                else self.line_content
            )
            return f"{self.message} (line {self.line_number}: {content!r})"
        elif self.line_number is not None:
            return f"{self.message} (line {self.line_number})"
        return self.message


class UnterminatedQuoteError(ParseError):
    """
    Raised when a quoted field opens but never closes.

    Attributes:
        start_index: Token index of the opening quote
    """

    def __init__(self, start_index: int, line_content: str | None = None):
        self.start_index = start_index
        super().__init__(
            f"Quoted field starting at token {start_index} is never closed",
            line_content=line_content,
        )


class InvalidFieldError(LogParsingError, ValueError):
    """
    Raised when an analysis operation names a field it cannot use.

    Attributes:
        field: The offending field name
        schema: Schema the field was looked up in (optional)
        reason: Why the field was rejected (optional)
    """

    def __init__(
        self,
        field: str,
        schema: str | None = None,
        reason: str | None = None,
    ):
        self.field = field
        self.schema = schema
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with schema context."""
        parts = [f"Invalid field: {self.field!r}"]
        if self.schema:
            parts.append(f"schema='{self.schema}'")
        if self.reason:
            parts.append(f"reason: {self.reason}")
        return " - ".join(parts)
