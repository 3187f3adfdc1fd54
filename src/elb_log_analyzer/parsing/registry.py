"""
Schema registry for log line parsers.

Maps schema selectors to parser implementations.
"""

import logging
from typing import Type, Union

from .base import LogLineParser, LogSchema
from .exceptions import UnknownSchemaError

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """
    Registry for log line parsers.

    Usage:
        # Register using decorator
        @SchemaRegistry.register(LogSchema.ACCESS)
        class AccessLogParser(LogLineParser):
            ...

        # Get parser instance
        parser = SchemaRegistry.get_parser("access")

        # List all schemas
        schemas = SchemaRegistry.list_schemas()
    """

    _parsers: dict[str, Type[LogLineParser]] = {}

    @classmethod
    def register(cls, schema: Union[LogSchema, str]):
        """
        Decorator to register a parser class.

        Args:
            schema: Schema selector the parser handles

        Returns:
            Decorator function
        """

        def decorator(parser_class: Type[LogLineParser]) -> Type[LogLineParser]:
            cls.register_parser(schema, parser_class)
            return parser_class

        return decorator

    @classmethod
    def register_parser(
        cls, schema: Union[LogSchema, str], parser_class: Type[LogLineParser]
    ) -> None:
        """
        Register a parser class for a schema.

        Args:
            schema: Schema selector
            parser_class: Class implementing LogLineParser

        Raises:
            TypeError: If parser_class doesn't inherit from LogLineParser
            UnknownSchemaError: If schema is not a known LogSchema
        """
        if not issubclass(parser_class, LogLineParser):
            raise TypeError(
                f"Parser class must inherit from LogLineParser, "
                f"got {parser_class.__name__}"
            )

        name = LogSchema.parse(schema).value

        if name in cls._parsers:
            logger.warning(f"Overwriting existing parser for schema '{name}'")

        cls._parsers[name] = parser_class
        logger.debug(f"Registered log parser: {name}")

    @classmethod
    def _resolve_name(cls, schema: Union[LogSchema, str]) -> str:
        try:
            name = LogSchema.parse(schema).value
        except UnknownSchemaError:
            name = None
        if name is None or name not in cls._parsers:
            raise UnknownSchemaError(
                schema=schema,
                available_schemas=list(cls._parsers.keys()),
            )
        return name

    @classmethod
    def get_parser(cls, schema: Union[LogSchema, str]) -> LogLineParser:
        """
        Get a parser instance by schema selector.

        Args:
            schema: LogSchema member or schema name

        Returns:
            Instantiated parser for the schema

        Raises:
            UnknownSchemaError: If no parser is registered for the schema
        """
        return cls._parsers[cls._resolve_name(schema)]()

    @classmethod
    def get_parser_class(cls, schema: Union[LogSchema, str]) -> Type[LogLineParser]:
        """
        Get a parser class by schema selector (without instantiation).

        Raises:
            UnknownSchemaError: If no parser is registered for the schema
        """
        return cls._parsers[cls._resolve_name(schema)]

    @classmethod
    def list_schemas(cls) -> list[str]:
        """
        List all registered schema names.

        Returns:
            Sorted list of schema names
        """
        return sorted(cls._parsers.keys())

    @classmethod
    def is_schema_registered(cls, schema: Union[LogSchema, str]) -> bool:
        """Check if a parser is registered for a schema."""
        try:
            cls._resolve_name(schema)
        except UnknownSchemaError:
            return False
        return True

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered parsers.

        Primarily used for testing to reset registry state.
        """
        cls._parsers.clear()
        logger.debug("Cleared log parser registry")


# =============================================================================
# Convenience Functions
# =============================================================================


def get_parser(schema: Union[LogSchema, str]) -> LogLineParser:
    """
    Get a parser instance by schema selector.

    Convenience function wrapping SchemaRegistry.get_parser().

    Raises:
        UnknownSchemaError: If no parser is registered for the schema
    """
    return SchemaRegistry.get_parser(schema)


def list_schemas() -> list[str]:
    """
    List all registered schema names.

    Convenience function wrapping SchemaRegistry.list_schemas().
    """
    return SchemaRegistry.list_schemas()
