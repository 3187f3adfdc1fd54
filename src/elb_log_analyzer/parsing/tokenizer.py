"""
Line splitting and positional tokenization for load-balancer logs.

Log lines are space-delimited with double quotes around fields that may
themselves contain spaces (request line, user agent). There is no other
escaping, so fields are addressed by token position and quoted segments
are reassembled by scanning forward for the closing quote.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .exceptions import UnterminatedQuoteError

QUOTE = '"'


def iter_numbered_lines(raw_lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """
    Yield (line_number, line) for every non-blank line.

    Line numbers are 1-based positions in the input, blank lines included,
    so they can be reported back to the user. Trailing newline and
    carriage return characters are removed.
    """
    for line_number, line in enumerate(raw_lines, 1):
        line = line.rstrip("\n")
        if line.endswith("\r"):
            line = line[:-1]
        if line.strip():
            yield line_number, line


def split_lines(text: str) -> list[str]:
    """
    Split raw text into non-blank log lines.

    Args:
        text: Raw multi-line text

    Returns:
        Lines in input order, without blank lines or trailing carriage returns
    """
    return [line for _, line in iter_numbered_lines(text.split("\n"))]


def tokenize(line: str) -> list[str]:
    """
    Split a log line on single spaces.

    Consecutive spaces are not collapsed; empty tokens keep their
    position so that fixed offsets stay aligned.
    """
    return line.split(" ")


@dataclass(frozen=True)
class QuotedSegment:
    """
    A quoted field reassembled from one or more tokens.

    Attributes:
        value: Field content with the outer quotes removed
        start: Index of the token holding the opening quote
        end: Index immediately after the closing token
    """

    value: str
    start: int
    end: int


def _opens(token: str) -> bool:
    return token.startswith(QUOTE)


def _closes(token: str, is_opening_token: bool) -> bool:
    # A lone quote character can open a segment but not also close it
    if is_opening_token:
        return len(token) >= 2 and token.endswith(QUOTE)
    return token.endswith(QUOTE)


def find_quoted_segment(tokens: list[str], start: int) -> Optional[QuotedSegment]:
    """
    Locate the first quoted field at or after a token index.

    Args:
        tokens: Token sequence of one line
        start: Index to start scanning from

    Returns:
        QuotedSegment, or None if no token at or after start opens a quote

    Raises:
        UnterminatedQuoteError: If a quote opens but no later token closes it
    """
    open_index = start
    while open_index < len(tokens) and not _opens(tokens[open_index]):
        open_index += 1
    if open_index >= len(tokens):
        return None

    close_index = open_index
    while close_index < len(tokens) and not _closes(
        tokens[close_index], close_index == open_index
    ):
        close_index += 1
    if close_index >= len(tokens):
        raise UnterminatedQuoteError(start_index=open_index)

    joined = " ".join(tokens[open_index : close_index + 1])
    return QuotedSegment(value=joined[1:-1], start=open_index, end=close_index + 1)


def unquote(token: str) -> str:
    """Strip one pair of surrounding quotes from a single token, if present."""
    if len(token) >= 2 and token.startswith(QUOTE) and token.endswith(QUOTE):
        return token[1:-1]
    return token


class TokenCursor:
    """
    Explicit parser state over a token sequence.

    Tracks the current position so that variable-position quoted fields
    can be consumed one after another, each search starting where the
    previous field ended.

    Example:
        cursor = TokenCursor(tokenize(line), position=12)
        request = cursor.take_quoted()
        user_agent = cursor.take_quoted()
        ssl_cipher = cursor.field_at(0)
    """

    def __init__(self, tokens: list[str], position: int = 0):
        self.tokens = tokens
        self.position = position

    def __len__(self) -> int:
        return len(self.tokens)

    def at(self, index: int) -> str:
        """Token at an absolute index, or empty string when out of range."""
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return ""

    def field_at(self, offset: int) -> str:
        """Token at an offset from the current position, or empty string."""
        return self.at(self.position + offset)

    def take_quoted(self) -> str:
        """
        Consume the next quoted field.

        Returns:
            The field content, or empty string when no quoted field
            remains (the position is left unchanged in that case)

        Raises:
            UnterminatedQuoteError: If the field opens but never closes
        """
        segment = find_quoted_segment(self.tokens, self.position)
        if segment is None:
            return ""
        self.position = segment.end
        return segment.value
