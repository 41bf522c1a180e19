"""
Custom exceptions for the time tree package.
"""

from __future__ import annotations
from typing import Optional


class TimeTreeError(Exception):
    """Base exception for time tree errors."""

    pass


class NewickSyntaxError(TimeTreeError, SyntaxError):
    """Raised when a Newick string violates the grammar.

    Attributes:
        expected: Name of the token kind the parser required.
        offset: 1-based character offset at which matching failed.
        found: The offending character, or None at end of input.
        text: The complete input string.
    """

    def __init__(self, expected: str, offset: int, found: Optional[str], text: str):
        got = "end of input" if found is None else repr(found)
        message = f"Expected token {expected} at index {offset} but got {got} instead."
        super().__init__(message)
        self.msg = message
        self.expected = expected
        self.offset = offset
        self.found = found
        self.text = text

    def __str__(self) -> str:
        return self.msg


class DegenerateTreeError(TimeTreeError, ValueError):
    """Raised when a tree cannot be laid out (zero height or no leaves)."""

    pass
