"""
Defines the failures returned by parsers. Parsers return these as data; only
:py:meth:`Parser.first <rangeparse.parsers.Parser.first>` and
:py:meth:`Parser.values <rangeparse.parsers.Parser.values>` raise them.
"""
import typing
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

A = TypeVar("A")


@dataclass
class Failure(Exception):
    """
    An unsuccessful parse attempt.

    >>> str(Failure("expected digit", position=3))
    'expected digit (at position 3)'
    >>> print(Failure("expected digit", position=3).explain("12\\n3a"))
    expected digit at line 2, column 1
    3a
    ^
    """

    message: str
    position: Optional[int] = field(default=None, kw_only=True)

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"

    def explain(self, buffer: Optional[typing.Sequence] = None) -> str:
        """
        Renders the message together with the offending line of ``buffer`` and a caret
        under the position where the attempt started.
        """
        if self.position is None or not isinstance(buffer, str):
            return str(self)
        line_start = buffer.rfind("\n", 0, self.position) + 1
        line_end = buffer.find("\n", self.position)
        if line_end == -1:
            line_end = len(buffer)
        line_number = buffer.count("\n", 0, self.position) + 1
        column = self.position - line_start
        return "\n".join(
            [
                f"{self.message} at line {line_number}, column {column + 1}",
                buffer[line_start:line_end],
                " " * column + "^",
            ]
        )


@dataclass
class MissingError(Failure):
    """A token was required but the input was exhausted."""


@dataclass
class MismatchError(Failure, Generic[A]):
    expected: str
    got: Optional[A]


@dataclass
class CardinalityError(Failure):
    bound: int


@dataclass
class UnexpectedError(Failure, Generic[A]):
    unexpected: A


@dataclass
class ZeroError(Failure):
    pass
