"""
Defines the outcomes of a parse (`Value`, `Empty` and
:py:class:`Failure <rangeparse.errors.Failure>`) and `Results`, the nonempty
ordered sequence of outcomes output by parsers.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterator, List, Optional, Tuple, Type, TypeVar, Union

from pytypeclass import Monad, MonadPlus

from rangeparse.errors import Failure, ZeroError
from rangeparse.range import Range

A_co = TypeVar("A_co", covariant=True)
A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class Value(Generic[A_co]):
    """
    A success that produced ``value``. ``rest`` is the input left after it.
    """

    value: A_co
    rest: Range


@dataclass(frozen=True)
class Empty:
    """
    A success that produced no value, e.g. zero repetitions.
    """

    rest: Range


Outcome = Union[Value[A_co], Empty, Failure]


@dataclass(frozen=True)
class Results(MonadPlus[A_co]):
    """
    The nonempty, ordered outcomes of applying a parser to a range. The leading outcome
    decides whether the parse succeeded and the last outcome decides where parsing resumes.

    >>> r = Range("ab")
    >>> results = Results((Value("a", r.tail()), Value("b", r.tail(2))))
    >>> results.is_success()
    True
    >>> results.values()
    ['a', 'b']
    >>> results.remaining()
    Range('', start=2)
    >>> results.map(str.upper).values()
    ['A', 'B']
    >>> (Results.zero() | results).values()
    ['a', 'b']
    """

    get: Tuple["Outcome[A_co]", ...]

    def __post_init__(self):
        if not self.get:
            raise ValueError("Results must contain at least one outcome.")

    def __add__(self, other: "Results[B]") -> "Results[A_co | B]":
        """
        Concatenates the outcomes of ``self`` and ``other``.
        """
        return Results((*self.get, *other.get))

    def __ge__(self, f: Callable[["Outcome[A_co]"], Monad[B]]) -> "Results[B]":  # type: ignore[override]
        return self.bind(f)

    def __iter__(self) -> Iterator["Outcome[A_co]"]:
        yield from self.get

    def __len__(self) -> int:
        return len(self.get)

    def __or__(self, other: "Results[B]") -> "Results[A_co | B]":  # type: ignore[override]
        """
        Ordered choice: ``self`` unless its leading outcome is a failure.
        """
        return self if self.is_success() else other

    def __repr__(self) -> str:
        return f"Results({list(self.get)!r})"

    def __rshift__(self, other: "Results[B]") -> "Results[A_co | B]":
        return self + other

    def bind(self, f: Callable[["Outcome[A_co]"], Monad[B]]) -> "Results[B]":  # type: ignore[override]
        """
        Replaces each successful outcome ``o`` with the outcomes of ``f(o)``. Failures are kept
        in place.

        >>> r = Range("xy")
        >>> results = Results((Value(1, r), Value(2, r)))
        >>> (results >= (lambda o: Results((Value(o.value, r), Value(-o.value, r))))).values()
        [1, -1, 2, -2]
        """

        def g() -> Iterator[Outcome[B]]:
            for outcome in self.get:
                if isinstance(outcome, Failure):
                    yield outcome
                else:
                    y = f(outcome)
                    assert isinstance(y, Results), y
                    yield from y.get

        return Results(tuple(g()))

    def failure(self) -> Optional[Failure]:
        head = self.head
        return head if isinstance(head, Failure) else None

    @property
    def head(self) -> "Outcome[A_co]":
        return self.get[0]

    def is_success(self) -> bool:
        return not isinstance(self.head, Failure)

    @property
    def last(self) -> "Outcome[A_co]":
        return self.get[-1]

    def map(self, f: Callable[[A_co], B]) -> "Results[B]":
        return Results(
            tuple(
                Value(f(o.value), o.rest) if isinstance(o, Value) else o
                for o in self.get
            )
        )

    def remaining(self) -> Optional[Range]:
        """
        The input left after the last outcome that consumed any, or ``None`` if every
        outcome is a failure.
        """
        for outcome in reversed(self.get):
            if not isinstance(outcome, Failure):
                return outcome.rest
        return None

    def resume(self, rest: Range) -> "Results[A_co]":
        """
        Moves the remaining input of the last successful outcome to ``rest``.
        """
        outcomes = list(self.get)
        for i in reversed(range(len(outcomes))):
            outcome = outcomes[i]
            if not isinstance(outcome, Failure):
                outcomes[i] = replace(outcome, rest=rest)
                return Results(tuple(outcomes))
        return self

    @classmethod
    def return_(cls: "Type[Results[A]]", a: "Outcome[A]") -> "Results[A]":  # type: ignore[override]
        return Results((a,))

    def values(self) -> List[Any]:
        return [o.value for o in self.get if isinstance(o, Value)]

    @classmethod
    def zero(cls, error: Optional[Failure] = None) -> "Results[Any]":  # type: ignore[override]
        return Results((ZeroError("failure") if error is None else error,))
