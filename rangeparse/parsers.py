"""
Defines parsing functions and the
:py:class:`Parser <rangeparse.parsers.Parser>`
class that they instantiate.
"""
# pyright: reportGeneralTypeIssues=false
from __future__ import annotations

import functools
import logging
import operator
import os
import re
import typing
from dataclasses import MISSING, dataclass, replace
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from pytypeclass import Monad, MonadPlus, Monoid

from rangeparse.errors import (
    CardinalityError,
    Failure,
    MismatchError,
    MissingError,
    UnexpectedError,
)
from rangeparse.range import Range
from rangeparse.result import Empty, Outcome, Results, Value

MAX_MANY = int(os.environ.get("RANGEPARSE_MAX_MANY", 1_000_000))

logger = logging.getLogger(__name__)

A_co = TypeVar("A_co", covariant=True)
A = TypeVar("A")
B = TypeVar("B")


def binary_description(a: Optional[str], op: str, b: Optional[str]):
    """
    Utility for generating descriptions for binary operators.
    """
    no_nones = [x for x in (a, b) if x is not None]
    description = op.join(no_nones)
    if len(no_nones) > 1:
        description = f"[{description}]"
    return description or None


@dataclass(frozen=True)
class Parser(MonadPlus[A_co]):
    """
    Main class of the library. A parser wraps a function from a
    :py:class:`Range <rangeparse.range.Range>` to
    :py:class:`Results <rangeparse.result.Results>`. Parsers hold no state, so one parser
    can be applied to any number of inputs.

    >>> p = some(token("a")) >> some(token("b"))
    >>> p.values("aabbb")
    ['a', 'a', 'b', 'b', 'b']
    >>> p.description
    "['a' ['a' ...] >> 'b' ['b' ...]]"
    """

    f: Callable[[Range], Results[A_co]]
    description: Optional[str] = None

    def __ge__(self, f: Callable[[A_co], Monad[B]]) -> "Parser[B]":  # type: ignore[override]
        """Sugar for :py:meth:`Parser.bind <rangeparse.parsers.Parser.bind>`."""
        return self.bind(f)

    def __or__(self, other: "Parser[B]") -> "Parser[A_co | B]":  # type: ignore[override]
        """
        Ordered choice. Tries the first parser. If its leading outcome is a failure,
        tries the second on the same input. Once a branch succeeds, the remaining branches
        are never tried.

        >>> p = token("a") | token("b")
        >>> p.values("b")
        ['b']
        >>> p.values("c")
        Traceback (most recent call last):
        ...
        rangeparse.errors.MismatchError: expected 'b' (at position 0)

        The first success wins even if a later branch would consume more:

        >>> from rangeparse.leaves import string
        >>> (token("a") | string("ab")).run("ab").remaining()
        Range('b', start=1)
        """

        def f(r: Range) -> Results["A_co | B"]:
            results = self.parse(r)
            if results.is_success():
                return results
            return other.parse(r)

        return Parser(f, description=binary_description(self.description, " | ", other.description))

    def __rshift__(self, other: "Parser[B]") -> "Parser[A_co | B]":
        """
        Applies parsers in sequence. If the first parser succeeds, the rest of the input
        after its last outcome gets handed off to the second parser. If either parser fails,
        the whole thing fails with that parser's failure.

        >>> p = token("a") >> token("b")
        >>> p.values("ab")
        ['a', 'b']
        >>> p.values("aa")
        Traceback (most recent call last):
        ...
        rangeparse.errors.MismatchError: expected 'b' (at position 1)
        """

        def f(r: Range) -> Results["A_co | B"]:
            left = self.parse(r)
            rest = left.remaining()
            if not left.is_success() or rest is None:
                return left
            right = other.parse(rest)
            if not right.is_success():
                return right
            return left + right

        return Parser(
            f,
            description=binary_description(self.description, " >> ", other.description),
        )

    def __repr__(self) -> str:
        return f"Parser({self.description!r})"

    def bind(self, f: Callable[[A_co], Monad[B]]) -> "Parser[B]":  # type: ignore[override]
        """
        Returns a new parser that

        1. applies ``self``;
        2. for every value ``self`` produced, applies ``f`` to that value and runs the
           resulting parser on the input left after it.

        All outcomes are concatenated in order. Failures and :py:class:`Empty <rangeparse.result.Empty>`
        outcomes of ``self`` pass through unchanged.

        :py:meth:`Parser.bind` is one of the functions that makes :py:class:`Parser` a
        `Monad <https://github.com/ethanabrooks/pytypeclass/blob/fe6813e69c1def160c77dea1752f4235820793df/pytypeclass/monad.py#L16>`_.
        Here we use it to parse a digit ``n`` followed by exactly ``n`` letters:

        >>> from rangeparse.leaves import alpha, digit
        >>> p = digit() >= (lambda n: some(alpha(), int(n)).reduce())
        >>> p.values("3abcd")
        ['abc']
        >>> p.values("3")
        Traceback (most recent call last):
        ...
        rangeparse.errors.CardinalityError: expected at least one result (at position 1)
        """

        def h(outcome: Outcome[A_co]) -> Results[B]:
            if isinstance(outcome, Value):
                y = f(outcome.value)
                assert isinstance(y, Parser), y
                return y.parse(outcome.rest)
            return Results.return_(outcome)

        def g(r: Range) -> Results[B]:
            return self.parse(r) >= h

        return Parser(g, description=self.description)

    def describe(self, description: Optional[str]) -> "Parser[A_co]":
        """
        Replaces the description used for error messages and composed descriptions.
        """
        return replace(self, description=description)

    @classmethod
    def done(cls) -> "Parser[Any]":
        """
        :py:meth:`Parser.done` succeeds on the end of input and fails on everything else.

        >>> Parser.done().run("")
        Results([Empty(rest=Range('', start=0))])
        >>> Parser.done().run("a").failure()
        UnexpectedError(message="unexpected 'a'", position=0, unexpected='a')
        """

        def f(r: Range) -> Results[Any]:
            if r.is_empty():
                return Results.return_(Empty(r))
            head = r.head()
            return Results.zero(
                error=UnexpectedError(f"unexpected {head!r}", unexpected=head, position=r.start)
            )

        return Parser(f)

    @classmethod
    def empty(cls) -> "Parser[Any]":
        """
        Always succeeds without consuming input or producing a value.
        """
        return Parser(lambda r: Results.return_(Empty(r)))

    def first(self, tokens: "typing.Sequence | Range") -> Any:
        """
        Returns the value of the first successful outcome, or ``None`` if the parse succeeded
        without producing a value. Raises the leading
        :py:class:`Failure <rangeparse.errors.Failure>` if the parse failed.

        >>> from rangeparse.leaves import digit
        >>> some(digit()).first("123")
        '1'
        >>> many(digit()).first("abc") is None
        True
        """
        results = self.run(tokens)
        failure = results.failure()
        if failure is not None:
            raise failure
        return next((o.value for o in results if isinstance(o, Value)), None)

    def ignore(self) -> "Parser[Any]":
        """
        Keeps the consumption of ``self`` but discards its values.

        >>> (token("a").ignore() >> token("b")).values("ab")
        ['b']
        """

        def f(r: Range) -> Results[Any]:
            results = self.parse(r)
            rest = results.remaining()
            if not results.is_success() or rest is None:
                return results
            return Results.return_(Empty(rest))

        return Parser(f, description=self.description)

    def ignore_left(self, other: "Parser[B]") -> "Parser[B]":
        """
        Like :py:meth:`>> <Parser.__rshift__>` but keeps only the outcomes of ``other``.
        """

        def f(r: Range) -> Results[B]:
            left = self.parse(r)
            rest = left.remaining()
            if not left.is_success() or rest is None:
                return left
            return other.parse(rest)

        return Parser(f, description=binary_description(self.description, " >> ", other.description))

    def ignore_right(self, other: "Parser[Any]") -> "Parser[A_co]":
        """
        Like :py:meth:`>> <Parser.__rshift__>` but keeps only the outcomes of ``self``,
        resuming after ``other``.

        >>> p = token("a").ignore_right(token(";"))
        >>> p.values("a;")
        ['a']
        >>> p.run("a;").remaining()
        Range('', start=2)
        """

        def f(r: Range) -> Results[A_co]:
            left = self.parse(r)
            rest = left.remaining()
            if not left.is_success() or rest is None:
                return left
            right = other.parse(rest)
            resumed = right.remaining()
            if not right.is_success() or resumed is None:
                return right
            return left.resume(resumed)

        return Parser(f, description=binary_description(self.description, " >> ", other.description))

    def inject(self, value: B) -> "Parser[B]":
        """
        Replaces the outcomes of a successful application of ``self`` with ``value``,
        located where ``self`` stopped. Failures pass through.

        >>> from rangeparse.leaves import string
        >>> string("true").inject(True).run("true!")
        Results([Value(value=True, rest=Range('!', start=4))])
        """
        return _fold(self, lambda _: value, allow_empty=True)

    def lift(self, f: Callable[[A_co], B]) -> "Parser[B]":
        """
        Applies ``f`` to every value produced by ``self``.

        >>> token("a").lift(str.upper).values("a")
        ['A']
        """
        return Parser(lambda r: self.parse(r).map(f), description=self.description)

    def many(self, n: Optional[int] = None) -> "Parser[A_co]":
        """
        Applies ``self`` zero or more times (like ``*`` in regexes).

        Parameters
        ----------

        n: Optional[int]
            If given, fails when ``self`` matches more than ``n`` times.
            Otherwise repetition is limited by ``parsers.MAX_MANY``, which defaults to the
            environment variable ``RANGEPARSE_MAX_MANY``.

        Examples
        --------

        >>> p = token("a").many()
        >>> p.run("b")
        Results([Empty(rest=Range('b', start=0))])
        >>> p.values("aab")
        ['a', 'a']
        >>> token("a").many(2).values("aaa")
        Traceback (most recent call last):
        ...
        rangeparse.errors.CardinalityError: expected at most 2 matches (at position 2)

        Repetition stops as soon as an application stops consuming input:

        >>> Parser.empty().many().run("a")
        Results([Empty(rest=Range('a', start=0))])
        """
        if n is not None and n < 0:
            raise ValueError(f"many expects a nonnegative bound, got {n}.")

        def f(r: Range) -> Results[A_co]:
            results = self.parse(r)
            if not results.is_success():
                return Results.return_(Empty(r))
            if n == 0:
                return _at_most(self, results, r, 0)
            results, complete = _repeat(self, results, n)
            if n is not None and not complete:
                return _at_most(self, results, results.remaining(), n)
            return results

        return Parser(f, description=f"[{self.description} ...]")

    def optional(self, default: Any = MISSING) -> "Parser[Any]":
        """
        Allows ``self`` to be absent. If ``default`` is given, it becomes the value of an
        absent parse.

        >>> p = token("-").optional("+")
        >>> p.values("-1")
        ['-']
        >>> p.values("1")
        ['+']
        >>> token("-").optional().run("1")
        Results([Empty(rest=Range('1', start=0))])
        """
        fallback = Parser.empty() if default is MISSING else Parser.return_(default)
        return replace(self | fallback, description=f"[{self.description}]")

    def parse(self, r: Range) -> Results[A_co]:
        """
        Applies the parser to the range ``r``.
        """
        return self.f(r)

    def reduce(
        self,
        f: Optional[Callable[[Any, B], B]] = None,
        seed: Any = MISSING,
    ) -> "Parser[Any]":
        """
        Folds the values of a single application of ``self`` into one value located at the
        end of that application.

        Without arguments the values are combined left to right with ``+``, which works for
        strings, lists and numbers. Values that are a `Monoid <https://github.com/ethanabrooks/pytypeclass/blob/fe6813e69c1def160c77dea1752f4235820793df/pytypeclass/monoid.py#L13>`_
        are combined with ``|`` instead.
        With ``f`` and ``seed`` this is a right fold: ``f(v1, f(v2, ... f(vn, seed)))``.

        >>> from rangeparse.leaves import digit
        >>> some(digit()).reduce().values("123")
        ['123']
        >>> some(digit()).reduce(lambda d, acc: acc + [int(d)], []).values("123")
        [[3, 2, 1]]

        An application that produced no values reduces to :py:class:`Empty <rangeparse.result.Empty>`:

        >>> many(digit()).reduce().run("x")
        Results([Empty(rest=Range('x', start=0))])
        """
        if f is not None and seed is MISSING:
            raise TypeError("reduce with a combining function requires a seed.")

        def fold(values: List[Any]) -> Any:
            if f is None:
                combine = operator.or_ if isinstance(values[0], Monoid) else operator.add
                return functools.reduce(combine, values)
            return functools.reduce(lambda acc, v: f(v, acc), reversed(values), seed)

        return _fold(self, fold, allow_empty=f is not None)

    def reduce_left(self, f: Callable[[B, Any], B], seed: B) -> "Parser[B]":
        """
        Folds the values of a single application of ``self`` left to right:
        ``f(...f(f(seed, v1), v2)..., vn)``.

        >>> from rangeparse.leaves import digit
        >>> some(digit()).reduce_left(lambda acc, d: 10 * acc + int(d), 0).values("123")
        [123]
        """
        return _fold(self, lambda values: functools.reduce(f, values, seed), allow_empty=True)

    def run(self, tokens: "typing.Sequence | Range") -> Results[A_co]:
        """
        Applies the parser to a buffer of tokens (or to a
        :py:class:`Range <rangeparse.range.Range>` over one) and returns all outcomes.

        >>> token("a").run("ab")
        Results([Value(value='a', rest=Range('b', start=1))])
        >>> item().run("")
        Results([MissingError(message='expected item', position=0)])
        """
        return self.parse(tokens if isinstance(tokens, Range) else Range(tokens))

    @classmethod
    def return_(cls, a: A_co) -> "Parser[A_co]":  # type: ignore[misc]
        """
        This method is required to make :py:class:`Parser` a `Monad <https://github.com/ethanabrooks/pytypeclass/blob/fe6813e69c1def160c77dea1752f4235820793df/pytypeclass/monad.py#L16>`_.
        It consumes none of the input and always produces ``a``.

        >>> Parser.return_(1).run("a")
        Results([Value(value=1, rest=Range('a', start=0))])
        """
        return Parser(lambda r: Results.return_(Value(a, r)), description=None)

    def sat(self, predicate: Callable[[A_co], bool], description: str) -> "Parser[A_co]":
        """
        Applies ``self`` and fails the whole application if ``predicate`` rejects any of
        its values. The failure points at the rejected value.

        >>> from rangeparse.leaves import digit, natural
        >>> p = natural().sat(lambda n: n < 256, "byte")
        >>> p.values("255")
        [255]
        >>> p.values("256")
        Traceback (most recent call last):
        ...
        rangeparse.errors.MismatchError: expected byte (at position 0)
        >>> some(digit()).sat(lambda d: d != "2", "not two").values("123")
        Traceback (most recent call last):
        ...
        rangeparse.errors.MismatchError: expected not two (at position 1)
        """

        def f(r: Range) -> Results[A_co]:
            results = self.parse(r)
            if not results.is_success():
                return results
            start = r.start
            for outcome in results:
                if isinstance(outcome, Value) and not predicate(outcome.value):
                    return Results.zero(
                        error=MismatchError(
                            f"expected {description}",
                            expected=description,
                            got=outcome.value,
                            position=start,
                        )
                    )
                if not isinstance(outcome, Failure):
                    start = outcome.rest.start
            return results

        return Parser(f, description=description)

    def some(self, n: Optional[int] = None) -> "Parser[A_co]":
        """
        Applies ``self`` one or more times (like ``+`` in regexes).

        Parameters
        ----------

        n: Optional[int]
            If given, stops after ``n`` applications. Otherwise repetition is limited by
            ``parsers.MAX_MANY``.

        Examples
        --------

        >>> p = token("a").some()
        >>> p.values("aab")
        ['a', 'a']
        >>> p.run("b")
        Results([CardinalityError(message='expected at least one result', position=0, bound=1)])
        >>> token("a").some(2).run("aaa").remaining()
        Range('a', start=2)
        """
        if n is not None and n < 1:
            raise ValueError(f"some expects a positive bound, got {n}.")

        def f(r: Range) -> Results[A_co]:
            results = self.parse(r)
            if not results.is_success():
                return Results.zero(
                    error=CardinalityError("expected at least one result", bound=1, position=r.start)
                )
            results, _ = _repeat(self, results, n)
            return results

        return Parser(f, description=f"{self.description} [{self.description} ...]")

    def values(self, tokens: "typing.Sequence | Range", allow_unparsed: bool = True) -> List[Any]:
        """
        The main way the user extracts parsed values from the parser.

        Parameters
        ----------
        tokens : typing.Sequence | Range
            The buffer to parse.
        allow_unparsed : bool
            Whether to let the parse succeed without consuming all of ``tokens``.

        Examples
        --------

        >>> token("a").values("ab")
        ['a']
        >>> token("a").values("ab", allow_unparsed=False)
        Traceback (most recent call last):
        ...
        rangeparse.errors.UnexpectedError: unexpected 'b' (at position 1)
        """
        if not allow_unparsed:
            return (self >> Parser.done()).values(tokens)
        results = self.run(tokens)
        failure = results.failure()
        if failure is not None:
            raise failure
        return results.values()

    @classmethod
    def zero(cls, error: Optional[Failure] = None) -> "Parser[A_co]":
        """
        This parser always fails. This method is necessary to make :py:class:`Parser`
        a `Monoid <https://github.com/ethanabrooks/pytypeclass/blob/fe6813e69c1def160c77dea1752f4235820793df/pytypeclass/monoid.py#L13>`_.

        >>> Parser.zero().run("a")
        Results([ZeroError(message='failure', position=None)])
        >>> str(Parser.zero(error=Failure("This is a test.")).run("a").failure())
        'This is a test.'
        """
        return Parser(lambda _: Results.zero(error=error), description=None)


def _advanced(before: Range, after: Optional[Range]) -> bool:
    return after is not None and after.start != before.start


def _repeat(parser: Parser[A], results: Results[A], n: Optional[int]) -> Tuple[Results[A], bool]:
    """
    Re-applies ``parser`` after the successful ``results`` of its first application until
    an application fails, stops consuming input, or ``parser`` has been applied ``n`` times
    (``MAX_MANY`` if ``n`` is ``None``). Returns the accumulated results and whether
    repetition ended on its own rather than on reaching the bound.
    """
    outcomes = list(results)
    rest = results.remaining()
    count = 1
    limit = MAX_MANY if n is None else n
    while count < limit:
        assert rest is not None
        following = parser.parse(rest)
        if not following.is_success():
            return Results(tuple(outcomes)), True
        after = following.remaining()
        if not _advanced(rest, after):
            logger.debug(
                "%s matched without consuming input at position %d; stopping repetition.",
                parser.description,
                rest.start,
            )
            return Results(tuple(outcomes)), True
        outcomes.extend(following)
        rest = after
        count += 1
    if n is None:
        logger.warning(
            "Stopped repeating %s after %d matches. Raise RANGEPARSE_MAX_MANY to allow more.",
            parser.description,
            count,
        )
    return Results(tuple(outcomes)), False


def _at_most(parser: Parser[A], results: Results[A], rest: Optional[Range], n: int) -> Results[A]:
    """
    Checks that ``parser`` cannot be applied once more after ``results``.
    """
    assert rest is not None
    extra = parser.parse(rest)
    if extra.is_success() and _advanced(rest, extra.remaining()):
        return Results.zero(
            error=CardinalityError(f"expected at most {n} matches", bound=n, position=rest.start)
        )
    if n == 0:
        return Results.return_(Empty(rest))
    return results


def _fold(parser: Parser[Any], fold: Callable[[List[Any]], B], allow_empty: bool) -> Parser[B]:
    def f(r: Range) -> Results[B]:
        results = parser.parse(r)
        rest = results.remaining()
        if not results.is_success() or rest is None:
            return results
        values = results.values()
        if not values and not allow_empty:
            return Results.return_(Empty(rest))
        return Results.return_(Value(fold(values), rest))

    return Parser(f, description=parser.description)


def bind(parser: Parser[A], f: Callable[[A], Parser[B]]) -> Parser[B]:
    """
    Functional form of :py:meth:`Parser.bind`.
    """
    return parser >= f


def defer(thunk: Callable[[], Parser[A]], description: Optional[str] = None) -> Parser[A]:
    """
    Builds the parser returned by ``thunk`` each time it is applied, so that a grammar can
    refer to parsers that are defined later, including itself.

    >>> def parens() -> Parser[str]:
    ...     return many(token("(") >> defer(parens) >> token(")"))
    ...
    >>> parens().values("(()())", allow_unparsed=False)
    ['(', '(', ')', '(', ')', ')']
    >>> parens().values("(()", allow_unparsed=False)
    Traceback (most recent call last):
    ...
    rangeparse.errors.UnexpectedError: unexpected '(' (at position 0)
    """

    def f(r: Range) -> Results[A]:
        return thunk().parse(r)

    return Parser(f, description=description)


def ignore_left(left: Parser[Any], right: Parser[B]) -> Parser[B]:
    """
    Functional form of :py:meth:`Parser.ignore_left`.

    >>> from rangeparse.leaves import space, word
    >>> ignore_left(many(space()), word()).values("  fox")
    ['fox']
    """
    return left.ignore_left(right)


def ignore_right(left: Parser[A], right: Parser[Any]) -> Parser[A]:
    """
    Functional form of :py:meth:`Parser.ignore_right`.
    """
    return left.ignore_right(right)


def inject(parser: Parser[Any], value: B) -> Parser[B]:
    """
    Functional form of :py:meth:`Parser.inject`.
    """
    return parser.inject(value)


def in_range(low: A, high: A, description: Optional[str] = None) -> Parser[A]:
    """
    Matches a token ``t`` with ``low <= t <= high``.

    >>> in_range("a", "f").values("c")
    ['c']
    >>> in_range("a", "f").values("x")
    Traceback (most recent call last):
    ...
    rangeparse.errors.MismatchError: expected ['a'..'f'] (at position 0)
    """
    return satisfy(lambda t: low <= t <= high, description or f"[{low!r}..{high!r}]")


def item() -> Parser[Any]:
    """
    Matches any single token.

    >>> item().values("xyz")
    ['x']
    """
    return satisfy(lambda _: True, "item")


def lift(parser: Parser[A], f: Callable[[A], B]) -> Parser[B]:
    """
    Functional form of :py:meth:`Parser.lift`.
    """
    return parser.lift(f)


def many(parser: Parser[A], n: Optional[int] = None) -> Parser[A]:
    """
    Functional form of :py:meth:`Parser.many`.
    """
    return parser.many(n)


def none_of(tokens: typing.Iterable[A]) -> Parser[A]:
    """
    Matches any single token except those in ``tokens``.

    >>> none_of("ab").values("c")
    ['c']
    >>> str(none_of("ab").run("a").failure())
    "expected none of 'a', 'b' (at position 0)"
    """
    excluded = tuple(tokens)
    return satisfy(lambda t: t not in excluded, "none of " + ", ".join(map(repr, excluded)))


def one_of(tokens: typing.Iterable[A]) -> Parser[A]:
    """
    Matches any single token in ``tokens``.

    >>> one_of("+-").values("-1")
    ['-']
    """
    allowed = tuple(tokens)
    return satisfy(lambda t: t in allowed, "one of " + ", ".join(map(repr, allowed)))


def option(*parsers: Parser[Any]) -> Parser[Any]:
    """
    Ordered choice between any number of parsers. See :py:meth:`Parser.__or__`.

    >>> option(token("a"), token("b"), token("c")).values("c")
    ['c']
    """
    if not parsers:
        raise TypeError("option expects at least one parser.")
    *init, last = parsers
    return functools.reduce(lambda acc, p: p | acc, reversed(init), last)


def optional(parser: Parser[A], default: Any = MISSING) -> Parser[Any]:
    """
    Functional form of :py:meth:`Parser.optional`.
    """
    return parser.optional(default)


def reduce(parser: Parser[Any], f: Optional[Callable[[Any, B], B]] = None, seed: Any = MISSING) -> Parser[Any]:
    """
    Functional form of :py:meth:`Parser.reduce`.
    """
    return parser.reduce(f, seed)


def reduce_left(parser: Parser[Any], f: Callable[[B, Any], B], seed: B) -> Parser[B]:
    """
    Functional form of :py:meth:`Parser.reduce_left`.
    """
    return parser.reduce_left(f, seed)


def regex(pattern: "str | bytes | re.Pattern", description: Optional[str] = None) -> Parser[Any]:
    """
    Matches ``pattern`` against the tokens in view, anchored at the start of the range.
    The pattern never sees tokens outside the range, so ``^`` and lookbehinds behave the
    same wherever the parser is applied. Only works on ``str`` and ``bytes`` buffers.

    >>> regex("a+").values("aab")
    ['aa']
    >>> regex("a+b+").values("aabbb")
    ['aabbb']
    >>> regex("a+b+").values("ba")
    Traceback (most recent call last):
    ...
    rangeparse.errors.MismatchError: expected a+b+ (at position 0)
    >>> (token("x") >> regex("^a")).values("xa")
    ['x', 'a']
    """
    compiled = re.compile(pattern)
    description = description or str(compiled.pattern) or "regex match"

    def f(r: Range) -> Results[Any]:
        if not isinstance(r.buffer, (str, bytes)):
            raise TypeError(f"regex can only match str or bytes buffers, not {type(r.buffer).__name__}.")
        match = compiled.match(r.contents())
        if match is None:
            return Results.zero(
                error=MismatchError(
                    f"expected {description}",
                    expected=description,
                    got=None if r.is_empty() else r.head(),
                    position=r.start,
                )
            )
        return Results.return_(Value(match.group(0), r.tail(match.end())))

    return Parser(f, description=description)


def run(parser: Parser[A], tokens: "typing.Sequence | Range") -> Results[A]:
    """
    Applies ``parser`` to ``tokens``. See :py:meth:`Parser.run`.
    """
    return parser.run(tokens)


def satisfy(predicate: Callable[[A], bool], description: str = "item") -> Parser[A]:
    """
    One of the lowest level building blocks for parsers. Consumes one token if
    ``predicate`` holds for it.

    >>> p = satisfy(str.isupper, "capital")
    >>> p.run("Ab")
    Results([Value(value='A', rest=Range('b', start=1))])
    >>> p.run("ab")
    Results([MismatchError(message='expected capital', position=0, expected='capital', got='a')])
    >>> p.run("")
    Results([MissingError(message='expected item', position=0)])

    Parameters
    ----------
    predicate : Callable[[A], bool]
        Decides whether to accept the next token.
    description : str
        Names what is expected, for error messages.
    """

    def f(r: Range) -> Results[A]:
        if r.is_empty():
            return Results.zero(error=MissingError("expected item", position=r.start))
        head = r.head()
        if predicate(head):
            return Results.return_(Value(head, r.tail()))
        return Results.zero(
            error=MismatchError(
                f"expected {description}", expected=description, got=head, position=r.start
            )
        )

    return Parser(f, description=description)


def sequence(*parsers: Parser[Any]) -> Parser[Any]:
    """
    Applies any number of parsers in sequence. See :py:meth:`Parser.__rshift__`.

    >>> sequence(token("a"), token("b"), token("c")).values("abc")
    ['a', 'b', 'c']
    """
    if not parsers:
        raise TypeError("sequence expects at least one parser.")
    *init, last = parsers
    return functools.reduce(lambda acc, p: p >> acc, reversed(init), last)


def some(parser: Parser[A], n: Optional[int] = None) -> Parser[A]:
    """
    Functional form of :py:meth:`Parser.some`.
    """
    return parser.some(n)


def token(t: A) -> Parser[A]:
    """
    Matches a token equal to ``t``.

    >>> token("a").values("abc")
    ['a']
    >>> token(1).values([1, 2])
    [1]
    """
    return satisfy(lambda x: x == t, repr(t))
