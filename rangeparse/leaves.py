"""
Ready-made parsers for text: characters, words and numbers. Each function builds a
new :py:class:`Parser <rangeparse.parsers.Parser>`, so grammars never share state
through module globals.

>>> naturals().values("123 45 42 1001")
[123, 45, 42, 1001]
>>> integers().values("-13 45 -99 +803")
[-13, 45, -99, 803]
>>> floatings().values("-2.3 3.14159 1 2e-2 -5.2E5")
[-2.3, 3.14159, 1.0, 0.02, -520000.0]
>>> words().values("the quick brown fox")
['the', 'quick', 'brown', 'fox']
"""
from __future__ import annotations

from string import ascii_lowercase, hexdigits, punctuation
from typing import Optional

from rangeparse.parsers import (
    Parser,
    ignore_left,
    in_range,
    many,
    one_of,
    option,
    optional,
    satisfy,
    sequence,
    some,
    token,
)

BASE_DIGITS = "0123456789" + ascii_lowercase


def alpha() -> Parser[str]:
    return satisfy(str.isalpha, "letter")


def character(c: str) -> Parser[str]:
    return token(c)


def characters(c: str, n: Optional[int] = None) -> Parser[str]:
    """
    One or more repetitions of ``c``, at most ``n`` if given.

    >>> characters("a").values("aaab")
    ['a', 'a', 'a']
    >>> characters("a", 2).run("aaa").remaining()
    Range('a', start=2)
    """
    return some(character(c), n)


def digit() -> Parser[str]:
    return in_range("0", "9", "digit")


def digit_value(base: int = 10) -> Parser[int]:
    """
    A single digit in ``base``, converted to its integer value.

    >>> digit_value(16).values("b")
    [11]
    """
    return _base_digit(base).lift(lambda c: int(c, base))


def digit_values(base: int = 10) -> Parser[int]:
    """
    >>> digit_values().values("1 2 3")
    [1, 2, 3]
    """
    return _spaced(digit_value(base))


def digits(base: int = 10) -> Parser[str]:
    """
    One or more digits in ``base``, as a string.

    >>> digits().values("0042x")
    ['0042']
    >>> digits(2).values("1012")
    ['101']
    """
    return some(_base_digit(base)).reduce().describe("digits")


def floating() -> Parser[float]:
    """
    A decimal number with optional sign, fraction and exponent.

    >>> floating().values("-5.2E5")
    [-520000.0]
    >>> floating().run("1.x").remaining()
    Range('.x', start=1)
    """
    number = (
        _signed_digits()
        >> optional(_fraction(), "")
        >> optional(_exponent(), "")
    )
    return number.reduce().lift(float).describe("floating point number")


def floatings() -> Parser[float]:
    return _spaced(floating())


def hexdigit() -> Parser[str]:
    return satisfy(lambda c: c in hexdigits, "hex digit")


def integer() -> Parser[int]:
    """
    >>> integer().values("+7")
    [7]
    """
    return _signed_digits().lift(int).describe("integer")


def integers() -> Parser[int]:
    return _spaced(integer())


def lower() -> Parser[str]:
    return satisfy(str.islower, "lowercase letter")


def natural(base: int = 10) -> Parser[int]:
    """
    >>> natural(16).values("ff")
    [255]
    """
    return digits(base).lift(lambda s: int(s, base)).describe("natural number")


def naturals(base: int = 10) -> Parser[int]:
    return _spaced(natural(base))


def punct() -> Parser[str]:
    return satisfy(lambda c: c in punctuation, "punctuation")


def skip_spaces() -> Parser[str]:
    """
    Consumes any amount of whitespace, producing no value.
    """
    return many(space()).ignore()


def space() -> Parser[str]:
    return satisfy(str.isspace, "space")


def spaces() -> Parser[str]:
    return some(space())


def string(s: str) -> Parser[str]:
    """
    Matches the characters of ``s`` in order and produces ``s``.

    >>> string("let").values("let x")
    ['let']
    >>> str(string("let").run("lex").failure())
    "expected 't' (at position 2)"
    """
    if not s:
        raise ValueError("string expects at least one character.")
    return sequence(*map(character, s)).reduce().describe(repr(s))


def upper() -> Parser[str]:
    return satisfy(str.isupper, "uppercase letter")


def word() -> Parser[str]:
    return some(alpha()).reduce().describe("word")


def words() -> Parser[str]:
    return _spaced(word())


def _base_digit(base: int) -> Parser[str]:
    if not 2 <= base <= 36:
        raise ValueError(f"base must be between 2 and 36, got {base}.")
    if base == 10:
        return digit()
    if base == 16:
        return hexdigit()
    allowed = BASE_DIGITS[:base]
    return satisfy(lambda c: c.lower() in allowed, f"base-{base} digit")


def _exponent() -> Parser[str]:
    return (one_of("eE") >> _signed_digits()).reduce()


def _fraction() -> Parser[str]:
    return (character(".") >> digits()).reduce()


def _signed_digits() -> Parser[str]:
    return option(digits(), (one_of("+-") >> digits()).reduce())


def _spaced(parser: Parser) -> Parser:
    return some(ignore_left(many(space()), parser))
