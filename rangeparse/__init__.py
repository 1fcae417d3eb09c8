from rangeparse.errors import (
    CardinalityError,
    Failure,
    MismatchError,
    MissingError,
    UnexpectedError,
    ZeroError,
)
from rangeparse.parsers import (
    Parser,
    bind,
    defer,
    ignore_left,
    ignore_right,
    in_range,
    inject,
    item,
    lift,
    many,
    none_of,
    one_of,
    option,
    optional,
    reduce,
    reduce_left,
    regex,
    run,
    satisfy,
    sequence,
    some,
    token,
)
from rangeparse.range import Range
from rangeparse.result import Empty, Results, Value

__all__ = [
    "Parser",
    "bind",
    "defer",
    "ignore_left",
    "ignore_right",
    "in_range",
    "inject",
    "item",
    "lift",
    "many",
    "none_of",
    "one_of",
    "option",
    "optional",
    "reduce",
    "reduce_left",
    "regex",
    "run",
    "satisfy",
    "sequence",
    "some",
    "token",
    "Range",
    "Empty",
    "Results",
    "Value",
    "Failure",
    "CardinalityError",
    "MismatchError",
    "MissingError",
    "UnexpectedError",
    "ZeroError",
]
