import functools
import operator

from rangeparse import Failure, ignore_left, many, regex
from rangeparse.leaves import (
    digit,
    floatings,
    integers,
    naturals,
    space,
    spaces,
    words,
)

WHITESPACE_NAMES = {
    " ": "space",
    "\n": "newline",
    "\t": "tab",
    "\v": "vertical tab",
    "\r": "carriage return",
    "\f": "form feed",
}


def main():
    chars = "aabbb"
    print("rx_as result:")
    print("\t", regex("a+").values(chars))
    print("rx_as_bs result:")
    print("\t", regex("a+b+").values(chars))

    print("whitespace result:")
    print("\t", [WHITESPACE_NAMES.get(c, "not whitespace") for c in spaces().values(" \n\t \r\v\f")])

    nats = "123 45 42 1001"
    print("digits result:")
    print("\t", ignore_left(many(space()), digit().lift(int)).some().values(nats))
    print("naturals result:")
    values = naturals().values(nats)
    print("\t", values)
    print("\tsum:", sum(values))

    print("integers result:")
    values = integers().values("-13 45 -99 +803")
    print("\t", values)
    print("\tsum:", sum(values))

    print("floats result:")
    values = floatings().values("-2.3 3.14159 1 2e-2 -5.2E5")
    print("\t", values)
    print("\tproduct:", functools.reduce(operator.mul, values, 1.0))

    print("words result:")
    print("\t", words().values("the quick brown fox jumped over the lazy dog"))

    print("failure looks like:")
    try:
        integers().values("")
    except Failure as failure:
        print("\t", failure)


if __name__ == "__main__":
    main()
