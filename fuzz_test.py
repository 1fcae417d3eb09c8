from typing import NamedTuple

from hypothesis import given, settings
from hypothesis import strategies as st

from rangeparse import Parser, Range, Results, item, many, one_of, some, token
from rangeparse.errors import MismatchError, MissingError
from rangeparse.leaves import digit, natural, naturals, space, word
from rangeparse.parsers import in_range, none_of, regex, satisfy, sequence
from rangeparse.result import Empty, Value

ALPHABET = "ab 1"


class StOutput(NamedTuple):
    parser: Parser
    repr: str


PREDICATES = [
    (str.isalpha, "str.isalpha"),
    (str.isdigit, "str.isdigit"),
    (str.isspace, "str.isspace"),
    (lambda _: True, "lambda _: True"),
]

LEAVES = [
    StOutput(item(), "item()"),
    StOutput(token("a"), 'token("a")'),
    StOutput(one_of("ab"), 'one_of("ab")'),
    StOutput(none_of("a"), 'none_of("a")'),
    StOutput(in_range("a", "b"), 'in_range("a", "b")'),
    StOutput(digit(), "digit()"),
    StOutput(space(), "space()"),
    StOutput(word(), "word()"),
    StOutput(regex("a+"), 'regex("a+")'),
]

st_text = st.text(alphabet=ALPHABET, max_size=12)


@st.composite
def st_parser(draw) -> StOutput:
    def extend(children):
        return st.one_of(
            st.tuples(children, children).map(
                lambda ps: StOutput(ps[0].parser >> ps[1].parser, f"({ps[0].repr} >> {ps[1].repr})")
            ),
            st.tuples(children, children).map(
                lambda ps: StOutput(ps[0].parser | ps[1].parser, f"({ps[0].repr} | {ps[1].repr})")
            ),
            children.map(lambda p: StOutput(p.parser.many(), f"{p.repr}.many()")),
            children.map(lambda p: StOutput(p.parser.some(), f"{p.repr}.some()")),
        )

    return draw(st.recursive(st.sampled_from(LEAVES), extend, max_leaves=4))


@settings(deadline=None)
@given(st.sampled_from(PREDICATES), st_text)
def test_satisfy(predicate, text):
    f, _ = predicate
    results = satisfy(f, "x").run(text)
    if not text:
        assert isinstance(results.failure(), MissingError)
    elif f(text[0]):
        assert results == Results((Value(text[0], Range(text, 1)),))
    else:
        assert isinstance(results.failure(), MismatchError)
        assert results.failure().message == "expected x"


@settings(deadline=None)
@given(st_parser(), st_parser(), st_text)
def test_option_is_left_biased(p, q, text):
    left = p.parser.run(text)
    expected = left if left.is_success() else q.parser.run(text)
    assert (p.parser | q.parser).run(text) == expected, f"{p.repr} | {q.repr}"


@settings(deadline=None)
@given(st_parser(), st_text)
def test_many_always_succeeds(p, text):
    results = p.parser.many().run(text)
    assert results.is_success(), p.repr
    if not p.parser.run(text).is_success():
        assert results == Results((Empty(Range(text)),))


@settings(deadline=None)
@given(st_parser(), st_text)
def test_some_fails_exactly_when_first_attempt_fails(p, text):
    assert p.parser.some().run(text).is_success() == p.parser.run(text).is_success(), p.repr


@settings(deadline=None)
@given(st_parser(), st_text)
def test_sequence_resumes_after_left(p, text):
    left = p.parser.run(text)
    results = sequence(p.parser, item()).run(text)
    if not left.is_success():
        assert results == left
    else:
        rest = left.remaining()
        assert results.is_success() == (not rest.is_empty()), p.repr


@settings(deadline=None)
@given(st_parser(), st_text)
def test_lift_laws(p, text):
    def f(x):
        return (x, 1)

    def g(x):
        return [x]

    assert p.parser.lift(lambda x: x).run(text) == p.parser.run(text), p.repr
    assert p.parser.lift(f).lift(g).run(text) == p.parser.lift(lambda x: g(f(x))).run(text), p.repr


@settings(deadline=None)
@given(st.integers(min_value=0, max_value=10**100))
def test_natural_round_trips(n):
    assert natural().first(str(n)) == n


@settings(deadline=None)
@given(st.lists(st.integers(min_value=0, max_value=10**6), min_size=1), st.sampled_from([" ", "  ", "\n"]))
def test_naturals(ns, separator):
    assert naturals().values(separator.join(map(str, ns)), allow_unparsed=False) == ns


@settings(deadline=None)
@given(st.text(alphabet="ab", max_size=20))
def test_many_consumes_longest_run(text):
    results = many(token("a")).run(text)
    run_length = len(text) - len(text.lstrip("a"))
    assert results.values() == ["a"] * run_length
    assert results.remaining() == Range(text, run_length)
    if run_length:
        assert some(one_of("a")).run(text).values() == ["a"] * run_length
