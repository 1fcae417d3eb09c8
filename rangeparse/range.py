"""
Defines :py:class:`Range`, an immutable cursor over a buffer of tokens.
"""
from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import Iterator, Optional, TypeVar, overload

A_co = TypeVar("A_co", covariant=True)


@dataclass(frozen=True)
class Range(typing.Sequence[A_co]):
    """
    A read-only view of ``buffer[start:stop]``. The buffer is borrowed, never copied:
    advancing a range only moves its cursors.

    >>> r = Range("abc")
    >>> r.head()
    'a'
    >>> r.tail()
    Range('bc', start=1)
    >>> len(r.tail(2))
    1
    >>> r.tail(3).is_empty()
    True
    >>> list(Range([1, 2, 3], start=1))
    [2, 3]
    >>> r[1:]
    Range('bc', start=1)

    Parameters
    ----------
    buffer : typing.Sequence
        Tokens to parse. Must outlive every range over it.
    start : int
        Index of the first token in view.
    stop : Optional[int]
        Index one past the last token in view. Defaults to ``len(buffer)``.
    """

    buffer: typing.Sequence[A_co]
    start: int = 0
    stop: Optional[int] = None

    def __post_init__(self):
        stop = len(self.buffer) if self.stop is None else self.stop
        if not 0 <= self.start <= stop <= len(self.buffer):
            raise ValueError(
                f"Invalid range [{self.start}, {stop}) over a buffer of length {len(self.buffer)}."
            )
        object.__setattr__(self, "stop", stop)

    @overload
    def __getitem__(self, i: int) -> "A_co":
        ...

    @overload
    def __getitem__(self, i: slice) -> "Range[A_co]":
        ...

    def __getitem__(self, i: "int | slice") -> "A_co | Range[A_co]":
        indices = range(self.start, self._stop)[i]
        if isinstance(indices, int):
            return self.buffer[indices]
        if indices.step != 1:
            raise ValueError("Ranges only support contiguous slices.")
        return Range(self.buffer, indices.start, max(indices.start, indices.stop))

    def __iter__(self) -> Iterator[A_co]:
        for i in range(self.start, self._stop):
            yield self.buffer[i]

    def __len__(self) -> int:
        return self._stop - self.start

    def __repr__(self) -> str:
        return f"Range({self.contents()!r}, start={self.start})"

    @property
    def _stop(self) -> int:
        assert self.stop is not None
        return self.stop

    def contents(self) -> typing.Sequence[A_co]:
        """
        Copies the tokens in view out of the buffer.
        """
        return self.buffer[self.start : self._stop]

    def distance(self, other: "Range") -> int:
        """
        Number of tokens between the start of ``self`` and the start of ``other``.

        >>> r = Range("abcd")
        >>> r.distance(r.tail(3))
        3
        """
        if other.buffer is not self.buffer:
            raise ValueError("Cannot measure the distance between ranges over different buffers.")
        return other.start - self.start

    def head(self) -> A_co:
        if self.is_empty():
            raise IndexError("head of an empty range")
        return self.buffer[self.start]

    def is_empty(self) -> bool:
        return self.start == self._stop

    def length(self) -> int:
        return len(self)

    def tail(self, n: int = 1) -> "Range[A_co]":
        """
        Advances the range by ``n`` tokens.
        """
        if not 0 <= n <= len(self):
            raise IndexError(f"Cannot advance a range of length {len(self)} by {n}.")
        return Range(self.buffer, self.start + n, self._stop)
