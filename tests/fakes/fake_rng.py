"""Fixed-sequence RNG for exact-output tests.

Implements the ``RandomSource`` protocol (``random`` and ``choice``) by
replaying a scripted list of floats, so tests can drive every branch of a
random operation deliberately.
"""

from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")


class SequenceRng:
    """Replays ``values`` from ``random()``; cycles when exhausted if ``cycle``."""

    def __init__(self, values: Iterable[float], *, cycle: bool = True) -> None:
        self._values = list(values)
        if not self._values:
            raise ValueError("SequenceRng needs at least one value")
        self._cycle = cycle
        self._index = 0
        self.draws = 0

    def random(self) -> float:
        if self._index >= len(self._values):
            if not self._cycle:
                raise AssertionError("SequenceRng exhausted")
            self._index = 0
        value = self._values[self._index]
        self._index += 1
        self.draws += 1
        return value

    def choice(self, seq: Sequence[T]) -> T:
        return seq[int(self.random() * len(seq))]


class ForbiddenRng:
    """Fails the test if any draw is made."""

    def random(self) -> float:
        raise AssertionError("unexpected random draw")

    def choice(self, seq):
        raise AssertionError("unexpected random choice")
