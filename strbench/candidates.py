"""Concatenation strategies under comparison and the workload they run on."""

import io
import operator
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from functools import reduce

DEFAULT_FRAGMENT = "abc"
DEFAULT_COUNT = 100_000


def naive_concat(fragments: Sequence[str]) -> str:
    """Fold fragments into one string, copying the accumulator at every step.

    ``operator.add`` always allocates a fresh string, so no intermediate
    buffer is reused and the total cost grows with the square of the
    fragment count.
    """
    return reduce(operator.add, fragments, "")


def buffer_concat(fragments: Sequence[str]) -> str:
    """Append fragments to a growable text buffer and materialize it once."""
    buffer = io.StringIO()
    for fragment in fragments:
        buffer.write(fragment)
    return buffer.getvalue()


# Display name -> strategy, in benchmark order
CANDIDATES: dict[str, Callable[[Sequence[str]], str]] = {
    "reduce str": naive_concat,
    "string buffer": buffer_concat,
}


@dataclass(frozen=True)
class Workload:
    """Immutable input sequence shared read-only by every candidate."""

    fragment: str = DEFAULT_FRAGMENT
    count: int = DEFAULT_COUNT
    fragments: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"Fragment count must be >= 0, got {self.count}")
        object.__setattr__(self, "fragments", (self.fragment,) * self.count)

    @property
    def total_length(self) -> int:
        """Length of the fully concatenated output."""
        return len(self.fragment) * self.count

    def describe(self) -> str:
        return f"{self.count:,} x {self.fragment!r}"


def default_workload() -> Workload:
    """Return the standard workload: 100,000 repetitions of "abc"."""
    return Workload()
