"""
Input types with an iteration interface.

Inputs are either constant in time (one element, infinite length) or
varying (a finite sequence of elements). Both iterate over their
elements, so code driving a system can treat them alike:

    >>> c = ConstantInput(-0.5)
    >>> list(nextinput(c, 3))
    [-0.5, -0.5, -0.5]
    >>> v = VaryingInput([-0.5, 0.5])
    >>> list(nextinput(v, 4))
    [-0.5, 0.5]

Inputs are immutable. ``nextinput`` returns a view that restarts from the
first element each time it is iterated; ``map`` returns a new input.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterable, Iterator, Optional, Tuple

import numpy as np

from mathsys.utils import as_array, values_equal

__all__ = ["AbstractInput", "ConstantInput", "VaryingInput", "Take", "nextinput"]


class AbstractInput(ABC):
    """Abstract supertype for all input types.

    Besides Python iteration, inputs support explicit iteration states:
    ``iterate(state)`` returns ``(element, next_state)``, or ``None`` once
    the input is exhausted.
    """

    infinite: ClassVar[bool] = False

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        ...

    @abstractmethod
    def iterate(self, state: Any = None) -> Optional[Tuple[Any, Any]]:
        ...

    @abstractmethod
    def map(self, fn: Callable[[Any], Any]) -> AbstractInput:
        """Return a new input of the same type with ``fn`` applied elementwise."""

    @property
    @abstractmethod
    def eltype(self) -> type:
        """Type of the elements of this input."""

    def nextinput(self, n: int = 1) -> Take:
        """Return the first ``n`` elements of this input as a lazy view."""
        if n < 0:
            raise ValueError(f"number of elements must be non-negative, got {n}")
        return Take(self, n)

    # inputs may hold arrays: compared elementwise, never hashed
    __hash__ = None


def _freeze(value: Any) -> Any:
    """Read-only copy of an array value; other values are stored as given."""
    if isinstance(value, np.ndarray):
        return as_array(value, "U")
    return value


@dataclass(frozen=True, eq=False)
class ConstantInput(AbstractInput):
    """An input that remains constant in time.

    Attributes
    ----------
    U : Any
        The input value (a number, a vector or a set)
    """

    U: Any
    infinite: ClassVar[bool] = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "U", _freeze(self.U))

    def __eq__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return values_equal(self.U, other.U)

    def __iter__(self) -> Iterator[Any]:
        return itertools.repeat(self.U)

    def __len__(self) -> int:
        raise TypeError("a constant input has infinite length")

    def iterate(self, state: Any = None) -> Optional[Tuple[Any, Any]]:
        return self.U, None

    def map(self, fn: Callable[[Any], Any]) -> ConstantInput:
        return ConstantInput(fn(self.U))

    @property
    def eltype(self) -> type:
        return type(self.U)


@dataclass(frozen=True, eq=False)
class VaryingInput(AbstractInput):
    """An input that may vary with time.

    Attributes
    ----------
    U : tuple
        The sequence of input values; its length is the length of the input
    """

    U: Iterable

    def __post_init__(self) -> None:
        object.__setattr__(self, "U", tuple(_freeze(u) for u in self.U))

    def __eq__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return len(self.U) == len(other.U) and all(
            values_equal(a, b) for a, b in zip(self.U, other.U)
        )

    def __iter__(self) -> Iterator[Any]:
        return iter(self.U)

    def __len__(self) -> int:
        return len(self.U)

    def iterate(self, state: Any = 0) -> Optional[Tuple[Any, Any]]:
        if state is None:
            state = 0
        if state >= len(self.U):
            return None
        return self.U[state], state + 1

    def map(self, fn: Callable[[Any], Any]) -> VaryingInput:
        return VaryingInput(tuple(fn(u) for u in self.U))

    def collect(self) -> list:
        return list(self.U)

    @property
    def eltype(self) -> type:
        if not self.U:
            return object
        return type(self.U[0])


@dataclass(frozen=True)
class Take:
    """At most the first ``n`` elements of an input.

    Each iteration starts over from the first element of ``source``; the
    view holds no iteration state of its own.
    """

    source: AbstractInput
    n: int

    def __iter__(self) -> Iterator[Any]:
        return itertools.islice(iter(self.source), self.n)

    def __len__(self) -> int:
        if self.source.infinite:
            return self.n
        return min(self.n, len(self.source))


def nextinput(u: AbstractInput, n: int = 1) -> Take:
    """Return the first ``n`` elements of the input ``u``.

    For a constant input this is ``n`` copies of its value. For a varying
    input it is at most ``n`` elements: asking for more than the input
    holds returns the whole input.
    """
    return u.nextinput(n)
