"""
Variant tags and the accessors defined on them.

Every concrete system and map class carries a ``kind`` class attribute: a
``Kind`` value recording its four axes (time domain, dynamics class,
constrained, controlled). Structural traits (``islinear``, ``isaffine``,
...) are answered from the tag alone, so they work on classes as well as
instances and never look at stored numbers. A polynomial system whose
polynomial happens to be linear is still not linear.

Dimension accessors read the stored fields selected by the tag. They are
``functools.singledispatch`` functions so that wrappers such as
``InitialValueProblem`` can register their delegating versions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from functools import singledispatch
from typing import Any, Optional

__all__ = [
    "TimeDomain",
    "Dynamics",
    "Kind",
    "kind_of",
    "islinear",
    "isaffine",
    "iscontinuous",
    "isdiscrete",
    "isconstrained",
    "iscontrolled",
    "statedim",
    "inputdim",
    "outputdim",
    "stateset",
    "inputset",
]


class TimeDomain(Enum):
    """Time axis of a variant. Maps have no time domain."""

    CONTINUOUS = auto()
    DISCRETE = auto()
    NONE = auto()


class Dynamics(Enum):
    """Dynamics class of a variant."""

    IDENTITY = auto()  # x' = 0, x+ = x, x -> x
    LINEAR = auto()  # A x (+ B u)
    AFFINE = auto()  # A x (+ B u) + c
    LINEAR_ALGEBRAIC = auto()  # E x' = A x
    POLYNOMIAL = auto()  # p(x)
    RESET = auto()  # x -> R(x), maps only


@dataclass(frozen=True)
class Kind:
    """The four axes identifying a system or map variant."""

    time: TimeDomain
    dynamics: Dynamics
    constrained: bool = False
    controlled: bool = False

    @property
    def is_map(self) -> bool:
        return self.time is TimeDomain.NONE


_LINEAR = frozenset({Dynamics.IDENTITY, Dynamics.LINEAR, Dynamics.LINEAR_ALGEBRAIC})
_AFFINE = _LINEAR | {Dynamics.AFFINE, Dynamics.RESET}


def kind_of(obj: Any) -> Kind:
    """Return the variant tag of a system or map class or instance."""
    kind = getattr(obj, "kind", None)
    if not isinstance(kind, Kind):
        raise TypeError(f"{obj!r} is not a system or map")
    return kind


def islinear(obj: Any) -> bool:
    """Whether the dynamics of ``obj`` are given by linear equations.

    A system ``x' = A x + B u`` is linear since it is linear in ``(x, u)``;
    ``x' = A x + B u + c`` is affine but not linear. The answer depends on
    the type only: if a type admits nonlinear instances, it is not linear.
    """
    return kind_of(obj).dynamics in _LINEAR


def isaffine(obj: Any) -> bool:
    """Whether the dynamics of ``obj`` are given by affine equations.

    An affine system is the composition of a linear system and a
    translation, so every linear type is also affine.
    """
    return kind_of(obj).dynamics in _AFFINE


def iscontinuous(obj: Any) -> bool:
    return kind_of(obj).time is TimeDomain.CONTINUOUS


def isdiscrete(obj: Any) -> bool:
    return kind_of(obj).time is TimeDomain.DISCRETE


def isconstrained(obj: Any) -> bool:
    return kind_of(obj).constrained


def iscontrolled(obj: Any) -> bool:
    return kind_of(obj).controlled


@singledispatch
def statedim(s: Any) -> int:
    """Dimension of the state space of ``s``."""
    kind = kind_of(s)
    if kind.dynamics in (Dynamics.IDENTITY, Dynamics.RESET) and kind.is_map:
        return s.dim
    if kind.dynamics in (Dynamics.IDENTITY, Dynamics.POLYNOMIAL):
        return s.statedim
    return int(s.A.shape[1])


@singledispatch
def inputdim(s: Any) -> int:
    """Dimension of the input space of ``s``, 0 without control input."""
    if not kind_of(s).controlled:
        return 0
    return int(s.B.shape[1])


@singledispatch
def outputdim(m: Any) -> int:
    """Dimension of the output space of the map ``m``."""
    kind = kind_of(m)
    if not kind.is_map:
        raise TypeError(f"{type(m).__name__} has no output; wrap it in a SystemWithOutput")
    if kind.dynamics in (Dynamics.IDENTITY, Dynamics.RESET):
        return m.dim
    return int(m.A.shape[0])


@singledispatch
def stateset(s: Any) -> Optional[Any]:
    """The set of allowed states of ``s``, or ``None`` if unconstrained."""
    if not kind_of(s).constrained:
        return None
    return s.X


@singledispatch
def inputset(s: Any) -> Optional[Any]:
    """The set of allowed inputs of ``s``, or ``None`` if unconstrained."""
    kind = kind_of(s)
    if not (kind.constrained and kind.controlled):
        return None
    return s.U
