"""
Composite types built from a system: initial value problems and systems
with output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from mathsys.maps import AbstractMap, ConstrainedLinearControlMap, LinearControlMap
from mathsys.systems import (
    AbstractSystem,
    ConstrainedLinearControlContinuousSystem,
    LinearControlContinuousSystem,
)
from mathsys.traits import inputdim, inputset, outputdim, statedim, stateset
from mathsys.types import ConstraintSet, MatrixLike

__all__ = [
    "InitialValueProblem",
    "IVP",
    "SystemWithOutput",
    "outputmap",
    "LinearTimeInvariantSystem",
    "LTISystem",
]


@dataclass(frozen=True, eq=False)
class InitialValueProblem:
    """Initial value problem: a system together with an initial state.

    The length of ``x0`` is not checked against the state dimension of
    ``s``; code consuming the problem does that when it needs to.

    Attributes
    ----------
    s : AbstractSystem
        System
    x0 : Any
        Initial state

    Example:
        >>> from mathsys import LinearContinuousSystem, inputdim, statedim
        >>> p = InitialValueProblem(LinearContinuousSystem([[-1.0, 0.0], [0.0, -1.0]]), [-0.5, 0.5])
        >>> statedim(p), inputdim(p)
        (2, 0)
    """

    s: AbstractSystem
    x0: Any


IVP = InitialValueProblem


@dataclass(frozen=True, eq=False)
class SystemWithOutput:
    """A system together with an output map.

    Attributes
    ----------
    s : AbstractSystem
        System
    outputmap : AbstractMap
        Output map; its output dimension is that of the wrapper
    """

    s: AbstractSystem
    outputmap: AbstractMap


def outputmap(s: SystemWithOutput) -> AbstractMap:
    """Return the output map of a system with output."""
    return s.outputmap


@statedim.register(InitialValueProblem)
@statedim.register(SystemWithOutput)
def _(p: Any) -> int:
    return statedim(p.s)


@inputdim.register(InitialValueProblem)
@inputdim.register(SystemWithOutput)
def _(p: Any) -> int:
    return inputdim(p.s)


@stateset.register(InitialValueProblem)
@stateset.register(SystemWithOutput)
def _(p: Any) -> Optional[Any]:
    return stateset(p.s)


@inputset.register(InitialValueProblem)
@inputset.register(SystemWithOutput)
def _(p: Any) -> Optional[Any]:
    return inputset(p.s)


@outputdim.register(SystemWithOutput)
def _(s: SystemWithOutput) -> int:
    return outputdim(s.outputmap)


def LinearTimeInvariantSystem(
    A: MatrixLike,
    B: MatrixLike,
    C: MatrixLike,
    D: MatrixLike,
    X: Optional[ConstraintSet] = None,
    U: Optional[ConstraintSet] = None,
) -> SystemWithOutput:
    """A linear time-invariant system with output.

    ``x' = A x + B u``, ``y = C x + D u``, optionally with ``x(t) ∈ X`` and
    ``u(t) ∈ U`` for all ``t``.

    Parameters
    ----------
    A, B, C, D : MatrixLike
        System matrices
    X : ConstraintSet, optional
        State constraints
    U : ConstraintSet, optional
        Input constraints; given together with ``X``

    Returns
    -------
    SystemWithOutput
        A (constrained) linear control continuous system with a
        (constrained) linear control output map
    """
    if (X is None) != (U is None):
        raise TypeError("state and input constraints must be given together")
    if X is None:
        return SystemWithOutput(LinearControlContinuousSystem(A, B), LinearControlMap(C, D))
    return SystemWithOutput(
        ConstrainedLinearControlContinuousSystem(A, B, X, U),
        ConstrainedLinearControlMap(C, D, X, U),
    )


LTISystem = LinearTimeInvariantSystem
