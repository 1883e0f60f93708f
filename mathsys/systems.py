"""
System taxonomy.

A closed set of frozen dataclasses, one per system variant. Each class
stores exactly the fields its dynamics need and carries its variant tag in
the ``kind`` class attribute (see ``mathsys.traits``). Shapes are checked
once, in the constructor:

- ``A`` is square,
- ``B`` has as many rows as ``A``,
- ``b``/``c`` have length ``statedim``,
- ``E`` has the shape of ``A``,
- polynomial fields have ``statedim`` components.

Matrices and vectors are stored as read-only numpy arrays (nested lists
are converted); an ``IdentityMultiple`` may stand in for a square matrix.
Constraint sets ``X``/``U`` are stored as given and never inspected.

Example:
    >>> from mathsys import inputdim, statedim
    >>> s = LinearControlContinuousSystem([[0.0, 1.0], [0.0, 0.0]], [[0.0], [1.0]])
    >>> statedim(s), inputdim(s)
    (2, 1)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from mathsys.traits import Dynamics, Kind, TimeDomain
from mathsys.types import ConstraintSet, Dim, MatrixLike, VectorField, VectorLike
from mathsys.utils import (
    FrozenValue,
    check_polynomial,
    check_rows,
    check_same_shape,
    check_square,
    check_vector,
)

__all__ = [
    "AbstractSystem",
    "AbstractContinuousSystem",
    "AbstractDiscreteSystem",
    # continuous
    "ContinuousIdentitySystem",
    "ConstrainedContinuousIdentitySystem",
    "LinearContinuousSystem",
    "AffineContinuousSystem",
    "LinearControlContinuousSystem",
    "ConstrainedLinearContinuousSystem",
    "ConstrainedAffineContinuousSystem",
    "ConstrainedAffineControlContinuousSystem",
    "ConstrainedLinearControlContinuousSystem",
    "LinearAlgebraicContinuousSystem",
    "ConstrainedLinearAlgebraicContinuousSystem",
    "PolynomialContinuousSystem",
    "ConstrainedPolynomialContinuousSystem",
    # discrete
    "DiscreteIdentitySystem",
    "ConstrainedDiscreteIdentitySystem",
    "LinearDiscreteSystem",
    "AffineDiscreteSystem",
    "LinearControlDiscreteSystem",
    "ConstrainedLinearDiscreteSystem",
    "ConstrainedAffineDiscreteSystem",
    "ConstrainedLinearControlDiscreteSystem",
    "ConstrainedAffineControlDiscreteSystem",
    "LinearAlgebraicDiscreteSystem",
    "ConstrainedLinearAlgebraicDiscreteSystem",
    "PolynomialDiscreteSystem",
    "ConstrainedPolynomialDiscreteSystem",
]

_CT = TimeDomain.CONTINUOUS
_DT = TimeDomain.DISCRETE


class AbstractSystem(FrozenValue):
    """Abstract supertype for all system types."""

    kind: ClassVar[Kind]

    def _validate(self) -> None:
        if hasattr(self, "A"):
            n = check_square("A", self.A)
            if hasattr(self, "E"):
                check_same_shape("E", self.E, "A", self.A)
            if hasattr(self, "B"):
                check_rows("B", self.B, n)
            for name in ("b", "c"):
                if hasattr(self, name):
                    check_vector(name, getattr(self, name), n)
        if hasattr(self, "p"):
            object.__setattr__(self, "p", check_polynomial(self.p, self.statedim))


class AbstractContinuousSystem(AbstractSystem):
    """Abstract supertype for all continuous-time system types."""


class AbstractDiscreteSystem(AbstractSystem):
    """Abstract supertype for all discrete-time system types."""


# ---------------------------------------------------------------------------
# Continuous time
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class ContinuousIdentitySystem(AbstractContinuousSystem):
    """Trivial identity continuous-time system ``x' = 0``.

    Attributes
    ----------
    statedim : int
        Number of state variables
    """

    statedim: Dim
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.IDENTITY)


@dataclass(frozen=True, eq=False)
class ConstrainedContinuousIdentitySystem(AbstractContinuousSystem):
    """Trivial identity continuous-time system ``x' = 0, x(t) ∈ X``.

    Attributes
    ----------
    statedim : int
        Number of state variables
    X : ConstraintSet
        State constraints
    """

    statedim: Dim
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.IDENTITY, constrained=True)


@dataclass(frozen=True, eq=False)
class LinearContinuousSystem(AbstractContinuousSystem):
    """Continuous-time linear system ``x' = A x``."""

    A: MatrixLike
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.LINEAR)


@dataclass(frozen=True, eq=False)
class AffineContinuousSystem(AbstractContinuousSystem):
    """Continuous-time affine system ``x' = A x + b``."""

    A: MatrixLike
    b: VectorLike
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.AFFINE)


@dataclass(frozen=True, eq=False)
class LinearControlContinuousSystem(AbstractContinuousSystem):
    """Continuous-time linear control system ``x' = A x + B u``.

    Attributes
    ----------
    A : MatrixLike
        Square state matrix
    B : MatrixLike
        Input matrix with as many rows as ``A``
    """

    A: MatrixLike
    B: MatrixLike
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.LINEAR, controlled=True)


@dataclass(frozen=True, eq=False)
class ConstrainedLinearContinuousSystem(AbstractContinuousSystem):
    """Continuous-time linear system ``x' = A x, x(t) ∈ X``."""

    A: MatrixLike
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.LINEAR, constrained=True)


@dataclass(frozen=True, eq=False)
class ConstrainedAffineContinuousSystem(AbstractContinuousSystem):
    """Continuous-time affine system ``x' = A x + b, x(t) ∈ X``."""

    A: MatrixLike
    b: VectorLike
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.AFFINE, constrained=True)


@dataclass(frozen=True, eq=False)
class ConstrainedAffineControlContinuousSystem(AbstractContinuousSystem):
    """Continuous-time affine control system with state and input constraints.

    ``x' = A x + B u + c, x(t) ∈ X, u(t) ∈ U`` for all ``t``.

    Attributes
    ----------
    A : MatrixLike
        Square state matrix
    B : MatrixLike
        Input matrix
    c : VectorLike
        Constant term
    X : ConstraintSet
        State constraints
    U : ConstraintSet
        Input constraints
    """

    A: MatrixLike
    B: MatrixLike
    c: VectorLike
    X: ConstraintSet
    U: ConstraintSet
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.AFFINE, constrained=True, controlled=True)


@dataclass(frozen=True, eq=False)
class ConstrainedLinearControlContinuousSystem(AbstractContinuousSystem):
    """Continuous-time linear control system ``x' = A x + B u, x(t) ∈ X, u(t) ∈ U``."""

    A: MatrixLike
    B: MatrixLike
    X: ConstraintSet
    U: ConstraintSet
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.LINEAR, constrained=True, controlled=True)


@dataclass(frozen=True, eq=False)
class LinearAlgebraicContinuousSystem(AbstractContinuousSystem):
    """Continuous-time linear algebraic (descriptor) system ``E x' = A x``.

    Attributes
    ----------
    A : MatrixLike
        Square state matrix
    E : MatrixLike
        Mass matrix, same shape as ``A``
    """

    A: MatrixLike
    E: MatrixLike
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.LINEAR_ALGEBRAIC)


@dataclass(frozen=True, eq=False)
class ConstrainedLinearAlgebraicContinuousSystem(AbstractContinuousSystem):
    """Continuous-time linear algebraic system ``E x' = A x, x(t) ∈ X``."""

    A: MatrixLike
    E: MatrixLike
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.LINEAR_ALGEBRAIC, constrained=True)


@dataclass(frozen=True, eq=False)
class PolynomialContinuousSystem(AbstractContinuousSystem):
    """Continuous-time polynomial system ``x' = p(x)``.

    Attributes
    ----------
    p : VectorField
        Polynomial vector field: a sympy matrix or sequence of sympy
        polynomials (stored as an ``ImmutableMatrix``), or a callable
    statedim : int
        Number of state variables
    """

    p: VectorField
    statedim: Dim
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.POLYNOMIAL)


@dataclass(frozen=True, eq=False)
class ConstrainedPolynomialContinuousSystem(AbstractContinuousSystem):
    """Continuous-time polynomial system ``x' = p(x), x(t) ∈ X``."""

    p: VectorField
    X: ConstraintSet
    statedim: Dim
    kind: ClassVar[Kind] = Kind(_CT, Dynamics.POLYNOMIAL, constrained=True)


# ---------------------------------------------------------------------------
# Discrete time
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class DiscreteIdentitySystem(AbstractDiscreteSystem):
    """Trivial identity discrete-time system ``x[k+1] = x[k]``."""

    statedim: Dim
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.IDENTITY)


@dataclass(frozen=True, eq=False)
class ConstrainedDiscreteIdentitySystem(AbstractDiscreteSystem):
    """Trivial identity discrete-time system ``x[k+1] = x[k], x[k] ∈ X``."""

    statedim: Dim
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.IDENTITY, constrained=True)


@dataclass(frozen=True, eq=False)
class LinearDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time linear system ``x[k+1] = A x[k]``."""

    A: MatrixLike
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.LINEAR)


@dataclass(frozen=True, eq=False)
class AffineDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time affine system ``x[k+1] = A x[k] + b``."""

    A: MatrixLike
    b: VectorLike
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.AFFINE)


@dataclass(frozen=True, eq=False)
class LinearControlDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time linear control system ``x[k+1] = A x[k] + B u[k]``."""

    A: MatrixLike
    B: MatrixLike
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.LINEAR, controlled=True)


@dataclass(frozen=True, eq=False)
class ConstrainedLinearDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time linear system ``x[k+1] = A x[k], x[k] ∈ X``."""

    A: MatrixLike
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.LINEAR, constrained=True)


@dataclass(frozen=True, eq=False)
class ConstrainedAffineDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time affine system ``x[k+1] = A x[k] + b, x[k] ∈ X`` for all ``k``."""

    A: MatrixLike
    b: VectorLike
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.AFFINE, constrained=True)


@dataclass(frozen=True, eq=False)
class ConstrainedLinearControlDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time linear control system with state and input constraints.

    ``x[k+1] = A x[k] + B u[k], x[k] ∈ X, u[k] ∈ U`` for all ``k``.
    """

    A: MatrixLike
    B: MatrixLike
    X: ConstraintSet
    U: ConstraintSet
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.LINEAR, constrained=True, controlled=True)


@dataclass(frozen=True, eq=False)
class ConstrainedAffineControlDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time affine control system with state and input constraints.

    ``x[k+1] = A x[k] + B u[k] + c, x[k] ∈ X, u[k] ∈ U`` for all ``k``.
    """

    A: MatrixLike
    B: MatrixLike
    c: VectorLike
    X: ConstraintSet
    U: ConstraintSet
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.AFFINE, constrained=True, controlled=True)


@dataclass(frozen=True, eq=False)
class LinearAlgebraicDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time linear algebraic system ``E x[k+1] = A x[k]``."""

    A: MatrixLike
    E: MatrixLike
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.LINEAR_ALGEBRAIC)


@dataclass(frozen=True, eq=False)
class ConstrainedLinearAlgebraicDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time linear algebraic system ``E x[k+1] = A x[k], x[k] ∈ X``."""

    A: MatrixLike
    E: MatrixLike
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.LINEAR_ALGEBRAIC, constrained=True)


@dataclass(frozen=True, eq=False)
class PolynomialDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time polynomial system ``x[k+1] = p(x[k])``."""

    p: VectorField
    statedim: Dim
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.POLYNOMIAL)


@dataclass(frozen=True, eq=False)
class ConstrainedPolynomialDiscreteSystem(AbstractDiscreteSystem):
    """Discrete-time polynomial system ``x[k+1] = p(x[k]), x[k] ∈ X``."""

    p: VectorField
    X: ConstraintSet
    statedim: Dim
    kind: ClassVar[Kind] = Kind(_DT, Dynamics.POLYNOMIAL, constrained=True)
