"""
Map taxonomy.

The map counterpart of ``mathsys.systems``: frozen dataclasses without a
time axis, plus reset maps. Map matrices need not be square (an output
map ``y = C x + D u`` has ``outputdim`` rows), but ``B`` and the constant
term must agree with the row count of ``A``.

``apply`` evaluates the map formula with numpy and checks the lengths of
its arguments against ``statedim``/``inputdim``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from mathsys.traits import Dynamics, Kind, TimeDomain, inputdim, statedim
from mathsys.types import ConstraintSet, Dim, MatrixLike, ResetDict, VectorLike
from mathsys.utils import (
    FrozenValue,
    check_argument,
    check_matrix,
    check_reset_dict,
    check_rows,
    check_vector,
    nrows,
)

__all__ = [
    "AbstractMap",
    "IdentityMap",
    "ConstrainedIdentityMap",
    "LinearMap",
    "ConstrainedLinearMap",
    "AffineMap",
    "ConstrainedAffineMap",
    "LinearControlMap",
    "ConstrainedLinearControlMap",
    "AffineControlMap",
    "ConstrainedAffineControlMap",
    "ResetMap",
    "ConstrainedResetMap",
    "apply",
]

_MAP = TimeDomain.NONE


class AbstractMap(FrozenValue):
    """Abstract supertype for all map types."""

    kind: ClassVar[Kind]

    def _validate(self) -> None:
        if hasattr(self, "A"):
            check_matrix("A", self.A)
            m = nrows(self.A)
            if hasattr(self, "B"):
                check_rows("B", self.B, m)
            for name in ("b", "c"):
                if hasattr(self, name):
                    check_vector(name, getattr(self, name), m)
        if hasattr(self, "dict"):
            object.__setattr__(self, "dict", check_reset_dict(self.dict, self.dim))

    def _state(self, x: Any) -> np.ndarray:
        return check_argument("x", x, statedim(self))

    def _input(self, u: Any) -> np.ndarray:
        return check_argument("u", u, inputdim(self))


class _IdentityApply:
    def apply(self, x: VectorLike) -> Any:
        return np.array(self._state(x))


class _LinearApply:
    def apply(self, x: VectorLike) -> Any:
        return self.A @ self._state(x)


class _AffineApply:
    def apply(self, x: VectorLike) -> Any:
        return self.A @ self._state(x) + self.b


class _LinearControlApply:
    def apply(self, x: VectorLike, u: VectorLike) -> Any:
        return self.A @ self._state(x) + self.B @ self._input(u)


class _AffineControlApply:
    def apply(self, x: VectorLike, u: VectorLike) -> Any:
        return self.A @ self._state(x) + self.B @ self._input(u) + self.c


class _ResetApply:
    def apply(self, x: VectorLike) -> Any:
        """Overwrite the reset positions of ``x``; other entries pass through."""
        x = self._state(x)
        values = list(self.dict.values())
        y = np.array(x, dtype=np.result_type(x, *values) if values else x.dtype)
        for i, value in self.dict.items():
            y[i - 1] = value
        return y


@dataclass(frozen=True, eq=False)
class IdentityMap(_IdentityApply, AbstractMap):
    """An identity map ``x -> x``.

    Attributes
    ----------
    dim : int
        Dimension
    """

    dim: Dim
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.IDENTITY)


@dataclass(frozen=True, eq=False)
class ConstrainedIdentityMap(_IdentityApply, AbstractMap):
    """An identity map with state constraints ``x -> x, x ∈ X``."""

    dim: Dim
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.IDENTITY, constrained=True)


@dataclass(frozen=True, eq=False)
class LinearMap(_LinearApply, AbstractMap):
    """A linear map ``x -> A x``."""

    A: MatrixLike
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.LINEAR)


@dataclass(frozen=True, eq=False)
class ConstrainedLinearMap(_LinearApply, AbstractMap):
    """A linear map with state constraints ``x -> A x, x ∈ X``."""

    A: MatrixLike
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.LINEAR, constrained=True)


@dataclass(frozen=True, eq=False)
class AffineMap(_AffineApply, AbstractMap):
    """An affine map ``x -> A x + b``.

    Attributes
    ----------
    A : MatrixLike
        Matrix
    b : VectorLike
        Vector with as many entries as ``A`` has rows
    """

    A: MatrixLike
    b: VectorLike
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.AFFINE)


@dataclass(frozen=True, eq=False)
class ConstrainedAffineMap(_AffineApply, AbstractMap):
    """An affine map with state constraints ``x -> A x + b, x ∈ X``."""

    A: MatrixLike
    b: VectorLike
    X: ConstraintSet
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.AFFINE, constrained=True)


@dataclass(frozen=True, eq=False)
class LinearControlMap(_LinearControlApply, AbstractMap):
    """A linear control map ``(x, u) -> A x + B u``.

    Attributes
    ----------
    A : MatrixLike
        State matrix
    B : MatrixLike
        Input matrix with as many rows as ``A``
    """

    A: MatrixLike
    B: MatrixLike
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.LINEAR, controlled=True)


@dataclass(frozen=True, eq=False)
class ConstrainedLinearControlMap(_LinearControlApply, AbstractMap):
    """A linear control map with constraints ``(x, u) -> A x + B u, x ∈ X, u ∈ U``."""

    A: MatrixLike
    B: MatrixLike
    X: ConstraintSet
    U: ConstraintSet
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.LINEAR, constrained=True, controlled=True)


@dataclass(frozen=True, eq=False)
class AffineControlMap(_AffineControlApply, AbstractMap):
    """An affine control map ``(x, u) -> A x + B u + c``."""

    A: MatrixLike
    B: MatrixLike
    c: VectorLike
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.AFFINE, controlled=True)


@dataclass(frozen=True, eq=False)
class ConstrainedAffineControlMap(_AffineControlApply, AbstractMap):
    """An affine control map with constraints ``(x, u) -> A x + B u + c, x ∈ X, u ∈ U``."""

    A: MatrixLike
    B: MatrixLike
    c: VectorLike
    X: ConstraintSet
    U: ConstraintSet
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.AFFINE, constrained=True, controlled=True)


@dataclass(frozen=True, eq=False)
class ResetMap(_ResetApply, AbstractMap):
    """A reset map ``x -> R(x)``.

    A subset of the variables is given a specified value and the rest are
    unchanged. Positions are counted from 1, as in ``x_1, ..., x_n``.

    Attributes
    ----------
    dim : int
        Dimension
    dict : Mapping[int, Any]
        Positions of the reset variables mapped to their new values

    Example:
        >>> ResetMap(3, {2: 9.0}).apply([1, 1, 1])
        array([1., 9., 1.])
    """

    dim: Dim
    dict: ResetDict
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.RESET)


@dataclass(frozen=True, eq=False)
class ConstrainedResetMap(_ResetApply, AbstractMap):
    """A reset map with state constraints ``x -> R(x), x ∈ X``."""

    dim: Dim
    X: ConstraintSet
    dict: ResetDict
    kind: ClassVar[Kind] = Kind(_MAP, Dynamics.RESET, constrained=True)


def apply(m: AbstractMap, *args: Any) -> Any:
    """Apply the rule specified by the map ``m`` to the given arguments.

    ``apply(m, x)`` for maps without input, ``apply(m, x, u)`` for
    control maps.
    """
    return m.apply(*args)
