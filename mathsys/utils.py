"""
Dimension helpers and shape validation shared by systems and maps.

Constructors are the only validation point: every helper here raises
``ShapeMismatchError`` on inconsistent shapes, so accessors can read
dimensions off the stored fields without further checks.
"""

from __future__ import annotations

from dataclasses import fields
from numbers import Integral
from types import MappingProxyType
from typing import Any, Mapping

import numpy as np
import sympy

from mathsys.errors import ShapeMismatchError, UnsupportedExpressionError
from mathsys.identity import IdentityMultiple

__all__ = [
    "FrozenValue",
    "as_array",
    "nrows",
    "check_matrix",
    "check_square",
    "check_rows",
    "check_vector",
    "check_same_shape",
    "check_dim",
    "check_reset_dict",
    "check_polynomial",
    "check_argument",
    "values_equal",
]

_MATRIX_FIELDS = ("A", "B", "E")
_VECTOR_FIELDS = ("b", "c")
_DIM_FIELDS = ("statedim", "dim")


def as_array(value: Any, name: str = "value") -> Any:
    """Return a read-only numpy copy of ``value``; identity multiples are kept."""
    if isinstance(value, IdentityMultiple):
        return value
    try:
        arr = np.array(value)
    except ValueError as exc:
        raise ShapeMismatchError(f"{name} is not a rectangular array") from exc
    arr.setflags(write=False)
    return arr


def nrows(M: Any) -> int:
    return int(M.shape[0])


def check_matrix(name: str, M: Any) -> None:
    if len(M.shape) != 2:
        raise ShapeMismatchError(f"{name} must be a matrix, got shape {M.shape}")


def check_square(name: str, M: Any) -> int:
    """Check that ``M`` is a square matrix and return its order."""
    check_matrix(name, M)
    if M.shape[0] != M.shape[1]:
        raise ShapeMismatchError(f"{name} must be square, got shape {M.shape}")
    return nrows(M)


def check_rows(name: str, M: Any, n: int) -> None:
    check_matrix(name, M)
    if nrows(M) != n:
        raise ShapeMismatchError(f"{name} must have {n} rows, got shape {M.shape}")


def check_vector(name: str, v: Any, n: int) -> None:
    if len(v.shape) != 1 or v.shape[0] != n:
        raise ShapeMismatchError(f"{name} must be a vector of length {n}, got shape {v.shape}")


def check_same_shape(name: str, M: Any, other: str, N: Any) -> None:
    if tuple(M.shape) != tuple(N.shape):
        raise ShapeMismatchError(
            f"{name} and {other} must have the same shape, got {M.shape} and {N.shape}"
        )


def check_dim(name: str, n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise TypeError(f"{name} must be an integer, got {type(n).__name__}")
    if n < 0:
        raise ShapeMismatchError(f"{name} must be non-negative, got {n}")
    return int(n)


def check_reset_dict(d: Mapping, dim: int) -> Mapping:
    """Check reset indices against ``dim`` and return a read-only copy.

    Indices are positions ``1..dim``, as in the notation ``x_1, ..., x_n``.
    """
    for key in d:
        if isinstance(key, bool) or not isinstance(key, Integral):
            raise TypeError(f"reset index must be an integer, got {key!r}")
        if not 1 <= key <= dim:
            raise ShapeMismatchError(f"reset index {key} is out of range [1, {dim}]")
    return MappingProxyType({int(k): v for k, v in d.items()})


def check_polynomial(p: Any, statedim: int) -> Any:
    """Validate a polynomial vector field.

    Callables are stored as given. A single sympy expression is a field
    with one component. A sympy matrix or a sequence of expressions must
    have ``statedim`` entries, each polynomial in its free symbols; it is
    returned as an immutable sympy column.
    """
    # sympy symbols are callable, so expressions are matched first
    if isinstance(p, sympy.Expr) and not isinstance(p, sympy.MatrixBase):
        p = [p]
    elif callable(p) and not isinstance(p, sympy.MatrixBase):
        return p
    entries = [sympy.sympify(e) for e in p]
    if len(entries) != statedim:
        raise ShapeMismatchError(
            f"vector field has {len(entries)} components, expected {statedim}"
        )
    for e in entries:
        if not e.is_polynomial(*sorted(e.free_symbols, key=str)):
            raise UnsupportedExpressionError(f"{e} is not a polynomial")
    return sympy.ImmutableMatrix(entries)


def check_argument(name: str, value: Any, n: int) -> np.ndarray:
    """Convert an ``apply`` argument to an array and check its length."""
    arr = np.asarray(value)
    if arr.ndim != 1 or arr.shape[0] != n:
        raise ShapeMismatchError(f"{name} must be a vector of length {n}, got shape {arr.shape}")
    return arr


def values_equal(a: Any, b: Any) -> bool:
    """Equality of stored values, comparing arrays elementwise."""
    if a is b:
        return True
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return (
            isinstance(a, np.ndarray)
            and isinstance(b, np.ndarray)
            and np.array_equal(a, b)
        )
    return bool(a == b)


class FrozenValue:
    """Base for the immutable system and map dataclasses.

    Subclasses are ``@dataclass(frozen=True, eq=False)``. After the
    generated ``__init__``, matrices and vectors are replaced by read-only
    arrays, dimensions by plain ints, and ``_validate`` checks the shape
    invariants of the variant.
    """

    def __post_init__(self) -> None:
        for name in _MATRIX_FIELDS + _VECTOR_FIELDS:
            if hasattr(self, name):
                object.__setattr__(self, name, as_array(getattr(self, name), name))
        for name in _DIM_FIELDS:
            if hasattr(self, name):
                object.__setattr__(self, name, check_dim(name, getattr(self, name)))
        self._validate()

    def _validate(self) -> None:
        pass

    def __eq__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return all(
            values_equal(getattr(self, f.name), getattr(other, f.name)) for f in fields(self)
        )

    __hash__ = None
