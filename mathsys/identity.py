"""
Scalar multiple of the identity matrix with a fixed order.

``IdentityMultiple(M, n)`` stands for ``M * eye(n)`` without materializing
the matrix. It can be stored wherever a system or map expects a square
matrix, and multiplies vectors of length ``n``.

Example
-------
>>> I2 = IdentityMultiple(1.0, 2)
>>> I2 + I2
IdentityMultiple(2.0*I, 2)
>>> 10.0 * I2
IdentityMultiple(10.0*I, 2)
"""

from __future__ import annotations

from numbers import Integral, Number
from typing import Any

import numpy as np

from mathsys.errors import OrderMismatchError, ShapeMismatchError

__all__ = ["IdentityMultiple", "I"]


class IdentityMultiple:
    """A scalar multiple of the identity matrix of given order.

    Parameters
    ----------
    M : Number
        The scaling value
    n : int
        Order of the identity matrix
    """

    # numpy scalars and arrays defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(self, M: Number, n: Integral):
        if n < 0:
            raise ShapeMismatchError(f"order must be non-negative, got {n}")
        self._M = M
        self._n = int(n)

    @property
    def M(self) -> Number:
        return self._M

    @property
    def n(self) -> int:
        return self._n

    @property
    def shape(self) -> tuple[int, int]:
        return (self._n, self._n)

    @property
    def ndim(self) -> int:
        return 2

    def _check_order(self, other: IdentityMultiple) -> None:
        if other.n != self.n:
            raise OrderMismatchError(
                f"identity multiples have different order: {self.n} and {other.n}"
            )

    def __add__(self, other: Any):
        if isinstance(other, IdentityMultiple):
            self._check_order(other)
            return IdentityMultiple(self.M + other.M, self.n)
        if isinstance(other, Number):
            # a bare scalar acts as a multiple of the identity of the same order
            return IdentityMultiple(self.M + other, self.n)
        return NotImplemented

    __radd__ = __add__

    def __mul__(self, other: Any):
        if isinstance(other, IdentityMultiple):
            self._check_order(other)
            return IdentityMultiple(self.M * other.M, self.n)
        if isinstance(other, Number):
            return IdentityMultiple(self.M * other, self.n)
        return NotImplemented

    def __rmul__(self, other: Any):
        if isinstance(other, Number):
            return IdentityMultiple(other * self.M, self.n)
        return NotImplemented

    def __neg__(self) -> IdentityMultiple:
        return IdentityMultiple(-self.M, self.n)

    def __matmul__(self, other: Any):
        if isinstance(other, IdentityMultiple):
            return self * other
        if isinstance(other, (np.ndarray, list, tuple)):
            arr = np.asarray(other)
            if arr.ndim == 0 or arr.shape[0] != self.n:
                raise ShapeMismatchError(
                    f"cannot multiply identity of order {self.n} by shape {arr.shape}"
                )
            return self.M * arr
        return NotImplemented

    def __rmatmul__(self, other: Any):
        if isinstance(other, (np.ndarray, list, tuple)):
            arr = np.asarray(other)
            if arr.ndim == 0 or arr.shape[-1] != self.n:
                raise ShapeMismatchError(
                    f"cannot multiply shape {arr.shape} by identity of order {self.n}"
                )
            return arr * self.M
        return NotImplemented

    def __eq__(self, other: Any):
        if not isinstance(other, IdentityMultiple):
            return NotImplemented
        return self.n == other.n and self.M == other.M

    def __hash__(self) -> int:
        return hash((self.M, self.n))

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return self.to_array(dtype)

    def to_array(self, dtype=None) -> np.ndarray:
        """Materialize the ``n x n`` matrix."""
        return self.M * np.eye(self.n, dtype=dtype)

    def __repr__(self) -> str:
        return f"IdentityMultiple({self.M!r}*I, {self.n})"


def I(n: Integral) -> IdentityMultiple:  # noqa: E743
    """Identity matrix of order ``n``, as an ``IdentityMultiple``."""
    return IdentityMultiple(1.0, n)
