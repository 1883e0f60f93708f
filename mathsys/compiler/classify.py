"""
Selection of the map variant for a normal form ``A x + B u + c``.

- a nonzero constant term makes the map affine,
- an input term makes it a control map,
- a bare state (or ``I(n) * x``) with nothing else is an identity map,
- constraint sets select the constrained variant.

The state dimension comes from the coefficients; an explicit ``dim``
must agree with every dimension the expression implies.
"""

from __future__ import annotations

import warnings
from typing import Any, List, Optional, Tuple

import numpy as np

from mathsys.compiler.parser import UNSIZED, NormalForm
from mathsys.errors import (
    DimensionConflictError,
    ShapeMismatchError,
    UnsupportedExpressionError,
)
from mathsys.identity import IdentityMultiple
from mathsys.maps import (
    AbstractMap,
    AffineControlMap,
    AffineMap,
    ConstrainedAffineControlMap,
    ConstrainedAffineMap,
    ConstrainedIdentityMap,
    ConstrainedLinearControlMap,
    ConstrainedLinearMap,
    IdentityMap,
    LinearControlMap,
    LinearMap,
)
from mathsys.types import ConstraintSet

__all__ = ["classify"]


def _implied_dims(nf: NormalForm) -> List[Tuple[str, int]]:
    """Dimensions of the state implied by the coefficients."""
    if isinstance(nf.A, np.ndarray):
        return [("the columns of A", nf.A.shape[1])]
    if isinstance(nf.A, IdentityMultiple):
        return [(f"I({nf.A.n})", nf.A.n)]
    # x appears bare: the output has the size of the state
    implied = []
    if nf.c is not None:
        implied.append(("the constant term", len(nf.c)))
    if nf.B is not None and nf.B is not UNSIZED:
        implied.append(("the rows of B", nf.B.shape[0]))
    return implied


def _statedim(nf: NormalForm, dim: Optional[int]) -> int:
    implied = _implied_dims(nf)
    if dim is not None:
        for what, n in implied:
            if n != dim:
                raise DimensionConflictError(f"dim={dim} conflicts with {what} ({n})")
        return dim
    if not implied:
        raise UnsupportedExpressionError(
            "cannot infer the state dimension from the expression; pass dim"
        )
    sizes = {n for _, n in implied}
    if len(sizes) > 1:
        raise ShapeMismatchError(f"inconsistent dimensions in expression: {implied}")
    return implied[0][1]


def _is_identity(A: Any) -> bool:
    return A is UNSIZED or (isinstance(A, IdentityMultiple) and A.M == 1)


def classify(
    nf: NormalForm,
    *,
    dim: Optional[int] = None,
    X: Optional[ConstraintSet] = None,
    U: Optional[ConstraintSet] = None,
) -> AbstractMap:
    """Build the map variant matching ``nf``."""
    n = _statedim(nf, dim)
    A = IdentityMultiple(1.0, n) if nf.A is UNSIZED else nf.A
    B = nf.B
    if B is UNSIZED:
        B = IdentityMultiple(1.0, A.shape[0])

    c = nf.c
    if c is not None and not np.any(c):
        warnings.warn(f"constant term {c.tolist()} is zero, building a linear map")
        c = None

    if U is not None and B is None:
        raise UnsupportedExpressionError(
            "input constraints given but the expression has no input term"
        )
    constrained = X is not None or U is not None
    if B is not None and constrained and (X is None or U is None):
        raise UnsupportedExpressionError(
            "a constrained control map needs both state and input constraints"
        )

    if B is None:
        if c is None and _is_identity(nf.A):
            return ConstrainedIdentityMap(n, X) if constrained else IdentityMap(n)
        if c is None:
            return ConstrainedLinearMap(A, X) if constrained else LinearMap(A)
        return ConstrainedAffineMap(A, c, X) if constrained else AffineMap(A, c)
    if c is None:
        if constrained:
            return ConstrainedLinearControlMap(A, B, X, U)
        return LinearControlMap(A, B)
    if constrained:
        return ConstrainedAffineControlMap(A, B, c, X, U)
    return AffineControlMap(A, B, c)
