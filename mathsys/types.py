"""Type aliases for the arguments accepted by the system and map constructors."""

from numbers import Integral
from typing import Any, Callable, Mapping, Sequence, Union

import numpy as np
import sympy

from mathsys.identity import IdentityMultiple

__all__ = [
    "Dim",
    "MatrixLike",
    "VectorLike",
    "ConstraintSet",
    "VectorField",
    "ResetDict",
]

Dim = Integral

# Nested lists are accepted and converted to read-only arrays
MatrixLike = Union[np.ndarray, IdentityMultiple, Sequence]
VectorLike = Union[np.ndarray, Sequence]

# Constraint sets are opaque: stored, never inspected
ConstraintSet = Any

# Polynomial vector field: a sympy expression, matrix or sequence of expressions, or a callable
VectorField = Union[sympy.Expr, sympy.MatrixBase, Sequence, Callable]

ResetDict = Mapping[int, Any]
