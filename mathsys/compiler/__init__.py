"""
Map compiler: build the map variant matching an expression.

The expression is either a callable taking the state (and optionally one
input), or a string ``"x -> ..."`` / ``"(x, u) -> ..."``:

    >>> m = compile_map("x -> [[1, 0], [0, 0]] * x")
    >>> type(m).__name__, m.A.tolist()
    ('LinearMap', [[1, 0], [0, 0]])
    >>> compile_map("x -> x", dim=5)
    IdentityMap(dim=5)
    >>> import numpy as np
    >>> A, b = np.eye(2), np.ones(2)
    >>> type(compile_map(lambda x: A @ x + b)).__name__
    'AffineMap'

The pipeline has three stages, usable on their own: ``trace``/``parse``
build an ``Expr`` tree, ``normalize`` reduces it to ``A x + B u + c``,
``classify`` picks the map variant.
"""

from typing import Any, Callable, Mapping, Optional, Union

from mathsys.compiler.classify import classify
from mathsys.compiler.expr import Expr, ExprKind, trace
from mathsys.compiler.parser import UNSIZED, NormalForm, normalize, parse
from mathsys.maps import AbstractMap
from mathsys.types import ConstraintSet

__all__ = [
    "compile_map",
    "trace",
    "parse",
    "normalize",
    "classify",
    "Expr",
    "ExprKind",
    "NormalForm",
    "UNSIZED",
]


def compile_map(
    expression: Union[str, Callable],
    *,
    dim: Optional[int] = None,
    X: Optional[ConstraintSet] = None,
    U: Optional[ConstraintSet] = None,
    namespace: Optional[Mapping[str, Any]] = None,
) -> AbstractMap:
    """Return an instance of the map type corresponding to ``expression``.

    Parameters
    ----------
    expression : str or callable
        The map, as ``"x -> body"``/``"(x, u) -> body"`` or as a callable
        of the state and optionally the input
    dim : int, optional
        State dimension; required when the expression does not imply it
        (``x -> x``), checked against it otherwise
    X : ConstraintSet, optional
        State constraints
    U : ConstraintSet, optional
        Input constraints
    namespace : Mapping, optional
        Values of the names used in a string expression

    Returns
    -------
    AbstractMap
        The map that best matches the expression

    Raises
    ------
    UnsupportedExpressionError
        If the expression is not of the form ``A x [+ B u] [+ c]``
    DimensionConflictError
        If ``dim`` disagrees with the expression
    """
    if isinstance(expression, str):
        params, tree = parse(expression, namespace)
    else:
        if namespace is not None:
            raise TypeError("namespace only applies to string expressions")
        params, tree = trace(expression)
    return classify(normalize(tree, params), dim=dim, X=X, U=U)
