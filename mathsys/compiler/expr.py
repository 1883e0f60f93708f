"""
Expression tree for map expressions.

``Expr`` nodes are produced either by tracing a Python callable (the
placeholders passed for ``x`` and ``u`` are ``SYMBOL`` nodes whose
operators build the tree) or by ``mathsys.compiler.parser.parse`` from a
string. Only the operations that can appear in ``A x + B u + c`` are
recorded; any other operation raises ``UnsupportedExpressionError`` as
soon as it is attempted.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional, Tuple

import numpy as np

from mathsys.errors import UnsupportedExpressionError
from mathsys.identity import IdentityMultiple

__all__ = ["ExprKind", "Expr", "to_expr", "symbol", "trace"]


class ExprKind(Enum):
    """Kinds of expression nodes."""

    SYMBOL = auto()  # state or input variable
    CONSTANT = auto()  # numeric array
    IDENTITY = auto()  # IdentityMultiple, e.g. I(n)
    ADD = auto()  # a + b
    MATMUL = auto()  # a * b or a @ b


@dataclass(frozen=True, eq=False)
class Expr:
    """Immutable expression tree node."""

    kind: ExprKind
    children: Tuple[Expr, ...] = ()
    name: Optional[str] = None  # SYMBOL
    value: Any = None  # CONSTANT, IDENTITY

    # numpy arrays defer to the reflected operators, so ``A @ x`` records a node
    __array_ufunc__ = None

    def __repr__(self) -> str:
        if self.kind == ExprKind.SYMBOL:
            return f"{self.name}"
        elif self.kind == ExprKind.CONSTANT:
            return f"{self.value.tolist()}"
        elif self.kind == ExprKind.IDENTITY:
            return f"{self.value.M}*I({self.value.n})"
        elif self.kind == ExprKind.ADD:
            return " + ".join(repr(c) for c in self.children)
        return f"{self.children[0]!r} @ {self.children[1]!r}"

    def __add__(self, other: Any) -> Expr:
        return Expr(ExprKind.ADD, (self, to_expr(other)))

    def __radd__(self, other: Any) -> Expr:
        return Expr(ExprKind.ADD, (to_expr(other), self))

    def __mul__(self, other: Any) -> Expr:
        return Expr(ExprKind.MATMUL, (self, to_expr(other)))

    def __rmul__(self, other: Any) -> Expr:
        return Expr(ExprKind.MATMUL, (to_expr(other), self))

    __matmul__ = __mul__
    __rmatmul__ = __rmul__

    def _unsupported(self, *args: Any) -> Expr:
        raise UnsupportedExpressionError(
            "only sums of matrix products and a constant vector are supported"
        )

    __sub__ = __rsub__ = __neg__ = __truediv__ = __rtruediv__ = __pow__ = _unsupported


def to_expr(value: Any) -> Expr:
    """Wrap an operand of a traced expression."""
    if isinstance(value, Expr):
        return value
    if isinstance(value, IdentityMultiple):
        return Expr(ExprKind.IDENTITY, value=value)
    try:
        arr = np.asarray(value)
    except ValueError as exc:
        raise UnsupportedExpressionError(f"{value!r} is not a rectangular array") from exc
    return Expr(ExprKind.CONSTANT, value=arr)


def symbol(name: str) -> Expr:
    return Expr(ExprKind.SYMBOL, name=name)


def trace(fn: Callable) -> Tuple[Tuple[str, ...], Expr]:
    """Call ``fn`` with symbolic placeholders and return ``(params, tree)``.

    ``fn`` takes the state, or the state and the input, e.g.
    ``lambda x: A @ x + b`` or ``lambda x, u: A @ x + B @ u``.
    """
    params = []
    for p in inspect.signature(fn).parameters.values():
        if p.kind not in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
            raise UnsupportedExpressionError(f"parameter '{p.name}' must be positional")
        params.append(p.name)
    if len(params) not in (1, 2):
        raise UnsupportedExpressionError(
            f"expected a state and at most one input symbol, got {len(params)} parameters"
        )
    try:
        out = fn(*(symbol(name) for name in params))
    except TypeError as exc:
        raise UnsupportedExpressionError(f"cannot trace expression: {exc}") from exc
    return tuple(params), to_expr(out)
