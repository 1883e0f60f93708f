"""
Parsing and normalization of map expressions.

``parse`` reads a string such as ``"x -> [[1, 0], [0, 0]] * x + [2, 0]"``
or ``"(x, u) -> A * x + B * u"`` into the same ``Expr`` tree that tracing
a callable produces. ``normalize`` then matches the tree against the
grammar

    expr  := term ("+" term)*
    term  := SYMBOL | COEF ("*" | "@") SYMBOL | VECTOR
    COEF  := matrix literal | name | I(n)

and returns the coefficients of the normal form ``A x + B u + c``.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

import numpy as np

from mathsys.compiler.expr import Expr, ExprKind, symbol, to_expr
from mathsys.errors import UnsupportedExpressionError
from mathsys.identity import I

__all__ = ["UNSIZED", "NormalForm", "parse", "normalize"]

_OPERATORS = {
    ast.Sub: "-",
    ast.Div: "/",
    ast.FloorDiv: "//",
    ast.Mod: "%",
    ast.Pow: "**",
}


class _Unsized:
    """Coefficient of a bare symbol: an identity whose order is not known yet."""

    def __repr__(self) -> str:
        return "I"


UNSIZED = _Unsized()


@dataclass(frozen=True, eq=False)
class NormalForm:
    """Coefficients of ``A x + B u + c``.

    ``A``/``B`` are arrays, identity multiples or ``UNSIZED``; ``B`` and
    ``c`` are ``None`` when the term is absent.
    """

    A: Any
    B: Any = None
    c: Optional[np.ndarray] = None

    @property
    def has_input(self) -> bool:
        return self.B is not None

    @property
    def has_constant(self) -> bool:
        return self.c is not None


def parse(
    text: str, namespace: Optional[Mapping[str, Any]] = None
) -> Tuple[Tuple[str, ...], Expr]:
    """Parse ``"params -> body"`` into ``(params, tree)``.

    Names in the body other than the parameters are looked up in
    ``namespace``; ``I(n)`` is the identity of order ``n``.
    """
    head, arrow, body = text.partition("->")
    if not arrow:
        raise UnsupportedExpressionError(f"expected 'x -> ...', got {text!r}")
    try:
        head_node = ast.parse(head.strip(), mode="eval").body
        body_node = ast.parse(body.strip(), mode="eval").body
    except SyntaxError as exc:
        raise UnsupportedExpressionError(f"cannot parse {text!r}") from exc
    params = _parameters(head_node)
    return params, _Converter(params, namespace or {}).visit(body_node)


def _parameters(node: ast.AST) -> Tuple[str, ...]:
    if isinstance(node, ast.Name):
        return (node.id,)
    if isinstance(node, ast.Tuple) and all(isinstance(e, ast.Name) for e in node.elts):
        names = tuple(e.id for e in node.elts)
        if len(names) not in (1, 2) or len(set(names)) != len(names):
            raise UnsupportedExpressionError(
                f"expected a state and at most one input symbol, got {names}"
            )
        return names
    raise UnsupportedExpressionError(f"invalid parameter list '{ast.unparse(node)}'")


class _Converter(ast.NodeVisitor):
    """Convert a Python expression AST into an ``Expr`` tree."""

    def __init__(self, params: Tuple[str, ...], namespace: Mapping[str, Any]):
        self.params = params
        self.namespace = namespace

    def generic_visit(self, node: ast.AST) -> Expr:
        raise UnsupportedExpressionError(f"'{ast.unparse(node)}' is not supported")

    def visit_BinOp(self, node: ast.BinOp) -> Expr:
        left, right = self.visit(node.left), self.visit(node.right)
        if isinstance(node.op, ast.Add):
            return Expr(ExprKind.ADD, (left, right))
        if isinstance(node.op, (ast.Mult, ast.MatMult)):
            return Expr(ExprKind.MATMUL, (left, right))
        op = _OPERATORS.get(type(node.op), type(node.op).__name__)
        raise UnsupportedExpressionError(f"operator '{op}' is not supported")

    def visit_Name(self, node: ast.Name) -> Expr:
        if node.id in self.params:
            return symbol(node.id)
        if node.id in self.namespace:
            return to_expr(self.namespace[node.id])
        raise UnsupportedExpressionError(f"unknown name '{node.id}'")

    def visit_Call(self, node: ast.Call) -> Expr:
        if (
            isinstance(node.func, ast.Name)
            and node.func.id == "I"
            and len(node.args) == 1
            and not node.keywords
        ):
            n = self._value(node.args[0])
            if isinstance(n, (int, np.integer)) and not isinstance(n, bool):
                return to_expr(I(n))
        raise UnsupportedExpressionError(f"call '{ast.unparse(node)}' is not supported")

    def _constant(self, node: ast.AST) -> Expr:
        try:
            value = ast.literal_eval(node)
        except (ValueError, TypeError) as exc:
            raise UnsupportedExpressionError(
                f"'{ast.unparse(node)}' is not a constant"
            ) from exc
        return to_expr(value)

    visit_Constant = visit_List = visit_Tuple = visit_UnaryOp = _constant

    def _value(self, node: ast.AST) -> Any:
        if isinstance(node, ast.Name) and node.id in self.namespace:
            return self.namespace[node.id]
        try:
            return ast.literal_eval(node)
        except (ValueError, TypeError) as exc:
            raise UnsupportedExpressionError(
                f"'{ast.unparse(node)}' is not a constant"
            ) from exc


def normalize(expr: Expr, params: Sequence[str]) -> NormalForm:
    """Match ``expr`` against ``A x [+ B u] [+ c]`` and return its coefficients."""
    state = params[0]
    terms = {}
    constant = None
    for term in _summands(expr):
        if term.kind == ExprKind.CONSTANT:
            if constant is not None:
                raise UnsupportedExpressionError("more than one constant term")
            constant = _vector(term)
            continue
        name, coefficient = _linear_term(term)
        if name in terms:
            raise UnsupportedExpressionError(f"more than one term in '{name}'")
        terms[name] = coefficient
    if state not in terms:
        raise UnsupportedExpressionError(f"expression has no term in the state '{state}'")
    B = terms[params[1]] if len(params) > 1 and params[1] in terms else None
    return NormalForm(terms[state], B, constant)


def _summands(expr: Expr) -> list:
    if expr.kind == ExprKind.ADD:
        return [t for child in expr.children for t in _summands(child)]
    return [expr]


def _linear_term(term: Expr) -> Tuple[str, Any]:
    if term.kind == ExprKind.SYMBOL:
        return term.name, UNSIZED
    if term.kind != ExprKind.MATMUL:
        raise UnsupportedExpressionError(f"'{term!r}' is not a term of the form A * x")
    left, right = term.children
    if right.kind != ExprKind.SYMBOL:
        raise UnsupportedExpressionError(
            f"'{term!r}': the right operand of a product must be a symbol"
        )
    if left.kind == ExprKind.IDENTITY:
        return right.name, left.value
    if left.kind == ExprKind.CONSTANT:
        return right.name, _matrix(left, right.name)
    if left.kind == ExprKind.SYMBOL:
        raise UnsupportedExpressionError(f"'{term!r}' is not linear")
    raise UnsupportedExpressionError(f"'{term!r}': nested products are not supported")


def _numeric(value: np.ndarray) -> bool:
    return value.dtype.kind in "biufc"


def _matrix(node: Expr, name: str) -> np.ndarray:
    if not _numeric(node.value) or node.value.ndim != 2:
        raise UnsupportedExpressionError(f"the coefficient of '{name}' must be a matrix")
    return node.value


def _vector(node: Expr) -> np.ndarray:
    if not _numeric(node.value) or node.value.ndim != 1:
        raise UnsupportedExpressionError(f"the constant term {node!r} must be a vector")
    return node.value
