"""
Error kinds raised by mathsys.

All errors are raised eagerly, when an instance is constructed or an
expression is compiled. A constructed instance is always valid, so the
accessors never raise these.
"""

__all__ = [
    "MathSysError",
    "ShapeMismatchError",
    "DimensionConflictError",
    "UnsupportedExpressionError",
    "OrderMismatchError",
]


class MathSysError(Exception):
    """Base class for all mathsys errors."""


class ShapeMismatchError(MathSysError, ValueError):
    """Matrix/vector dimensions are inconsistent.

    Examples: ``A`` not square, ``B`` row count different from the state
    dimension, ``E`` and ``A`` of different shape, a reset index out of
    range, or an argument of the wrong length passed to ``apply``.
    """


class DimensionConflictError(MathSysError, ValueError):
    """An explicit ``dim`` disagrees with the dimension implied by an expression."""


class UnsupportedExpressionError(MathSysError, ValueError):
    """An expression falls outside the supported forms.

    Raised by the map compiler for expressions that are not of the form
    ``A x + B u + c``, and by the polynomial system constructors for
    vector fields that are not polynomial.
    """


class OrderMismatchError(MathSysError, ValueError):
    """Arithmetic between identity multiples of different order."""
