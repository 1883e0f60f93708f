"""
MathSys - Systems and maps for reachability and control

Typed taxonomy of continuous-time and discrete-time dynamical systems,
maps, inputs and initial value problems, with structural traits answered
from the type alone, and a compiler turning ``A x + B u + c`` expressions
into the matching map type.
"""

from beartype.claw import beartype_package

beartype_package(__name__)

__version__ = "0.1.0"

from .errors import (
    DimensionConflictError,
    MathSysError,
    OrderMismatchError,
    ShapeMismatchError,
    UnsupportedExpressionError,
)
from .identity import I, IdentityMultiple
from .traits import (
    Dynamics,
    Kind,
    TimeDomain,
    inputdim,
    inputset,
    isaffine,
    isconstrained,
    iscontinuous,
    iscontrolled,
    isdiscrete,
    islinear,
    kind_of,
    outputdim,
    statedim,
    stateset,
)
from .systems import *  # noqa: F401,F403
from .systems import __all__ as _systems_all
from .maps import *  # noqa: F401,F403
from .maps import __all__ as _maps_all
from .inputs import AbstractInput, ConstantInput, Take, VaryingInput, nextinput
from .problems import (
    IVP,
    InitialValueProblem,
    LinearTimeInvariantSystem,
    LTISystem,
    SystemWithOutput,
    outputmap,
)
from .compiler import compile_map
from . import backends

__all__ = [
    "__version__",
    # errors
    "MathSysError",
    "ShapeMismatchError",
    "DimensionConflictError",
    "UnsupportedExpressionError",
    "OrderMismatchError",
    # identity
    "IdentityMultiple",
    "I",
    # traits
    "TimeDomain",
    "Dynamics",
    "Kind",
    "kind_of",
    "islinear",
    "isaffine",
    "iscontinuous",
    "isdiscrete",
    "isconstrained",
    "iscontrolled",
    "statedim",
    "inputdim",
    "outputdim",
    "stateset",
    "inputset",
    *_systems_all,
    *_maps_all,
    # inputs
    "AbstractInput",
    "ConstantInput",
    "VaryingInput",
    "Take",
    "nextinput",
    # problems
    "InitialValueProblem",
    "IVP",
    "SystemWithOutput",
    "outputmap",
    "LinearTimeInvariantSystem",
    "LTISystem",
    # compiler
    "compile_map",
    "backends",
]
