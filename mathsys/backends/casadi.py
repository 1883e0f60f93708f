"""CasADi export of maps.

``to_function`` turns any map variant into a ``casadi.Function`` with
inputs ``x`` (and ``u`` for control maps) and output ``y``, so the map can
be embedded in CasADi integrators and optimization problems.

Example:
    >>> import numpy as np
    >>> from mathsys import AffineMap
    >>> f = to_function(AffineMap([[1.0, 0.0], [0.0, 2.0]], [1.0, 1.0]))
    >>> np.array(f([1.0, 1.0])).ravel().tolist()
    [2.0, 3.0]
"""

from typing import Any

import casadi as ca
import numpy as np

from mathsys.identity import IdentityMultiple
from mathsys.maps import AbstractMap
from mathsys.traits import Dynamics, inputdim, kind_of, statedim

__all__ = ["to_function"]


def _dm(value: Any) -> ca.DM:
    if isinstance(value, IdentityMultiple):
        value = value.to_array()
    return ca.DM(np.asarray(value, dtype=float))


def to_function(m: AbstractMap, name: str = "f") -> ca.Function:
    """Build a ``casadi.Function`` evaluating the map ``m``."""
    kind = kind_of(m)
    x = ca.SX.sym("x", statedim(m))
    inputs, names = [x], ["x"]

    if kind.dynamics == Dynamics.IDENTITY:
        y = x
    elif kind.dynamics == Dynamics.RESET:
        rows = [ca.SX(float(m.dict[i + 1])) if i + 1 in m.dict else x[i] for i in range(m.dim)]
        y = ca.vertcat(*rows) if rows else ca.SX(0, 1)
    else:
        y = ca.mtimes(_dm(m.A), x)
        if kind.controlled:
            u = ca.SX.sym("u", inputdim(m))
            inputs.append(u)
            names.append("u")
            y = y + ca.mtimes(_dm(m.B), u)
        if kind.dynamics == Dynamics.AFFINE:
            y = y + _dm(m.c if kind.controlled else m.b)

    return ca.Function(name, inputs, [y], names, ["y"])
