"""Tests for mathsys.problems: IVPs, systems with output and LTI systems."""

from __future__ import annotations

import numpy as np
import pytest

from mathsys import (
    IVP,
    ConstrainedLinearControlContinuousSystem,
    ConstrainedLinearControlMap,
    InitialValueProblem,
    LinearContinuousSystem,
    LinearControlContinuousSystem,
    LinearControlMap,
    LinearMap,
    LTISystem,
    SystemWithOutput,
    inputdim,
    inputset,
    outputdim,
    outputmap,
    statedim,
    stateset,
)


class TestInitialValueProblem:
    def test_dimensions_delegate(self) -> None:
        p = InitialValueProblem(LinearContinuousSystem([[-1.0, 0.0], [0.0, -1.0]]), [-0.5, 0.5])
        assert statedim(p) == 2
        assert inputdim(p) == 0
        assert p.x0 == [-0.5, 0.5]

    def test_alias(self) -> None:
        assert IVP is InitialValueProblem

    def test_x0_not_checked(self) -> None:
        p = IVP(LinearContinuousSystem(np.eye(2)), "any initial set")
        assert p.x0 == "any initial set"

    def test_constraint_sets_delegate(self) -> None:
        s = ConstrainedLinearControlContinuousSystem(np.eye(1), np.eye(1), "X", "U")
        p = IVP(s, [0.0])
        assert stateset(p) == "X"
        assert inputset(p) == "U"


class TestSystemWithOutput:
    def test_dimensions(self) -> None:
        s = LinearControlContinuousSystem(np.eye(3), np.ones((3, 1)))
        sys = SystemWithOutput(s, LinearMap(np.ones((2, 3))))
        assert statedim(sys) == 3
        assert inputdim(sys) == 1
        assert outputdim(sys) == 2
        assert outputmap(sys) is sys.outputmap


class TestLTISystem:
    def test_unconstrained(self) -> None:
        sys = LTISystem(np.eye(2), np.ones((2, 1)), np.ones((1, 2)), np.zeros((1, 1)))
        assert isinstance(sys.s, LinearControlContinuousSystem)
        assert isinstance(sys.outputmap, LinearControlMap)
        assert (statedim(sys), inputdim(sys), outputdim(sys)) == (2, 1, 1)

    def test_constrained(self) -> None:
        sys = LTISystem(np.eye(2), np.ones((2, 1)), np.eye(2), np.zeros((2, 1)), "X", "U")
        assert isinstance(sys.s, ConstrainedLinearControlContinuousSystem)
        assert isinstance(sys.outputmap, ConstrainedLinearControlMap)
        assert stateset(sys) == "X"
        assert inputset(sys) == "U"
        assert outputdim(sys) == 2

    def test_one_constraint_set(self) -> None:
        with pytest.raises(TypeError):
            LTISystem(np.eye(2), np.ones((2, 1)), np.eye(2), np.zeros((2, 1)), "X")
