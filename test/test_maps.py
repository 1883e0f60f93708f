"""Tests for mathsys.maps: construction and apply."""

from __future__ import annotations

import numpy as np
import pytest

from mathsys import (
    AffineControlMap,
    AffineMap,
    ConstrainedAffineControlMap,
    ConstrainedIdentityMap,
    ConstrainedLinearControlMap,
    ConstrainedResetMap,
    I,
    IdentityMap,
    LinearControlMap,
    LinearMap,
    ResetMap,
    ShapeMismatchError,
    apply,
    inputdim,
    outputdim,
    statedim,
)


class TestApply:
    def test_identity(self) -> None:
        np.testing.assert_array_equal(apply(IdentityMap(2), [1.0, 2.0]), [1.0, 2.0])

    def test_identity_returns_copy(self) -> None:
        x = np.array([1.0, 2.0])
        y = apply(IdentityMap(2), x)
        y[0] = 5.0
        np.testing.assert_array_equal(x, [1.0, 2.0])

    def test_constrained_identity(self) -> None:
        np.testing.assert_array_equal(ConstrainedIdentityMap(2, "X").apply([3.0, 4.0]), [3.0, 4.0])

    def test_linear(self) -> None:
        m = LinearMap([[1.0, 0.0], [0.0, 0.0]])
        np.testing.assert_array_equal(apply(m, [2.0, 3.0]), [2.0, 0.0])

    def test_affine(self) -> None:
        m = AffineMap([[1.0, 0.0], [0.0, 0.0]], [2.0, 0.0])
        np.testing.assert_array_equal(apply(m, [1.0, 5.0]), [3.0, 0.0])

    def test_linear_control(self) -> None:
        m = LinearControlMap([[1.0, 1.0], [0.0, 1.0]], [[0.0], [1.0]])
        np.testing.assert_array_equal(apply(m, [1.0, 2.0], [3.0]), [3.0, 5.0])

    def test_affine_control(self) -> None:
        m = AffineControlMap(I(2), [[1.0], [1.0]], [1.0, -1.0])
        np.testing.assert_array_equal(apply(m, [1.0, 2.0], [1.0]), [3.0, 2.0])

    def test_constrained_affine_control(self) -> None:
        m = ConstrainedAffineControlMap([[2.0]], [[1.0]], [0.5], "X", "U")
        np.testing.assert_array_equal(apply(m, [1.0], [1.0]), [3.5])

    def test_wrong_state_length(self) -> None:
        with pytest.raises(ShapeMismatchError):
            apply(LinearMap(np.eye(3)), [1.0, 2.0])

    def test_wrong_input_length(self) -> None:
        m = LinearControlMap(np.eye(2), np.ones((2, 1)))
        with pytest.raises(ShapeMismatchError):
            apply(m, [1.0, 2.0], [1.0, 1.0])


class TestResetMap:
    def test_reset_one_position(self) -> None:
        m = ResetMap(3, {2: 9.0})
        np.testing.assert_array_equal(apply(m, [1.0, 1.0, 1.0]), [1.0, 9.0, 1.0])

    def test_integer_state_promoted(self) -> None:
        y = ResetMap(2, {1: 0.5}).apply([1, 1])
        np.testing.assert_array_equal(y, [0.5, 1.0])

    def test_input_not_modified(self) -> None:
        x = np.array([1.0, 2.0])
        ResetMap(2, {1: 0.0}).apply(x)
        np.testing.assert_array_equal(x, [1.0, 2.0])

    def test_empty_reset(self) -> None:
        np.testing.assert_array_equal(ResetMap(2, {}).apply([1.0, 2.0]), [1.0, 2.0])

    def test_index_out_of_range(self) -> None:
        with pytest.raises(ShapeMismatchError):
            ResetMap(3, {4: 1.0})

    def test_index_zero_out_of_range(self) -> None:
        with pytest.raises(ShapeMismatchError):
            ResetMap(3, {0: 1.0})

    def test_dict_is_read_only(self) -> None:
        source = {1: 1.0}
        m = ResetMap(2, source)
        source[2] = 2.0
        assert dict(m.dict) == {1: 1.0}
        with pytest.raises(TypeError):
            m.dict[2] = 2.0

    def test_constrained(self) -> None:
        m = ConstrainedResetMap(2, "X", {2: 0.0})
        np.testing.assert_array_equal(m.apply([1.0, 1.0]), [1.0, 0.0])
        assert statedim(m) == outputdim(m) == 2


class TestValidation:
    def test_nonsquare_allowed(self) -> None:
        m = LinearMap([[1.0, 0.0, 0.0]])
        assert statedim(m) == 3
        assert outputdim(m) == 1

    def test_vector_matrix_rejected(self) -> None:
        with pytest.raises(ShapeMismatchError):
            LinearMap([1.0, 2.0])

    def test_b_rows(self) -> None:
        with pytest.raises(ShapeMismatchError):
            LinearControlMap(np.eye(2), np.ones((3, 1)))

    def test_b_length(self) -> None:
        with pytest.raises(ShapeMismatchError):
            AffineMap(np.eye(2), [1.0])

    def test_constrained_control_dims(self) -> None:
        m = ConstrainedLinearControlMap(np.ones((1, 2)), np.ones((1, 3)), "X", "U")
        assert (statedim(m), inputdim(m), outputdim(m)) == (2, 3, 1)


def test_equality() -> None:
    assert ResetMap(2, {1: 0.0}) == ResetMap(2, {1: 0.0})
    assert AffineMap(np.eye(2), [1.0, 0.0]) != AffineMap(np.eye(2), [0.0, 0.0])
