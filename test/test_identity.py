"""Tests for mathsys.identity (IdentityMultiple and I)."""

from __future__ import annotations

import numpy as np
import pytest

from mathsys import I, IdentityMultiple, OrderMismatchError, ShapeMismatchError


class TestIdentityMultipleArithmetic:
    """Sums and products of identity multiples."""

    def test_sum_same_order(self) -> None:
        I2 = IdentityMultiple(1.0, 2)
        assert I2 + I2 == IdentityMultiple(2.0, 2)

    def test_sum_different_order_raises(self) -> None:
        with pytest.raises(OrderMismatchError):
            IdentityMultiple(1.0, 2) + IdentityMultiple(1.0, 3)

    def test_product_different_order_raises(self) -> None:
        with pytest.raises(OrderMismatchError):
            IdentityMultiple(1.0, 2) * IdentityMultiple(1.0, 3)

    def test_scalar_product_both_sides(self) -> None:
        I2 = IdentityMultiple(1.0, 2)
        assert 10.0 * I2 == IdentityMultiple(10.0, 2)
        assert I2 * 10.0 == IdentityMultiple(10.0, 2)

    def test_scalar_sum(self) -> None:
        assert IdentityMultiple(1.0, 3) + 2.0 == IdentityMultiple(3.0, 3)
        assert 2.0 + IdentityMultiple(1.0, 3) == IdentityMultiple(3.0, 3)

    def test_negation(self) -> None:
        assert -IdentityMultiple(2.0, 2) == IdentityMultiple(-2.0, 2)

    def test_numpy_scalar_on_left(self) -> None:
        result = np.float64(3.0) * IdentityMultiple(1.0, 2)
        assert isinstance(result, IdentityMultiple)
        assert result.M == 3.0

    def test_product_of_multiples(self) -> None:
        assert IdentityMultiple(2.0, 2) @ IdentityMultiple(3.0, 2) == IdentityMultiple(6.0, 2)


class TestIdentityMultipleVector:
    """Products with vectors and matrices."""

    def test_matvec(self) -> None:
        y = IdentityMultiple(2.0, 3) @ np.array([1.0, 2.0, 3.0])
        np.testing.assert_allclose(y, [2.0, 4.0, 6.0])

    def test_matvec_list(self) -> None:
        y = IdentityMultiple(2.0, 2) @ [1.0, -1.0]
        np.testing.assert_allclose(y, [2.0, -2.0])

    def test_matvec_wrong_length(self) -> None:
        with pytest.raises(ShapeMismatchError):
            IdentityMultiple(2.0, 3) @ np.ones(2)

    def test_rmatmul_matrix(self) -> None:
        A = np.array([[1.0, 2.0], [3.0, 4.0]])
        np.testing.assert_allclose(A @ IdentityMultiple(2.0, 2), 2.0 * A)


class TestIdentityMultipleProperties:
    def test_shape(self) -> None:
        I3 = I(3)
        assert I3.shape == (3, 3)
        assert I3.ndim == 2
        assert I3.n == 3
        assert I3.M == 1.0

    def test_to_array(self) -> None:
        np.testing.assert_array_equal(IdentityMultiple(2.0, 2).to_array(), 2.0 * np.eye(2))

    def test_asarray(self) -> None:
        np.testing.assert_array_equal(np.asarray(I(2)), np.eye(2))

    def test_negative_order(self) -> None:
        with pytest.raises(ShapeMismatchError):
            IdentityMultiple(1.0, -1)

    def test_repr(self) -> None:
        assert repr(IdentityMultiple(2.0, 2)) == "IdentityMultiple(2.0*I, 2)"

    def test_equality_and_hash(self) -> None:
        assert IdentityMultiple(1.0, 2) == I(2)
        assert IdentityMultiple(1.0, 2) != I(3)
        assert hash(IdentityMultiple(1.0, 2)) == hash(I(2))
