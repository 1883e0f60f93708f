"""Tests for mathsys.inputs."""

from __future__ import annotations

import numpy as np
import pytest

from mathsys import ConstantInput, Take, VaryingInput, nextinput


class TestConstantInput:
    def test_nextinput(self) -> None:
        assert list(nextinput(ConstantInput(-0.5), 3)) == [-0.5, -0.5, -0.5]

    def test_nextinput_default_one(self) -> None:
        assert list(nextinput(ConstantInput(2.0))) == [2.0]

    def test_no_length(self) -> None:
        with pytest.raises(TypeError):
            len(ConstantInput(1.0))

    def test_infinite(self) -> None:
        assert ConstantInput(1.0).infinite

    def test_iterate(self) -> None:
        u = ConstantInput(3.0)
        value, state = u.iterate()
        assert value == 3.0
        assert u.iterate(state) == (3.0, state)

    def test_map(self) -> None:
        original = ConstantInput(2.0)
        u = original.map(lambda v: v * 10)
        assert isinstance(u, ConstantInput)
        assert u.U == 20.0
        assert original.U == 2.0

    def test_eltype(self) -> None:
        assert ConstantInput(1.0).eltype is float

    def test_vector_value(self) -> None:
        u = ConstantInput(np.array([1.0, 2.0]))
        first, second = nextinput(u, 2)
        assert first is second


class TestVaryingInput:
    def test_nextinput_truncates(self) -> None:
        assert list(nextinput(VaryingInput([-0.5, 0.5]), 4)) == [-0.5, 0.5]

    def test_nextinput_prefix(self) -> None:
        assert list(nextinput(VaryingInput([1, 2, 3]), 2)) == [1, 2]

    def test_length(self) -> None:
        u = VaryingInput([1.0, 2.0, 3.0])
        assert len(u) == 3
        assert not u.infinite

    def test_iterate_states(self) -> None:
        u = VaryingInput(["a", "b"])
        assert u.iterate() == ("a", 1)
        assert u.iterate(1) == ("b", 2)
        assert u.iterate(2) is None

    def test_map_and_collect(self) -> None:
        original = VaryingInput([1, 2, 3])
        u = original.map(lambda v: v + 1)
        assert isinstance(u, VaryingInput)
        assert u.collect() == [2, 3, 4]
        assert original.U == (1, 2, 3)

    def test_stored_as_tuple(self) -> None:
        source = [1.0, 2.0]
        u = VaryingInput(source)
        source.append(3.0)
        assert u.U == (1.0, 2.0)

    def test_eltype(self) -> None:
        assert VaryingInput([1, 2]).eltype is int
        assert VaryingInput([]).eltype is object

    def test_from_array_rows(self) -> None:
        u = VaryingInput(np.zeros((3, 2)))
        assert len(u) == 3


class TestTake:
    def test_view_restarts(self) -> None:
        view = nextinput(VaryingInput([1, 2, 3]), 2)
        assert isinstance(view, Take)
        assert list(view) == [1, 2]
        assert list(view) == [1, 2]

    def test_len(self) -> None:
        assert len(nextinput(VaryingInput([1, 2]), 5)) == 2
        assert len(nextinput(ConstantInput(0.0), 5)) == 5

    def test_zero(self) -> None:
        assert list(nextinput(VaryingInput([1, 2]), 0)) == []

    def test_negative(self) -> None:
        with pytest.raises(ValueError):
            nextinput(ConstantInput(0.0), -1)


def test_constant_nextinput_repeatable() -> None:
    u = ConstantInput([1.0, 2.0])
    assert list(nextinput(u, 4)) == list(nextinput(u, 4))
    assert all(v == [1.0, 2.0] for v in nextinput(u, 4))


class TestInputEquality:
    def test_constant_array_values(self) -> None:
        assert ConstantInput(np.array([1.0, 2.0])) == ConstantInput(np.array([1.0, 2.0]))
        assert ConstantInput(np.array([1.0, 2.0])) != ConstantInput(np.array([1.0, 3.0]))

    def test_constant_scalar_values(self) -> None:
        assert ConstantInput(1.0) == ConstantInput(1.0)
        assert ConstantInput(1.0) != ConstantInput(2.0)

    def test_varying_array_values(self) -> None:
        a = VaryingInput([np.zeros(2), np.ones(2)])
        assert a == VaryingInput([np.zeros(2), np.ones(2)])
        assert a != VaryingInput([np.zeros(2)])
        assert a != VaryingInput([np.zeros(2), np.zeros(2)])

    def test_constant_and_varying_differ(self) -> None:
        assert ConstantInput(1.0) != VaryingInput([1.0])

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(ConstantInput(np.array([1.0, 2.0])))

    def test_array_value_is_read_only_copy(self) -> None:
        value = np.array([1.0, 2.0])
        u = ConstantInput(value)
        value[0] = 5.0
        assert u.U[0] == 1.0
        with pytest.raises(ValueError):
            u.U[0] = 3.0
