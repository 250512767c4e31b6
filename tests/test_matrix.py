"""
Tests for the matrix engine (multiply, Fibonacci tensor, add, compare)
"""

import pytest
import numpy as np

from fibtangle import field
from fibtangle import matrix as matrix_module
from fibtangle.constants import MOD, PHI
from fibtangle.errors import DimensionMismatch, ResourceLimitExceeded
from fibtangle.fibonacci import FibonacciTable, get_table
from fibtangle.generators import CATALOGUE, Glyph, generator_matrix
from fibtangle.matrix import (
    FibMatrix,
    add,
    empty_diagram,
    equals,
    fused_indices,
    identity,
    multiply,
    scalar_identity,
    scale,
    tensor,
    tensor_handle,
)


def random_matrix(rows, cols, seed=0):
    table = get_table()
    rng = np.random.default_rng(seed)
    data = rng.integers(0, MOD, size=(table.dimension(rows), table.dimension(cols)))
    return FibMatrix(data, rows, cols)


class TestFibMatrix:
    def test_shape_from_handles(self):
        m = FibMatrix([1, 0, 0, 1], 3, 3)
        assert m.shape == (2, 2)
        assert m.handles == (3, 3)

    def test_entries_are_normalized(self):
        m = FibMatrix([[-1, 0], [0, 523]], 3, 3)
        np.testing.assert_array_equal(m.data, [[520, 0], [0, 2]])

    def test_wrong_size(self):
        with pytest.raises(DimensionMismatch):
            FibMatrix([1, 2, 3], 3, 3)

    def test_handle_out_of_range(self):
        with pytest.raises(ResourceLimitExceeded):
            FibMatrix([1], 0, 1)

    def test_copy_is_independent(self):
        m = identity(4)
        snapshot = m.copy()
        m.data[0, 0] = 7
        assert snapshot.data[0, 0] == 1

    def test_seeds(self):
        assert scalar_identity().handles == (1, 1)
        assert scalar_identity().tolist() == [[1]]
        assert empty_diagram().handles == (3, 3)
        assert empty_diagram().tolist() == [[1, 0], [0, 1]]


class TestMultiply:
    def test_identity(self):
        a = random_matrix(5, 4)
        assert multiply(identity(5), a) == a
        assert multiply(a, identity(4)) == a

    def test_matmul_operator(self):
        a = random_matrix(4, 5, seed=1)
        b = random_matrix(5, 3, seed=2)
        assert (a @ b) == multiply(a, b)
        assert (a @ b).handles == (4, 3)

    def test_modular_entries(self):
        a = FibMatrix([520, 520, 0, 1], 3, 3)
        b = FibMatrix([520, 0, 520, 1], 3, 3)
        np.testing.assert_array_equal(multiply(a, b).data, [[2, 520], [520, 1]])

    def test_associative(self):
        a = random_matrix(5, 4, seed=3)
        b = random_matrix(4, 6, seed=4)
        c = random_matrix(6, 3, seed=5)
        assert multiply(multiply(a, b), c) == multiply(a, multiply(b, c))

    def test_mismatched_dimensions(self):
        cup = generator_matrix(Glyph.CUP)
        with pytest.raises(DimensionMismatch):
            multiply(cup, cup)


class TestFusedIndices:
    def test_counts_match_output_handle(self):
        table = get_table()
        for k1 in range(2, 14):
            for k2 in range(1, 12):
                k = k1 + k2 - 3
                if not 1 <= k <= table.max_handle:
                    continue
                left, right = fused_indices(k1, k2)
                assert len(left) == len(right) == table.dimension(k)

    def test_right_block_selected_by_left_bit(self):
        # Left handle 4: bits 0, 1, 0. Right handle 5 splits as [0, 3) | [3, 5)
        left, right = fused_indices(4, 5)
        assert left.tolist() == [0, 0, 0, 1, 1, 2, 2, 2]
        assert right.tolist() == [0, 1, 2, 3, 4, 0, 1, 2]

    def test_tensor_handle(self):
        assert tensor_handle(4, 5) == 6
        assert tensor_handle(3, 3) == 3
        with pytest.raises(DimensionMismatch):
            tensor_handle(1, 1)
        with pytest.raises(ResourceLimitExceeded):
            tensor_handle(20, 4)


class TestTensor:
    @pytest.mark.parametrize("glyph", list(Glyph))
    def test_empty_diagram_is_two_sided_identity(self, glyph):
        m = generator_matrix(glyph)
        assert tensor(empty_diagram(), m) == m
        assert tensor(m, empty_diagram()) == m

    def test_empty_identity_on_composite(self):
        line = tensor(tensor(empty_diagram(), identity(4)), generator_matrix(Glyph.POSITIVE_CROSSING))
        assert tensor(empty_diagram(), line) == line
        assert tensor(line, empty_diagram()) == line

    def test_strand_beside_crossing(self):
        cross = generator_matrix(Glyph.POSITIVE_CROSSING).data
        result = tensor(identity(4), generator_matrix(Glyph.POSITIVE_CROSSING))
        assert result.handles == (6, 6)
        expected = np.zeros((8, 8), dtype=np.int64)
        expected[0:3, 0:3] = cross[0:3, 0:3]
        expected[3:5, 3:5] = cross[3:5, 3:5]
        expected[5:8, 5:8] = cross[0:3, 0:3]
        np.testing.assert_array_equal(result.data, expected)

    def test_strands_stay_identity(self):
        strands = identity(4)
        for _ in range(3):
            strands = tensor(strands, identity(4))
        assert strands == identity(7)

    def test_scalar_seed_cannot_be_tensored(self):
        with pytest.raises(DimensionMismatch):
            tensor(scalar_identity(), generator_matrix(Glyph.POSITIVE_CROSSING))

    def test_generators_are_not_modified(self):
        before = generator_matrix(Glyph.CUP).data.copy()
        tensor(identity(4), generator_matrix(Glyph.CUP))
        np.testing.assert_array_equal(generator_matrix(Glyph.CUP).data, before)

    def test_exceeds_table_bound(self):
        table = FibonacciTable(8)
        with pytest.raises(ResourceLimitExceeded):
            tensor(identity(7, table), identity(5, table))


class TestFieldReduction:
    def test_engine_reduces_through_field(self, monkeypatch):
        calls = []

        def counting_reduce(values):
            calls.append(1)
            return field.reduce(values)

        a = random_matrix(4, 5, seed=6)
        b = random_matrix(5, 4, seed=7)
        monkeypatch.setattr(matrix_module, "reduce", counting_reduce)
        multiply(a, b)
        tensor(a, b)
        add(a, a)
        scale(a, PHI)
        # one reduction per operation plus one per constructed FibMatrix
        assert len(calls) == 8


class TestOutOfMemory:
    @staticmethod
    def _exhausted(values):
        raise MemoryError("Unable to allocate")

    def test_multiply(self, monkeypatch):
        a = identity(5)
        monkeypatch.setattr(matrix_module, "reduce", self._exhausted)
        with pytest.raises(ResourceLimitExceeded, match="out of memory"):
            multiply(a, a)

    def test_tensor(self, monkeypatch):
        a = identity(4)
        b = identity(5)
        monkeypatch.setattr(matrix_module, "reduce", self._exhausted)
        with pytest.raises(ResourceLimitExceeded, match="out of memory"):
            tensor(a, b)

    def test_construction(self, monkeypatch):
        monkeypatch.setattr(matrix_module, "reduce", self._exhausted)
        with pytest.raises(ResourceLimitExceeded, match="out of memory"):
            FibMatrix([1, 0, 0, 1], 3, 3)


class TestAddAndEquals:
    def test_add(self):
        total = add(identity(4), identity(4))
        np.testing.assert_array_equal(total.data, 2 * np.eye(3, dtype=np.int64))
        assert (identity(4) + identity(4)) == total

    def test_add_wraps(self):
        a = FibMatrix([520, 0, 0, 1], 3, 3)
        assert add(a, identity(3)).tolist() == [[0, 0], [0, 2]]

    def test_add_mismatch(self):
        with pytest.raises(DimensionMismatch):
            add(identity(4), identity(5))

    def test_equals(self):
        assert equals(identity(5), identity(5))
        assert not equals(identity(5), generator_matrix(Glyph.POSITIVE_CROSSING))

    def test_equals_mismatch(self):
        with pytest.raises(DimensionMismatch):
            equals(identity(4), identity(5))

    def test_eq_operator_with_other_handles(self):
        assert identity(4) != identity(5)

    def test_scale(self):
        assert scale(empty_diagram(), PHI).tolist() == [[PHI, 0], [0, PHI]]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
