"""
Tests for field arithmetic over Z/521Z
"""

import pytest
import numpy as np

from fibtangle import field
from fibtangle.constants import MOD, PHI, PHI_INV, Q, QQQQ


class TestScalars:
    def test_add_wraps(self):
        assert field.add(520, 1) == 0
        assert field.add(300, 300) == 79

    def test_mul(self):
        assert field.mul(520, 520) == 1
        assert field.mul(PHI, PHI_INV) == 1

    def test_results_in_range(self):
        for a in (0, 1, 260, 520):
            for b in (0, 1, 261, 520):
                assert 0 <= field.add(a, b) < MOD
                assert 0 <= field.mul(a, b) < MOD


class TestTheoryConstants:
    def test_golden_ratio(self):
        assert field.mul(PHI, PHI) == field.add(PHI, 1)

    def test_fifth_power_of_root(self):
        assert field.mul(Q, QQQQ) == MOD - 1

    def test_values(self):
        assert PHI == 422
        assert PHI_INV == 421


class TestReduce:
    def test_reduce_array(self):
        reduced = field.reduce([-1, 521, 1045])
        np.testing.assert_array_equal(reduced, [520, 0, 3])
        assert reduced.dtype == np.int64


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
