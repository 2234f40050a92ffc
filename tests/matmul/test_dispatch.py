"""
Tests for kernel dispatch, MatmulDesign and MatmulSolution.
"""

import numpy as np
import pytest

from pymatrices import DenseMatrix, MatmulSolution, matmul, multiply
from pymatrices.core.exceptions import (
    DimensionMismatchError,
    MultiplicationDimensionError,
    ValidationError,
)
from pymatrices.matmul import (
    KERNELS,
    MatmulDesign,
    general_blocked,
    naive,
    plan_kernel,
    transposed_blocked,
)


def _random_int(rng, shape):
    return DenseMatrix.from_array(rng.integers(-20, 20, shape), 'int64')


# ═══════════════════════════════════════════════════════════════════════
# Planning
# ═══════════════════════════════════════════════════════════════════════


class TestPlanKernel:

    @pytest.mark.parametrize("shape_a, shape_b", [
        ((1, 2), (2, 1)),
        ((2, 2), (2, 1)),
        ((1, 2), (2, 2)),
        ((2, 2), (2, 2)),
    ])
    def test_tiny(self, shape_a, shape_b):
        assert plan_kernel(shape_a, shape_b) == 'tiny'

    def test_equal_shapes_use_transposed(self):
        assert plan_kernel((3, 3), (3, 3)) == 'transposed_blocked'
        assert plan_kernel((1, 1), (1, 1)) == 'transposed_blocked'

    def test_other_shapes_use_general(self):
        assert plan_kernel((3, 4), (4, 5)) == 'general_blocked'
        assert plan_kernel((2, 1), (1, 2)) == 'general_blocked'

    def test_forced_transposed_requires_square(self):
        with pytest.raises(DimensionMismatchError):
            plan_kernel((3, 4), (4, 5), 'transposed_blocked')

    def test_forced_general_and_naive(self):
        assert plan_kernel((2, 2), (2, 2), 'general_blocked') == 'general_blocked'
        assert plan_kernel((2, 2), (2, 2), 'naive') == 'naive'

    def test_unknown_kernel(self):
        with pytest.raises(ValidationError, match="Unknown kernel"):
            plan_kernel((2, 2), (2, 2), 'strassen')

    def test_kernel_names(self):
        assert set(KERNELS) == {'tiny', 'transposed_blocked', 'general_blocked', 'naive'}


class TestMatmulDesign:

    def test_blocked_design_records_block_size(self, rng):
        a, b = _random_int(rng, (12, 20)), _random_int(rng, (20, 8))
        design = MatmulDesign.from_matrices(a, b)
        assert design.kernel == 'general_blocked'
        assert design.block_size == 10
        assert not design.block_size_fallback
        assert design.output_shape == (12, 8)

    def test_fallback_recorded(self, rng):
        a = _random_int(rng, (37, 37))
        design = MatmulDesign.from_matrices(a, a)
        assert design.block_size == 10
        assert design.block_size_fallback

    def test_explicit_block_size(self, rng):
        a = _random_int(rng, (6, 6))
        design = MatmulDesign.from_matrices(a, a, block_size=4)
        assert design.block_size == 4
        assert not design.block_size_fallback

    def test_tiny_and_naive_have_no_block_size(self, rng):
        a = _random_int(rng, (2, 2))
        assert MatmulDesign.from_matrices(a, a).block_size is None
        assert MatmulDesign.from_matrices(a, a, kernel='naive').block_size is None

    def test_promotes_operands(self):
        a = DenseMatrix.ones((3, 3), 'int32')
        b = DenseMatrix.ones((3, 3), 'float64')
        design = MatmulDesign.from_matrices(a, b)
        assert design.dtype == np.float64
        assert design.left.dtype == np.float64

    def test_rejects_non_dense(self):
        with pytest.raises(ValidationError, match="DenseMatrix"):
            MatmulDesign.from_matrices(np.ones((2, 2)), DenseMatrix.ones((2, 2)))

    @pytest.mark.parametrize("option", [{'block_size': 0}, {'workers': 0}, {'workers': 1.5}])
    def test_invalid_options(self, option):
        a = DenseMatrix.ones((3, 3))
        with pytest.raises(ValidationError):
            MatmulDesign.from_matrices(a, a, **option)

    def test_inner_dimension_mismatch(self):
        with pytest.raises(MultiplicationDimensionError) as info:
            MatmulDesign.from_matrices(DenseMatrix.ones((2, 3)), DenseMatrix.ones((4, 2)))
        assert info.value.left == (2, 3)
        assert info.value.right == (4, 2)

    def test_frozen(self):
        a = DenseMatrix.ones((3, 3))
        design = MatmulDesign.from_matrices(a, a)
        with pytest.raises(AttributeError):
            design._kernel = 'naive'


# ═══════════════════════════════════════════════════════════════════════
# Solutions
# ═══════════════════════════════════════════════════════════════════════


class TestMatmul:

    def test_returns_solution(self, rng):
        a, b = _random_int(rng, (5, 7)), _random_int(rng, (7, 3))
        solution = matmul(a, b)
        assert isinstance(solution, MatmulSolution)
        np.testing.assert_array_equal(
            solution.product.to_numpy(), a.to_numpy() @ b.to_numpy()
        )
        assert solution.shape == (5, 3)

    def test_metadata(self, rng):
        a = _random_int(rng, (20, 20))
        solution = matmul(a, a)
        assert solution.kernel == 'transposed_blocked'
        assert solution.block_size == 10
        assert solution.backend_name == 'cpu_transposed_blocked'
        assert solution.info['output_shape'] == (20, 20)
        assert solution.info['dtype'] == 'int64'
        assert solution.timing['kernel'] <= solution.timing['total_seconds']
        assert solution.timing['total_seconds'] >= 0
        assert solution.warnings == ()

    def test_fallback_warning(self, rng):
        a = _random_int(rng, (37, 37))
        solution = matmul(a, a)
        assert solution.block_size_fallback
        assert any("no block size" in w for w in solution.warnings)
        assert "range minimum" in solution.summary()

    def test_summary(self, rng):
        a, b = _random_int(rng, (2, 2)), _random_int(rng, (2, 1))
        summary = matmul(a, b).summary()
        assert "Kernel:     tiny" in summary
        assert "Block size" not in summary
        assert "cpu_tiny" in summary

    def test_repr(self, rng):
        a = _random_int(rng, (4, 4))
        assert repr(matmul(a, a, kernel='naive')) == (
            "MatmulSolution(shape=(4, 4), kernel='naive', block_size=None)"
        )

    @pytest.mark.parametrize("kernel", ['auto', 'general_blocked', 'naive', 'transposed_blocked'])
    def test_every_kernel_agrees(self, rng, kernel):
        a, b = _random_int(rng, (23, 23)), _random_int(rng, (23, 23))
        expected = a.to_numpy() @ b.to_numpy()
        np.testing.assert_array_equal(matmul(a, b, kernel=kernel).product.to_numpy(), expected)

    def test_float_products_within_tolerance(self, rng):
        a = DenseMatrix.from_array(rng.standard_normal((31, 44)))
        b = DenseMatrix.from_array(rng.standard_normal((44, 17)))
        blocked = matmul(a, b).product
        reference = naive(a, b)
        np.testing.assert_allclose(
            blocked.to_numpy(), reference.to_numpy(), rtol=1e-10, atol=1e-10
        )

    def test_mismatch_raises(self):
        with pytest.raises(MultiplicationDimensionError):
            matmul(DenseMatrix.ones((3, 2)), DenseMatrix.ones((3, 2)))


class TestEntryPoints:

    def test_multiply(self, det_matrix):
        expected = det_matrix.to_numpy() @ det_matrix.to_numpy()
        np.testing.assert_array_equal(multiply(det_matrix, det_matrix).to_numpy(), expected)

    def test_naive_workers(self, rng):
        a, b = _random_int(rng, (17, 9)), _random_int(rng, (9, 4))
        assert naive(a, b, workers=4) == naive(a, b)

    def test_transposed_blocked_block_size(self, rng):
        a, b = _random_int(rng, (9, 9)), _random_int(rng, (9, 9))
        assert transposed_blocked(a, b, block_size=4) == naive(a, b)

    def test_transposed_blocked_rejects_rectangular(self):
        with pytest.raises(DimensionMismatchError):
            transposed_blocked(DenseMatrix.ones((2, 3)), DenseMatrix.ones((3, 2)))

    def test_general_blocked(self, rng):
        a, b = _random_int(rng, (11, 6)), _random_int(rng, (6, 13))
        assert general_blocked(a, b, block_size=3) == naive(a, b)

    def test_result_does_not_alias_operands(self, rng):
        a = _random_int(rng, (4, 4))
        product = multiply(a, DenseMatrix.eye(4, 'int64'))
        product.set(999, (0, 0))
        assert a.at(0, 0) != 999
