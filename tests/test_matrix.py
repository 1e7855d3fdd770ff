"""Tests for Matrix4 composition and construction."""

import numpy as np
import pytest

from furnace.core.matrix import IDENTITY, Matrix4, multiply


@pytest.fixture
def random_matrices():
    rng = np.random.default_rng(seed=7)
    return [Matrix4(rng.uniform(-2.0, 2.0, size=(4, 4))) for _ in range(3)]


class TestMultiply:
    def test_row_by_column_product(self):
        a = Matrix4(np.arange(16).reshape(4, 4))
        b = Matrix4(np.arange(16, 32).reshape(4, 4))
        expected = np.arange(16).reshape(4, 4) @ np.arange(16, 32).reshape(4, 4)
        np.testing.assert_allclose(multiply(a, b).contents(), expected)

    def test_associative(self, random_matrices):
        a, b, c = random_matrices
        left = multiply(multiply(a, b), c)
        right = multiply(a, multiply(b, c))
        np.testing.assert_allclose(left.contents(), right.contents(), rtol=1e-5, atol=1e-5)

    def test_not_commutative(self, random_matrices):
        a, b, _ = random_matrices
        assert not (a @ b).isclose(b @ a)

    def test_identity_is_neutral(self, random_matrices):
        a = random_matrices[0]
        np.testing.assert_allclose(multiply(a, IDENTITY).contents(), a.contents())
        np.testing.assert_allclose(multiply(IDENTITY, a).contents(), a.contents())

    def test_operator_matches_function(self, random_matrices):
        a, b, _ = random_matrices
        assert (a @ b).isclose(multiply(a, b))

    def test_operator_rejects_other_types(self):
        with pytest.raises(TypeError):
            IDENTITY @ "not a matrix"


class TestConstruction:
    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            Matrix4(np.zeros((3, 3)))

    def test_contents_are_read_only(self):
        matrix = Matrix4.identity()
        with pytest.raises(ValueError):
            matrix.contents()[0, 0] = 5.0

    def test_source_array_is_copied(self):
        source = np.identity(4)
        matrix = Matrix4(source)
        source[0, 0] = 9.0
        assert matrix.contents()[0, 0] == 1.0

    def test_float32_storage(self):
        matrix = Matrix4.identity()
        assert matrix.contents().dtype == np.float32
        assert len(matrix.tobytes()) == 64

    def test_translation_in_last_column(self):
        matrix = Matrix4.from_translation((1.0, 2.0, 3.0))
        np.testing.assert_allclose(matrix.contents()[:, 3], [1.0, 2.0, 3.0, 1.0])
        np.testing.assert_allclose(matrix.contents()[3, :3], [0.0, 0.0, 0.0])

    def test_uniform_and_per_axis_scale(self):
        np.testing.assert_allclose(np.diag(Matrix4.from_scale(0.5).contents()), [0.5, 0.5, 0.5, 1.0])
        np.testing.assert_allclose(np.diag(Matrix4.from_scale((1.0, 2.0, 3.0)).contents()), [1.0, 2.0, 3.0, 1.0])

    def test_transpose(self):
        matrix = Matrix4.from_translation((1.0, 2.0, 3.0)).transpose()
        np.testing.assert_allclose(matrix.contents()[3], [1.0, 2.0, 3.0, 1.0])


class TestTransform:
    def test_translate_then_scale_order(self):
        # translation @ scale scales first, then translates
        matrix = Matrix4.from_translation((1.0, 0.0, 0.0)) @ Matrix4.from_scale(2.0)
        np.testing.assert_allclose(matrix.transform_point((1.0, 1.0, 1.0)), [3.0, 2.0, 2.0])

    def test_perspective_divide(self):
        matrix = Matrix4(np.diag([1.0, 1.0, 1.0, 2.0]))
        np.testing.assert_allclose(matrix.transform_point((2.0, 4.0, 6.0)), [1.0, 2.0, 3.0])

    def test_w_zero_raises(self):
        matrix = Matrix4(np.diag([1.0, 1.0, 1.0, 0.0]))
        with pytest.raises(ZeroDivisionError):
            matrix.transform_point((1.0, 1.0, 1.0))

    def test_determinant(self):
        assert Matrix4.from_scale(2.0).determinant() == pytest.approx(8.0)

    def test_repr(self):
        assert repr(IDENTITY).startswith("Matrix4([")
