import itertools
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

import gslbridge
from gslbridge import (
    ElementKind,
    Matrix,
    RankMismatch,
    UnsupportedElementKind,
    Vector,
)
from gslbridge.bridge import kind_to_dtype
from gslbridge.utils.numpy import np_init

from bridge_utils import (
    MAPPED_KINDS,
    UNMAPPED_KINDS,
    make_bridge,
    padded_matrix,
    sample_matrix,
    sample_vector,
)


@pytest.fixture
def bridge():
    return make_bridge()


# Typed storage to numpy


def test_gsl_vector_to_ndarray(bridge):
    vector = Vector.alloc(2.354, 4.443, 6.776)
    array = bridge.vector_to_ndarray(vector)
    assert array.shape == (3,)
    assert array.dtype == np.float64
    assert array.tolist() == [2.354, 4.443, 6.776]
    assert bridge.ndarray_to_vector(array) == vector


def test_gsl_vector_int_to_ndarray(bridge):
    vector = Vector.alloc(1, 2, 3, 4, 5, kind=ElementKind.INT)
    array = bridge.vector_to_ndarray(vector)
    assert array.dtype == np.int32
    assert np.array_equal(array, np.array([1, 2, 3, 4, 5], dtype=np.int32))
    assert bridge.ndarray_to_vector(array) == vector


def test_gsl_vector_complex_to_ndarray(bridge):
    vector = Vector.alloc([[1, 0], [2, 0], [3, 0]], kind=ElementKind.COMPLEX)
    array = bridge.vector_to_ndarray(vector)
    assert array.dtype == np.complex128
    assert np.array_equal(array, np.array([1, 2, 3], dtype=np.complex128))
    back = bridge.ndarray_to_vector(array)
    assert back == vector
    assert back.kind == ElementKind.COMPLEX


def test_complex_component_order(bridge):
    vector = Vector.alloc((1, -2), (3, 4), kind=ElementKind.COMPLEX)
    array = bridge.vector_to_ndarray(vector)
    assert array.real.tolist() == [1.0, 3.0]
    assert array.imag.tolist() == [-2.0, 4.0]


def test_gsl_matrix_to_ndarray(bridge):
    matrix = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    array = bridge.matrix_to_ndarray(matrix)
    assert array.shape == (3, 3)
    assert array.dtype == np.float64
    assert array.ravel().tolist() == [1, 2, 3, 4, 5, 6, 7, 8, 9]
    assert bridge.ndarray_to_matrix(array) == matrix


def test_gsl_matrix_int_to_ndarray(bridge):
    matrix = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]], kind=ElementKind.INT)
    array = bridge.matrix_to_ndarray(matrix)
    expected = np.array([1, 2, 3, 4, 5, 6, 7, 8, 9], dtype=np.int32).reshape(3, 3)
    assert array.dtype == np.int32
    assert np.array_equal(array, expected)


def test_strided_vector_is_densified(bridge):
    vector = Vector.alloc(list(range(10))).subvector(1, 3, stride=3)
    array = bridge.vector_to_ndarray(vector)
    assert array.tolist() == [1.0, 4.0, 7.0]
    assert array.flags["C_CONTIGUOUS"]
    assert array.strides == (8,)


def test_matrix_with_tda_is_densified(bridge):
    matrix, values = padded_matrix(3, 2, 5)
    array = bridge.matrix_to_ndarray(matrix)
    assert array.flags["C_CONTIGUOUS"]
    assert np.array_equal(array, values)
    assert -1.0 not in array


def test_column_view_to_ndarray(bridge):
    matrix = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]], kind=ElementKind.INT)
    array = bridge.vector_to_ndarray(matrix.column(2))
    assert array.tolist() == [3, 6, 9]


# numpy to typed storage


def test_ndarray_to_vector(bridge):
    vector = bridge.ndarray_to_vector(np.array([2.354, 4.443, 6.776]))
    assert vector == Vector.alloc(2.354, 4.443, 6.776)
    assert vector.stride == 1
    assert not vector.is_view


def test_ndarray_to_matrix(bridge):
    matrix = bridge.ndarray_to_matrix(np.arange(6, dtype=np.int32).reshape(2, 3))
    assert matrix.kind == ElementKind.INT
    assert matrix.shape == (2, 3)
    assert matrix.tda == 3
    assert matrix.tolist() == [[0, 1, 2], [3, 4, 5]]


def test_non_contiguous_ndarray_inputs(bridge):
    array = np.arange(12.0).reshape(3, 4)
    assert bridge.ndarray_to_vector(array[:, 1]).tolist() == [1.0, 5.0, 9.0]
    assert bridge.ndarray_to_matrix(array.T).tolist() == array.T.tolist()
    assert bridge.ndarray_to_vector(array[0, ::-1]).tolist() == [3.0, 2.0, 1.0, 0.0]


def test_non_native_byte_order_is_copied(bridge):
    array = np.arange(3, dtype=np.dtype(np.float64).newbyteorder())
    vector = bridge.ndarray_to_vector(array)
    assert vector.tolist() == [0.0, 1.0, 2.0]


def test_conversions_do_not_alias(bridge):
    array = np.array([1.0, 2.0, 3.0])
    vector = bridge.ndarray_to_vector(array)
    array[0] = 100.0
    assert vector[0] == 1.0
    out = bridge.vector_to_ndarray(vector)
    out[1] = 200.0
    assert vector[1] == 2.0

    matrix = Matrix.eye(2)
    out = bridge.matrix_to_ndarray(matrix)
    out[0, 0] = 5.0
    assert matrix[0, 0] == 1.0


def test_source_is_not_mutated(bridge):
    array = np_init((3, 3), ElementKind.COMPLEX)
    expected = array.copy()
    bridge.ndarray_to_matrix(array)
    assert np.array_equal(array, expected)


# Errors


@pytest.mark.parametrize("kind", UNMAPPED_KINDS)
def test_unmapped_vector_kind(bridge, kind):
    with pytest.raises(UnsupportedElementKind):
        bridge.vector_to_ndarray(Vector(3, kind))


@pytest.mark.parametrize("kind", UNMAPPED_KINDS)
def test_unmapped_matrix_kind(bridge, kind):
    with pytest.raises(UnsupportedElementKind):
        bridge.matrix_to_ndarray(Matrix(2, 2, kind))


@pytest.mark.parametrize("dtype", ["float32", "int64", "uint8", "complex64", "bool"])
def test_unmapped_dtype(bridge, dtype):
    with pytest.raises(UnsupportedElementKind):
        bridge.ndarray_to_vector(np.zeros(3, dtype=dtype))
    with pytest.raises(UnsupportedElementKind):
        bridge.ndarray_to_matrix(np.zeros((3, 3), dtype=dtype))


@pytest.mark.parametrize("shape", [(), (2, 2), (2, 2, 2)])
def test_rank_mismatch_vector(bridge, shape):
    with pytest.raises(RankMismatch) as excinfo:
        bridge.ndarray_to_vector(np.zeros(shape))
    assert excinfo.value.expected == 1
    assert excinfo.value.actual == len(shape)


@pytest.mark.parametrize("shape", [(), (3,), (2, 2, 2)])
def test_rank_mismatch_matrix(bridge, shape):
    with pytest.raises(RankMismatch) as excinfo:
        bridge.ndarray_to_matrix(np.zeros(shape))
    assert excinfo.value.expected == 2


def test_rank_is_checked_before_kind(bridge):
    with pytest.raises(RankMismatch):
        bridge.ndarray_to_vector(np.zeros((2, 2, 2), dtype=np.float32))


def test_not_an_ndarray(bridge):
    with pytest.raises(TypeError):
        bridge.ndarray_to_vector([1.0, 2.0])
    with pytest.raises(TypeError):
        bridge.to_ndarray([1.0, 2.0])


# Round trips


@pytest.mark.parametrize("kind", MAPPED_KINDS)
@pytest.mark.parametrize("size", [0, 1, 3, 100])
def test_vector_round_trip(bridge, kind, size):
    vector = sample_vector(size, kind)
    array = bridge.vector_to_ndarray(vector)
    assert array.shape == (size,)
    assert array.dtype == kind_to_dtype(kind)
    back = bridge.ndarray_to_vector(array)
    assert back == vector
    assert bridge.equivalent(back, vector)
    assert bridge.equivalent(array, vector)


@pytest.mark.parametrize("kind", MAPPED_KINDS)
@pytest.mark.parametrize("size1, size2", list(itertools.product([0, 1, 3], [0, 1, 3])))
def test_matrix_round_trip(bridge, kind, size1, size2):
    matrix = sample_matrix(size1, size2, kind)
    array = bridge.matrix_to_ndarray(matrix)
    assert array.shape == (size1, size2)
    back = bridge.ndarray_to_matrix(array)
    assert back == matrix
    assert bridge.equivalent(matrix, array)


# Equivalence


def test_equivalent(bridge):
    vector = Vector.alloc(1, 2)
    assert bridge.equivalent(vector, np.array([1.0, 2.0]))
    assert bridge.equivalent(np.array([1.0, 2.0]), vector)
    assert not bridge.equivalent(vector, np.array([1, 2], dtype=np.int32))
    assert not bridge.equivalent(vector, np.array([1.0, 2.5]))
    assert not bridge.equivalent(vector, np.array([[1.0, 2.0]]))
    assert not bridge.equivalent(vector, Matrix.from_rows([[1, 2]]))
    assert not bridge.equivalent(vector, np.array([1.0, 2.0], dtype=np.float32))
    assert not bridge.equivalent(np.zeros((1, 1, 2)), np.zeros((1, 1, 2)))
    with pytest.raises(TypeError):
        bridge.equivalent(vector, [1.0, 2.0])


def test_equivalent_is_exact(bridge):
    vector = Vector.alloc(0.1 + 0.2)
    assert not bridge.equivalent(vector, np.array([0.3]))


def test_nan_round_trip(bridge):
    vector = Vector.alloc(np.nan, 1.0)
    array = bridge.vector_to_ndarray(vector)
    assert bridge.equivalent(vector, array)
    assert bridge.ndarray_to_vector(array) == vector
    matrix = Matrix.from_rows([[np.nan, 2.0], [3.0, np.nan]])
    array = bridge.matrix_to_ndarray(matrix)
    assert bridge.equivalent(array, matrix)
    assert bridge.ndarray_to_matrix(array) == matrix


# Module helpers


def test_default_bridge_helpers():
    vector = Vector.alloc(1, 2, 3, kind=ElementKind.INT)
    array = gslbridge.to_ndarray(vector)
    assert array.dtype == np.int32
    assert gslbridge.to_vector(array) == vector
    assert vector.to_ndarray().tolist() == [1, 2, 3]
    assert Vector.from_ndarray(array) == vector

    matrix = Matrix.eye(3)
    assert gslbridge.to_matrix(gslbridge.to_ndarray(matrix)) == matrix
    assert Matrix.from_ndarray(matrix.to_ndarray()) == matrix
    assert gslbridge.default_bridge() is gslbridge.default_bridge()


def test_concurrent_conversions(bridge):
    arrays = [np_init((n, 3), ElementKind.DOUBLE) * n for n in range(1, 17)]
    with ThreadPoolExecutor(max_workers=4) as executor:
        matrices = list(executor.map(bridge.ndarray_to_matrix, arrays))
    for array, matrix in zip(arrays, matrices):
        assert bridge.equivalent(matrix, array)
