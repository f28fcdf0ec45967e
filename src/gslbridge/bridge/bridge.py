#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from typing import Any
from typing_extensions import override
import logging
import threading
import numpy as np

import gslbridge.itf as itf
from ..exceptions import (
    AllocationFailure,
    FeatureDisabled,
    RankMismatch,
    UnsupportedElementKind,
    ViewNotPossible,
)
from ..types.block import Block
from ..types.kinds import ElementKind
from ..types.matrix import Matrix
from ..types.vector import Vector
from .config import BridgeConfig
from .kinds import dtype_to_kind, kind_to_dtype

__all__ = [
    "ArrayBridge",
    "default_bridge",
    "reset_default_bridge",
    "to_ndarray",
    "to_vector",
    "to_matrix",
]

logger = logging.getLogger(__name__)


class ArrayBridge(itf.bridge.Converter):
    """
    Converts between typed vectors/matrices and numpy arrays.
    Copy conversions are always available, view conversions
    depend on the configuration.
    """

    def __init__(self, config: BridgeConfig | None = None) -> None:
        self._config = config if config is not None else BridgeConfig()

    @property
    def config(self) -> BridgeConfig:
        return self._config

    @classmethod
    def _allocate(cls, shape: tuple[int, ...], dtype: np.dtype) -> np.ndarray:
        try:
            return np.empty(shape, dtype=dtype)
        except MemoryError as e:
            raise AllocationFailure(
                f"unable to allocate {dtype.name} array of shape {shape}"
            ) from e

    @classmethod
    def _check_ndarray(cls, array: Any, ndim: int) -> np.ndarray:
        if not isinstance(array, np.ndarray):
            raise TypeError(
                f"expected a numpy ndarray, got: {array.__class__.__name__}"
            )
        if array.ndim != ndim:
            raise RankMismatch(ndim, array.ndim)
        return array

    def _check_views(self, conversion: str) -> None:
        if not self._config.enable_views:
            raise FeatureDisabled(f"{conversion}: view conversions are disabled")

    @override
    def vector_to_ndarray(self, vector: Vector) -> np.ndarray:
        assert isinstance(vector, Vector), f"not a Vector: {vector!r}"
        dtype = kind_to_dtype(vector.kind)
        logger.debug(
            "vector to ndarray: size %d, stride %d, %s",
            vector.size,
            vector.stride,
            dtype.name,
        )
        out = self._allocate((vector.size,), dtype)
        out[...] = vector.numpy()
        return out

    @override
    def matrix_to_ndarray(self, matrix: Matrix) -> np.ndarray:
        assert isinstance(matrix, Matrix), f"not a Matrix: {matrix!r}"
        dtype = kind_to_dtype(matrix.kind)
        logger.debug(
            "matrix to ndarray: %dx%d, tda %d, %s",
            matrix.size1,
            matrix.size2,
            matrix.tda,
            dtype.name,
        )
        out = self._allocate(matrix.shape, dtype)
        out[...] = matrix.numpy()
        return out

    @override
    def ndarray_to_vector(self, array: np.ndarray) -> Vector:
        array = self._check_ndarray(array, 1)
        kind = dtype_to_kind(array.dtype)
        logger.debug("ndarray to vector: size %d, %s", array.shape[0], kind.value)
        vector = Vector(array.shape[0], kind)
        vector.numpy()[...] = array
        return vector

    @override
    def ndarray_to_matrix(self, array: np.ndarray) -> Matrix:
        array = self._check_ndarray(array, 2)
        kind = dtype_to_kind(array.dtype)
        size1, size2 = array.shape
        logger.debug("ndarray to matrix: %dx%d, %s", size1, size2, kind.value)
        matrix = Matrix(size1, size2, kind)
        matrix.numpy()[...] = array
        return matrix

    def _borrow(self, array: np.ndarray, span: int, kind: ElementKind) -> Block:
        return Block.borrow(
            array.ctypes.data,
            span,
            kind,
            owner=array,
            readonly=not array.flags.writeable,
        )

    @classmethod
    def _view_kind(cls, array: np.ndarray) -> ElementKind:
        kind = dtype_to_kind(array.dtype)
        if not array.dtype.isnative:
            raise ViewNotPossible(
                f"can't view non-native byte order array of {array.dtype.str}"
            )
        if not array.flags.aligned:
            raise ViewNotPossible("can't view unaligned array")
        return kind

    def ndarray_to_vector_view(self, array: np.ndarray) -> Vector:
        """Return a vector aliasing the memory of a rank 1 numpy array.

        The vector keeps the array alive. Writes through the vector are
        visible in the array and conversely. A read-only array gives a
        read-only vector.
        """
        self._check_views("ndarray_to_vector_view")
        array = self._check_ndarray(array, 1)
        kind = self._view_kind(array)
        itemsize = array.dtype.itemsize
        (size,) = array.shape
        stride = 1
        if size > 1:
            stride_bytes = array.strides[0]
            if stride_bytes <= 0 or stride_bytes % itemsize != 0:
                raise ViewNotPossible(
                    f"can't view array with stride of {stride_bytes} bytes "
                    f"as a vector of {itemsize} bytes elements"
                )
            stride = stride_bytes // itemsize
        span = (size - 1) * stride + 1 if size > 0 else 0
        logger.debug("ndarray to vector view: size %d, stride %d", size, stride)
        block = self._borrow(array, span, kind)
        return Vector(size, kind, block=block, stride=stride, owner=array)

    def ndarray_to_matrix_view(self, array: np.ndarray) -> Matrix:
        """Return a matrix aliasing the memory of a rank 2 numpy array.

        Rows must be contiguous, the row pitch becomes the matrix tda.
        """
        self._check_views("ndarray_to_matrix_view")
        array = self._check_ndarray(array, 2)
        kind = self._view_kind(array)
        itemsize = array.dtype.itemsize
        size1, size2 = array.shape
        if size1 > 0 and size2 > 1 and array.strides[1] != itemsize:
            raise ViewNotPossible(
                "can't view array with non contiguous rows as a matrix"
            )
        tda = size2
        if size1 > 1 and size2 > 0:
            row_bytes = array.strides[0]
            if (
                row_bytes <= 0
                or row_bytes % itemsize != 0
                or row_bytes // itemsize < size2
            ):
                raise ViewNotPossible(
                    f"can't view array with row stride of {row_bytes} bytes "
                    f"as a matrix with {size2} columns"
                )
            tda = row_bytes // itemsize
        span = (size1 - 1) * tda + size2 if size1 > 0 and size2 > 0 else 0
        logger.debug("ndarray to matrix view: %dx%d, tda %d", size1, size2, tda)
        block = self._borrow(array, span, kind)
        return Matrix(size1, size2, kind, block=block, tda=tda, owner=array)

    def vector_to_ndarray_view(self, vector: Vector) -> np.ndarray:
        """Return a numpy array aliasing the storage of a vector.

        The array keeps the vector storage alive and honours its stride.
        """
        self._check_views("vector_to_ndarray_view")
        assert isinstance(vector, Vector), f"not a Vector: {vector!r}"
        kind_to_dtype(vector.kind)
        return vector.numpy()

    def matrix_to_ndarray_view(self, matrix: Matrix) -> np.ndarray:
        """Return a numpy array aliasing the storage of a matrix.

        The array keeps the matrix storage alive and honours its tda.
        """
        self._check_views("matrix_to_ndarray_view")
        assert isinstance(matrix, Matrix), f"not a Matrix: {matrix!r}"
        kind_to_dtype(matrix.kind)
        return matrix.numpy()

    def to_ndarray(self, obj: Vector | Matrix, view: bool = False) -> np.ndarray:
        if isinstance(obj, Vector):
            if view:
                return self.vector_to_ndarray_view(obj)
            return self.vector_to_ndarray(obj)
        if isinstance(obj, Matrix):
            if view:
                return self.matrix_to_ndarray_view(obj)
            return self.matrix_to_ndarray(obj)
        raise TypeError(f"expected a Vector or a Matrix, got: {obj.__class__.__name__}")

    @classmethod
    def _describe(
        cls, obj: Any
    ) -> tuple[str, tuple[int, ...], ElementKind, np.ndarray] | None:
        if isinstance(obj, Vector):
            return "vector", obj.shape, obj.kind, obj.numpy()
        if isinstance(obj, Matrix):
            return "matrix", obj.shape, obj.kind, obj.numpy()
        if isinstance(obj, np.ndarray):
            if obj.ndim not in (1, 2):
                return None
            role = "vector" if obj.ndim == 1 else "matrix"
            return role, obj.shape, dtype_to_kind(obj.dtype), obj
        raise TypeError(
            f"expected a Vector, a Matrix or a numpy ndarray, got: {obj.__class__.__name__}"
        )

    @override
    def equivalent(self, lhs: Any, rhs: Any) -> bool:
        try:
            lhs_desc = self._describe(lhs)
            rhs_desc = self._describe(rhs)
        except UnsupportedElementKind as e:
            logger.debug("not equivalent: %s", e)
            return False
        if lhs_desc is None or rhs_desc is None:
            return False
        lhs_role, lhs_shape, lhs_kind, lhs_values = lhs_desc
        rhs_role, rhs_shape, rhs_kind, rhs_values = rhs_desc
        return (
            lhs_role == rhs_role
            and lhs_shape == rhs_shape
            and lhs_kind == rhs_kind
            and bool(
                np.array_equal(
                    lhs_values, rhs_values, equal_nan=not lhs_kind.is_integer
                )
            )
        )

    def __repr__(self) -> str:
        return f"ArrayBridge({self._config!r})"


_default_bridge: ArrayBridge | None = None
_default_bridge_lock = threading.Lock()


def default_bridge() -> ArrayBridge:
    """Return the bridge configured from the environment, built on first use"""
    global _default_bridge
    with _default_bridge_lock:
        if _default_bridge is None:
            _default_bridge = ArrayBridge(BridgeConfig.from_env())
        return _default_bridge


def reset_default_bridge() -> None:
    """Drop the default bridge, the next use reads the environment again"""
    global _default_bridge
    with _default_bridge_lock:
        _default_bridge = None


def to_ndarray(obj: Vector | Matrix, view: bool = False) -> np.ndarray:
    return default_bridge().to_ndarray(obj, view=view)


def to_vector(array: np.ndarray, view: bool = False) -> Vector:
    if view:
        return default_bridge().ndarray_to_vector_view(array)
    return default_bridge().ndarray_to_vector(array)


def to_matrix(array: np.ndarray, view: bool = False) -> Matrix:
    if view:
        return default_bridge().ndarray_to_matrix_view(array)
    return default_bridge().ndarray_to_matrix(array)
