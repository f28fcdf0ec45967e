#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any
import numpy.typing

if TYPE_CHECKING:
    from ...types.vector import Vector
    from ...types.matrix import Matrix


class Converter(ABC):
    """An abstract representation of a typed array converter.

    A Converter translates between typed storage (Vector and Matrix) and
    numpy N-dimensional arrays. The copy conversions always produce a new,
    independently owned and contiguous destination, the element kind is
    preserved through an exact mapping table and elements are traversed in
    linear order for vectors and row-major order for matrices.

    A conversion either fully succeeds or raises, no partially filled
    destination is ever returned.
    """

    @abstractmethod
    def vector_to_ndarray(self, vector: "Vector") -> numpy.typing.NDArray[Any]:
        """Copies a vector into a new rank 1 numpy array.

        Strided vectors are densified.

        Args:
            vector: the source vector, left untouched

        Returns:
            A contiguous array of shape (size,)
        """
        ...

    @abstractmethod
    def matrix_to_ndarray(self, matrix: "Matrix") -> numpy.typing.NDArray[Any]:
        """Copies a matrix into a new rank 2 numpy array.

        Args:
            matrix: the source matrix, left untouched

        Returns:
            A C-contiguous array of shape (size1, size2)
        """
        ...

    @abstractmethod
    def ndarray_to_vector(self, array: numpy.typing.NDArray[Any]) -> "Vector":
        """Copies a rank 1 numpy array into a new vector.

        Args:
            array: the source array, left untouched

        Returns:
            An owning vector with unit stride
        """
        ...

    @abstractmethod
    def ndarray_to_matrix(self, array: numpy.typing.NDArray[Any]) -> "Matrix":
        """Copies a rank 2 numpy array into a new matrix.

        Args:
            array: the source array, left untouched

        Returns:
            An owning matrix with tda equal to its number of columns
        """
        ...

    @abstractmethod
    def equivalent(self, lhs: Any, rhs: Any) -> bool:
        """Compares two entities across the conversion boundary.

        Entities are equivalent when they have the same logical shape,
        the same element kind after mapping and exactly equal elements
        in traversal order.

        Returns:
            True if lhs and rhs are equivalent
        """
        ...
