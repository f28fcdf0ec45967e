#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from collections.abc import Callable, Sequence
from typing import Any
from typing_extensions import override
import numbers
import numpy as np

from ..exceptions import AllocationFailure
from ..itf.data import TypedArray
from .block import Block
from .kinds import ElementKind
from .vector import Vector, _flatten_values

__all__ = [
    "Matrix",
]


class Matrix(TypedArray):
    """
    A typed, row-major 2-D array.
    Element (i, j) lives at position offset + i * tda + j of the block,
    tda may exceed size2 for sub-matrix views.
    """

    # Let scalar * matrix fall back to Matrix.__rmul__ for numpy scalars
    __array_ufunc__ = None

    def __init__(
        self,
        size1: int,
        size2: int,
        kind: ElementKind = ElementKind.DOUBLE,
        block: Block | None = None,
        offset: int = 0,
        tda: int | None = None,
        owner: Any = None,
    ) -> None:
        if block is None:
            assert owner is None, "an allocated matrix has no owner"
            if size1 < 0 or size2 < 0:
                raise AllocationFailure(f"invalid matrix dimensions: {size1}x{size2}")
            block = Block.alloc(size1 * size2, kind)
        assert block.kind == kind, f"block kind {block.kind} differs from {kind}"
        if tda is None:
            tda = size2
        if size1 < 0 or size2 < 0:
            raise ValueError(f"invalid matrix dimensions: {size1}x{size2}")
        if tda < size2:
            raise ValueError(f"matrix tda {tda} is lower than size2 {size2}")
        if (
            offset < 0
            or offset > block.size
            or (
                size1 > 0
                and size2 > 0
                and offset + (size1 - 1) * tda + size2 > block.size
            )
        ):
            raise ValueError(
                f"matrix {size1}x{size2} with tda {tda} at offset {offset} "
                f"does not fit in block of size {block.size}"
            )
        self._size1 = size1
        self._size2 = size2
        self._kind = kind
        self._block = block
        self._offset = offset
        self._tda = tda
        self._owner = owner

    @classmethod
    def alloc(
        cls,
        values: Sequence[Any],
        size1: int,
        size2: int,
        kind: ElementKind = ElementKind.DOUBLE,
    ) -> "Matrix":
        """Allocate a size1 x size2 matrix filled row by row from values"""
        values = list(values)
        if len(values) > size1 * size2:
            raise ValueError(
                f"{len(values)} values do not fit a {size1}x{size2} matrix"
            )
        matrix = cls(size1, size2, kind)
        for idx, value in enumerate(values):
            matrix[divmod(idx, size2)] = value
        return matrix

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[Any]], kind: ElementKind = ElementKind.DOUBLE
    ) -> "Matrix":
        size1 = len(rows)
        size2 = len(rows[0]) if size1 > 0 else 0
        matrix = cls(size1, size2, kind)
        for i, row in enumerate(rows):
            matrix.set_row(i, row)
        return matrix

    @classmethod
    def zeros(
        cls, size1: int, size2: int | None = None, kind: ElementKind = ElementKind.DOUBLE
    ) -> "Matrix":
        return cls(size1, size1 if size2 is None else size2, kind)

    @classmethod
    def ones(
        cls, size1: int, size2: int | None = None, kind: ElementKind = ElementKind.DOUBLE
    ) -> "Matrix":
        matrix = cls.zeros(size1, size2, kind)
        matrix.set_all(1)
        return matrix

    @classmethod
    def eye(
        cls, size: int, value: Any = 1, kind: ElementKind = ElementKind.DOUBLE
    ) -> "Matrix":
        """Allocate a square matrix with value on the diagonal"""
        matrix = cls(size, size, kind)
        for i in range(size):
            matrix[i, i] = value
        return matrix

    @classmethod
    def from_ndarray(cls, array: np.ndarray, view: bool = False) -> "Matrix":
        """Convert a rank 2 numpy array with the default bridge"""
        from ..bridge import default_bridge

        if view:
            return default_bridge().ndarray_to_matrix_view(array)
        return default_bridge().ndarray_to_matrix(array)

    def to_ndarray(self, view: bool = False) -> np.ndarray:
        """Convert to a numpy array with the default bridge"""
        from ..bridge import default_bridge

        if view:
            return default_bridge().matrix_to_ndarray_view(self)
        return default_bridge().matrix_to_ndarray(self)

    @property
    @override
    def shape(self) -> tuple[int, ...]:
        return (self._size1, self._size2)

    @property
    @override
    def kind(self) -> ElementKind:
        return self._kind

    @property
    @override
    def ndims(self) -> int:
        return 2

    @property
    @override
    def is_view(self) -> bool:
        return self._owner is not None

    @property
    def size1(self) -> int:
        return self._size1

    @property
    def size2(self) -> int:
        return self._size2

    @property
    def tda(self) -> int:
        return self._tda

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def block(self) -> Block:
        return self._block

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def readonly(self) -> bool:
        return self._block.readonly

    @property
    def is_contiguous(self) -> bool:
        return self._tda == self._size2 or self._size1 <= 1

    def _pos(self, idx: Any) -> int:
        if not isinstance(idx, tuple) or len(idx) != 2:
            raise TypeError(f"matrix index must be a (row, column) pair, got: {idx!r}")
        i, j = idx
        if not (
            isinstance(i, (int, np.integer)) and isinstance(j, (int, np.integer))
        ):
            raise TypeError(f"matrix indices must be integers, got: {idx!r}")
        if i < 0:
            i += self._size1
        if j < 0:
            j += self._size2
        if i < 0 or i >= self._size1 or j < 0 or j >= self._size2:
            raise IndexError(
                f"index {idx} out of range for {self._size1}x{self._size2} matrix"
            )
        return self._offset + int(i) * self._tda + int(j)

    def __getitem__(self, idx: tuple[int, int]) -> Any:
        return self._block.get(self._pos(idx))

    def __setitem__(self, idx: tuple[int, int], value: Any) -> None:
        self._block.set(self._pos(idx), value)

    def _positions(self):
        for i in range(self._size1):
            base = self._offset + i * self._tda
            for j in range(self._size2):
                yield base + j

    @override
    def tolist(self) -> list[Any]:
        return [self.row(i).tolist() for i in range(self._size1)]

    @override
    def numpy(self) -> np.ndarray:
        itemsize = self._kind.itemsize
        return np.ndarray(
            shape=(self._size1, self._size2),
            dtype=self._kind.storage_dtype,
            buffer=self._block.numpy(),
            offset=self._offset * itemsize,
            strides=(self._tda * itemsize, itemsize),
        )

    def set_all(self, value: Any) -> None:
        for pos in self._positions():
            self._block.set(pos, value)

    def set_row(self, i: int, *values: Any) -> None:
        values_list = _flatten_values(values, self._kind)
        if len(values_list) != self._size2:
            raise ValueError(
                f"row of a {self._size1}x{self._size2} matrix needs "
                f"{self._size2} values, got {len(values_list)}"
            )
        row = self.row(i)
        for j, value in enumerate(values_list):
            row[j] = value

    def set_col(self, j: int, *values: Any) -> None:
        values_list = _flatten_values(values, self._kind)
        if len(values_list) != self._size1:
            raise ValueError(
                f"column of a {self._size1}x{self._size2} matrix needs "
                f"{self._size1} values, got {len(values_list)}"
            )
        column = self.column(j)
        for i, value in enumerate(values_list):
            column[i] = value

    def row(self, i: int) -> Vector:
        """Return a view on row i"""
        if i < 0:
            i += self._size1
        if i < 0 or i >= self._size1:
            raise IndexError(f"row {i} out of range [0, {self._size1})")
        return Vector(
            self._size2,
            self._kind,
            block=self._block,
            offset=self._offset + i * self._tda,
            stride=1,
            owner=self,
        )

    def column(self, j: int) -> Vector:
        """Return a view on column j, strided by tda"""
        if j < 0:
            j += self._size2
        if j < 0 or j >= self._size2:
            raise IndexError(f"column {j} out of range [0, {self._size2})")
        return Vector(
            self._size1,
            self._kind,
            block=self._block,
            offset=self._offset + j,
            stride=self._tda,
            owner=self,
        )

    def submatrix(self, i: int, j: int, size1: int, size2: int) -> "Matrix":
        """Return a view on the size1 x size2 block at (i, j), sharing the tda"""
        if (
            i < 0
            or j < 0
            or size1 < 0
            or size2 < 0
            or i + size1 > self._size1
            or j + size2 > self._size2
        ):
            raise IndexError(
                f"submatrix ({i}, {j}) {size1}x{size2} out of range "
                f"for {self._size1}x{self._size2} matrix"
            )
        offset = self._offset
        if size1 > 0 and size2 > 0:
            offset += i * self._tda + j
        return Matrix(
            size1,
            size2,
            self._kind,
            block=self._block,
            offset=offset,
            tda=self._tda,
            owner=self,
        )

    def copy(self) -> "Matrix":
        """Return an owning copy of the matrix with tda equal to size2"""
        matrix = Matrix(self._size1, self._size2, self._kind)
        matrix.numpy()[...] = self.numpy()
        return matrix

    def _check_ordered(self, pred: str) -> None:
        if self._kind.is_complex:
            raise TypeError(f"{pred} is not defined for complex matrices")

    def ispos(self) -> bool:
        """True if all elements are strictly positive"""
        self._check_ordered("ispos")
        return all(self._block.get(pos) > 0 for pos in self._positions())

    def isneg(self) -> bool:
        """True if all elements are strictly negative"""
        self._check_ordered("isneg")
        return all(self._block.get(pos) < 0 for pos in self._positions())

    def isnonneg(self) -> bool:
        """True if all elements are non-negative"""
        self._check_ordered("isnonneg")
        return all(self._block.get(pos) >= 0 for pos in self._positions())

    def isnull(self) -> bool:
        """True if all elements are zero"""
        return all(self._block.get(pos) == 0 for pos in self._positions())

    def _map(self, func: Callable[[Any], Any]) -> "Matrix":
        matrix = Matrix(self._size1, self._size2, self._kind)
        for i in range(self._size1):
            for j in range(self._size2):
                matrix[i, j] = func(self[i, j])
        return matrix

    def scale(self, factor: Any) -> "Matrix":
        """Return a new matrix of the same kind with every element times factor.

        Integer kinds truncate the products toward zero.
        """
        return self._map(lambda value: value * factor)

    def add_constant(self, value: Any) -> "Matrix":
        """Return a new matrix of the same kind with value added to every element"""
        return self._map(lambda elt: elt + value)

    def __add__(self, other: Any) -> "Matrix":
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return self.add_constant(other)

    def __radd__(self, other: Any) -> "Matrix":
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return self.add_constant(other)

    def __sub__(self, other: Any) -> "Matrix":
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return self.add_constant(-other)

    def __rsub__(self, other: Any) -> "Matrix":
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return self._map(lambda elt: other - elt)

    def __mul__(self, other: Any) -> "Matrix":
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return self.scale(other)

    def __rmul__(self, other: Any) -> "Matrix":
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return self.scale(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._kind == other._kind
            and self.shape == other.shape
            and bool(
                np.array_equal(
                    self.numpy(),
                    other.numpy(),
                    equal_nan=not self._kind.is_integer,
                )
            )
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self.tolist()!r}, kind={self._kind.name})"
