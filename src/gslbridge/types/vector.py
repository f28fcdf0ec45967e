#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from collections.abc import Iterator, Sequence
from typing import Any
from typing_extensions import override
import numbers
import numpy as np

from ..itf.data import TypedArray
from .block import Block
from .kinds import ElementKind

__all__ = [
    "Vector",
]


def _flatten_values(values: tuple[Any, ...], kind: ElementKind) -> Sequence[Any]:
    # alloc(1, 2, 3) and alloc([1, 2, 3]) are equivalent
    if len(values) != 1:
        return values
    (value,) = values
    if isinstance(value, (list, np.ndarray)):
        return list(value)
    if isinstance(value, tuple):
        # A lone (real, imag) pair is one complex element
        if (
            kind.is_complex
            and len(value) == 2
            and all(isinstance(part, numbers.Real) for part in value)
        ):
            return values
        return list(value)
    return values


class Vector(TypedArray):
    """
    A typed, strided 1-D array.
    Element i lives at position offset + i * stride of the block.
    Vectors created from a size own a fresh zero-filled block, vectors
    created over an existing block are views and keep their owner alive.
    """

    def __init__(
        self,
        size: int,
        kind: ElementKind = ElementKind.DOUBLE,
        block: Block | None = None,
        offset: int = 0,
        stride: int = 1,
        owner: Any = None,
    ) -> None:
        if block is None:
            assert owner is None, "an allocated vector has no owner"
            block = Block.alloc(size, kind)
        assert block.kind == kind, f"block kind {block.kind} differs from {kind}"
        if size < 0:
            raise ValueError(f"invalid vector size: {size}")
        if stride < 1:
            raise ValueError(f"vector stride must be >= 1, got: {stride}")
        if (
            offset < 0
            or offset > block.size
            or (size > 0 and offset + (size - 1) * stride >= block.size)
        ):
            raise ValueError(
                f"vector of size {size} and stride {stride} at offset {offset} "
                f"does not fit in block of size {block.size}"
            )
        self._size = size
        self._kind = kind
        self._block = block
        self._offset = offset
        self._stride = stride
        self._owner = owner

    @classmethod
    def alloc(cls, *values: Any, kind: ElementKind = ElementKind.DOUBLE) -> "Vector":
        """Allocate a vector holding the given values"""
        return cls.from_list(_flatten_values(values, kind), kind=kind)

    @classmethod
    def from_list(
        cls, values: Sequence[Any], kind: ElementKind = ElementKind.DOUBLE
    ) -> "Vector":
        vector = cls(len(values), kind)
        for idx, value in enumerate(values):
            vector[idx] = value
        return vector

    @classmethod
    def from_ndarray(cls, array: np.ndarray, view: bool = False) -> "Vector":
        """Convert a rank 1 numpy array with the default bridge"""
        from ..bridge import default_bridge

        if view:
            return default_bridge().ndarray_to_vector_view(array)
        return default_bridge().ndarray_to_vector(array)

    def to_ndarray(self, view: bool = False) -> np.ndarray:
        """Convert to a numpy array with the default bridge"""
        from ..bridge import default_bridge

        if view:
            return default_bridge().vector_to_ndarray_view(self)
        return default_bridge().vector_to_ndarray(self)

    @property
    @override
    def shape(self) -> tuple[int, ...]:
        return (self._size,)

    @property
    @override
    def kind(self) -> ElementKind:
        return self._kind

    @property
    @override
    def ndims(self) -> int:
        return 1

    @property
    @override
    def is_view(self) -> bool:
        return self._owner is not None

    @property
    @override
    def size(self) -> int:
        return self._size

    @property
    def stride(self) -> int:
        return self._stride

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
        return self._stride == 1 or self._size <= 1

    def _pos(self, idx: int) -> int:
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"vector index must be an integer, got: {idx!r}")
        if idx < 0:
            idx += self._size
        if idx < 0 or idx >= self._size:
            raise IndexError(f"index {idx} out of range [0, {self._size})")
        return self._offset + int(idx) * self._stride

    def __getitem__(self, idx: int) -> Any:
        return self._block.get(self._pos(idx))

    def __setitem__(self, idx: int, value: Any) -> None:
        self._block.set(self._pos(idx), value)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        for idx in range(self._size):
            yield self._block.get(self._offset + idx * self._stride)

    @override
    def tolist(self) -> list[Any]:
        return list(self)

    @override
    def numpy(self) -> np.ndarray:
        itemsize = self._kind.itemsize
        return np.ndarray(
            shape=(self._size,),
            dtype=self._kind.storage_dtype,
            buffer=self._block.numpy(),
            offset=self._offset * itemsize,
            strides=(self._stride * itemsize,),
        )

    def set_all(self, value: Any) -> None:
        for idx in range(self._size):
            self[idx] = value

    def copy(self) -> "Vector":
        """Return an owning, contiguous copy of the vector"""
        vector = Vector(self._size, self._kind)
        vector.numpy()[...] = self.numpy()
        return vector

    def subvector(self, offset: int, size: int, stride: int = 1) -> "Vector":
        """Return a view on size elements starting at offset, every stride elements"""
        if offset < 0 or stride < 1 or size < 0:
            raise ValueError(
                f"invalid subvector: offset {offset}, size {size}, stride {stride}"
            )
        if size > 0 and offset + (size - 1) * stride >= self._size:
            raise IndexError(
                f"subvector [{offset}:{offset + (size - 1) * stride + 1}:{stride}] "
                f"out of range for vector of size {self._size}"
            )
        return Vector(
            size,
            self._kind,
            block=self._block,
            offset=self._pos(offset) if size > 0 else self._offset,
            stride=self._stride * stride,
            owner=self,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return (
            self._kind == other._kind
            and self._size == other._size
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
        return f"Vector({self.tolist()!r}, kind={self._kind.name})"
