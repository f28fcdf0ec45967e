#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from typing import Any
import ctypes
import numpy as np

from ..exceptions import AllocationFailure, ReadOnlyError
from .kinds import ElementKind

__all__ = [
    "Block",
]


class Block:
    """
    Flat typed storage for vectors and matrices.
    A block either owns its ctypes buffer or borrows memory owned by
    another object. A borrowed block keeps a reference to the owner,
    hence the memory stays valid as long as the block is alive.
    Complex elements are stored as consecutive (real, imag) doubles.
    """

    def __init__(
        self,
        data: Any,
        size: int,
        kind: ElementKind,
        owner: Any = None,
        readonly: bool = False,
    ) -> None:
        self._data = data
        self._size = size
        self._kind = kind
        self._owner = owner
        self._readonly = readonly

    @classmethod
    def alloc(cls, size: int, kind: ElementKind) -> "Block":
        """Allocate a zero-filled block of size elements"""
        if size < 0:
            raise AllocationFailure(f"invalid block size: {size}")
        try:
            data = (kind.ctype * (size * kind.components))()
        except (MemoryError, OverflowError) as e:
            raise AllocationFailure(
                f"unable to allocate block of {size} {kind.value} elements"
            ) from e
        return cls(data, size, kind)

    @classmethod
    def borrow(
        cls,
        address: int,
        size: int,
        kind: ElementKind,
        owner: Any,
        readonly: bool = False,
    ) -> "Block":
        """Wrap size elements of foreign memory at address, owned by owner"""
        assert owner is not None, "a borrowed block requires an owner"
        assert size >= 0
        data = (kind.ctype * (size * kind.components)).from_address(address)
        return cls(data, size, kind, owner=owner, readonly=readonly)

    @property
    def size(self) -> int:
        return self._size

    @property
    def kind(self) -> ElementKind:
        return self._kind

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def readonly(self) -> bool:
        return self._readonly

    @property
    def is_borrowed(self) -> bool:
        return self._owner is not None

    @property
    def address(self) -> int:
        return ctypes.addressof(self._data)

    @property
    def __array_interface__(self) -> dict[str, Any]:
        return {
            "version": 3,
            "shape": (self._size,),
            "typestr": self._kind.storage_dtype.str,
            "data": (self.address, self._readonly),
        }

    def numpy(self) -> np.ndarray:
        """Flat numpy array aliasing the block memory.

        The returned array references the block, thus the block
        and its owner, if any, outlive it.
        """
        return np.asarray(self)

    def get(self, pos: int) -> Any:
        if self._kind.is_complex:
            return complex(self._data[2 * pos], self._data[2 * pos + 1])
        return self._data[pos]

    def set(self, pos: int, value: Any) -> None:
        if self._readonly:
            raise ReadOnlyError("write through a read-only view")
        value = self._kind.coerce(value)
        if self._kind.is_complex:
            self._data[2 * pos] = value.real
            self._data[2 * pos + 1] = value.imag
        else:
            self._data[pos] = value
