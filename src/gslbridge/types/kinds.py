#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from enum import Enum
from typing import Any
import ctypes
import numpy as np

__all__ = [
    "ElementKind",
]


class ElementKind(Enum):
    """Element kinds of the typed storage, one per GSL block type."""

    DOUBLE = "double"
    FLOAT = "float"
    INT = "int"
    LONG = "long"
    UCHAR = "uchar"
    COMPLEX = "complex"

    @property
    def ctype(self) -> Any:
        """The ctypes scalar type of one storage component."""
        match self:
            case ElementKind.DOUBLE | ElementKind.COMPLEX:
                return ctypes.c_double
            case ElementKind.FLOAT:
                return ctypes.c_float
            case ElementKind.INT:
                return ctypes.c_int32
            case ElementKind.LONG:
                return ctypes.c_long
            case ElementKind.UCHAR:
                return ctypes.c_ubyte

    @property
    def components(self) -> int:
        """Number of ctypes scalars per element."""
        return 2 if self is ElementKind.COMPLEX else 1

    @property
    def is_integer(self) -> bool:
        return self in (ElementKind.INT, ElementKind.LONG, ElementKind.UCHAR)

    @property
    def is_complex(self) -> bool:
        return self is ElementKind.COMPLEX

    @property
    def storage_dtype(self) -> np.dtype:
        """The numpy dtype describing one element as laid out in storage.

        This is the in-memory layout only, it does not imply that the
        kind can cross the bridge.
        """
        if self is ElementKind.COMPLEX:
            return np.dtype(np.complex128)
        return np.dtype(self.ctype)

    @property
    def itemsize(self) -> int:
        return ctypes.sizeof(self.ctype) * self.components

    @property
    def limits(self) -> tuple[int, int]:
        """Inclusive value range of an integer kind."""
        assert self.is_integer, f"{self} is not an integer kind"
        bits = ctypes.sizeof(self.ctype) * 8
        if self is ElementKind.UCHAR:
            return 0, (1 << bits) - 1
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def coerce(self, value: Any) -> Any:
        """Convert a python value into a scalar storable with this kind.

        Integer kinds truncate toward zero and raise OverflowError
        when the result does not fit. Complex values are accepted either
        as a python complex or as a (real, imag) pair.
        """
        if self is ElementKind.COMPLEX:
            if isinstance(value, (tuple, list)):
                if len(value) != 2:
                    raise ValueError(
                        f"complex element must be a (real, imag) pair, got: {value!r}"
                    )
                return complex(float(value[0]), float(value[1]))
            return complex(value)
        if isinstance(value, complex):
            raise TypeError(f"can't store complex value {value!r} in a {self.value} array")
        if self.is_integer:
            ivalue = int(value)
            lo, hi = self.limits
            if ivalue < lo or ivalue > hi:
                raise OverflowError(
                    f"value {ivalue} out of range [{lo}, {hi}] for {self.value} element"
                )
            return ivalue
        return float(value)
