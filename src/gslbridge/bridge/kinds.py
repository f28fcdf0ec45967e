#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from typing import Any
import numpy as np

from ..exceptions import UnsupportedElementKind
from ..types.kinds import ElementKind

__all__ = [
    "MAPPED_KINDS",
    "kind_to_dtype",
    "dtype_to_kind",
]

MAPPED_KINDS: tuple[ElementKind, ...] = (
    ElementKind.DOUBLE,
    ElementKind.INT,
    ElementKind.COMPLEX,
)


def kind_to_dtype(kind: ElementKind) -> np.dtype:
    """
    Return the numpy dtype an element kind maps to.
    Raise UnsupportedElementKind for kinds outside the mapping table.
    """
    match kind:
        case ElementKind.DOUBLE:
            return np.dtype(np.float64)
        case ElementKind.INT:
            return np.dtype(np.int32)
        case ElementKind.COMPLEX:
            return np.dtype(np.complex128)
        case _:
            raise UnsupportedElementKind(kind.value, context="typed array")


def dtype_to_kind(dtype: Any) -> ElementKind:
    """
    Return the element kind a numpy dtype maps to.
    Byte order is not part of the mapping, a big-endian float64 maps
    to DOUBLE as well.
    Raise UnsupportedElementKind for dtypes outside the mapping table.
    """
    dtype = np.dtype(dtype)
    match (dtype.kind, dtype.itemsize):
        case ("f", 8):
            return ElementKind.DOUBLE
        case ("i", 4):
            return ElementKind.INT
        case ("c", 16):
            return ElementKind.COMPLEX
        case _:
            raise UnsupportedElementKind(dtype.name, context="numpy array")
