#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from typing import Any
import numpy as np
import numpy.typing

from ..bridge.kinds import kind_to_dtype
from ..types.kinds import ElementKind


def np_init(shape: tuple, kind: ElementKind) -> numpy.typing.NDArray[Any]:
    """
    Initialize and return a NP array of the dtype mapped from kind,
    filled with numbers in [1, 9].
    Complex arrays get an imaginary part of the opposite sign.
    """
    dtype = kind_to_dtype(kind)
    size = 1
    for d in shape:
        size = size * d
    vals = np.arange(size) % 9 + 1
    if kind.is_complex:
        return (vals - 1j * vals).reshape(shape).astype(dtype)
    return vals.reshape(shape).astype(dtype)
