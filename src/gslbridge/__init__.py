#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
import importlib.metadata

from .exceptions import (
    BridgeError,
    UnsupportedElementKind,
    RankMismatch,
    AllocationFailure,
    ViewNotPossible,
    FeatureDisabled,
    ReadOnlyError,
)
from .types import ElementKind, Vector, Matrix
from .bridge import (
    ArrayBridge,
    BridgeConfig,
    default_bridge,
    to_ndarray,
    to_vector,
    to_matrix,
)

__version__ = importlib.metadata.version("gsl-bridge")

__all__ = [
    "BridgeError",
    "UnsupportedElementKind",
    "RankMismatch",
    "AllocationFailure",
    "ViewNotPossible",
    "FeatureDisabled",
    "ReadOnlyError",
    "ElementKind",
    "Vector",
    "Matrix",
    "ArrayBridge",
    "BridgeConfig",
    "default_bridge",
    "to_ndarray",
    "to_vector",
    "to_matrix",
]
