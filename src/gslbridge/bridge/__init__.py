#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from .kinds import MAPPED_KINDS, kind_to_dtype, dtype_to_kind  # type: ignore
from .config import BridgeConfig  # type: ignore
from .bridge import (
    ArrayBridge,  # type: ignore
    default_bridge,  # type: ignore
    reset_default_bridge,  # type: ignore
    to_ndarray,  # type: ignore
    to_vector,  # type: ignore
    to_matrix,  # type: ignore
)
