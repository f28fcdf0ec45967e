#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from . import (
    data,  # type: ignore
    bridge,  # type: ignore
)
