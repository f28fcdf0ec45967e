#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from .kinds import ElementKind  # type: ignore
from .block import Block  # type: ignore
from .vector import Vector  # type: ignore
from .matrix import Matrix  # type: ignore
