#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
"""Bridge-related exceptions."""


class BridgeError(RuntimeError):
    """Base class of all errors raised by the bridge."""

    pass


class UnsupportedElementKind(BridgeError):
    """Raised when an element kind or dtype has no defined mapping."""

    def __init__(self, kind: object, context: str = "") -> None:
        self.kind = kind
        msg = f"unsupported element kind: {kind}"
        if context:
            msg = f"{context}: {msg}"
        super().__init__(msg)


class RankMismatch(BridgeError):
    """Raised when an array rank does not match the requested target."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected an array of rank {expected}, got rank {actual}")


class AllocationFailure(BridgeError):
    """Raised when backing storage for a destination cannot be obtained."""

    pass


class ViewNotPossible(BridgeError):
    """Raised when a zero-copy view cannot describe the source layout."""

    pass


class FeatureDisabled(BridgeError):
    """Raised when a conversion is disabled by the bridge configuration."""

    pass


class ReadOnlyError(BridgeError):
    """Raised on a write through a read-only borrowed view."""

    pass
