#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any
import numpy.typing

if TYPE_CHECKING:
    from ...types.kinds import ElementKind


class TypedArray(ABC):
    """An abstract representation of a typed, strided numeric array.

    A TypedArray is the storage side of the bridge: a vector or a matrix
    whose elements all share one ElementKind and live in a Block, either
    owned by the array or borrowed from another object. The logical
    layout is given by the shape while the physical layout is given by
    the stride (vectors) or the trailing dimension (matrices).
    """

    @property
    @abstractmethod
    def shape(self) -> tuple[int, ...]:
        """Returns the array's logical shape.

        Returns:
            (size,) for a vector, (size1, size2) for a matrix
        """
        ...

    @property
    @abstractmethod
    def kind(self) -> "ElementKind":
        """Returns the array's element kind.

        Returns:
            The element kind shared by every entry of the array
        """
        ...

    @property
    @abstractmethod
    def ndims(self) -> int:
        """Returns the number of dimensions of the array.

        Returns:
            1 for a vector, 2 for a matrix
        """
        ...

    @property
    @abstractmethod
    def is_view(self) -> bool:
        """Returns whether the array borrows its storage.

        A view aliases memory owned by another object, writes through
        the view are visible from the owner and conversely.

        Returns:
            True if the array does not own its storage
        """
        ...

    @abstractmethod
    def tolist(self) -> list[Any]:
        """Returns the array's elements as (nested) python lists.

        Returns:
            Elements in linear order for a vector, row-major for a matrix
        """
        ...

    @abstractmethod
    def numpy(self) -> numpy.typing.NDArray[Any]:
        """Returns a strided numpy array aliasing the array storage.

        The returned array uses the storage dtype of the element kind
        and is not a bridge conversion: no kind mapping is checked
        and no copy is made.

        Returns:
            The storage as a numpy array
        """
        ...

    @property
    def size(self) -> int:
        """Returns the total number of elements."""
        size = 1
        for d in self.shape:
            size = size * d
        return size
