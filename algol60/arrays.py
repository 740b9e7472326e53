"""Fixed-size 1D and 2D arrays.

Arrays never grow and never accept negative indices. Both shapes share
one addressing rule: a 1D array of length n behaves as an n x 1 grid, so
it may be read with a second index of 0, and a 2D array read with a
single index reads column 0.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple, Union

from .errors import ArraySizeExceeded, IndexOutOfBounds, TypeMismatch, UnsupportedOperands
from .types import UNDEFINED, Array1D, Array2D, TypeSpec, check_value, is_integer, type_name


ArrayVal = Union[Array1D, Array2D]


def allocate(elem_type: TypeSpec, dims: Sequence[int]) -> ArrayVal:
    if len(dims) == 1:
        return Array1D(elem_type, [UNDEFINED] * dims[0])
    rows, cols = dims
    return Array2D(elem_type, rows, cols, [[UNDEFINED] * cols for _ in range(rows)])


def extents(array: ArrayVal) -> Tuple[int, int]:
    if isinstance(array, Array1D):
        return array.length, 1
    return array.rows, array.cols


def capacity(array: ArrayVal) -> int:
    rows, cols = extents(array)
    return rows * cols


def check_capacity(name: str, array: ArrayVal, count: int):
    if count > capacity(array):
        raise ArraySizeExceeded(
            f'array {name} holds {capacity(array)} elements, initializer has {count}',
            name=name, capacity=capacity(array), count=count,
        )


def fill_position(array: ArrayVal, index: int) -> Tuple[int, int]:
    """Map a flat initializer index to an element position.

    The second dimension is the outer loop and the first the inner one,
    so index `i + j * rows` lands on `[i, j]`.
    """
    rows, _ = extents(array)
    return index % rows, index // rows


def store_initial(name: str, array: ArrayVal, index: int, value: Any):
    try:
        check_value(value, array.elem_type)
    except TypeError as e:
        raise TypeMismatch(
            f'cannot store {type_name(value)} in {array.elem_type!r} array {name}: {e}',
            name=name, index=index, expected=array.elem_type.kind, actual=type_name(value),
        )
    i, j = fill_position(array, index)
    _put(array, i, j, value)


def _position(name: str, array: Any, indices: List[Any]) -> Tuple[int, int]:
    if not isinstance(array, (Array1D, Array2D)):
        raise UnsupportedOperands(f'{name} is not an array ({type_name(array)})', name=name)
    for index in indices:
        if not is_integer(index):
            raise TypeMismatch(
                f'array index for {name} must be int, got {type_name(index)}',
                name=name, index=index,
            )
    rows, cols = extents(array)
    i = indices[0]
    j = indices[1] if len(indices) > 1 else 0
    if i < 0 or i >= rows or j < 0 or j >= cols:
        shown = ', '.join(str(index) for index in indices)
        raise IndexOutOfBounds(
            f'index [{shown}] out of bounds for array {name}',
            name=name, indices=list(indices), extents=[rows, cols],
        )
    return i, j


def read(name: str, array: Any, indices: List[Any]) -> Any:
    i, j = _position(name, array, indices)
    if isinstance(array, Array1D):
        return array.items[i]
    return array.cells[i][j]


def write(name: str, array: Any, indices: List[Any], value: Any):
    i, j = _position(name, array, indices)
    _put(array, i, j, value)


def _put(array: ArrayVal, i: int, j: int, value: Any):
    if isinstance(array, Array1D):
        array.items[i] = value
    else:
        array.cells[i][j] = value
