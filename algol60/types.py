"""Runtime values and declared types for the ALGOL 60 evaluator.

Values are plain Python objects wherever a Python type fits exactly:
Integer is `int`, Real is `float`, Text is `str` and Boolean is `bool`.
Arrays, callables and the undefined placeholder get their own classes.
Because `bool` is a subclass of `int`, every check in this module tests
for `bool` before it tests for `int`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class TypeSpec:
    """A declared type tag: one of 'int', 'double', 'str' or 'bool'.

    Tags only appear on declarations. They are used once to validate an
    initializer and are not stored with the binding.
    """
    kind: str

    def __repr__(self) -> str:
        return self.kind

    @staticmethod
    def integer() -> 'TypeSpec':
        return TypeSpec('int')

    @staticmethod
    def double() -> 'TypeSpec':
        return TypeSpec('double')

    @staticmethod
    def string() -> 'TypeSpec':
        return TypeSpec('str')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('bool')


TYPE_KINDS = ('int', 'double', 'str', 'bool')


class Undefined:
    """Value of a variable or array element that was declared without a value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'Undefined'


UNDEFINED = Undefined()


@dataclass(eq=False)
class Array1D:
    """A fixed-length one-dimensional array.

    `elem_type` is the declared element tag; `items` always holds exactly
    `length` entries, Undefined until filled.
    """
    elem_type: TypeSpec
    items: List[Any]

    @property
    def length(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Array1D({self.elem_type!r}, {self.items!r})"


@dataclass(eq=False)
class Array2D:
    """A fixed rows x cols array. `cells[i][j]` is element `[i, j]`."""
    elem_type: TypeSpec
    rows: int
    cols: int
    cells: List[List[Any]]

    def __repr__(self) -> str:
        return f"Array2D({self.elem_type!r}, {self.rows}x{self.cols}, {self.cells!r})"


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_real(value: Any) -> bool:
    return isinstance(value, float)


def is_numeric(value: Any) -> bool:
    return is_integer(value) or is_real(value)


def check_value(value: Any, spec: TypeSpec) -> bool:
    """Check that a runtime value matches a declared type tag.

    Returns True on success. On mismatch a plain TypeError is raised with
    a descriptive message; callers turn it into a TypeMismatch together
    with the name being declared.
    """
    kind = spec.kind
    if kind == 'int':
        if is_integer(value):
            return True
    elif kind == 'double':
        if is_real(value):
            return True
    elif kind == 'str':
        if isinstance(value, str):
            return True
    elif kind == 'bool':
        if isinstance(value, bool):
            return True
    else:
        raise TypeError(f"unknown type tag: {spec}")
    raise TypeError(f"expected {kind}, got {type_name(value)}")


def type_name(value: Any) -> str:
    """Return the language-level name of a runtime value's variant."""
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, int):
        return 'int'
    if isinstance(value, float):
        return 'double'
    if isinstance(value, str):
        return 'str'
    if isinstance(value, Array1D):
        return f"array {value.elem_type!r}[{value.length}]"
    if isinstance(value, Array2D):
        return f"array {value.elem_type!r}[{value.rows}, {value.cols}]"
    if isinstance(value, Undefined):
        return 'undefined'
    kind = getattr(value, 'kind', None)
    if kind in ('builtin', 'function', 'procedure'):
        return kind
    return type(value).__name__


def format_real(value: float) -> str:
    # Shortest round-trip form, printing integral values without '.0'
    text = repr(value)
    if text.endswith('.0'):
        text = text[:-2]
    return text


def to_string(value: Any) -> str:
    """Convert a value to its natural textual form.

    This is the form `write` prints and the form `+` uses when one of its
    operands is text.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_real(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Undefined):
        return ''
    if isinstance(value, Array1D):
        return '[' + ', '.join(to_string(item) for item in value.items) + ']'
    if isinstance(value, Array2D):
        rows = ('[' + ', '.join(to_string(item) for item in row) + ']' for row in value.cells)
        return '[' + ', '.join(rows) + ']'
    return repr(value)
