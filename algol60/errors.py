from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class ErrorInfo:
    """Describes a runtime error: its kind, a message, and the names and
    values involved at the point of failure."""
    kind: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"Error(kind={self.kind!r}, message={self.message!r})"


class Algol60Error(Exception):
    """Base exception for every runtime error raised while evaluating a program."""
    kind = 'Algol60Error'

    def __init__(self, message: str, **context: Any):
        super().__init__(f"{self.kind}: {message}")
        self.err = ErrorInfo(self.kind, message, context)


class UndefinedVariable(Algol60Error):
    kind = 'UndefinedVariable'


class TypeMismatch(Algol60Error):
    kind = 'TypeMismatch'


class UnsupportedOperands(Algol60Error):
    kind = 'UnsupportedOperands'


class DivisionByZero(Algol60Error):
    kind = 'DivisionByZero'


class IndexOutOfBounds(Algol60Error):
    kind = 'IndexOutOfBounds'


class ArraySizeExceeded(Algol60Error):
    kind = 'ArraySizeExceeded'


class NotCallable(Algol60Error):
    kind = 'NotCallable'


class ArityMismatch(Algol60Error):
    kind = 'ArityMismatch'


class NotABoolean(Algol60Error):
    kind = 'NotABoolean'
