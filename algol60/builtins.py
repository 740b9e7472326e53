from dataclasses import dataclass
from typing import Any, List, Optional

from algol60.environment import Environment
from algol60.types import UNDEFINED, to_string


@dataclass
class BuiltinFunction:
    name: str
    arity: Optional[int]  # None means variadic
    fn: Any
    kind: str = 'builtin'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


def std_write(args: List[Any]) -> Any:
    for arg in args:
        print(to_string(arg))
    return UNDEFINED


def populate_builtins() -> Environment:
    """Build the registry of native callables available to every program."""
    registry = Environment()
    registry.values['write'] = BuiltinFunction('write', None, std_write)
    return registry
