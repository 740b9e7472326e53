from typing import Any, Dict, Optional

from algol60.errors import UndefinedVariable


RETURN_SLOT = '_returnValue'


class Environment:
    """A flat scope mapping identifiers to values.

    There is no parent link: the global scope and every call frame are
    independent environments, and a name is visible only in the
    environment that bound it.
    """
    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = dict(values) if values else {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        raise UndefinedVariable(f'undefined variable {name}', name=name)

    def lookup(self, name: str) -> Optional[Any]:
        """Return the bound value, or None when the name is unbound."""
        return self.values.get(name)

    def declare(self, name: str, value: Any):
        # last write wins, redeclaration is allowed
        self.values[name] = value

    def set(self, name: str, value: Any):
        self.values[name] = value
