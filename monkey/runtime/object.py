"""Runtime values produced and consumed by monkey.runtime.evaluator.

Every value is an instance of one of the Object subclasses below; the set is closed, and code that dispatches on
values (operators, builtins, rendering) handles each of them explicitly. Each object has a kind tag, used in error
messages, and an inspect() rendering, used when a value is shown to the user.

Errors are ordinary values: an Error is returned, not raised, and the evaluator propagates it the same way it
propagates a ReturnValue.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Tuple


class Object(ABC):
    """Superclass of every runtime value."""
    kind = "OBJECT"
    hashable = False  # whether this object can be used as a Hash key

    @abstractmethod
    def inspect(self):
        """Rendering of this value as shown to the user."""

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    kind = "INTEGER"
    hashable = True
    value: int

    def inspect(self):
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    """Use Boolean.of (or TRUE/FALSE) rather than instantiating directly."""
    kind = "BOOLEAN"
    hashable = True
    value: bool

    @staticmethod
    def of(value):
        return TRUE if value else FALSE

    def inspect(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String(Object):
    kind = "STRING"
    hashable = True
    value: str

    def inspect(self):
        return self.value


@dataclass(frozen=True)
class Null(Object):
    kind = "NULL"

    def inspect(self):
        return "null"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Control-flow marker wrapping the value of a return statement. Never seen by user code: function calls and
    programs unwrap it.
    """
    kind = "RETURN_VALUE"
    value: Object

    def inspect(self):
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    kind = "ERROR"
    message: str

    def inspect(self):
        return f"Error: {self.message}"


@dataclass(frozen=True, eq=False)
class Function(Object):
    """User-defined function. env is the snapshot of the scope the function literal was evaluated in."""
    kind = "FUNCTION"
    parameters: Tuple[str, ...]
    env: Any = field(repr=False)
    body: Any

    def inspect(self):
        return f"fn({', '.join(self.parameters)}) {{ {self.body} }}"


@dataclass(frozen=True)
class Builtin(Object):
    """Native function. fn takes the list of evaluated arguments and returns an Object."""
    kind = "BUILTIN"
    name: str
    fn: Callable = field(compare=False, repr=False)

    def inspect(self):
        return f"builtin function {self.name}"


@dataclass(frozen=True)
class Array(Object):
    kind = "ARRAY"
    elements: Tuple[Object, ...] = ()

    def inspect(self):
        return "[" + ", ".join(element.inspect() for element in self.elements) + "]"


@dataclass(frozen=True)
class Hash(Object):
    """Insertion-ordered mapping. Keys are always hashable objects (Integer, Boolean or String)."""
    kind = "HASH"
    pairs: Dict[Object, Object] = field(default_factory=dict)

    def inspect(self):
        return "{" + ", ".join(f"{key.inspect()}: {value.inspect()}" for key, value in self.pairs.items()) + "}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def is_error(obj):
    return isinstance(obj, Error)


def is_truthy(obj):
    """Everything is truthy except false and null."""
    if isinstance(obj, Null):
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True
