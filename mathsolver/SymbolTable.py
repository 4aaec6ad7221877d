# SymbolTable.py
import logging
import math

from . import error as E
from . import ScientificEngine
from .Tokenizer import FUNCTION_NAMES

logger = logging.getLogger(__name__)

MAX_VARIABLES = 10
MAX_NAME_LENGTH = 19


class Variable:
    def __init__(self, name, value):
        self.name = name
        self.value = value

    def __repr__(self):
        return f"Variable({self.name!r}, {self.value!r})"


def is_valid_name(name):
    """A variable name is an identifier that the tokenizer would not classify as anything else."""
    if not isinstance(name, str) or not name or len(name) > MAX_NAME_LENGTH:
        return False
    if not (name[0].isalpha() or name[0] == "_"):
        return False
    if not all(char.isalnum() or char == "_" for char in name):
        return False
    return name not in FUNCTION_NAMES


def is_builtin_constant(name):
    """Return the value of pi, e or phi (or their symbols), else None."""
    return ScientificEngine.isConstant(name)


class SymbolTable:
    """Fixed-capacity name -> value mapping. Lookups are case-sensitive."""

    def __init__(self, capacity=MAX_VARIABLES):
        self.capacity = capacity
        self._variables = {}

    def set(self, name, value):
        if not is_valid_name(name):
            raise E.EvalError(f"Invalid variable name: {name!r}", kind=E.ErrorKind.INVALID_NAME)
        if is_builtin_constant(name) is not None:
            raise E.EvalError(f"Cannot assign to constant '{name}'", kind=E.ErrorKind.INVALID_NAME)

        try:
            value = float(value)
        except (TypeError, ValueError):
            raise E.EvalError(f"Invalid value for '{name}': {value!r}", kind=E.ErrorKind.INVALID_OPERATION)
        if not math.isfinite(value):
            raise E.EvalError(f"Invalid value for '{name}': {value!r}", kind=E.ErrorKind.INVALID_OPERATION)

        entry = self._variables.get(name)
        if entry is not None:
            entry.value = value
        else:
            if len(self._variables) >= self.capacity:
                raise E.EvalError(f"Too many variables (maximum {self.capacity}); cannot add '{name}'",
                                  kind=E.ErrorKind.VARIABLE_LIMIT_EXCEEDED)
            self._variables[name] = Variable(name, value)

        logger.debug("variable %s = %r", name, value)

    def get(self, name):
        entry = self._variables.get(name)
        if entry is None:
            return None
        return entry.value

    def resolve(self, name, span=None):
        """Builtin constants first, then user variables."""
        value = is_builtin_constant(name)
        if value is not None:
            return value

        value = self.get(name)
        if value is None:
            raise E.EvalError(f"Undefined variable: {name}", kind=E.ErrorKind.UNDEFINED_VARIABLE, span=span)
        return value

    def unset(self, name):
        return self._variables.pop(name, None) is not None

    def clear(self):
        self._variables.clear()

    def names(self):
        return sorted(self._variables)

    def items(self):
        return [(name, self._variables[name].value) for name in self.names()]

    def copy(self):
        clone = SymbolTable(self.capacity)
        for name, value in self.items():
            clone.set(name, value)
        return clone

    def __contains__(self, name):
        return self.get(name) is not None

    def __len__(self):
        return len(self._variables)
