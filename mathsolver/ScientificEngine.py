# ScientificEngine
import math
from enum import Enum

from . import error as E

EPSILON = 1e-10
MAX_FACTORIAL = 170  # 171! no longer fits in a float


CONSTANTS = {
    "pi": math.pi,
    "π": math.pi,
    "e": math.e,
    "phi": (1 + math.sqrt(5)) / 2,
    "φ": (1 + math.sqrt(5)) / 2,
}


class FunctionKind(Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    LOG = "log"
    LN = "ln"
    SQRT = "sqrt"


FUNCTION_DESCRIPTIONS = {
    FunctionKind.SIN: "Calculate sin of {argument}",
    FunctionKind.COS: "Calculate cos of {argument}",
    FunctionKind.TAN: "Calculate tan of {argument}",
    FunctionKind.LOG: "Calculate log of {argument}",
    FunctionKind.LN: "Calculate ln of {argument}",
    FunctionKind.SQRT: "Calculate sqrt of {argument}",
}


def isConstant(name):
    """Return the value of a builtin constant, or None."""
    return CONSTANTS.get(name)


def function_kind(name):
    try:
        return FunctionKind(name)
    except ValueError:
        return None


def invalid(message, span=None):
    return E.EvalError(message, kind=E.ErrorKind.INVALID_OPERATION, span=span)


def evaluate_function(kind, argument, span=None):
    """Apply a scientific function. Trigonometric functions take radians."""
    if kind == FunctionKind.SIN:
        return math.sin(argument)

    elif kind == FunctionKind.COS:
        return math.cos(argument)

    elif kind == FunctionKind.TAN:
        return math.tan(argument)

    elif kind == FunctionKind.LOG:
        if argument <= 0:
            raise invalid(f"Cannot take logarithm of a non-positive number: {argument:g}", span)
        return math.log10(argument)

    elif kind == FunctionKind.LN:
        if argument <= 0:
            raise invalid(f"Cannot take natural logarithm of a non-positive number: {argument:g}", span)
        return math.log(argument)

    elif kind == FunctionKind.SQRT:
        if argument < 0:
            raise invalid(f"Cannot take square root of a negative number: {argument:g}", span)
        return math.sqrt(argument)

    raise invalid(f"Unknown function: {kind!r}", span)


def power(base, exponent, span=None):
    """Real-valued power; complex, NaN and infinite results are rejected."""
    try:
        result = math.pow(base, exponent)
    except (ValueError, OverflowError):
        raise invalid(f"Cannot raise {base:g} to power {exponent:g}", span)

    if not math.isfinite(result):
        raise invalid(f"Cannot raise {base:g} to power {exponent:g}", span)
    return result


def factorial(value, span=None):
    """Iterative factorial of a non-negative integer value up to MAX_FACTORIAL."""
    if value < 0 or abs(value - round(value)) > EPSILON:
        raise invalid(f"Factorial is only defined for non-negative integers, got {value:g}", span)

    n = int(round(value))
    if n > MAX_FACTORIAL:
        raise invalid(f"Factorial argument too large: {n} (maximum {MAX_FACTORIAL})", span)

    result = 1.0
    for i in range(2, n + 1):
        result *= i
    return result
