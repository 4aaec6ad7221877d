# Nodes.py
"""
AST node types, the fixed-capacity node pool and the expression printer.

Every node is created through a NodePool, which belongs to exactly one parse
and is thrown away together with the tree. A node owns its children; nothing
is shared between nodes.
"""

from decimal import Decimal
from enum import Enum

from . import error as E

MAX_NODES = 50


class BinaryKind(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


# Binding strength used by the printer
PRECEDENCE = {
    BinaryKind.ADD: 1,
    BinaryKind.SUB: 1,
    BinaryKind.MUL: 2,
    BinaryKind.DIV: 2,
    BinaryKind.POW: 3,
}
ATOM = 4


# -----------------------------
# AST node types
# -----------------------------

class Node:
    arity = 0

    def __init__(self, span):
        self.span = span

    def children(self):
        return ()


class Number(Node):
    """Numeric literal."""
    def __init__(self, value, span=None):
        super().__init__(span)
        self.value = float(value)

    def __repr__(self):
        return f"Number({self.value!r})"


class Variable(Node):
    """Named value: a user variable or a builtin constant such as pi."""
    def __init__(self, name, span=None):
        super().__init__(span)
        self.name = name

    def __repr__(self):
        return f"Variable({self.name!r})"


class BinaryOp(Node):
    """left <operator> right. Unary minus is stored as 0 - operand with unary=True."""
    arity = 2

    def __init__(self, kind, left, right, span=None, unary=False):
        super().__init__(span)
        self.kind = kind
        self.left = left
        self.right = right
        self.unary = unary

    def children(self):
        return (self.left, self.right)

    def __repr__(self):
        if self.unary:
            return f"Negate({self.right})"
        return f"BinaryOp({self.kind.value!r}, left={self.left}, right={self.right})"


class Function(Node):
    arity = 1

    def __init__(self, kind, argument, span=None):
        super().__init__(span)
        self.kind = kind
        self.argument = argument

    def children(self):
        return (self.argument,)

    def __repr__(self):
        return f"Function({self.kind.value}, {self.argument})"


class Factorial(Node):
    arity = 1

    def __init__(self, operand, span=None):
        super().__init__(span)
        self.operand = operand

    def children(self):
        return (self.operand,)

    def __repr__(self):
        return f"Factorial({self.operand})"


class Parenthesis(Node):
    """Explicit grouping; evaluates to its inner value."""
    arity = 1

    def __init__(self, inner, span=None):
        super().__init__(span)
        self.inner = inner

    def children(self):
        return (self.inner,)

    def __repr__(self):
        return f"Parenthesis({self.inner})"


def iter_nodes(node):
    """Yield node and all of its descendants, parents first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


# -----------------------------
# Node pool
# -----------------------------

class NodePool:
    """Hands out at most `capacity` nodes for one parse."""

    def __init__(self, capacity=MAX_NODES):
        self.capacity = capacity
        self.count = 0

    def new(self, node_class, *args, span=None, **kwargs):
        if self.count >= self.capacity:
            raise E.ParseError(f"Expression too large: more than {self.capacity} nodes",
                               kind=E.ErrorKind.NODE_LIMIT_EXCEEDED, span=span)
        self.count += 1
        return node_class(*args, span=span, **kwargs)


# -----------------------------
# Printer
# -----------------------------

def literal_text(value):
    """Positional text for a float that parses back to the same float ('1e-05' -> '0.00001')."""
    if value == int(value) and abs(value) < 1e16:
        return str(int(value))
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _precedence(node):
    if isinstance(node, BinaryOp):
        if node.unary:
            return PRECEDENCE[BinaryKind.MUL]
        return PRECEDENCE[node.kind]
    if isinstance(node, Number) and node.value < 0:
        return PRECEDENCE[BinaryKind.MUL]
    return ATOM


def _wrap(text):
    return f"({text})"


def format_expression(node):
    """Print a tree as text that parses back to an equivalent tree."""
    if isinstance(node, Number):
        text = literal_text(abs(node.value))
        return f"-{text}" if node.value < 0 else text

    elif isinstance(node, Variable):
        return node.name

    elif isinstance(node, BinaryOp):
        if node.unary:
            operand = format_expression(node.right)
            # -(4^2) prints as -4 ^ 2; anything looser than '^' needs brackets
            if _precedence(node.right) < PRECEDENCE[BinaryKind.POW]:
                operand = _wrap(operand)
            return f"-{operand}"

        own = PRECEDENCE[node.kind]
        left = format_expression(node.left)
        right = format_expression(node.right)

        if node.kind == BinaryKind.POW:
            # right-associative: only the left side needs brackets at equal strength
            if _precedence(node.left) <= own:
                left = _wrap(left)
            if _precedence(node.right) < own and not _is_unary(node.right):
                right = _wrap(right)
        else:
            if _precedence(node.left) < own:
                left = _wrap(left)
            if _precedence(node.right) <= own and not _is_unary(node.right):
                right = _wrap(right)

        return f"{left} {node.kind.value} {right}"

    elif isinstance(node, Function):
        return f"{node.kind.value}({format_expression(node.argument)})"

    elif isinstance(node, Factorial):
        operand = format_expression(node.operand)
        if _precedence(node.operand) < ATOM:
            operand = _wrap(operand)
        return f"{operand}!"

    elif isinstance(node, Parenthesis):
        return _wrap(format_expression(node.inner))

    raise TypeError(f"Unknown node type: {type(node).__name__}")


def _is_unary(node):
    return (isinstance(node, BinaryOp) and node.unary) or (isinstance(node, Number) and node.value < 0)
