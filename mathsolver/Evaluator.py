# Evaluator.py
"""
Post-order tree evaluation.

Evaluator.evaluate() returns a plain float. Passing a StepRecorder makes the
same walk append one CalculationStep per operator, function and factorial
node; evaluate_with_steps() wraps that into a CalculationResult.
"""

import logging
import math
from collections import namedtuple

from . import Arithmetic
from . import error as E
from . import Nodes
from . import ScientificEngine

logger = logging.getLogger(__name__)

MAX_STEPS = 20
EPSILON = 1e-10

CalculationStep = namedtuple("CalculationStep", "expression operation result")

OPERATION_NAMES = {
    Nodes.BinaryKind.ADD: "Addition",
    Nodes.BinaryKind.SUB: "Subtraction",
    Nodes.BinaryKind.MUL: "Multiplication",
    Nodes.BinaryKind.DIV: "Division",
    Nodes.BinaryKind.POW: "Exponentiation",
}

STEP_DESCRIPTIONS = {
    Nodes.BinaryKind.ADD: "Add {left} and {right}",
    Nodes.BinaryKind.SUB: "Subtract {right} from {left}",
    Nodes.BinaryKind.MUL: "Multiply {left} by {right}",
    Nodes.BinaryKind.DIV: "Divide {left} by {right}",
    Nodes.BinaryKind.POW: "Raise {left} to power {right}",
}


class CalculationResult:
    """Outcome of one evaluation. Not modified after construction."""

    def __init__(self, value, steps, formatted_result, settings, expression="", dropped_steps=0):
        self.value = value
        self.steps = tuple(steps)
        self.formatted_result = formatted_result
        self.arithmetic_mode = settings.mode
        self.precision = settings.precision
        self.use_significant_digits = settings.use_significant_digits
        self.expression = expression
        self.dropped_steps = dropped_steps

    @property
    def step_count(self):
        return len(self.steps)

    def __repr__(self):
        return (f"CalculationResult(value={self.value!r}, formatted_result={self.formatted_result!r}, "
                f"steps={len(self.steps)})")


class StepRecorder:
    """Append-only step log. Steps past max_steps are counted and dropped."""

    def __init__(self, max_steps=MAX_STEPS):
        self.max_steps = max_steps
        self.steps = []
        self.dropped = 0

    @property
    def full(self):
        return len(self.steps) >= self.max_steps

    def record(self, expression, operation, result):
        if self.full:
            self.dropped += 1
            return
        self.steps.append(CalculationStep(expression, operation, result))


class Evaluator:
    def __init__(self, variables, settings, recorder=None):
        self.variables = variables
        self.settings = settings
        self.recorder = recorder

    def _text(self, value):
        return Arithmetic.format_number(value, self.settings)

    def _finish(self, value, what, span):
        """Apply the arithmetic policy to one operation result."""
        if not math.isfinite(value):
            raise E.EvalError(f"Number too large in {what.lower()}",
                              kind=E.ErrorKind.INVALID_OPERATION, span=span)
        return Arithmetic.apply_format(value, self.settings)

    def _record(self, node, template, value, **operands):
        if self.recorder is None:
            return
        texts = {name: self._text(operand) for name, operand in operands.items()}
        self.recorder.record(Nodes.format_expression(node), template.format(**texts), self._text(value))

    def evaluate(self, node):
        # Leaves are formatted too (pi in Round(2) enters as 3.14) but record no step
        if isinstance(node, Nodes.Number):
            return Arithmetic.apply_format(node.value, self.settings)

        elif isinstance(node, Nodes.Variable):
            return Arithmetic.apply_format(self.variables.resolve(node.name, node.span), self.settings)

        elif isinstance(node, Nodes.Parenthesis):
            return self.evaluate(node.inner)

        elif isinstance(node, Nodes.BinaryOp):
            return self._evaluate_binary(node)

        elif isinstance(node, Nodes.Function):
            argument = self.evaluate(node.argument)
            raw = ScientificEngine.evaluate_function(node.kind, argument, node.span)
            result = self._finish(raw, node.kind.value, node.span)
            logger.debug("%s(%r) = %r", node.kind.value, argument, result)
            self._record(node, ScientificEngine.FUNCTION_DESCRIPTIONS[node.kind], result, argument=argument)
            return result

        elif isinstance(node, Nodes.Factorial):
            operand = self.evaluate(node.operand)
            result = self._finish(ScientificEngine.factorial(operand, node.span), "Factorial", node.span)
            logger.debug("%r! = %r", operand, result)
            self._record(node, "Calculate factorial of {operand}", result, operand=operand)
            return result

        raise TypeError(f"Unknown node type: {type(node).__name__}")

    def _evaluate_binary(self, node):
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        kind = node.kind

        if kind == Nodes.BinaryKind.ADD:
            raw = left + right
        elif kind == Nodes.BinaryKind.SUB:
            raw = left - right
        elif kind == Nodes.BinaryKind.MUL:
            raw = left * right
        elif kind == Nodes.BinaryKind.DIV:
            if abs(right) < EPSILON:
                raise E.EvalError(f"Division by zero: {self._text(left)} / {self._text(right)}",
                                  kind=E.ErrorKind.DIVISION_BY_ZERO, span=node.span)
            raw = left / right
        elif kind == Nodes.BinaryKind.POW:
            raw = ScientificEngine.power(left, right, node.span)
        else:
            raise TypeError(f"Unknown operator: {kind!r}")

        result = self._finish(raw, OPERATION_NAMES[kind], node.span)
        logger.debug("%s: %r %s %r = %r", OPERATION_NAMES[kind], left, kind.value, right, result)

        template = "Negate {right}" if node.unary else STEP_DESCRIPTIONS[kind]
        self._record(node, template, result, left=left, right=right)
        return result


def evaluate(node, variables, settings):
    """Evaluate a tree to a float without recording steps."""
    return Evaluator(variables, settings).evaluate(node)


def _build_result(node, variables, settings, recorder, expression):
    snapshot = settings.snapshot()
    value = Evaluator(variables, snapshot, recorder).evaluate(node)
    value = Arithmetic.apply_format(value, snapshot)

    steps = recorder.steps if recorder is not None else ()
    dropped = recorder.dropped if recorder is not None else 0
    return CalculationResult(value, steps, Arithmetic.format_number(value, snapshot), snapshot,
                             expression=expression, dropped_steps=dropped)


def evaluate_with_steps(node, variables, settings, max_steps=MAX_STEPS, expression=""):
    """Evaluate a tree and return a CalculationResult with its step trace."""
    return _build_result(node, variables, settings, StepRecorder(max_steps), expression)


def evaluate_to_result(node, variables, settings, expression=""):
    """Like evaluate_with_steps, without recording any steps."""
    return _build_result(node, variables, settings, None, expression)
