# MathEngine.py
"""""
Core calculation engine for the MathSolver calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into tokens with source positions.
2) Parser (AST): builds an Abstract Syntax Tree (recursive-descent, precedence aware)
   from a fixed-size node pool.
3) Evaluator: walks the tree, resolving variables and constants, optionally
   recording every intermediate step.
4) Formatter: applies the rounding / truncation policy and renders the result.

A Session owns the variables and arithmetic settings. The module-level
functions work on one default session shared by the whole process.
"""""

import logging

from . import Arithmetic
from . import Evaluator
from . import Nodes
from . import Parser
from . import error as E
from .SymbolTable import SymbolTable

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 100
APPROX_SIGN = "\u2248"  # "≈"


class Session:
    """Variables plus arithmetic settings used for a series of evaluations."""

    def __init__(self, settings=None, variables=None, max_steps=Evaluator.MAX_STEPS, max_nodes=Nodes.MAX_NODES):
        self.settings = settings if settings is not None else Arithmetic.ArithmeticSettings()
        self.variables = variables if variables is not None else SymbolTable()
        self.max_steps = max_steps
        self.max_nodes = max_nodes

    # --- parsing / evaluation ---

    def parse(self, text):
        return Parser.parse(text, self.max_nodes)

    def evaluate(self, text, trace=False):
        """Parse and evaluate text. Returns a CalculationResult; errors carry the input as `equation`."""
        try:
            tree = self.parse(text)
            if trace:
                result = Evaluator.evaluate_with_steps(tree, self.variables, self.settings,
                                                       self.max_steps, expression=text)
            else:
                result = Evaluator.evaluate_to_result(tree, self.variables, self.settings, expression=text)

        except E.MathError as e:
            e.equation = text
            logger.info("Evaluation of %r failed: [%s] %s", text, e.code, e)
            raise

        logger.debug("%r = %r (%d steps)", text, result.value, result.step_count)
        return result

    def validate(self, text):
        """Return (True, "") if text parses, else (False, error message)."""
        try:
            self.parse(text)
        except E.MathError as e:
            return False, str(e)
        return True, ""

    def format_expression(self, text):
        return Nodes.format_expression(self.parse(text))

    def calculate(self, problem):
        """Display string for a result: "= 14", or "≈ 3.14" if the shown value is not exact."""
        result = self.evaluate(problem)
        try:
            exact = Evaluator.evaluate(self.parse(problem), self.variables, Arithmetic.ArithmeticSettings())
        except E.MathError as e:
            e.equation = problem
            raise

        if abs(float(result.formatted_result) - exact) > Arithmetic.EPSILON:
            return f"{APPROX_SIGN} {result.formatted_result}"
        return f"= {result.formatted_result}"

    # --- variables ---

    def set_variable(self, name, value):
        self.variables.set(name, value)

    def get_variable(self, name):
        return self.variables.get(name)

    # --- arithmetic settings ---

    def set_arithmetic_mode(self, mode, precision, use_significant_digits=False):
        self.settings.set(mode, precision, use_significant_digits)
        logger.info("Arithmetic mode set to %r", self.settings)

    def get_arithmetic_mode(self):
        return self.settings.mode

    def get_precision(self):
        return self.settings.precision

    def get_use_significant_digits(self):
        return self.settings.use_significant_digits

    def apply_format(self, value):
        return Arithmetic.apply_format(value, self.settings)

    def format_number(self, value):
        return Arithmetic.format_number(value, self.settings)

    def apply_settings(self, settings_dict):
        """Take arithmetic_mode / precision / use_significant_digits / max_steps from a config dict."""
        max_steps = settings_dict.get("max_steps", self.max_steps)
        if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
            raise E.SettingsError(f"max_steps must be a non-negative integer, got {max_steps!r}")

        self.set_arithmetic_mode(
            settings_dict.get("arithmetic_mode", self.settings.mode),
            settings_dict.get("precision", self.settings.precision),
            settings_dict.get("use_significant_digits", self.settings.use_significant_digits),
        )
        self.max_steps = max_steps


# -----------------------------
# Process-wide default session
# -----------------------------

_session = Session()


def get_session():
    return _session


def reset():
    """Forget all variables and restore the default arithmetic settings."""
    global _session
    _session = Session()
    return _session


def parse(text):
    return _session.parse(text)


def evaluate(text, trace=False):
    return _session.evaluate(text, trace)


def validate(text):
    return _session.validate(text)


def format_expression(text):
    return _session.format_expression(text)


def calculate(problem):
    return _session.calculate(problem)


def set_variable(name, value):
    _session.set_variable(name, value)


def get_variable(name):
    return _session.get_variable(name)


def set_arithmetic_mode(mode, precision, use_significant_digits=False):
    _session.set_arithmetic_mode(mode, precision, use_significant_digits)


def get_arithmetic_mode():
    return _session.get_arithmetic_mode()


def get_precision():
    return _session.get_precision()


def get_use_significant_digits():
    return _session.get_use_significant_digits()


def apply_format(value):
    return _session.apply_format(value)


def format_number(value):
    return _session.format_number(value)


def apply_settings(settings_dict):
    _session.apply_settings(settings_dict)
