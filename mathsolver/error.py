from enum import Enum


class ErrorKind(Enum):
    UNEXPECTED_CHARACTER = "3011"

    EXPECTED_OPERAND = "3027"
    UNMATCHED_PAREN = "3009"
    EXPECTED_ARG_LIST = "3010"
    TRAILING_INPUT = "3012"
    NODE_LIMIT_EXCEEDED = "3031"

    DIVISION_BY_ZERO = "3003"
    INVALID_OPERATION = "3018"
    UNDEFINED_VARIABLE = "3032"
    VARIABLE_LIMIT_EXCEEDED = "3033"
    INVALID_NAME = "3034"

    INVALID_SETTINGS = "5001"

    @property
    def code(self):
        return self.value


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None, kind=None, span=None):
        super().__init__(message)
        self.message = message
        self.code = kind.code if kind is not None else code
        self.equation = equation
        self.kind = kind
        self.span = span

    def __str__(self):
        if self.span is not None:
            return f"{self.message} (line {self.span.line}, column {self.span.column})"
        return self.message


class LexError(MathError):
    pass

class ParseError(MathError):
    pass

class EvalError(MathError):
    pass

class SettingsError(MathError):
    def __init__(self, message, equation=None):
        super().__init__(message, equation=equation, kind=ErrorKind.INVALID_SETTINGS)


Error_Dictionary = {

    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "4002" : "Calculation already Running!",
    "4501" : "Not all Settings could be saved: ", # + Error raising setting

    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Return the category and message line the UI shows for an error."""
    code = getattr(error, "code", "9999")
    category = Error_Dictionary.get(code[:1], Error_Dictionary["9"])
    return f"{category} {code}", str(error)
