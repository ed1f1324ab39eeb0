"""
Error types for the math expression parser.

Parse failures carry the offset of the offending term so a math command
can echo the input back with a caret under the problem.
"""

from enum import Enum
from typing import Optional


class ParseErrorKind(Enum):
    """Classification of syntax failures raised by the parser."""

    UNRECOGNIZED_TOKEN = "UNRECOGNIZED_TOKEN"
    MISSING_LEFT_PARENTHESIS = "MISSING_LEFT_PARENTHESIS"
    UNMATCHED_RIGHT_PARENTHESIS = "UNMATCHED_RIGHT_PARENTHESIS"
    UNMATCHED_COMMA = "UNMATCHED_COMMA"
    UNMATCHED_LEFT_PARENTHESIS = "UNMATCHED_LEFT_PARENTHESIS"
    MALFORMED_ASSIGNMENT = "MALFORMED_ASSIGNMENT"


class ExpressionError(Exception):
    """
    Root of every parser, limit and evaluation failure.

    ``position`` is an offset into ``expression``, the (case-folded) text
    that was being scanned; both are None for errors raised outside a scan.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns the message followed by the scanned text and a caret line,
        or just the message when no position is known.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class TokenizerError(ExpressionError):
    """
    Error raised by the term reader itself rather than by classification.
    """

    pass


class EndOfInputError(TokenizerError, IndexError):
    """
    Raised when a token is requested past the end of the input.
    """

    def __init__(self, position: int, expression: Optional[str] = None):
        super().__init__("Unexpected end of input", position, expression)


class ParseError(ExpressionError):
    """
    Syntax error found while classifying terms; ``kind`` names which one.
    """

    kind: ParseErrorKind = ParseErrorKind.UNRECOGNIZED_TOKEN


class UnrecognizedTokenError(ParseError):
    """A term that is not a number, constant, variable, function or operator."""

    kind = ParseErrorKind.UNRECOGNIZED_TOKEN

    def __init__(self, term: str, position: int, expression: Optional[str] = None):
        super().__init__(f"Unrecognized term '{term}'", position, expression)
        self.term = term


class MissingLeftParenthesisError(ParseError):
    """A function name that is not immediately followed by '('."""

    kind = ParseErrorKind.MISSING_LEFT_PARENTHESIS

    def __init__(self, function_name: str, position: int, expression: Optional[str] = None):
        super().__init__(
            f"Expected '(' after function '{function_name}'", position, expression
        )
        self.function_name = function_name


class UnmatchedParenthesisError(ParseError):
    """
    Base class for grouping errors.
    """

    pass


class UnmatchedRightParenthesisError(UnmatchedParenthesisError):
    kind = ParseErrorKind.UNMATCHED_RIGHT_PARENTHESIS

    def __init__(self, position: int, expression: Optional[str] = None):
        super().__init__("Unmatched right parenthesis", position, expression)


class UnmatchedCommaError(UnmatchedParenthesisError):
    kind = ParseErrorKind.UNMATCHED_COMMA

    def __init__(self, position: int, expression: Optional[str] = None):
        super().__init__("Comma without matching left parenthesis", position, expression)


class UnmatchedLeftParenthesisError(UnmatchedParenthesisError):
    kind = ParseErrorKind.UNMATCHED_LEFT_PARENTHESIS

    def __init__(self, position: int, expression: Optional[str] = None):
        super().__init__("Unmatched left parenthesis", position, expression)


class MalformedAssignmentError(ParseError):
    """
    Raised when an assignment is not of the form ``name = expression``.
    """

    kind = ParseErrorKind.MALFORMED_ASSIGNMENT

    def __init__(
        self,
        message: str = "The expression is not an assignment (i.e. not like z=...)",
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message, position, expression)


class LimitExceededError(ExpressionError):
    """
    Raised when input outgrows a ParserLimits bound.

    ``limit_name`` is the ParserLimits field that was exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual


class EvaluationError(ExpressionError):
    """
    Error raised while walking a postfix expression, e.g. a missing operand
    or an unknown variable binding.
    """

    pass


class OperationError(EvaluationError):
    """
    Raised when an operation cannot produce a value for its arguments.
    """

    def __init__(self, operation_name: str, message: str):
        super().__init__(f"{operation_name}: {message}")
        self.operation_name = operation_name
