"""
Shunting-yard parser for math expressions.

Converts an infix expression into a postfix Expression in a single
left-to-right scan. Operands go straight to the output; operators,
functions and open parentheses wait on an operator stack until the
precedence rules release them.

Scan states:
- EXPECT_OPERAND: at the start and after an operator, '(' or ','.
  '-' and '!' are read as unary operators here.
- EXPECT_OPERATOR: after an operand or ')'. '-' is read as subtraction.
- EXPECT_OPEN_PAREN: after a function name; only '(' may follow.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_PARSER_CONFIG, ParserConfig
from .errors import (
    ExpressionError,
    MalformedAssignmentError,
    MissingLeftParenthesisError,
    ParseError,
    UnmatchedCommaError,
    UnmatchedLeftParenthesisError,
    UnmatchedRightParenthesisError,
    UnrecognizedTokenError,
)
from .expression import Expression, ExpressionElement, NumberLiteral
from .limits import (
    check_expression_length,
    check_nesting_depth,
    check_output_elements,
    check_variable_count,
)
from .symbols import (
    BinaryOp,
    Comma,
    LeftParen,
    RightParen,
    StackEntry,
    UnaryOrFunctionOp,
    lookup_binary,
    lookup_constant,
    lookup_function,
    lookup_grouping,
    lookup_unary,
)
from .tokenizer import Token, Tokenizer, TokenKind

logger = logging.getLogger("blockmath.expr.parser")

# Decimal literals only; exponent notation is not supported.
_NUMBER_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")


class ScanState(Enum):
    """What the parser accepts next."""

    EXPECT_OPERAND = "EXPECT_OPERAND"
    EXPECT_OPERATOR = "EXPECT_OPERATOR"
    EXPECT_OPEN_PAREN = "EXPECT_OPEN_PAREN"


@dataclass
class ParseResult:
    """Result of a parse that reports failure as a value."""

    expression: Optional[Expression]
    """The parsed expression, or None on failure."""

    success: bool
    """Whether parsing succeeded."""

    error: Optional[ExpressionError] = None
    """The failure, carrying its message and position."""


class ShuntingYardParser:
    """Parser for one expression string. Instances are single-use."""

    def __init__(
        self,
        source: str,
        variable_names: Iterable[str] = (),
        config: Optional[ParserConfig] = None,
    ):
        self._config = config or DEFAULT_PARSER_CONFIG
        self._limits = self._config.limits

        names = list(variable_names)
        check_variable_count(len(names), self._limits)

        if self._config.case_fold:
            source = source.lower()
            names = [name.lower() for name in names]

        self._source = source
        self._expression = Expression(names)
        self._stack: List[StackEntry] = []
        self._open_positions: List[int] = []
        self._state = ScanState.EXPECT_OPERAND
        self._pending_function = ""

    def parse(self) -> Expression:
        """Parses the source into a postfix Expression."""
        check_expression_length(self._source, self._limits)

        tokenizer = Tokenizer(self._source)
        while not tokenizer.at_end:
            self._consume(tokenizer.read_term())

        self._finish(tokenizer.position)

        logger.debug(
            "expression_parsed",
            extra={
                "length": len(self._source),
                "elements": len(self._expression),
            },
        )
        return self._expression

    # ============================================================
    # Token Classification
    # ============================================================

    def _consume(self, token: Token) -> None:
        term = token.value

        if self._state is ScanState.EXPECT_OPEN_PAREN and term != "(":
            raise MissingLeftParenthesisError(
                self._pending_function, token.position, self._source
            )

        if token.kind is TokenKind.TERM:
            if self._consume_operand(token):
                self._state = ScanState.EXPECT_OPERATOR
                return

            function = lookup_function(term)
            if function is not None:
                self._stack.append(function)
                self._pending_function = term
                self._state = ScanState.EXPECT_OPEN_PAREN
                return
        else:
            grouping = lookup_grouping(term)

            if isinstance(grouping, LeftParen):
                self._stack.append(grouping)
                self._open_positions.append(token.position)
                check_nesting_depth(len(self._open_positions), self._limits)
                self._state = ScanState.EXPECT_OPERAND
                return

            if isinstance(grouping, RightParen):
                self._state = ScanState.EXPECT_OPERATOR
                self._reduce_right_paren(token)
                return

            if isinstance(grouping, Comma):
                self._state = ScanState.EXPECT_OPERAND
                self._reduce_comma(token)
                return

            if self._state is ScanState.EXPECT_OPERAND:
                unary = lookup_unary(term)
                if unary is not None:
                    # Another unary operator or an operand may still follow
                    self._stack.append(unary)
                    return
            else:
                binary = lookup_binary(term)
                if binary is not None:
                    self._reduce_binary(binary)
                    self._state = ScanState.EXPECT_OPERAND
                    return

        raise UnrecognizedTokenError(term, token.position, self._source)

    def _consume_operand(self, token: Token) -> bool:
        term = token.value

        if _NUMBER_PATTERN.fullmatch(term):
            value = float(term)
            if not math.isfinite(value):
                raise UnrecognizedTokenError(term, token.position, self._source)
            self._emit(NumberLiteral(value, term))
            return True

        constant = lookup_constant(term)
        if constant is not None:
            self._emit(constant)
            return True

        variable = self._expression.variables.get(term)
        if variable is not None:
            self._emit(variable)
            return True

        return False

    def _emit(self, element: ExpressionElement) -> None:
        self._expression.append(element)
        check_output_elements(len(self._expression), self._limits)

    # ============================================================
    # Stack Reductions
    # ============================================================

    def _reduce_binary(self, op: BinaryOp) -> None:
        # A unary operator on top already has its operand and binds tighter
        # than any binary operator.
        while self._stack and isinstance(self._stack[-1], UnaryOrFunctionOp):
            self._emit(self._stack.pop().operation)

        # Equal precedence pops too: binary operators are left-associative.
        while self._stack:
            top = self._stack[-1]
            if isinstance(top, BinaryOp) and top.precedence >= op.precedence:
                self._emit(top.operation)
                self._stack.pop()
            else:
                break

        self._stack.append(op)

    def _reduce_right_paren(self, token: Token) -> None:
        while True:
            if not self._stack:
                raise UnmatchedRightParenthesisError(token.position, self._source)
            entry = self._stack.pop()
            if isinstance(entry, LeftParen):
                break
            self._emit(entry.operation)

        self._open_positions.pop()

        # Apply the function call and/or unary prefixes of the closed group.
        while self._stack and isinstance(self._stack[-1], UnaryOrFunctionOp):
            self._emit(self._stack.pop().operation)

    def _reduce_comma(self, token: Token) -> None:
        # The left parenthesis stays; later arguments and ')' still need it.
        while True:
            if not self._stack:
                raise UnmatchedCommaError(token.position, self._source)
            entry = self._stack[-1]
            if isinstance(entry, LeftParen):
                return
            self._emit(entry.operation)
            self._stack.pop()

    def _finish(self, end_position: int) -> None:
        if self._state is ScanState.EXPECT_OPEN_PAREN:
            raise MissingLeftParenthesisError(
                self._pending_function, end_position, self._source
            )

        while self._stack:
            entry = self._stack.pop()
            if isinstance(entry, LeftParen):
                raise UnmatchedLeftParenthesisError(
                    self._open_positions[-1], self._source
                )
            self._emit(entry.operation)


def _log_parse_failure(error: ExpressionError) -> None:
    logger.debug(
        "parse_failed",
        extra={
            "kind": error.kind.value if isinstance(error, ParseError) else None,
            "position": error.position,
            "error": error.message,
        },
    )


def parse(
    expression: str,
    variable_names: Iterable[str] = (),
    config: Optional[ParserConfig] = None,
) -> Expression:
    """
    Parses an expression string into a postfix Expression.

    Args:
        expression: The expression string to parse
        variable_names: Names that may appear as variables
        config: Optional parser configuration

    Returns:
        The parsed expression

    Raises:
        ParseError: If the expression is malformed
        LimitExceededError: If a parser limit is exceeded
    """
    try:
        return ShuntingYardParser(expression, variable_names, config).parse()
    except ExpressionError as error:
        _log_parse_failure(error)
        raise


def parse_as_equality(
    expression: str,
    variable_names: Iterable[str] = (),
    config: Optional[ParserConfig] = None,
) -> Expression:
    """
    Parses a comparison such as ``x^2 + y^2 = 25`` and converts it with
    Expression.make_equality().

    Raises:
        ParseError: If the expression is malformed
        ExpressionError: If the expression is not a comparison
    """
    parsed = parse(expression, variable_names, config)
    try:
        parsed.make_equality()
    except ExpressionError as error:
        _log_parse_failure(error)
        raise
    return parsed


def try_parse(
    expression: str,
    variable_names: Iterable[str] = (),
    config: Optional[ParserConfig] = None,
) -> ParseResult:
    """
    Parses an expression, reporting failure as a value instead of raising.
    """
    try:
        parsed = parse(expression, variable_names, config)
        return ParseResult(expression=parsed, success=True)
    except ExpressionError as error:
        return ParseResult(expression=None, success=False, error=error)


def preparse_assignment(
    expression: str, config: Optional[ParserConfig] = None
) -> Tuple[str, str]:
    """
    Splits an assignment of the form ``name = expression``.

    Args:
        expression: The assignment text
        config: Optional parser configuration; with case folding on, the
            target name is lower-cased like variable names in parse()

    Returns:
        Tuple of (target name, text after the '=')

    Raises:
        MalformedAssignmentError: If the text is not an assignment
    """
    tokenizer = Tokenizer(expression)

    if tokenizer.at_end:
        raise MalformedAssignmentError(position=0, expression=expression)

    target = tokenizer.read_term()
    if target.kind is not TokenKind.TERM:
        raise MalformedAssignmentError(
            position=target.position, expression=expression
        )

    if tokenizer.at_end:
        raise MalformedAssignmentError(
            position=tokenizer.position, expression=expression
        )

    assignment = tokenizer.read_term()
    remainder = expression[tokenizer.position:]

    # '==' is a comparison, not an assignment
    if assignment.value != "=" or remainder.startswith("="):
        raise MalformedAssignmentError(
            position=assignment.position, expression=expression
        )

    config = config or DEFAULT_PARSER_CONFIG
    name = target.value.lower() if config.case_fold else target.value
    return name, remainder
