"""
Shunting-yard parser for math expressions.

This module turns infix math expressions into postfix expressions that
can be evaluated against variable bindings.
"""

# Config
from .config import (
    DEFAULT_PARSER_CONFIG,
    ParserConfig,
    load_parser_config,
)
from .errors import (
    EndOfInputError,
    EvaluationError,
    ExpressionError,
    LimitExceededError,
    MalformedAssignmentError,
    MissingLeftParenthesisError,
    OperationError,
    ParseError,
    ParseErrorKind,
    TokenizerError,
    UnmatchedCommaError,
    UnmatchedLeftParenthesisError,
    UnmatchedParenthesisError,
    UnmatchedRightParenthesisError,
    UnrecognizedTokenError,
)

# Evaluator
from .evaluator import (
    EvaluationResult,
    Evaluator,
    evaluate,
    evaluate_as_boolean,
)

# Expression types
from .expression import (
    Expression,
    ExpressionElement,
    NamedConstant,
    NumberLiteral,
    Operand,
    Variable,
)
from .limits import (
    DEFAULT_PARSER_LIMITS,
    ParserLimits,
    check_expression_length,
    check_nesting_depth,
    check_output_elements,
    check_variable_count,
)
from .operations import (
    OPERATIONS,
    Operation,
    apply_operation,
)

# Parser
from .parser import (
    ParseResult,
    ScanState,
    ShuntingYardParser,
    parse,
    parse_as_equality,
    preparse_assignment,
    try_parse,
)

# Tokenizer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenKind,
    tokenize,
)

__all__ = [
    # Expression types
    "Expression",
    "ExpressionElement",
    "Operand",
    "NumberLiteral",
    "NamedConstant",
    "Variable",
    # Operations
    "Operation",
    "OPERATIONS",
    "apply_operation",
    # Errors
    "ExpressionError",
    "TokenizerError",
    "EndOfInputError",
    "ParseError",
    "ParseErrorKind",
    "UnrecognizedTokenError",
    "MissingLeftParenthesisError",
    "UnmatchedParenthesisError",
    "UnmatchedRightParenthesisError",
    "UnmatchedCommaError",
    "UnmatchedLeftParenthesisError",
    "MalformedAssignmentError",
    "LimitExceededError",
    "EvaluationError",
    "OperationError",
    # Limits
    "ParserLimits",
    "DEFAULT_PARSER_LIMITS",
    "check_expression_length",
    "check_nesting_depth",
    "check_output_elements",
    "check_variable_count",
    # Config
    "ParserConfig",
    "DEFAULT_PARSER_CONFIG",
    "load_parser_config",
    # Tokenizer
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    # Parser
    "ParseResult",
    "ScanState",
    "ShuntingYardParser",
    "parse",
    "parse_as_equality",
    "preparse_assignment",
    "try_parse",
    # Evaluator
    "EvaluationResult",
    "Evaluator",
    "evaluate",
    "evaluate_as_boolean",
]
