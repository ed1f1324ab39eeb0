"""
Resource limits for expression parsing.

These limits protect a host command against overly long or deeply
nested input.
"""

from dataclasses import dataclass, fields
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class ParserLimits:
    """Parser limits configuration."""

    # Maximum expression string length in characters
    max_expression_length: int = 4096

    # Maximum number of simultaneously open parentheses
    max_nesting_depth: int = 32

    # Maximum number of postfix elements in a parsed expression
    max_output_elements: int = 256

    # Maximum number of variable names supplied for one parse
    max_variables: int = 64

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{field.name} must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"{field.name} must be at least 1, got {value}")


DEFAULT_PARSER_LIMITS = ParserLimits()


def check_expression_length(
    expression: str, limits: Optional[ParserLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_PARSER_LIMITS
    if len(expression) > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length", limits.max_expression_length, len(expression)
        )


def check_nesting_depth(depth: int, limits: Optional[ParserLimits] = None) -> None:
    """Validates parenthesis nesting during parsing."""
    limits = limits or DEFAULT_PARSER_LIMITS
    if depth > limits.max_nesting_depth:
        raise LimitExceededError("max_nesting_depth", limits.max_nesting_depth, depth)


def check_output_elements(count: int, limits: Optional[ParserLimits] = None) -> None:
    """Validates the postfix element count during parsing."""
    limits = limits or DEFAULT_PARSER_LIMITS
    if count > limits.max_output_elements:
        raise LimitExceededError(
            "max_output_elements", limits.max_output_elements, count
        )


def check_variable_count(count: int, limits: Optional[ParserLimits] = None) -> None:
    limits = limits or DEFAULT_PARSER_LIMITS
    if count > limits.max_variables:
        raise LimitExceededError("max_variables", limits.max_variables, count)
