"""
Symbol tables for the shunting-yard parser.

Maps token spellings to the entries the parser pushes on its operator
stack. The tables are built once at import time and are read-only.

Precedence (lowest to highest):
0. Logical: & |
1. Comparison: > < =
2. Additive: + -
3. Multiplicative: * / %
4. Power: ^

Unary operators and functions bind tighter than every binary operator;
that follows from the reduction rules, not from a precedence number.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .expression import NamedConstant
from .operations import Operation


@dataclass(frozen=True)
class BinaryOp:
    """Binary operator entry."""

    operation: Operation
    precedence: int


@dataclass(frozen=True)
class UnaryOrFunctionOp:
    """Unary operator or function entry; applied to the group or operand it prefixes."""

    operation: Operation


@dataclass(frozen=True)
class LeftParen:
    """Grouping marker delimiting ')' and ',' reductions."""


@dataclass(frozen=True)
class RightParen:
    pass


@dataclass(frozen=True)
class Comma:
    pass


GroupingSymbol = Union[LeftParen, RightParen, Comma]

# Entries that can be on the parser's operator stack.
StackEntry = Union[BinaryOp, UnaryOrFunctionOp, LeftParen]


BINARY_OPERATORS: Mapping[str, BinaryOp] = MappingProxyType(
    {
        "+": BinaryOp(Operation.ADD, 2),
        "-": BinaryOp(Operation.SUB, 2),
        "*": BinaryOp(Operation.MUL, 3),
        "/": BinaryOp(Operation.DIV, 3),
        "%": BinaryOp(Operation.MOD, 3),
        "^": BinaryOp(Operation.POW, 4),
        # Comparisons double as the main operator of equalities/inequalities
        ">": BinaryOp(Operation.GREATER, 1),
        "<": BinaryOp(Operation.LESS, 1),
        "=": BinaryOp(Operation.EQUAL, 1),
        "&": BinaryOp(Operation.AND, 0),
        # There is no OR operation; '|' resolves to AND as well.
        "|": BinaryOp(Operation.AND, 0),
    }
)

UNARY_OPERATORS: Mapping[str, UnaryOrFunctionOp] = MappingProxyType(
    {
        "-": UnaryOrFunctionOp(Operation.NEGATE),
        "!": UnaryOrFunctionOp(Operation.NOT),
    }
)

GROUPING_SYMBOLS: Mapping[str, GroupingSymbol] = MappingProxyType(
    {
        "(": LeftParen(),
        ")": RightParen(),
        ",": Comma(),
    }
)

FUNCTIONS: Mapping[str, UnaryOrFunctionOp] = MappingProxyType(
    {
        name: UnaryOrFunctionOp(operation)
        for name, operation in (
            ("sqrt", Operation.SQRT),
            ("abs", Operation.ABS),
            ("sign", Operation.SIGN),
            ("sq", Operation.SQ),
            ("exp", Operation.EXP),
            ("lg", Operation.LG),
            ("ln", Operation.LN),
            ("log", Operation.LOG),
            ("sin", Operation.SIN),
            ("cos", Operation.COS),
            ("tan", Operation.TAN),
            ("sinh", Operation.SINH),
            ("cosh", Operation.COSH),
            ("tanh", Operation.TANH),
        )
    }
)

CONSTANTS: Mapping[str, NamedConstant] = MappingProxyType(
    {
        "e": NamedConstant("e", math.e),
        "pi": NamedConstant("pi", math.pi),
    }
)


def lookup_binary(symbol: str) -> Optional[BinaryOp]:
    return BINARY_OPERATORS.get(symbol)


def lookup_unary(symbol: str) -> Optional[UnaryOrFunctionOp]:
    return UNARY_OPERATORS.get(symbol)


def lookup_grouping(symbol: str) -> Optional[GroupingSymbol]:
    return GROUPING_SYMBOLS.get(symbol)


def lookup_function(name: str) -> Optional[UnaryOrFunctionOp]:
    return FUNCTIONS.get(name)


def lookup_constant(name: str) -> Optional[NamedConstant]:
    return CONSTANTS.get(name)


def is_symbol_char(ch: str) -> bool:
    """Checks if a character is scanned as a single-character token."""
    return (
        ch in BINARY_OPERATORS
        or ch in UNARY_OPERATORS
        or ch in GROUPING_SYMBOLS
        or ch == "="
    )
