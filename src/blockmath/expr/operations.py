"""
Operations that can appear in a parsed expression.

Each operation has a fixed arity and a pure numeric implementation.
Comparison and logical operations return 1.0 for true and 0.0 for false;
any non-zero argument counts as true.
"""

import math
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from .errors import OperationError


class Operation(Enum):
    """Identifiers of the operations emitted by the parser."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    POW = "pow"
    GREATER = "greater"
    LESS = "less"
    EQUAL = "equal"
    AND = "and"
    NEGATE = "negate"
    NOT = "not"
    SQRT = "sqrt"
    ABS = "abs"
    SIGN = "sign"
    SQ = "sq"
    EXP = "exp"
    LG = "lg"
    LN = "ln"
    LOG = "log"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"

    @property
    def arity(self) -> int:
        return OPERATION_ARITY[self]


# Signature of an operation implementation.
OperationFunction = Callable[..., float]


def _truth(value: bool) -> float:
    return 1.0 if value else 0.0


def _sign(x: float) -> float:
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return 0.0


def _log(x: float, base: float) -> float:
    return math.log(x, base)


_BINARY = frozenset(
    {
        Operation.ADD,
        Operation.SUB,
        Operation.MUL,
        Operation.DIV,
        Operation.MOD,
        Operation.POW,
        Operation.GREATER,
        Operation.LESS,
        Operation.EQUAL,
        Operation.AND,
        Operation.LOG,
    }
)

OPERATION_ARITY: Mapping[Operation, int] = MappingProxyType(
    {op: 2 if op in _BINARY else 1 for op in Operation}
)

OPERATIONS: Mapping[Operation, OperationFunction] = MappingProxyType(
    {
        Operation.ADD: lambda a, b: a + b,
        Operation.SUB: lambda a, b: a - b,
        Operation.MUL: lambda a, b: a * b,
        Operation.DIV: lambda a, b: a / b,
        Operation.MOD: math.fmod,
        Operation.POW: math.pow,
        Operation.GREATER: lambda a, b: _truth(a > b),
        Operation.LESS: lambda a, b: _truth(a < b),
        Operation.EQUAL: lambda a, b: _truth(a == b),
        Operation.AND: lambda a, b: _truth(a != 0 and b != 0),
        Operation.NEGATE: lambda x: -x,
        Operation.NOT: lambda x: _truth(x == 0),
        Operation.SQRT: math.sqrt,
        Operation.ABS: abs,
        Operation.SIGN: _sign,
        Operation.SQ: lambda x: x * x,
        Operation.EXP: math.exp,
        Operation.LG: math.log10,
        Operation.LN: math.log,
        Operation.LOG: _log,
        Operation.SIN: math.sin,
        Operation.COS: math.cos,
        Operation.TAN: math.tan,
        Operation.SINH: math.sinh,
        Operation.COSH: math.cosh,
        Operation.TANH: math.tanh,
    }
)


def apply_operation(operation: Operation, args: Sequence[float]) -> float:
    """
    Applies an operation to its arguments.

    Args:
        operation: The operation to apply
        args: Exactly ``operation.arity`` arguments, leftmost first

    Returns:
        The resulting value

    Raises:
        OperationError: If the arguments are outside the operation's domain
            or the result is not a finite number
    """
    if len(args) != operation.arity:
        raise OperationError(
            operation.value,
            f"expected {operation.arity} argument(s), got {len(args)}",
        )
    try:
        result = float(OPERATIONS[operation](*args))
    except ZeroDivisionError:
        raise OperationError(operation.value, "division by zero") from None
    except OverflowError:
        raise OperationError(operation.value, "result out of range") from None
    except ValueError as error:
        raise OperationError(operation.value, str(error)) from None

    if not math.isfinite(result):
        raise OperationError(operation.value, "result out of range")
    return result
