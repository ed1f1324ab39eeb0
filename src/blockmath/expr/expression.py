"""
Postfix expression representation.

The parser appends operands and operations in postfix order; the
evaluator walks them left to right with a value stack.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import ExpressionError
from .operations import Operation


@dataclass(frozen=True)
class NumberLiteral:
    """Numeric literal operand."""

    value: float
    text: str


@dataclass(frozen=True)
class NamedConstant:
    """Named constant operand (e.g. e, pi)."""

    name: str
    value: float


@dataclass(eq=False)
class Variable:
    """
    Variable slot.

    Slots are shared by every reference to the same name inside one
    expression, so assigning ``value`` rebinds all of them.
    """

    name: str
    value: float = 0.0


Operand = Union[NumberLiteral, NamedConstant, Variable]

ExpressionElement = Union[Operand, Operation]

# Operations that may close an expression converted by make_equality().
RELATIONS = (Operation.EQUAL, Operation.GREATER, Operation.LESS)


class Expression:
    """A postfix expression under construction, bound to a set of variables."""

    def __init__(self, variable_names: Iterable[str] = ()):
        self._variables: Dict[str, Variable] = {}
        for name in variable_names:
            if name not in self._variables:
                self._variables[name] = Variable(name)
        self._elements: List[ExpressionElement] = []
        self._relation: Optional[Operation] = None

    @property
    def variables(self) -> Mapping[str, Variable]:
        return self._variables

    @property
    def elements(self) -> Tuple[ExpressionElement, ...]:
        return tuple(self._elements)

    @property
    def relation(self) -> Optional[Operation]:
        """The comparison removed by make_equality(), if any."""
        return self._relation

    @property
    def is_equality(self) -> bool:
        return self._relation is not None

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"Expression({self.to_postfix_string()!r})"

    def append(self, element: ExpressionElement) -> None:
        """Appends one more postfix element."""
        self._elements.append(element)

    def make_equality(self) -> None:
        """
        Converts a comparison into a residual expression.

        The last element must be one of ``=``, ``>`` or ``<``. It is recorded
        as ``relation`` and replaced with a subtraction, so evaluating the
        expression yields ``left - right``.

        Raises:
            ExpressionError: If the expression is not a comparison or was
                already converted
        """
        if self._relation is not None:
            raise ExpressionError("Expression is already an equality")
        if not self._elements or self._elements[-1] not in RELATIONS:
            raise ExpressionError(
                "Expression is not an equality or inequality (expected =, > or <)"
            )
        self._relation = self._elements[-1]
        self._elements[-1] = Operation.SUB

    def evaluate(self, bindings: Optional[Mapping[str, float]] = None) -> float:
        """
        Evaluates the expression.

        Args:
            bindings: Values for variables; unbound variables use their
                slot value

        Raises:
            EvaluationError: If evaluation fails
        """
        from .evaluator import Evaluator

        return Evaluator(self, bindings).evaluate()

    def holds(
        self,
        bindings: Optional[Mapping[str, float]] = None,
        tolerance: float = 0.0,
    ) -> bool:
        """
        Tests the relation of an expression converted by make_equality().

        Equalities hold when the residual is within ``tolerance`` of zero.
        """
        if self._relation is None:
            raise ExpressionError("Expression is not an equality; call make_equality()")
        residual = self.evaluate(bindings)
        if self._relation is Operation.EQUAL:
            return abs(residual) <= tolerance
        if self._relation is Operation.GREATER:
            return residual > 0
        return residual < 0

    def to_postfix_string(self) -> str:
        """Returns the postfix form for debugging, e.g. ``2 3 4 mul add``."""
        return " ".join(element_to_string(e) for e in self._elements)


def element_to_string(element: ExpressionElement) -> str:
    if isinstance(element, Operation):
        return element.value
    if isinstance(element, NumberLiteral):
        return element.text
    return element.name
