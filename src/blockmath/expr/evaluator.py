"""
Postfix expression evaluator.

Walks the elements of an Expression left to right: operands push their
value, operations pop ``arity`` values and push their result.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from .errors import EvaluationError
from .expression import Expression, NamedConstant, NumberLiteral, Variable
from .operations import Operation, apply_operation


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: Optional[float]
    """The evaluated value."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[str] = None
    """Error message if evaluation failed."""


class Evaluator:
    """Evaluates a postfix Expression against variable bindings."""

    def __init__(
        self,
        expression: Expression,
        bindings: Optional[Mapping[str, float]] = None,
    ):
        self._expression = expression
        self._values = self._resolve_bindings(expression, bindings or {})

    @staticmethod
    def _resolve_bindings(
        expression: Expression, bindings: Mapping[str, float]
    ) -> Dict[str, float]:
        values = {name: slot.value for name, slot in expression.variables.items()}
        for name, value in bindings.items():
            key = name if name in values else name.lower()
            if key not in values:
                raise EvaluationError(f"Unknown variable '{name}'")
            values[key] = float(value)
        return values

    def evaluate(self) -> float:
        """Evaluates the expression and returns its value."""
        stack: List[float] = []

        for element in self._expression.elements:
            if isinstance(element, Operation):
                arity = element.arity
                if len(stack) < arity:
                    raise EvaluationError(
                        f"Not enough operands for '{element.value}' "
                        f"(expected {arity}, got {len(stack)})"
                    )
                args = stack[len(stack) - arity:]
                del stack[len(stack) - arity:]
                stack.append(apply_operation(element, args))
            elif isinstance(element, Variable):
                stack.append(self._values[element.name])
            elif isinstance(element, (NumberLiteral, NamedConstant)):
                stack.append(element.value)
            else:
                raise EvaluationError(f"Unsupported expression element: {element!r}")

        if len(stack) != 1:
            raise EvaluationError(
                f"Malformed expression: {len(stack)} values left after evaluation"
            )
        return stack[0]

    def evaluate_as_boolean(self) -> bool:
        return self.evaluate() != 0


def evaluate(
    expression: Expression, bindings: Optional[Mapping[str, float]] = None
) -> EvaluationResult:
    """
    Evaluates an expression and returns the result.

    Args:
        expression: The parsed expression
        bindings: Variable values by name

    Returns:
        The evaluation result with value and success status
    """
    try:
        value = Evaluator(expression, bindings).evaluate()
        return EvaluationResult(value=value, success=True)
    except EvaluationError as error:
        return EvaluationResult(value=None, success=False, error=str(error))


def evaluate_as_boolean(
    expression: Expression, bindings: Optional[Mapping[str, float]] = None
) -> Tuple[bool, Optional[str]]:
    """
    Evaluates an expression as a boolean condition.

    Returns:
        Tuple of (value, error_message). Value is False if evaluation fails.
    """
    try:
        return (Evaluator(expression, bindings).evaluate_as_boolean(), None)
    except EvaluationError as error:
        return (False, str(error))
