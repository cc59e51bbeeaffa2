"""Holonomic constraints f(q1, q2) = 0 compiled from user expressions.

Expressions are parsed with Python's own grammar and then interpreted over a
restricted tree: numeric literals, the symbols q1 and q2, the constants pi and
e, arithmetic operators and a fixed table of math functions. Anything else is
rejected at compile time. ``Math.sin(q1)`` style calls are accepted as an
alias for ``sin(q1)``. Powers are real-valued: a negative base with a
fractional exponent is a domain error, as with ``sqrt``. Trees nested deeper
than MAX_DEPTH levels are rejected.

Compilation fails closed: a rejected expression compiles to the canonical
zero constraint, which is the only constraint treated as absent.
"""

import ast
import math
import operator
import warnings
from typing import Optional

from manifold_sim.errors import (
    ConfigurationFault,
    ConfigurationWarning,
    ConstraintEvaluationError,
)


SYMBOLS = ("q1", "q2")

CONSTANTS = {
    "pi": math.pi,
    "PI": math.pi,
    "e": math.e,
    "E": math.e,
}

FUNCTIONS = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "atan2": math.atan2,
    "sinh": math.sinh,
    "cosh": math.cosh,
    "tanh": math.tanh,
    "exp": math.exp,
    "log": math.log,
    "sqrt": math.sqrt,
    "hypot": math.hypot,
    "abs": abs,
    "pow": math.pow,
    "min": min,
    "max": max,
}

BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: math.pow,
    ast.Mod: operator.mod,
}

UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# Namespaces accepted in front of a function or constant name.
MODULE_ALIASES = ("Math", "math")

# Deepest expression tree accepted; keeps evaluation far from the stack limit.
MAX_DEPTH = 64


def _reference_name(node) -> Optional[str]:
    """Name behind a bare or ``Math.``-prefixed reference."""
    if isinstance(node, ast.Name):
        return node.id
    if (isinstance(node, ast.Attribute)
            and isinstance(node.value, ast.Name)
            and node.value.id in MODULE_ALIASES):
        return node.attr
    return None


def _validate(node, depth=0):
    """Reject any node outside the constraint grammar."""
    if depth > MAX_DEPTH:
        raise ConfigurationFault(f"Expression nested deeper than {MAX_DEPTH} levels")
    if isinstance(node, ast.Expression):
        _validate(node.body, depth + 1)
    elif isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ConfigurationFault(f"Unsupported literal {node.value!r}")
    elif isinstance(node, (ast.Name, ast.Attribute)):
        name = _reference_name(node)
        if name not in SYMBOLS and name not in CONSTANTS:
            raise ConfigurationFault(f"Unknown symbol '{ast.unparse(node)}'")
        if isinstance(node, ast.Attribute) and name in SYMBOLS:
            raise ConfigurationFault(f"Unknown symbol '{ast.unparse(node)}'")
    elif isinstance(node, ast.BinOp):
        if type(node.op) not in BINARY_OPERATORS:
            raise ConfigurationFault(f"Unsupported operator {type(node.op).__name__}")
        _validate(node.left, depth + 1)
        _validate(node.right, depth + 1)
    elif isinstance(node, ast.UnaryOp):
        if type(node.op) not in UNARY_OPERATORS:
            raise ConfigurationFault(f"Unsupported operator {type(node.op).__name__}")
        _validate(node.operand, depth + 1)
    elif isinstance(node, ast.Call):
        name = _reference_name(node.func)
        if name not in FUNCTIONS:
            raise ConfigurationFault(f"Unknown function '{ast.unparse(node.func)}'")
        if node.keywords or not node.args:
            raise ConfigurationFault(f"Bad call to '{name}'")
        for arg in node.args:
            _validate(arg, depth + 1)
    else:
        raise ConfigurationFault(f"Unsupported syntax: {type(node).__name__}")


def _evaluate(node, env):
    if isinstance(node, ast.Expression):
        return _evaluate(node.body, env)
    if isinstance(node, ast.Constant):
        # floats only, so that powers overflow instead of growing without bound
        return float(node.value)
    if isinstance(node, (ast.Name, ast.Attribute)):
        name = _reference_name(node)
        return env[name] if name in env else CONSTANTS[name]
    if isinstance(node, ast.BinOp):
        return BINARY_OPERATORS[type(node.op)](_evaluate(node.left, env), _evaluate(node.right, env))
    if isinstance(node, ast.UnaryOp):
        return UNARY_OPERATORS[type(node.op)](_evaluate(node.operand, env))
    # ast.Call, the only node left after validation
    args = [_evaluate(arg, env) for arg in node.args]
    return FUNCTIONS[_reference_name(node.func)](*args)


class ConstraintFunction:
    """A compiled scalar constraint f(q).

    Call with a coordinate vector, or use ``evaluate(q1, q2)``.
    """

    def __init__(self, expression: Optional[str] = None, tree: Optional[ast.Expression] = None):
        self.expression = expression
        self._tree = tree

    @property
    def is_active(self) -> bool:
        """False only for the canonical zero constraint."""
        return self is not ZERO_CONSTRAINT

    def __call__(self, q) -> float:
        return self.evaluate(q[0], q[1])

    def evaluate(self, q1: float, q2: float) -> float:
        """Value of the constraint at (q1, q2).

        Raises:
            ConstraintEvaluationError: If the expression leaves its domain
        """
        if self._tree is None:
            return 0.0
        try:
            value = _evaluate(self._tree, {"q1": float(q1), "q2": float(q2)})
            return float(value)
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise ConstraintEvaluationError(
                f"Cannot evaluate constraint '{self.expression}' at ({q1}, {q2}): {exc}"
            ) from exc

    def __repr__(self) -> str:
        if not self.is_active:
            return "ConstraintFunction(<zero>)"
        return f"ConstraintFunction({self.expression!r})"


ZERO_CONSTRAINT = ConstraintFunction()


def parse_constraint(expression: str) -> ConstraintFunction:
    """Compile an expression, raising on any fault.

    Raises:
        ConfigurationFault: If the expression is malformed or uses anything
            outside the constraint grammar
    """
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except (SyntaxError, ValueError, RecursionError) as exc:
        raise ConfigurationFault(f"Cannot parse constraint '{expression}': {exc}") from exc
    _validate(tree)
    return ConstraintFunction(expression.strip(), tree)


def compile_constraint(expression: Optional[str]) -> ConstraintFunction:
    """Compile a constraint expression, failing closed to ZERO_CONSTRAINT.

    An empty or missing expression means "unconstrained" and compiles to the
    zero constraint silently; a faulty one does so with a warning.
    """
    if expression is None or not str(expression).strip():
        return ZERO_CONSTRAINT
    try:
        return parse_constraint(str(expression))
    except ConfigurationFault as exc:
        warnings.warn(f"{exc}; running unconstrained", ConfigurationWarning)
        return ZERO_CONSTRAINT
