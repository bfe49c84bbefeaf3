"""
Evaluates the symbolic parameters of circuit commands.

Parameters arrive as strings produced by a symbolic algebra library, e.g. "0.5", "1/2" or
"-(234.0 - 0.304074011085012*pi**(-1))". They are evaluated in double precision with plain arithmetic: the expression
is parsed with the Python grammar, but only numbers, + - * / **, unary signs, parentheses and the constant pi() are
accepted. Nothing else is in the namespace.
"""

import ast
import math
import operator
import re
import logging

from .._circuit.serial import Command
from .._utility.errors import ParseError


logger = logging.getLogger(__name__)

_PI_NAME = re.compile(r"\bpi\b(?!\s*\()")

_BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
}

_UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

_FUNCTIONS = {
    "pi": lambda: math.pi,
}


class Evaluator(object):
    """Evaluates symbolic command parameters to floats.

    Example:
        .. code:: python

            evaluator = Evaluator()
            evaluator.evaluate("-234.0 + 0.304074011085012/pi")  # Gives -233.90321023614007

    Attributes:
        cache (dict): Already evaluated expressions, keyed by their raw string.
    """

    def __init__(self):
        self.cache = {}

    def eval_param(self, command: Command, index: int) -> float:
        """Evaluates the parameter at position index of the command.

        Args:
            command (Command): Command whose operation carries the parameters.
            index (int): Position of the parameter to evaluate.

        Returns:
            The value of the parameter as float.

        Raises:
            ParseError: If the command has no such parameter or the parameter is not a valid expression.
        """
        params = command.op.params
        if not params:
            raise ParseError(f"Operation {command.op.type} has no parameters.")
        if not 0 <= index < len(params):
            raise ParseError(f"Operation {command.op.type} has no parameter at index {index}, found {len(params)}.")
        return self.evaluate(params[index])

    def evaluate(self, expression: str) -> float:
        """ Evaluates a single symbolic expression. """
        if expression in self.cache:
            return self.cache[expression]
        value = self._evaluate_tree(self._parse(self.preprocess(expression)))
        logger.debug("Evaluated parameter %r to %r.", expression, value)
        self.cache[expression] = value
        return value

    @staticmethod
    def preprocess(expression: str) -> str:
        """Rewrites the notation of the symbolic library into the evaluator's grammar.

        The power operator becomes '**' (it may also be written '^') and the constant pi becomes the call pi().
        """
        expression = str(expression).replace("^", "**")
        return _PI_NAME.sub("pi()", expression)

    def _parse(self, expression: str) -> ast.AST:
        try:
            return ast.parse(expression.strip(), mode="eval")
        except SyntaxError as e:
            raise ParseError(f"Could not parse parameter expression {expression!r}: {e.msg}.") from e
        except ValueError as e:
            raise ParseError(f"Could not parse parameter expression {expression!r}: {e}.") from e
        except (RecursionError, MemoryError) as e:
            # The parser reports an overflow of its own stack as MemoryError on some interpreters.
            raise ParseError(f"Parameter expression is nested too deeply: {expression[:40]!r}...") from e

    def _evaluate_tree(self, tree: ast.AST) -> float:
        try:
            value = self._visit(tree.body)
        except (ZeroDivisionError, OverflowError) as e:
            raise ParseError(f"Could not evaluate parameter expression: {e}.") from e
        except RecursionError as e:
            raise ParseError("Parameter expression is nested too deeply to evaluate.") from e
        if isinstance(value, complex):
            raise ParseError("Parameter expression evaluates to a complex number.")
        return value

    def _visit(self, node: ast.AST) -> float:
        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
                raise ParseError(f"Unsupported literal {node.value!r} in parameter expression.")
            return float(node.value)

        if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
            left = self._visit(node.left)
            right = self._visit(node.right)
            return _BINARY_OPERATORS[type(node.op)](left, right)

        if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
            return _UNARY_OPERATORS[type(node.op)](self._visit(node.operand))

        if isinstance(node, ast.Call):
            if not isinstance(node.func, ast.Name) or node.func.id not in _FUNCTIONS:
                raise ParseError(f"Unknown function in parameter expression: {ast.dump(node.func)}.")
            if node.args or node.keywords:
                raise ParseError(f"Function {node.func.id}() does not take arguments.")
            return _FUNCTIONS[node.func.id]()

        if isinstance(node, ast.Name):
            raise ParseError(f"Unknown symbol {node.id!r} in parameter expression.")

        raise ParseError(f"Unsupported syntax {type(node).__name__} in parameter expression.")
