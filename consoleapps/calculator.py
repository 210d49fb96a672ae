"""Expression evaluator and interactive terminal calculator.

Expressions use the binary operators ``+ - * / % ^`` with parentheses and
the usual precedence (``^`` is right-associative). The unary functions are
sqrt, abs, log, ln, exp, fact, sin, cos and tan; the trigonometric ones take
degrees. The word ``Ans`` stands for the previous result.
"""

from __future__ import annotations

import argparse
import math
import os
import re
import subprocess
from dataclasses import dataclass
from enum import Enum, auto

__all__ = [
    "CalculatorError",
    "TokenKind",
    "Token",
    "tokenize",
    "to_postfix",
    "eval_postfix",
    "evaluate",
    "precedence",
    "is_right_associative",
    "apply_operator",
    "apply_function",
    "factorial",
    "format_result",
    "main",
]


class CalculatorError(ValueError):
    """Raised when an expression cannot be evaluated."""


class TokenKind(Enum):
    NUMBER = auto()
    OPERATOR = auto()
    FUNCTION = auto()
    PAREN_LEFT = auto()
    PAREN_RIGHT = auto()


@dataclass(frozen=True)
class Token:
    """A lexical element of an expression.

    ``value`` is set for numbers; ``text`` holds the operator symbol or the
    function name.
    """

    kind: TokenKind
    value: float = 0.0
    text: str = ""


_SCANNER = re.compile(
    r"(?P<space>[ \t\n\v\f\r]+)"
    r"|(?P<number>\.?[0-9][0-9.]*)"
    r"|(?P<word>[A-Za-z]+)"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<op>[-+*/%^])"
    r"|(?P<bad>.)",
    re.DOTALL,
)
_NUMBER_PREFIX = re.compile(r"[0-9]*\.?[0-9]*")


def tokenize(expr: str, last_result: float = 0.0) -> list[Token]:
    """Split ``expr`` into tokens, replacing ``Ans`` with ``last_result``."""
    tokens: list[Token] = []
    for match in _SCANNER.finditer(expr):
        group = match.lastgroup
        text = match.group()
        if group == "space":
            continue
        if group == "number":
            # The whole run of digits and dots is consumed, but only its
            # longest valid numeric prefix gives the value.
            prefix = _NUMBER_PREFIX.match(text).group()
            tokens.append(Token(TokenKind.NUMBER, float(prefix)))
        elif group == "word":
            if text == "Ans":
                tokens.append(Token(TokenKind.NUMBER, float(last_result)))
            else:
                tokens.append(Token(TokenKind.FUNCTION, text=text))
        elif group == "lparen":
            tokens.append(Token(TokenKind.PAREN_LEFT))
        elif group == "rparen":
            tokens.append(Token(TokenKind.PAREN_RIGHT))
        elif group == "op":
            tokens.append(Token(TokenKind.OPERATOR, text=text))
        else:
            raise CalculatorError(f"invalid character {text!r} at position {match.start()}")
    return tokens


def precedence(op: str) -> int:
    """Binding strength of a binary operator; 0 for anything else."""
    if op in ("+", "-"):
        return 1
    if op in ("*", "/", "%"):
        return 2
    if op == "^":
        return 3
    return 0


def is_right_associative(op: str) -> bool:
    return op == "^"


def _pops_before(top: Token, incoming: Token) -> bool:
    if top.kind is TokenKind.FUNCTION:
        return True
    if top.kind is not TokenKind.OPERATOR:
        return False
    top_rank, incoming_rank = precedence(top.text), precedence(incoming.text)
    return top_rank > incoming_rank or (
        top_rank == incoming_rank and not is_right_associative(incoming.text)
    )


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Reorder infix tokens into postfix order (shunting-yard)."""
    output: list[Token] = []
    stack: list[Token] = []
    for token in tokens:
        if token.kind is TokenKind.NUMBER:
            output.append(token)
        elif token.kind in (TokenKind.FUNCTION, TokenKind.PAREN_LEFT):
            stack.append(token)
        elif token.kind is TokenKind.OPERATOR:
            while stack and _pops_before(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)
        elif token.kind is TokenKind.PAREN_RIGHT:
            while stack and stack[-1].kind is not TokenKind.PAREN_LEFT:
                output.append(stack.pop())
            if not stack:
                raise CalculatorError("mismatched parentheses")
            stack.pop()
            if stack and stack[-1].kind is TokenKind.FUNCTION:
                output.append(stack.pop())
    while stack:
        top = stack.pop()
        if top.kind is TokenKind.PAREN_LEFT:
            raise CalculatorError("mismatched parentheses")
        output.append(top)
    return output


def eval_postfix(tokens: list[Token]) -> float:
    """Evaluate tokens in postfix order."""
    values: list[float] = []
    for token in tokens:
        if token.kind is TokenKind.NUMBER:
            values.append(token.value)
        elif token.kind is TokenKind.OPERATOR:
            if len(values) < 2:
                raise CalculatorError(f"operator {token.text!r} is missing an operand")
            b = values.pop()
            a = values.pop()
            values.append(apply_operator(token.text, a, b))
        elif token.kind is TokenKind.FUNCTION:
            if not values:
                raise CalculatorError(f"function {token.text!r} is missing an argument")
            values.append(apply_function(token.text, values.pop()))
    if len(values) != 1:
        raise CalculatorError("malformed expression")
    return values[0]


def evaluate(expr: str, last_result: float = 0.0) -> float:
    """Evaluate an infix expression; ``Ans`` refers to ``last_result``."""
    return eval_postfix(to_postfix(tokenize(expr, last_result)))


def _truncate(value: float) -> int:
    if not math.isfinite(value):
        raise CalculatorError("modulo of a non-finite value")
    return int(value)


def _is_odd_integer(value: float) -> bool:
    return value.is_integer() and value % 2 == 1


def _power(a: float, b: float) -> float:
    if a == 0 and b < 0:
        return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        return math.nan


def apply_operator(op: str, a: float, b: float) -> float:
    """Apply a binary operator; ``%`` works on the truncated integer parts."""
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        if b == 0:
            raise CalculatorError("division by zero")
        return a / b
    if op == "%":
        left, right = _truncate(a), _truncate(b)
        if right == 0:
            raise CalculatorError("modulo by zero")
        remainder = abs(left) % abs(right)
        return float(-remainder if left < 0 else remainder)
    if op == "^":
        return _power(a, b)
    raise CalculatorError(f"unknown operator {op!r}")


def _degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def _trig(function, degrees: float) -> float:
    try:
        return function(_degrees_to_radians(degrees))
    except ValueError:
        return math.nan


def apply_function(name: str, value: float) -> float:
    """Apply a named unary function."""
    if name == "sqrt":
        if value < 0:
            raise CalculatorError("square root of a negative number")
        return math.sqrt(value)
    if name == "abs":
        return math.fabs(value)
    if name == "ln":
        if value <= 0:
            raise CalculatorError("logarithm of a non-positive number")
        return math.log(value)
    if name == "log":
        if value <= 0:
            raise CalculatorError("logarithm of a non-positive number")
        return math.log10(value)
    if name == "exp":
        try:
            return math.exp(value)
        except OverflowError:
            return math.inf
    if name == "fact":
        if math.isnan(value) or value < 0:
            raise CalculatorError("factorial of a negative or undefined number")
        if math.isinf(value):
            return math.inf
        if math.floor(value) != value:
            raise CalculatorError("factorial of a non-integer")
        return factorial(int(value))
    if name == "sin":
        return _trig(math.sin, value)
    if name == "cos":
        return _trig(math.cos, value)
    if name == "tan":
        return _trig(math.tan, value)
    raise CalculatorError(f"unknown function {name!r}")


def factorial(n: int) -> float:
    """n! as a float; 0 for negative ``n`` and infinity once it overflows."""
    if n < 0:
        return 0.0
    result = 1.0
    for factor in range(2, n + 1):
        result *= factor
        if math.isinf(result):
            break
    return result


def format_result(value: float) -> str:
    """Render a result with six decimals."""
    return f"{value:.6f}"


def _clear_screen() -> None:
    subprocess.run("cls" if os.name == "nt" else "clear", shell=True, check=False)


def main(argv: list[str] | None = None) -> int:
    """Run the interactive calculator on standard input."""
    parser = argparse.ArgumentParser(
        prog="calculator", description="Interactive terminal calculator."
    )
    parser.parse_args(argv)

    print("=== Terminal Calculator ===")
    print("Supports full expressions (e.g., (3 + 2) * 5 - 1 / 2)")
    print("Unary functions: sqrt, log, sin, fact, etc. | Use 'Ans' for last result")
    print("Type 'q' to quit, 'c' to clear screen.")

    last_result = 0.0
    while True:
        try:
            line = input("\nEnter expression: ")
        except EOFError:
            print()
            break
        if line in ("q", "Q"):
            print("Goodbye!")
            break
        if line in ("c", "C"):
            _clear_screen()
            continue
        try:
            result = evaluate(line, last_result)
        except CalculatorError:
            print("Error: Invalid expression")
        else:
            print(f"Result: {format_result(result)}")
            last_result = result
    return 0