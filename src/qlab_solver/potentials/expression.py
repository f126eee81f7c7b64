"""
Restricted arithmetic expressions for user-defined potentials.

Text is tokenized, parsed by recursive descent into a small AST and then
evaluated over the single variable x. Only numbers, x, the constants pi
and e, the usual arithmetic operators and a fixed whitelist of math
functions are understood, so no user text is ever executed as code.

Grammar (lowest to highest precedence):

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('+' | '-') unary | power
    power   := atom (('^' | '**') unary)?        # right-associative
    atom    := NUMBER | NAME | NAME '(' args ')' | '(' expr ')'

JavaScript-style prefixes (Math.sin, Math.PI) are accepted and ignored.
Nesting is capped (MAX_NESTING, MAX_TREE_DEPTH) so that over-deep input
fails with ExpressionError rather than exhausting the interpreter stack.
"""

import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterator, List, Tuple, Union

from qlab_solver.core.exceptions import ExpressionError


FUNCTIONS: Dict[str, Tuple[int, Callable[..., float]]] = {
    "sin": (1, math.sin),
    "cos": (1, math.cos),
    "tan": (1, math.tan),
    "asin": (1, math.asin),
    "acos": (1, math.acos),
    "atan": (1, math.atan),
    "sinh": (1, math.sinh),
    "cosh": (1, math.cosh),
    "tanh": (1, math.tanh),
    "exp": (1, math.exp),
    "log": (1, math.log),
    "log10": (1, math.log10),
    "sqrt": (1, math.sqrt),
    "abs": (1, abs),
    "min": (2, min),
    "max": (2, max),
    "pow": (2, math.pow),
    "atan2": (2, math.atan2),
}

CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

VARIABLE = "x"

# Limits on nested parentheses, signs and exponents while parsing, and on the
# depth of the resulting tree (long operator chains nest too)
MAX_NESTING = 100
MAX_TREE_DEPTH = 200

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<name>[A-Za-z_][A-Za-z_0-9]*(?:\.[A-Za-z_][A-Za-z_0-9]*)?)"
    r"|(?P<op>\*\*|[-+*/^(),])"
    r")"
)


@dataclass(frozen=True)
class Token:
    kind: str  # 'number', 'name', 'op' or 'end'
    text: str
    position: int


def tokenize(text: str) -> List[Token]:
    """
    Split an expression into tokens.

    Raises:
        ExpressionError: On any character that starts no valid token.
    """
    tokens = []
    pos = 0
    stripped_end = len(text.rstrip())
    while pos < stripped_end:
        match = _TOKEN_RE.match(text, pos)
        if match is None or match.end() == pos:
            raise ExpressionError(f"Unexpected character {text[pos]!r} at position {pos}")
        kind = match.lastgroup
        value = match.group(kind)
        if kind == "name":
            value = _strip_math_prefix(value)
        tokens.append(Token(kind, value, match.start(kind)))
        pos = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


def _strip_math_prefix(name: str) -> str:
    if "." in name:
        prefix, _, attr = name.partition(".")
        if prefix != "Math":
            raise ExpressionError(f"Unknown name {name!r}")
        name = attr
    return name.lower() if name in ("PI", "E") else name


# =============================================================================
# AST
# =============================================================================

@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    name: str
    args: Tuple["Node", ...]


Node = Union[Number, Variable, UnaryOp, BinaryOp, Call]


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def expect(self, text: str) -> Token:
        token = self.current
        if token.kind != "op" or token.text != text:
            found = token.text or "end of input"
            raise ExpressionError(f"Expected {text!r} at position {token.position}, found {found!r}")
        return self.advance()

    def parse(self) -> Node:
        node = self.expr()
        if self.current.kind != "end":
            raise ExpressionError(
                f"Unexpected {self.current.text!r} at position {self.current.position}"
            )
        return node

    def enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise ExpressionError(
                f"Expression nested too deeply at position {self.current.position}"
            )

    def expr(self) -> Node:
        self.enter()
        try:
            node = self.term()
            while self.current.kind == "op" and self.current.text in ("+", "-"):
                op = self.advance().text
                node = BinaryOp(op, node, self.term())
            return node
        finally:
            self.depth -= 1

    def term(self) -> Node:
        node = self.unary()
        while self.current.kind == "op" and self.current.text in ("*", "/"):
            op = self.advance().text
            node = BinaryOp(op, node, self.unary())
        return node

    def unary(self) -> Node:
        if self.current.kind == "op" and self.current.text in ("+", "-"):
            op = self.advance().text
            self.enter()
            try:
                return UnaryOp(op, self.unary())
            finally:
                self.depth -= 1
        return self.power()

    def power(self) -> Node:
        base = self.atom()
        if self.current.kind == "op" and self.current.text in ("^", "**"):
            self.advance()
            # -x^2 parses as -(x^2); x^-2 is allowed
            self.enter()
            try:
                return BinaryOp("^", base, self.unary())
            finally:
                self.depth -= 1
        return base

    def atom(self) -> Node:
        token = self.current
        if token.kind == "number":
            self.advance()
            return Number(float(token.text))
        if token.kind == "name":
            self.advance()
            if self.current.kind == "op" and self.current.text == "(":
                return self.call(token)
            if token.text == VARIABLE:
                return Variable(token.text)
            if token.text in CONSTANTS:
                return Number(CONSTANTS[token.text])
            raise ExpressionError(f"Unknown name {token.text!r} at position {token.position}")
        if token.kind == "op" and token.text == "(":
            self.advance()
            node = self.expr()
            self.expect(")")
            return node
        found = token.text or "end of input"
        raise ExpressionError(f"Unexpected {found!r} at position {token.position}")

    def call(self, name_token: Token) -> Node:
        name = name_token.text
        if name not in FUNCTIONS:
            raise ExpressionError(f"Unknown function {name!r} at position {name_token.position}")
        self.expect("(")
        args = [self.expr()]
        while self.current.kind == "op" and self.current.text == ",":
            self.advance()
            args.append(self.expr())
        self.expect(")")
        arity = FUNCTIONS[name][0]
        if len(args) != arity:
            raise ExpressionError(f"{name}() takes {arity} argument(s), got {len(args)}")
        return Call(name, tuple(args))


# =============================================================================
# Evaluation
# =============================================================================

def _evaluate(node: Node, x: float) -> float:
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Variable):
        return x
    if isinstance(node, UnaryOp):
        value = _evaluate(node.operand, x)
        return -value if node.op == "-" else value
    if isinstance(node, BinaryOp):
        left = _evaluate(node.left, x)
        right = _evaluate(node.right, x)
        if node.op == "+":
            return left + right
        if node.op == "-":
            return left - right
        if node.op == "*":
            return left * right
        if node.op == "/":
            return left / right
        return math.pow(left, right)
    if isinstance(node, Call):
        func = FUNCTIONS[node.name][1]
        return func(*(_evaluate(arg, x) for arg in node.args))
    raise ExpressionError(f"Unsupported node {node!r}")


def _children(node: Node) -> Tuple[Node, ...]:
    if isinstance(node, UnaryOp):
        return (node.operand,)
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, Call):
        return node.args
    return ()


def tree_depth(node: Node) -> int:
    """Depth of the AST, computed without recursion."""
    depth = 0
    stack = [(node, 1)]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in _children(node))
    return depth


def _variables(node: Node) -> Iterator[str]:
    if isinstance(node, Variable):
        yield node.name
    elif isinstance(node, UnaryOp):
        yield from _variables(node.operand)
    elif isinstance(node, BinaryOp):
        yield from _variables(node.left)
        yield from _variables(node.right)
    elif isinstance(node, Call):
        for arg in node.args:
            yield from _variables(arg)


class Expression:
    """
    A compiled potential expression V(x).

    Attributes:
        text: The source text.
        tree: Parsed AST.
    """

    def __init__(self, text: str):
        if not isinstance(text, str) or not text.strip():
            raise ExpressionError("Expression is empty")
        self.text = text
        try:
            self.tree = _Parser(tokenize(text)).parse()
        except RecursionError as e:
            raise ExpressionError("Expression nested too deeply") from e
        if tree_depth(self.tree) > MAX_TREE_DEPTH:
            raise ExpressionError(
                f"Expression is too long to evaluate (depth above {MAX_TREE_DEPTH})"
            )

    @property
    def variables(self) -> FrozenSet[str]:
        """Variable names the expression refers to (empty for a constant)."""
        return frozenset(_variables(self.tree))

    def evaluate(self, x: float) -> float:
        """
        Evaluate at a single point.

        Raises:
            ExpressionError: On a math domain error, division by zero,
                overflow or a non-finite result.
        """
        try:
            value = float(_evaluate(self.tree, float(x)))
        except (ArithmeticError, ValueError, RecursionError) as e:
            raise ExpressionError(f"Cannot evaluate {self.text!r} at x={x}: {e}") from e
        if not math.isfinite(value):
            raise ExpressionError(f"{self.text!r} is not finite at x={x}")
        return value

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def __repr__(self) -> str:
        return f"Expression({self.text!r})"


def compile_expression(text: str) -> Expression:
    """Parse an expression string; raises ExpressionError on bad syntax."""
    return Expression(text)
