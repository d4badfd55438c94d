"""
Expression tree for Boolean expressions.

The tree is built from postfix tokens with an explicit operand stack. Nodes
are immutable and every composite node owns its children exclusively.

Chains of same-priority operators (ABCD..., A^B^C^...) produce trees as deep
as the chain is long, so every walk over a tree here is iterative: the tree is
flattened once into postfix instructions and those are run with a value stack.
"""

import operator
from dataclasses import dataclass
from typing import Union

from .errors import (
    InvalidAndOperandsError,
    InvalidExpressionError,
    InvalidNotOperandError,
    InvalidOrOperandsError,
    InvalidTokenError,
    InvalidXorOperandsError,
)
from .parser import AND, CONSTANTS, NOT, OR, VARIABLES, XOR, insert_implicit_and, to_postfix, validate


class _Infix:
    """Renders any node back to surface syntax."""

    def __str__(self):
        return to_infix(self)


@dataclass(frozen=True)
class Constant(_Infix):
    bit: int


@dataclass(frozen=True)
class Variable(_Infix):
    name: str


@dataclass(frozen=True)
class Not(_Infix):
    child: "Node"


@dataclass(frozen=True)
class And(_Infix):
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Or(_Infix):
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Xor(_Infix):
    left: "Node"
    right: "Node"


Node = Union[Constant, Variable, Not, And, Or, Xor]

BINARY_NODES = {
    AND: (And, InvalidAndOperandsError),
    XOR: (Xor, InvalidXorOperandsError),
    OR: (Or, InvalidOrOperandsError),
}

OPERATOR_TOKENS = {Not: NOT, And: AND, Xor: XOR, Or: OR}

BINARY_OPS = {
    AND: operator.and_,
    XOR: operator.xor,
    OR: operator.or_,
}

# Binding strength, used only to decide where parentheses are needed
_BINDING = {OR: 1, XOR: 2, AND: 3}
_ATOM = 4


def build_tree(postfix: list[str]) -> Node:
    """
    Build an expression tree from postfix tokens.

    Raises:
        InvalidNotOperandError: NOT with an empty operand stack
        InvalidAndOperandsError, InvalidXorOperandsError, InvalidOrOperandsError:
            binary operator with fewer than two operands
        InvalidTokenError: unrecognized token
        InvalidExpressionError: zero or more than one node left at the end
    """
    stack: list[Node] = []

    for token in postfix:
        if token in VARIABLES:
            stack.append(Variable(token))
        elif token in CONSTANTS:
            stack.append(Constant(int(token)))
        elif token == NOT:
            if not stack:
                raise InvalidNotOperandError()
            stack.append(Not(stack.pop()))
        elif token in BINARY_NODES:
            node_type, error = BINARY_NODES[token]
            if len(stack) < 2:
                raise error()
            left = stack.pop()
            right = stack.pop()
            stack.append(node_type(left, right))
        else:
            raise InvalidTokenError(token)

    if not stack:
        raise InvalidExpressionError("Empty expression")
    if len(stack) > 1:
        raise InvalidExpressionError(
            f"Invalid logic: {len(stack)} operands left without an operator"
        )

    return stack[0]


def compile_tree(node: Node) -> list[str]:
    """
    Flatten a tree into postfix instructions (left, right, operator).

    The result uses the same tokens as the parser and is a flat list, so it
    can be shipped to worker processes regardless of the tree depth.
    """
    program = []
    stack = [(node, False)]

    while stack:
        current, expanded = stack.pop()
        if isinstance(current, Constant):
            program.append(str(current.bit))
        elif isinstance(current, Variable):
            program.append(current.name)
        elif expanded:
            program.append(OPERATOR_TOKENS[type(current)])
        elif isinstance(current, Not):
            stack.append((current, True))
            stack.append((current.child, False))
        elif isinstance(current, (And, Or, Xor)):
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))
        else:
            raise TypeError(f"Unknown node type: {type(current).__name__}")

    return program


def run_program(program: list[str], assignment: dict[str, int] = None) -> int:
    """Evaluate compiled postfix instructions with a value stack."""
    values = []

    for token in program:
        if token in VARIABLES:
            values.append(assignment[token])
        elif token in CONSTANTS:
            values.append(int(token))
        elif token == NOT:
            values[-1] ^= 1
        else:
            b = values.pop()
            a = values.pop()
            values.append(BINARY_OPS[token](a, b))

    return values[-1]


def evaluate(node: Node, assignment: dict[str, int] = None) -> int:
    """Evaluate a tree under an explicit variable assignment."""
    return run_program(compile_tree(node), assignment)


def variables_in(node: Node) -> set[str]:
    """Collect the variable names reachable from a node."""
    return {token for token in compile_tree(node) if token in VARIABLES}


def to_infix(node: Node) -> str:
    """Render a tree in surface syntax with the fewest parentheses needed."""
    stack: list[tuple[str, int]] = []

    for token in compile_tree(node):
        if token == NOT:
            text, binding = stack.pop()
            if binding < _ATOM:
                text = f"({text})"
            stack.append((f"{text}'", _ATOM))
        elif token in _BINDING:
            right, right_binding = stack.pop()
            left, left_binding = stack.pop()
            binding = _BINDING[token]
            if left_binding < binding:
                left = f"({left})"
            if right_binding < binding:
                right = f"({right})"
            joiner = "" if token == AND else token
            stack.append((f"{left}{joiner}{right}", binding))
        else:
            stack.append((token, _ATOM))

    return stack[-1][0]


@dataclass
class ParsedExpression:
    """Front half of the pipeline: variables, postfix tokens and tree."""

    source: str
    variables: list[str]
    postfix: list[str]
    tree: Node


def parse(expression: str) -> ParsedExpression:
    """Validate, tokenize and build the expression tree in one call."""
    variables = validate(expression)
    postfix = to_postfix(insert_implicit_and(expression))
    tree = build_tree(postfix)

    return ParsedExpression(
        source=expression,
        variables=variables,
        postfix=postfix,
        tree=tree,
    )
