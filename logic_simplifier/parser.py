"""
Tokenizer and postfix converter for Boolean expressions.

Surface syntax:
- Variables are single uppercase letters A-Z
- 0 and 1 are constants
- ' is a postfix NOT, + is OR, ^ is XOR
- Juxtaposition is AND (AB means A AND B)

Operator priority: NOT > AND > XOR > OR
"""

from string import ascii_uppercase

from .errors import InvalidCharacterError, InvalidExpressionError

NOT = "'"
AND = "*"
XOR = "^"
OR = "+"
LPAREN = "("
RPAREN = ")"

VARIABLES = frozenset(ascii_uppercase)
CONSTANTS = frozenset("01")
ALPHABET = VARIABLES | CONSTANTS | frozenset("()+'^")

# Stack admission priority used by the postfix conversion
PRIORITY = {
    LPAREN: 1,
    OR: 2,
    XOR: 3,
    AND: 4,
    NOT: 5,
    RPAREN: 6,
}


def is_operand(token: str) -> bool:
    """True for variables and constants."""
    return token in VARIABLES or token in CONSTANTS


def validate(expression: str) -> list[str]:
    """
    Check the character set and collect the variables used.

    Returns:
        Sorted list of distinct variable symbols (index 0 = MSB)

    Raises:
        InvalidCharacterError: on the first character outside the alphabet
        InvalidExpressionError: if the expression is empty
    """
    if not expression:
        raise InvalidExpressionError("Empty expression")

    variables = set()
    for position, char in enumerate(expression):
        if char not in ALPHABET:
            raise InvalidCharacterError(char, position)
        if char in VARIABLES:
            variables.add(char)

    return sorted(variables)


def insert_implicit_and(expression: str) -> str:
    """Make juxtaposition explicit: A'B(C+D) -> A'*B*(C+D)."""
    if not expression:
        return expression

    out = [expression[0]]
    for prev, char in zip(expression, expression[1:]):
        if (is_operand(char) or char == LPAREN) and prev not in (LPAREN, OR, XOR):
            out.append(AND)
        out.append(char)

    return "".join(out)


def collapse_not_runs(tokens: list[str]) -> list[str]:
    """Fold each contiguous run of NOT tokens by parity (A'' -> A, A''' -> A')."""
    out = []
    run = 0

    for token in tokens:
        if token == NOT:
            run += 1
            continue
        if run % 2:
            out.append(NOT)
        run = 0
        out.append(token)

    if run % 2:
        out.append(NOT)

    return out


def to_postfix(expression: str) -> list[str]:
    """
    Convert an explicit-AND expression to postfix tokens.

    Operands are emitted immediately. An operator is pushed when the stack is
    empty, when it opens a group, or when the stack top has a strictly lower
    priority; otherwise higher-priority operators are popped first.

    Raises:
        InvalidExpressionError: on unbalanced parentheses
    """
    output = []
    stack = []

    for char in expression:
        if is_operand(char):
            output.append(char)
        elif char == RPAREN:
            while stack and stack[-1] != LPAREN:
                output.append(stack.pop())
            if not stack:
                raise InvalidExpressionError("Unmatched ')'")
            stack.pop()
        elif not stack or char == LPAREN:
            stack.append(char)
        elif PRIORITY[stack[-1]] < PRIORITY[char]:
            stack.append(char)
        else:
            while stack and PRIORITY[stack[-1]] > PRIORITY[char]:
                output.append(stack.pop())
            stack.append(char)

    while stack:
        op = stack.pop()
        if op == LPAREN:
            raise InvalidExpressionError("Unmatched '('")
        output.append(op)

    return collapse_not_runs(output)

