"""Exception types raised while parsing and building Boolean expressions."""


class ExpressionError(ValueError):
    """Base class for every expression parsing error."""


class InvalidCharacterError(ExpressionError):
    """A character outside the expression alphabet was found."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid character '{char}' at position {position}")


class InvalidExpressionError(ExpressionError):
    """Unbalanced parentheses or leftover/missing operands."""


class InvalidOperandCountError(ExpressionError):
    """An operator found fewer operands than it needs."""

    operator = "?"

    def __init__(self, message: str = None):
        super().__init__(message or f"Invalid {self.operator} logic")


class InvalidNotOperandError(InvalidOperandCountError):
    operator = "NOT"


class InvalidAndOperandsError(InvalidOperandCountError):
    operator = "AND"


class InvalidXorOperandsError(InvalidOperandCountError):
    operator = "XOR"


class InvalidOrOperandsError(InvalidOperandCountError):
    operator = "OR"


class InvalidTokenError(ExpressionError):
    """A postfix token is not a variable, a constant or an operator."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid token '{token}'")
