"""Boolean expression simplification with Quine-McCluskey prime implicants."""

from .errors import (
    ExpressionError,
    InvalidAndOperandsError,
    InvalidCharacterError,
    InvalidExpressionError,
    InvalidNotOperandError,
    InvalidOperandCountError,
    InvalidOrOperandsError,
    InvalidTokenError,
    InvalidXorOperandsError,
)
from .parser import validate, insert_implicit_and, to_postfix, collapse_not_runs
from .expression import build_tree, evaluate, parse, ParsedExpression
from .truth_tables import TruthTable, build_truth_table, enumerate_minterms
from .quine_mccluskey import Implicant, quine_mccluskey, greedy_cover, maxsat_cover
from .solver import BooleanSimplifier, SimplificationResult, CostBreakdown, simplify
from .export import to_text, to_equations, to_verilog, to_c_code
from .verify import verify_result, verify_round_trip, check_equivalence

__all__ = [
    "ExpressionError",
    "InvalidCharacterError",
    "InvalidExpressionError",
    "InvalidOperandCountError",
    "InvalidNotOperandError",
    "InvalidAndOperandsError",
    "InvalidXorOperandsError",
    "InvalidOrOperandsError",
    "InvalidTokenError",
    "validate",
    "insert_implicit_and",
    "to_postfix",
    "collapse_not_runs",
    "build_tree",
    "evaluate",
    "parse",
    "ParsedExpression",
    "TruthTable",
    "build_truth_table",
    "enumerate_minterms",
    "Implicant",
    "quine_mccluskey",
    "greedy_cover",
    "maxsat_cover",
    "BooleanSimplifier",
    "SimplificationResult",
    "CostBreakdown",
    "simplify",
    "to_text",
    "to_equations",
    "to_verilog",
    "to_c_code",
    "verify_result",
    "verify_round_trip",
    "check_equivalence",
]
__version__ = "0.1.0"
