"""
Boolean expression simplifier.

This module runs the whole pipeline: parse the expression, enumerate its
truth table, generate prime implicants and pick a sum-of-products cover.
"""

from dataclasses import dataclass, field
from typing import Optional

from .expression import ParsedExpression, parse
from .quine_mccluskey import (
    Implicant,
    greedy_cover,
    maxsat_cover,
    print_prime_implicants,
    quine_mccluskey,
)
from .truth_tables import TruthTable, build_truth_table

METHODS = ("greedy", "maxsat")


@dataclass
class CostBreakdown:
    """Size of a sum-of-products result."""

    literals: int   # AND gate inputs (multi-literal terms only)
    terms: int      # Number of product terms

    @property
    def total(self) -> int:
        """Gate inputs: AND inputs of multi-literal terms + one OR input per term."""
        return self.literals + self.terms


@dataclass
class SimplificationResult:
    """Result of simplifying a Boolean expression."""

    source: str
    variables: list[str]
    truth_table: TruthTable
    method: str
    minterms: tuple[int, ...] = ()
    prime_implicants: list[Implicant] = field(default_factory=list)
    selected: list[Implicant] = field(default_factory=list)
    terms: list[str] = field(default_factory=list)
    constant: Optional[int] = None  # Set for constant results (no variables, or Y = 0 / Y = 1)
    cost: CostBreakdown = None

    @property
    def expression(self) -> str:
        """Simplified expression, e.g. "A'B+AB'", "0" or "1"."""
        if self.constant is not None:
            return str(self.constant)
        return "+".join(self.terms)

    @property
    def is_constant_expression(self) -> bool:
        """True when the input had no variables at all."""
        return not self.variables


class BooleanSimplifier:
    """
    Sum-of-products simplifier for a single Boolean expression.

    Uses:
    1. Exhaustive evaluation of the expression tree for the truth table
    2. Quine-McCluskey merging for prime implicants
    3. Greedy (default) or MaxSAT covering to pick the final terms
    """

    def __init__(self, expression: str, workers: int = 1):
        self.parsed: ParsedExpression = parse(expression)
        self.workers = workers
        self.truth_table: Optional[TruthTable] = None
        self.prime_implicants: list[Implicant] = []

    @property
    def variables(self) -> list[str]:
        return self.parsed.variables

    def build_truth_table(self) -> TruthTable:
        self.truth_table = build_truth_table(
            self.parsed.tree, self.variables, self.workers
        )
        return self.truth_table

    def generate_prime_implicants(self) -> list[Implicant]:
        """Generate all prime implicants of the on-set."""
        if self.truth_table is None:
            self.build_truth_table()
        self.prime_implicants = quine_mccluskey(
            self.truth_table.minterms, len(self.variables)
        )
        return self.prime_implicants

    def select_cover(self, method: str = "greedy") -> list[Implicant]:
        if not self.prime_implicants:
            self.generate_prime_implicants()
        minterms = self.truth_table.minterms
        if method == "maxsat":
            return maxsat_cover(self.prime_implicants, minterms)
        return greedy_cover(self.prime_implicants, minterms)

    def _compute_cost(self, selected: list[Implicant]) -> CostBreakdown:
        literals = sum(
            impl.num_literals for impl in selected if impl.num_literals >= 2
        )
        return CostBreakdown(literals=literals, terms=len(selected))

    def solve(self, method: str = "greedy", verbose: bool = False) -> SimplificationResult:
        """
        Run the complete simplification pipeline.

        Args:
            method: "greedy" (most constrained minterm heuristic) or "maxsat"
            verbose: Print phase progress to stdout

        Returns:
            Simplification result
        """
        if method not in METHODS:
            raise ValueError(f"Unknown method: {method!r} (expected one of {', '.join(METHODS)})")

        def log(message):
            if verbose:
                print(message)

        log(f"Phase 1: Truth table over {len(self.variables)} variable(s)...")
        table = self.build_truth_table()

        result = SimplificationResult(
            source=self.parsed.source,
            variables=list(self.variables),
            truth_table=table,
            method=method,
            cost=CostBreakdown(literals=0, terms=0),
        )

        if table.is_constant:
            log(f"  Constant expression: {table.constant}")
            result.constant = table.constant
            return result

        result.minterms = table.minterms
        log(f"  Found {len(table.minterms)} minterm(s)")

        if not table.minterms:
            result.constant = 0
            return result
        if len(table.minterms) == 1 << len(self.variables):
            result.constant = 1
            return result

        log("\nPhase 2: Generating prime implicants...")
        result.prime_implicants = self.generate_prime_implicants()
        if verbose:
            print_prime_implicants(result.prime_implicants, self.variables)

        log(f"\nPhase 3: {method} cover...")
        selected = self.select_cover(method)
        result.selected = selected
        result.terms = sorted(impl.to_expr_str(self.variables) for impl in selected)
        result.cost = self._compute_cost(selected)
        log(f"  Selected {len(selected)} implicants, cost = {result.cost.total}")

        return result


def simplify(expression: str, method: str = "greedy", workers: int = 1) -> SimplificationResult:
    """Simplify an expression in one call."""
    return BooleanSimplifier(expression, workers=workers).solve(method=method)
