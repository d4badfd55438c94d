"""
Verification of simplification results.

Ensures a simplified sum-of-products agrees with the original expression, by
exhaustive comparison and by a SAT-based equivalence check.
"""

from typing import Optional

from pysat.formula import CNF
from pysat.solvers import Solver

from .expression import Node, compile_tree, evaluate, parse
from .parser import AND, CONSTANTS, NOT, OR, VARIABLES, XOR
from .quine_mccluskey import Implicant
from .solver import SimplificationResult
from .truth_tables import assignment_for, enumerate_minterms


def evaluate_sop(implicants: list[Implicant], minterm: int) -> bool:
    """Evaluate a sum-of-products on a specific row (OR of AND terms)."""
    return any(impl.covers(minterm) for impl in implicants)


def verify_result(result: SimplificationResult, tree: Node) -> tuple[bool, list[str]]:
    """
    Verify that a simplification result matches the expression on every row.

    Args:
        result: The simplification result to verify
        tree: Expression tree of the original input

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    errors = []
    variables = result.variables

    if not variables:
        expected = evaluate(tree, {})
        if result.constant != expected:
            errors.append(f"Constant: expected {expected}, got {result.constant}")
        return len(errors) == 0, errors

    for row in range(1 << len(variables)):
        expected = evaluate(tree, assignment_for(row, variables))
        if result.constant is not None:
            actual = result.constant
        else:
            actual = int(evaluate_sop(result.selected, row))

        if actual != expected:
            errors.append(f"Row {row}: expected {expected}, got {actual}")

    if result.constant is None:
        covered = set()
        for impl in result.selected:
            covered |= impl.covered_minterms
        if covered != set(result.minterms):
            missing = sorted(set(result.minterms) - covered)
            errors.append(f"Cover mismatch, uncovered minterms: {missing}")

    return len(errors) == 0, errors


def verify_round_trip(result: SimplificationResult) -> bool:
    """Re-parse the simplified expression and compare its minterms."""
    reparsed = parse(result.expression)
    if not result.variables:
        return evaluate(reparsed.tree, {}) == result.constant
    return enumerate_minterms(reparsed.tree, result.variables) == tuple(result.minterms)


class TseitinEncoder:
    """Encodes expression trees into CNF, one auxiliary variable per gate."""

    def __init__(self):
        self.cnf = CNF()
        self.var_ids: dict[str, int] = {}
        self.next_id = 1

    def new_var(self) -> int:
        v = self.next_id
        self.next_id += 1
        return v

    def variable(self, name: str) -> int:
        if name not in self.var_ids:
            self.var_ids[name] = self.new_var()
        return self.var_ids[name]

    def xor(self, a: int, b: int) -> int:
        v = self.new_var()
        self.cnf.extend([[-v, a, b], [-v, -a, -b], [v, -a, b], [v, a, -b]])
        return v

    def encode(self, node: Node) -> int:
        """Return a literal that is true exactly when the node evaluates to 1."""
        literals = []

        for token in compile_tree(node):
            if token in VARIABLES:
                literals.append(self.variable(token))
            elif token in CONSTANTS:
                v = self.new_var()
                self.cnf.append([v] if token == "1" else [-v])
                literals.append(v)
            elif token == NOT:
                literals.append(-literals.pop())
            else:
                b = literals.pop()
                a = literals.pop()
                literals.append(self.gate(token, a, b))

        return literals[-1]

    def gate(self, token: str, a: int, b: int) -> int:
        if token == XOR:
            return self.xor(a, b)

        v = self.new_var()
        if token == AND:
            self.cnf.extend([[-v, a], [-v, b], [v, -a, -b]])
        elif token == OR:
            self.cnf.extend([[v, -a], [v, -b], [-v, a, b]])
        else:
            raise ValueError(f"Unknown operator: {token}")
        return v


def find_counterexample(tree_a: Node, tree_b: Node) -> Optional[dict[str, int]]:
    """
    Search for an assignment on which two trees disagree.

    Both trees are encoded into one CNF and their outputs are XORed (a miter);
    the miter is satisfiable exactly when the trees differ.

    Returns:
        A distinguishing assignment, or None if the trees are equivalent
    """
    encoder = TseitinEncoder()
    out_a = encoder.encode(tree_a)
    out_b = encoder.encode(tree_b)
    encoder.cnf.append([encoder.xor(out_a, out_b)])

    with Solver(bootstrap_with=encoder.cnf) as solver:
        if not solver.solve():
            return None
        model = set(solver.get_model())

    return {
        name: 1 if var in model else 0
        for name, var in sorted(encoder.var_ids.items())
    }


def check_equivalence(tree_a: Node, tree_b: Node) -> bool:
    """True when both trees compute the same function."""
    return find_counterexample(tree_a, tree_b) is None
