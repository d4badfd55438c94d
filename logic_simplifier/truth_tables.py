"""
Truth table enumeration for parsed Boolean expressions.

Input variables are ordered alphabetically; the first variable is the MSB of
the row index:

    A B C | Y
    0 0 0 | .    row 0
    0 0 1 | .    row 1
    ...
    1 1 1 | .    row 7
"""

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from .expression import Node, compile_tree, evaluate, run_program


@dataclass
class TruthTable:
    """Complete truth table of an expression."""

    variables: list[str]
    rows: list[tuple[tuple[int, ...], int]] = field(default_factory=list)
    minterms: tuple[int, ...] = ()
    constant: Optional[int] = None  # Set only when there are no variables

    @property
    def is_constant(self) -> bool:
        return self.constant is not None


def minterm_to_bits(minterm: int, n_vars: int) -> tuple[int, ...]:
    """Convert a minterm index to its bits, MSB first."""
    return tuple((minterm >> (n_vars - 1 - k)) & 1 for k in range(n_vars))


def bits_to_minterm(bits) -> int:
    """Convert bits (MSB first) to a minterm index."""
    minterm = 0
    for bit in bits:
        minterm = (minterm << 1) | bit
    return minterm


def assignment_for(minterm: int, variables: list[str]) -> dict[str, int]:
    """Map each variable to its bit in the given row."""
    return dict(zip(variables, minterm_to_bits(minterm, len(variables))))


def _evaluate_range(program: list[str], variables: list[str], start: int, stop: int) -> list[int]:
    """Minterms in [start, stop). Run in a separate process when parallel."""
    return [
        i for i in range(start, stop)
        if run_program(program, assignment_for(i, variables))
    ]


def _chunks(total: int, workers: int) -> list[tuple[int, int]]:
    """Split [0, total) into at most `workers` contiguous ranges."""
    size = -(-total // workers)
    return [(start, min(start + size, total)) for start in range(0, total, size)]


def enumerate_minterms(tree: Node, variables: list[str], workers: int = 1) -> tuple[int, ...]:
    """
    Evaluate the tree on every assignment and collect the 1-rows.

    Args:
        tree: Expression tree
        variables: Ordered variable set (index 0 = MSB)
        workers: Number of worker processes (1 = evaluate in-process)

    Returns:
        Strictly ascending tuple of minterm indices. With no variables the tree
        is evaluated once and the result is (0,) if it is 1, else ().
    """
    if not variables:
        return (0,) if evaluate(tree, {}) else ()

    total = 1 << len(variables)
    program = compile_tree(tree)

    if workers <= 1 or total < workers:
        return tuple(_evaluate_range(program, variables, 0, total))

    ranges = _chunks(total, workers)
    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_evaluate_range, program, variables, start, stop)
            for start, stop in ranges
        ]
        # Ranges are disjoint and ascending, so concatenating in order keeps the sort
        minterms = []
        for future in futures:
            minterms.extend(future.result())

    return tuple(minterms)


def build_truth_table(tree: Node, variables: list[str], workers: int = 1) -> TruthTable:
    """Build the full truth table (rows + minterms) for an expression."""
    if not variables:
        return TruthTable(variables=[], constant=evaluate(tree, {}))

    minterms = enumerate_minterms(tree, variables, workers)
    on_set = set(minterms)
    n_vars = len(variables)

    rows = [
        (minterm_to_bits(i, n_vars), 1 if i in on_set else 0)
        for i in range(1 << n_vars)
    ]

    return TruthTable(variables=list(variables), rows=rows, minterms=minterms)
