"""
Pure Python implementation of the Quine-McCluskey algorithm.

Prime implicants are found by repeatedly merging adjacent cubes; a cover is
then picked either greedily (most constrained minterm first) or exactly with
MaxSAT.
"""

from dataclasses import dataclass, field
from typing import Optional

from pysat.examples.rc2 import RC2
from pysat.formula import WCNF


@dataclass(frozen=False)
class Implicant:
    """
    A product term (cube) with the minterms it covers.

    An implicant is represented by its mask and value:
    - mask: which bit positions matter (1 = matters, 0 = don't care)
    - value: the required bit values for positions that matter

    Bit n_vars-1 is the first variable (MSB), bit 0 the last one. For three
    variables A, B, C the pattern "1-0" is mask=0b101, value=0b100.
    """

    mask: int       # Which bits matter (1 = matters)
    value: int      # Required values for bits that matter
    n_vars: int = field(compare=False)
    covered_minterms: set[int] = field(default_factory=set, compare=False)

    @classmethod
    def from_minterm(cls, minterm: int, n_vars: int) -> "Implicant":
        return cls(
            mask=(1 << n_vars) - 1,
            value=minterm,
            n_vars=n_vars,
            covered_minterms={minterm},
        )

    @classmethod
    def from_pattern(cls, pattern: str) -> "Implicant":
        """Build from a {0,1,-} string, e.g. "1-0"."""
        mask = value = 0
        for char in pattern:
            mask <<= 1
            value <<= 1
            if char != '-':
                mask |= 1
                value |= int(char)
        return cls(mask=mask, value=value, n_vars=len(pattern))

    @property
    def num_literals(self) -> int:
        """Count the number of literals (gate inputs) in this implicant."""
        return bin(self.mask).count('1')

    @property
    def num_ones(self) -> int:
        """Number of fixed 1 bits, used for grouping."""
        return bin(self.value & self.mask).count('1')

    @property
    def pattern(self) -> str:
        """Cube as a {0,1,-} string, MSB first."""
        chars = []
        for i in range(self.n_vars):
            bit = 1 << (self.n_vars - 1 - i)
            if not self.mask & bit:
                chars.append('-')
            else:
                chars.append('1' if self.value & bit else '0')
        return "".join(chars)

    def covers(self, minterm: int) -> bool:
        """Check if this implicant covers a given minterm."""
        return (minterm & self.mask) == (self.value & self.mask)

    def expand(self) -> list[int]:
        """All minterm indices consistent with the fixed bits."""
        free = [b for b in range(self.n_vars) if not self.mask & (1 << b)]
        minterms = []
        for combo in range(1 << len(free)):
            m = self.value & self.mask
            for i, b in enumerate(free):
                if (combo >> i) & 1:
                    m |= 1 << b
            minterms.append(m)
        return sorted(minterms)

    def to_expr_str(self, var_names: list[str] = None) -> str:
        """Convert to a product term: 0 -> X', 1 -> X, - -> omitted."""
        if var_names is None:
            var_names = [chr(ord('A') + i) for i in range(self.n_vars)]

        literals = []
        for i, char in enumerate(self.pattern):
            if char == '1':
                literals.append(var_names[i])
            elif char == '0':
                literals.append(f"{var_names[i]}'")

        return "".join(literals) if literals else "1"

    def __hash__(self):
        return hash((self.mask, self.value))

    def __eq__(self, other):
        if not isinstance(other, Implicant):
            return False
        return self.mask == other.mask and self.value == other.value

    def __repr__(self):
        return f"Implicant({self.pattern})"


def try_merge(impl1: Implicant, impl2: Implicant) -> Optional[Implicant]:
    """
    Try to merge two implicants differing in exactly one variable.

    Two implicants can merge if:
    1. They have the same mask (don't-cares in the same positions)
    2. They differ in exactly one bit position (within the mask)

    Returns new implicant with one less literal and the union of both
    coverage sets, or None if they can't merge.
    """
    if impl1.mask != impl2.mask:
        return None

    diff = (impl1.value ^ impl2.value) & impl1.mask

    if bin(diff).count('1') != 1:
        return None

    new_mask = impl1.mask & ~diff
    new_value = impl1.value & new_mask

    return Implicant(
        mask=new_mask,
        value=new_value,
        n_vars=impl1.n_vars,
        covered_minterms=impl1.covered_minterms | impl2.covered_minterms,
    )


def quine_mccluskey(minterms, n_vars: int) -> list[Implicant]:
    """
    Run the Quine-McCluskey merge phase to find all prime implicants.

    Each round groups the current implicants by their number of 1 bits and
    tries every pair from adjacent groups. Merged operands are consumed;
    untouched implicants carry over after the newly created ones. The loop
    stops after a round with no merge.

    Args:
        minterms: Minterms where the function is 1
        n_vars: Number of input variables

    Returns:
        Prime implicants, each with its accumulated coverage set
    """
    current = [Implicant.from_minterm(m, n_vars) for m in sorted(set(minterms))]
    known = {(impl.mask, impl.value) for impl in current}

    while True:
        groups: dict[int, list[Implicant]] = {}
        for impl in current:
            groups.setdefault(impl.num_ones, []).append(impl)

        next_gen = []
        used = set()

        for ones in range(1, max(groups, default=0) + 1):
            for impl1 in groups.get(ones, []):
                for impl2 in groups.get(ones - 1, []):
                    merged = try_merge(impl1, impl2)
                    if merged is None:
                        continue
                    key = (merged.mask, merged.value)
                    if key not in known:
                        known.add(key)
                        next_gen.append(merged)
                    used.add((impl1.mask, impl1.value))
                    used.add((impl2.mask, impl2.value))

        if not used:
            return current

        for impl in current:
            if (impl.mask, impl.value) not in used:
                next_gen.append(impl)

        current = next_gen


def greedy_cover(primes: list[Implicant], minterms) -> list[Implicant]:
    """
    Greedy set cover over the prime implicants.

    Repeatedly takes the uncovered minterm with the fewest covering primes
    (ties: lowest minterm), then the prime covering it with the most
    uncovered minterms (ties: earliest prime), until every minterm is covered.
    This is a heuristic and does not guarantee a minimum cover.

    Returns:
        Selected implicants in selection order
    """
    uncovered = set(minterms)
    remaining = [set(impl.covered_minterms) & uncovered for impl in primes]
    selected = []

    while uncovered:
        coverers = {
            m: [i for i, cov in enumerate(remaining) if m in cov]
            for m in uncovered
        }

        target = min(uncovered, key=lambda m: (len(coverers[m]), m))
        if not coverers[target]:
            raise RuntimeError(f"Cannot cover minterm {target}")

        best = min(coverers[target], key=lambda i: (-len(remaining[i]), i))
        covered = remaining[best]

        selected.append(primes[best])
        uncovered -= covered
        for i, cov in enumerate(remaining):
            if i != best:
                cov -= covered
        remaining[best] = set()

    return selected


def implicant_cost(impl: Implicant) -> int:
    """
    Gate input cost of one product term.

    AND inputs only for multi-literal terms (single literals are wires),
    plus one OR input for the term itself.
    """
    and_cost = impl.num_literals if impl.num_literals >= 2 else 0
    return and_cost + 1


def maxsat_cover(primes: list[Implicant], minterms) -> list[Implicant]:
    """
    Minimum-cost cover using MaxSAT.

    Formulates the covering problem as weighted MaxSAT where:
    - Hard clauses: every minterm must be covered by a selected implicant
    - Soft clauses: penalize each implicant by its gate input cost
    """
    wcnf = WCNF()

    # Variable mapping: implicant index -> SAT variable (1-indexed)
    impl_vars = {i: i + 1 for i in range(len(primes))}

    for minterm in sorted(set(minterms)):
        covering = [
            impl_vars[i]
            for i, impl in enumerate(primes)
            if minterm in impl.covered_minterms
        ]
        if not covering:
            raise RuntimeError(f"No implicant covers minterm {minterm}")
        wcnf.append(covering)  # Hard: at least one must be selected

    for i, impl in enumerate(primes):
        wcnf.append([-impl_vars[i]], weight=implicant_cost(impl))

    with RC2(wcnf) as solver:
        model = solver.compute()
        if model is None:
            raise RuntimeError("MaxSAT solver found no solution")
        chosen = set(lit for lit in model if lit > 0)

    return [impl for i, impl in enumerate(primes) if impl_vars[i] in chosen]


def print_prime_implicants(primes: list[Implicant], var_names: list[str] = None):
    """Debug helper to print all prime implicants."""
    print(f"Prime implicants ({len(primes)}):")
    for p in primes:
        covered = ", ".join(str(m) for m in sorted(p.covered_minterms))
        print(f"  {p.pattern:8} {p.to_expr_str(var_names):12} ({p.num_literals} lit) -> m({covered})")
