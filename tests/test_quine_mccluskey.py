import pytest

from logic_simplifier.quine_mccluskey import (
    Implicant,
    greedy_cover,
    maxsat_cover,
    quine_mccluskey,
    try_merge,
)

CYCLIC = [0, 1, 2, 5, 6, 7]


def test_implicant_from_pattern():
    impl = Implicant.from_pattern("1-0")
    assert impl.mask == 0b101
    assert impl.value == 0b100
    assert impl.pattern == "1-0"
    assert impl.num_literals == 2
    assert impl.expand() == [4, 6]
    assert impl.to_expr_str(["A", "B", "C"]) == "AC'"


def test_implicant_requires_width():
    with pytest.raises(TypeError):
        Implicant(mask=0b11, value=0b01)


def test_implicant_covers():
    impl = Implicant.from_pattern("-1")
    assert impl.covers(1)
    assert impl.covers(3)
    assert not impl.covers(2)


def test_all_dont_care_renders_as_one():
    assert Implicant.from_pattern("--").to_expr_str() == "1"


def test_try_merge_adjacent():
    merged = try_merge(Implicant.from_minterm(4, 3), Implicant.from_minterm(6, 3))
    assert merged.pattern == "1-0"
    assert merged.covered_minterms == {4, 6}


def test_try_merge_rejects_two_bit_difference():
    assert try_merge(Implicant.from_minterm(0, 2), Implicant.from_minterm(3, 2)) is None


def test_try_merge_rejects_different_dont_cares():
    a = Implicant.from_pattern("1-0")
    b = Implicant.from_pattern("11-")
    assert try_merge(a, b) is None


def test_non_adjacent_minterms_are_already_prime():
    primes = quine_mccluskey([1, 2], 2)
    assert [p.pattern for p in primes] == ["01", "10"]


def test_no_minterms_no_primes():
    assert quine_mccluskey([], 3) == []


def test_cyclic_prime_implicants():
    primes = quine_mccluskey(CYCLIC, 3)
    assert [p.pattern for p in primes] == ["00-", "0-0", "-01", "-10", "1-1", "11-"]


def test_merges_down_to_single_literal():
    primes = quine_mccluskey([4, 5, 6, 7], 3)
    assert [p.pattern for p in primes] == ["1--"]
    assert primes[0].covered_minterms == {4, 5, 6, 7}


def test_coverage_sets_match_cubes():
    minterms = [0, 2, 3, 5, 7, 8, 10, 11, 13, 15]
    for prime in quine_mccluskey(minterms, 4):
        assert sorted(prime.covered_minterms) == prime.expand()
        assert prime.covered_minterms <= set(minterms)


def test_greedy_cover_tie_breaks():
    primes = quine_mccluskey(CYCLIC, 3)
    selected = greedy_cover(primes, CYCLIC)
    assert [p.pattern for p in selected] == ["00-", "-10", "1-1"]


def test_greedy_cover_takes_most_constrained_minterm_first():
    # AB + A'C + BC: the consensus term BC is redundant
    minterms = [1, 3, 6, 7]
    primes = quine_mccluskey(minterms, 3)
    assert [p.pattern for p in primes] == ["0-1", "-11", "11-"]
    selected = greedy_cover(primes, minterms)
    assert [p.pattern for p in selected] == ["0-1", "11-"]


def test_greedy_cover_is_total():
    minterms = [0, 2, 3, 5, 7, 8, 10, 11, 13, 15]
    selected = greedy_cover(quine_mccluskey(minterms, 4), minterms)
    covered = set()
    for impl in selected:
        covered |= impl.covered_minterms
    assert covered == set(minterms)


def test_greedy_cover_empty():
    assert greedy_cover([], []) == []


def test_greedy_cover_uncoverable():
    with pytest.raises(RuntimeError):
        greedy_cover([Implicant.from_minterm(0, 2)], [0, 3])


def test_maxsat_cover_is_minimum():
    primes = quine_mccluskey(CYCLIC, 3)
    selected = maxsat_cover(primes, CYCLIC)
    assert len(selected) == 3
    covered = set()
    for impl in selected:
        covered |= impl.covered_minterms
    assert covered == set(CYCLIC)


def test_maxsat_cover_drops_consensus_term():
    minterms = [1, 3, 6, 7]
    selected = maxsat_cover(quine_mccluskey(minterms, 3), minterms)
    assert [p.pattern for p in selected] == ["0-1", "11-"]


def test_maxsat_cover_uncoverable():
    with pytest.raises(RuntimeError):
        maxsat_cover([Implicant.from_minterm(0, 2)], [0, 3])
