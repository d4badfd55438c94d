import pytest

from logic_simplifier.errors import (
    InvalidAndOperandsError,
    InvalidCharacterError,
    InvalidExpressionError,
    InvalidNotOperandError,
    InvalidOperandCountError,
    InvalidOrOperandsError,
    InvalidTokenError,
    InvalidXorOperandsError,
)
from logic_simplifier.expression import (
    And,
    Constant,
    Not,
    Or,
    Variable,
    Xor,
    build_tree,
    compile_tree,
    evaluate,
    parse,
    run_program,
    variables_in,
)


def test_build_tree_leaves_and_operators():
    assert build_tree(["A"]) == Variable("A")
    assert build_tree(["1"]) == Constant(1)
    assert build_tree(list("A'")) == Not(Variable("A"))
    assert build_tree(list("AB*")) == And(Variable("B"), Variable("A"))
    assert build_tree(list("AB+")) == Or(Variable("B"), Variable("A"))
    assert build_tree(list("AB^")) == Xor(Variable("B"), Variable("A"))


@pytest.mark.parametrize("tokens, error", [
    (["'"], InvalidNotOperandError),
    (["A", "*"], InvalidAndOperandsError),
    (["A", "^"], InvalidXorOperandsError),
    (["A", "+"], InvalidOrOperandsError),
    (["*"], InvalidAndOperandsError),
])
def test_build_tree_operand_count_errors(tokens, error):
    with pytest.raises(error):
        build_tree(tokens)


def test_operand_errors_share_a_base_class():
    with pytest.raises(InvalidOperandCountError):
        build_tree(["+"])


def test_build_tree_invalid_token():
    with pytest.raises(InvalidTokenError):
        build_tree(["A", "("])


def test_build_tree_dangling_operands():
    with pytest.raises(InvalidExpressionError):
        build_tree(["A", "B"])


def test_build_tree_empty():
    with pytest.raises(InvalidExpressionError):
        build_tree([])


@pytest.mark.parametrize("expr, error", [
    ("(AB", InvalidExpressionError),
    ("AB)", InvalidExpressionError),
    ("()", InvalidExpressionError),
    ("A+", InvalidOrOperandsError),
    ("A^", InvalidXorOperandsError),
    ("'A", InvalidNotOperandError),
    ("a", InvalidCharacterError),
])
def test_parse_errors(expr, error):
    with pytest.raises(error):
        parse(expr)


def test_parse_returns_variables_and_postfix():
    parsed = parse("AB'+A'B")
    assert parsed.variables == ["A", "B"]
    assert parsed.postfix == list("AB'*A'B*+")
    assert parse("10'").variables == []


def test_evaluate_xor_form():
    tree = parse("AB'+A'B").tree
    assert evaluate(tree, {"A": 0, "B": 0}) == 0
    assert evaluate(tree, {"A": 0, "B": 1}) == 1
    assert evaluate(tree, {"A": 1, "B": 0}) == 1
    assert evaluate(tree, {"A": 1, "B": 1}) == 0


def test_and_binds_tighter_than_or():
    tree = parse("A+BC").tree
    assert evaluate(tree, {"A": 0, "B": 1, "C": 0}) == 0
    assert evaluate(tree, {"A": 1, "B": 0, "C": 0}) == 1


def test_and_binds_tighter_than_xor():
    # (AB)^C, not A(B^C)
    tree = parse("AB^C").tree
    assert evaluate(tree, {"A": 0, "B": 0, "C": 1}) == 1


def test_xor_binds_tighter_than_or():
    # (A^B)+C, not A^(B+C)
    tree = parse("A^B+C").tree
    assert evaluate(tree, {"A": 1, "B": 1, "C": 1}) == 1


def test_not_applies_to_groups():
    tree = parse("(A+B)'").tree
    assert evaluate(tree, {"A": 0, "B": 0}) == 1
    assert evaluate(tree, {"A": 1, "B": 0}) == 0


def test_constants_evaluate_without_assignment():
    assert evaluate(parse("1").tree) == 1
    assert evaluate(parse("1'").tree) == 0
    assert evaluate(parse("1^1").tree) == 0
    assert evaluate(parse("0+1").tree) == 1


def test_str_reparses_to_same_function():
    for expr in ["(A+B)'C", "AB^C", "(A^B)(C+D)'", "A''+B'''"]:
        parsed = parse(expr)
        reparsed = parse(str(parsed.tree))
        for row in range(1 << len(parsed.variables)):
            assignment = {
                v: (row >> (len(parsed.variables) - 1 - k)) & 1
                for k, v in enumerate(parsed.variables)
            }
            assert evaluate(parsed.tree, assignment) == evaluate(reparsed.tree, assignment)


def test_variables_in():
    assert variables_in(parse("(A+C)'B^1").tree) == {"A", "B", "C"}


def test_compile_tree_emits_left_right_operator():
    tree = parse("AB'+C").tree
    program = compile_tree(tree)
    assert program == ["C", "B", "'", "A", "*", "+"]
    for a in (0, 1):
        for b in (0, 1):
            assignment = {"A": a, "B": b, "C": 0}
            assert run_program(program, assignment) == evaluate(tree, assignment)


def test_long_and_chain():
    expr = "A" * 1200
    tree = parse(expr).tree
    assert evaluate(tree, {"A": 1}) == 1
    assert evaluate(tree, {"A": 0}) == 0
    assert variables_in(tree) == {"A"}
    assert str(tree) == expr


def test_long_xor_chain():
    expr = "^".join(["A"] * 1201)
    tree = parse(expr).tree
    assert evaluate(tree, {"A": 1}) == 1
    assert evaluate(tree, {"A": 0}) == 0
    assert str(tree) == expr
