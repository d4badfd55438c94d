"""
Export simplification results to text, Verilog and C.
"""

from .quine_mccluskey import Implicant
from .solver import SimplificationResult
from .truth_tables import TruthTable


def format_truth_table(table: TruthTable) -> str:
    """
    Render a truth table as text.

        A B | Y
        0 0 | 0
        0 1 | 1
    """
    if table.is_constant:
        return f"Constant expression:\nY = {table.constant}"

    lines = [" ".join(table.variables) + " | Y"]
    for bits, y in table.rows:
        lines.append(" ".join(str(b) for b in bits) + f" | {y}")

    return "\n".join(lines)


def format_minterms(minterms) -> str:
    """Render the on-set as Y = m(1, 2, ...)."""
    return f"Y = m({', '.join(str(m) for m in minterms)})"


def to_equations(result: SimplificationResult) -> str:
    """
    Export the simplified expression as a single equation.

    Product terms are sorted lexicographically by their literal string and
    joined with '+'.
    """
    return f"Y = {result.expression}"


def to_text(result: SimplificationResult) -> str:
    """Truth table, minterm list and simplified expression."""
    if result.is_constant_expression:
        return format_truth_table(result.truth_table)

    lines = [
        format_truth_table(result.truth_table),
        "",
        format_minterms(result.minterms),
        "",
        to_equations(result),
    ]
    return "\n".join(lines)


def impl_to_verilog(impl: Implicant, var_names: list[str]) -> str:
    """Convert an implicant to a Verilog expression."""
    terms = []

    for i, char in enumerate(impl.pattern):
        if char == '1':
            terms.append(var_names[i])
        elif char == '0':
            terms.append(f"~{var_names[i]}")

    if not terms:
        return "1'b1"
    elif len(terms) == 1:
        return terms[0]
    else:
        return "(" + " & ".join(terms) + ")"


def _sorted_selection(result: SimplificationResult) -> list[Implicant]:
    """Selected implicants in the same order as the rendered terms."""
    return sorted(result.selected, key=lambda impl: impl.to_expr_str(result.variables))


def to_verilog(result: SimplificationResult, module_name: str = "logic_fn") -> str:
    """
    Export simplification result to Verilog.

    Args:
        result: The simplification result
        module_name: Name for the Verilog module

    Returns:
        Verilog source code as string
    """
    variables = result.variables
    n = len(variables)

    lines = []
    lines.append(f"// Y = {result.expression}")
    lines.append(f"// Simplified with {result.cost.total} gate inputs using {result.method}")
    lines.append("")

    if n:
        lines.append(f"module {module_name} (")
        lines.append(f"    input  wire [{n - 1}:0] in,  // {' '.join(variables)} (MSB first)")
        lines.append("    output wire y")
        lines.append(");")
        lines.append("")
        lines.append("    // Input aliases")
        for i, var in enumerate(variables):
            lines.append(f"    wire {var} = in[{n - 1 - i}];")
        lines.append("")
    else:
        lines.append(f"module {module_name} (")
        lines.append("    output wire y")
        lines.append(");")
        lines.append("")

    if result.constant is not None:
        expr = f"1'b{result.constant}"
    else:
        expr = " | ".join(
            impl_to_verilog(impl, variables) for impl in _sorted_selection(result)
        )

    lines.append(f"    assign y = {expr};")
    lines.append("")
    lines.append("endmodule")

    return "\n".join(lines)


def impl_to_c(impl: Implicant, var_names: list[str]) -> str:
    """Convert an implicant to a C expression."""
    terms = []

    for i, char in enumerate(impl.pattern):
        if char == '1':
            terms.append(var_names[i])
        elif char == '0':
            terms.append(f"n{var_names[i]}")

    if not terms:
        return "1"
    elif len(terms) == 1:
        return terms[0]
    else:
        return "(" + " & ".join(terms) + ")"


def to_c_code(result: SimplificationResult, func_name: str = "logic_fn") -> str:
    """
    Export simplification result as C code.

    Args:
        result: The simplification result
        func_name: Name for the C function

    Returns:
        C source code as string
    """
    variables = result.variables
    n = len(variables)

    lines = []
    lines.append("/*")
    lines.append(f" * Y = {result.expression}")
    lines.append(f" * Simplified with {result.cost.total} gate inputs using {result.method}")
    lines.append(" */")
    lines.append("")
    lines.append("#include <stdint.h>")
    lines.append("")
    lines.append(f"uint8_t {func_name}(uint32_t in) {{")

    if result.constant is not None:
        lines.append("    (void)in;")
        lines.append(f"    return {result.constant};")
        lines.append("}")
        return "\n".join(lines)

    lines.append("    // Extract individual bits")
    for i, var in enumerate(variables):
        lines.append(f"    uint8_t {var} = (in >> {n - 1 - i}) & 1;")
    lines.append("    uint8_t " + ", ".join(f"n{var} = !{var}" for var in variables) + ";")
    lines.append("")

    expr = " | ".join(impl_to_c(impl, variables) for impl in _sorted_selection(result))
    lines.append(f"    return {expr};")
    lines.append("}")

    return "\n".join(lines)
