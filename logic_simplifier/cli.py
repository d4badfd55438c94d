"""Command-line interface for Boolean expression simplification."""

import argparse
import sys

from .export import to_c_code, to_equations, to_text, to_verilog
from .expression import parse
from .solver import METHODS, BooleanSimplifier
from .verify import find_counterexample, verify_result


def read_expression(stream) -> str:
    """Read the first whitespace-free token from one line of input."""
    line = stream.readline()
    tokens = line.split()
    return tokens[0] if tokens else ""


def report_verification(result, tree) -> bool:
    """Check a result against the input tree and print the outcome to stderr."""
    ok, errors = verify_result(result, tree)
    counterexample = find_counterexample(tree, parse(result.expression).tree)

    if ok and counterexample is None:
        print("\nVerification PASSED", file=sys.stderr)
        return True

    print("\nVerification FAILED:", file=sys.stderr)
    for err in errors:
        print(f"  {err}", file=sys.stderr)
    if counterexample is not None:
        values = ", ".join(f"{name}={bit}" for name, bit in counterexample.items())
        print(f"  Counterexample: {values}", file=sys.stderr)
    return False


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print the truth table and a simplified sum-of-products of a Boolean expression",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Syntax:
  A-Z variables, 0/1 constants, ' NOT, juxtaposition AND, ^ XOR, + OR
  Priority: NOT > AND > XOR > OR

Examples:
  logic-simplify "AB'+A'B"               Truth table and simplified form
  logic-simplify "(AB'+A'B)'^C" -f verilog
  logic-simplify --method maxsat "AB+A'C+BC"
  echo "A(B+C)" | logic-simplify         Read the expression from stdin
        """,
    )

    parser.add_argument(
        "expression",
        nargs="?",
        help="Expression to simplify (read from stdin if omitted)",
    )
    parser.add_argument(
        "--method", "-m",
        choices=METHODS,
        default="greedy",
        help="Cover selection method (default: greedy)",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "equations", "verilog", "c"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--workers", "-j",
        type=int,
        default=1,
        help="Worker processes for truth table enumeration (default: 1)",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check the result against the input with a SAT solver",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    expression = args.expression
    if expression is None:
        if sys.stdin.isatty():
            print("Input expression: ", end="", flush=True)
        expression = read_expression(sys.stdin)

    # Progress output only makes sense for the text format
    verbose = args.verbose and args.format == "text"

    try:
        simplifier = BooleanSimplifier(expression, workers=args.workers)
        result = simplifier.solve(method=args.method, verbose=verbose)

        if args.format == "verilog":
            print(to_verilog(result))
        elif args.format == "c":
            print(to_c_code(result))
        elif args.format == "equations":
            print(to_equations(result))
        else:
            if verbose:
                print()
            print(to_text(result))

        if args.verify:
            if not report_verification(result, simplifier.parsed.tree):
                return 1

        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
