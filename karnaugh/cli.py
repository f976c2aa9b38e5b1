"""Command-line interface for Karnaugh map minimization."""

import argparse
import logging
import sys

from .kmap_engine import KMap, load_kmap
from .logic import format_expression, reference_expression, variable_symbols, verify_formula

FORMS = {"sop": [True], "pos": [False], "both": [True, False]}


def format_map(kmap: KMap) -> str:
    """Render the map grid with 1/0 per cell and '.' where no row exists."""
    lines = []
    for row in kmap.grid():
        lines.append(" ".join("." if value is None else str(int(value)) for value in row))
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Minimize a truth table with a Karnaugh map",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kmap-solve table.txt                 Print the SOP form
  kmap-solve table.txt --form pos      Print the POS form
  kmap-solve table.txt --form both     Print both forms
  kmap-solve table.txt --verify        Check the result against the table
        """,
    )

    parser.add_argument("path", help="Truth table file (variables line, then rows)")
    parser.add_argument(
        "--form",
        choices=sorted(FORMS),
        default="sop",
        help="Output form (default: sop)",
    )
    parser.add_argument(
        "--map",
        action="store_true",
        help="Print the Karnaugh map grid before the formula",
    )
    parser.add_argument(
        "--groups",
        action="store_true",
        help="Print the surviving groups (start and size)",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Evaluate the formula on every row; exit 1 on mismatch",
    )
    parser.add_argument(
        "--reference",
        action="store_true",
        help="Also print SymPy's minimization of the same table",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    kmap = load_kmap(args.path)
    status = 0

    try:
        if args.map:
            print(format_map(kmap))
            print()

        for v in FORMS[args.form]:
            label = "SOP" if v else "POS"
            if args.groups:
                for group in kmap.get_filtered_groups(v):
                    print(
                        f"{label} group at ({group.start.x}, {group.start.y}) "
                        f"size {group.width}x{group.height}"
                    )
            print(f"{label}: {kmap.get_formula_string(v)}")

            if args.reference:
                expr = reference_expression(kmap, v)
                text = format_expression(expr, variable_symbols(kmap), "dnf" if v else "cnf")
                print(f"{label} (sympy): {text}")

            if args.verify:
                correct, errors = verify_formula(kmap, v)
                if correct:
                    print(f"{label} verification passed")
                else:
                    status = 1
                    print(f"{label} verification FAILED:")
                    for err in errors:
                        print(f"  {err}")

        return status

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
