"""Interactive derivative calculator."""

from __future__ import annotations

import argparse
import sys
import time
from typing import Iterator, Optional, Sequence, TextIO

from zcalcderiv.catalog import REAL, ROOT, simplify
from zcalcderiv.derivative import derivative_calculator
from zcalcderiv.nodes import Category, Node, Tree
from zcalcderiv.parser import parse, parse_operators
from zcalcderiv.printer import CLEAR_SCREEN, print_subtree


def evaluate(expression: str) -> Node:
    """Parse an expression, work out its derivatives and simplify it.

    The returned node hangs under a root node of a fresh tree that holds
    the expression's variables. Raises ValueError on malformed input.
    """
    placeholder = Node(Category.OBJECT, REAL, value="")
    root = Node(Category.FUNCTION, ROOT, left=placeholder)
    tree = Tree(root=root)
    text = parse_operators(f"({expression})")
    placeholder.replace_with(parse(text, tree))
    derivative_calculator(root)
    return simplify(root.left)


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _run(expression: str) -> bool:
    started = time.process_time()
    try:
        result = evaluate(expression)
    except ValueError as error:
        print(f"[ERROR] {error}", file=sys.stderr)
        return False
    elapsed = time.process_time() - started
    print_subtree(result.parent)
    sys.stdout.write(f"\n\n [TIME] {elapsed:.3f}秒\n\n")
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Evaluate the given expressions, or read them from standard input."""
    arg_parser = argparse.ArgumentParser(
        prog="zcalcderiv",
        description="Symbolic derivatives, e.g. D(x^2,x).",
    )
    arg_parser.add_argument("expressions", nargs="*", help="expressions to evaluate")
    args = arg_parser.parse_args(argv)

    if args.expressions:
        results = [_run(expression) for expression in args.expressions]
        return 0 if all(results) else 1

    sys.stdout.write(CLEAR_SCREEN)
    tokens = _tokens(sys.stdin)
    while True:
        sys.stdout.write("\n>> ")
        sys.stdout.flush()
        token = next(tokens, None)
        if token is None:
            return 0
        _run(token)


if __name__ == "__main__":
    sys.exit(main())