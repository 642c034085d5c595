"""Reading calculator input: infix operators to prefix calls, then text to a tree."""

from __future__ import annotations

from zcalcderiv.catalog import FUNCTION_TYPES, OPERATION_TYPES, REAL, VARIABLE
from zcalcderiv.nodes import (
    Category,
    Node,
    OperationType,
    Precedence,
    Tree,
    search_function_type,
    search_operation_type,
)

_NUMBER_CHARS = frozenset("0123456789.-")


def left_bracket_index(text: str, index: int) -> int:
    """Index of the nearest unmatched '(' or top-level ',' left of ``index``.

    Returns -1 when there is none.
    """
    layer = 0
    position = index
    while layer >= 0:
        position -= 1
        if position < 0:
            return -1
        char = text[position]
        if layer == 0 and char == ",":
            return position
        if char == "(":
            layer -= 1
        elif char == ")":
            layer += 1
    return position


def right_bracket_index(text: str, index: int) -> int:
    """Index of the nearest unmatched ')' or top-level ',' right of ``index``.

    Returns the length of the text when there is none.
    """
    layer = 0
    length = len(text)
    position = index
    while layer >= 0:
        position += 1
        if position >= length:
            return position
        char = text[position]
        if layer == 0 and char == ",":
            return position
        if char == "(":
            layer += 1
        elif char == ")":
            layer -= 1
    return position


def is_number(text: str) -> bool:
    """Whether the text is made only of digits, dots and minus signs."""
    return bool(text) and all(char in _NUMBER_CHARS for char in text)


def _rewrite_infix(text: str, operation: OperationType) -> str:
    """Turn every ``a<infix>b`` of one operation into ``<prefix>(a,b)``, right to left."""
    opening = operation.prefix + "("
    position = len(text) - 1
    while position > 0:
        if text.startswith(operation.infix, position):
            start = left_bracket_index(text, position)
            text = text[: start + 1] + opening + text[start + 1 :]
            position += len(opening)
            end = right_bracket_index(text, position)
            text = text[:end] + ")" + text[end:]
            text = text[:position] + "," + text[position + 1 :]
        position -= 1
    return text


def parse_operators(text: str) -> str:
    """Rewrite infix operators as prefix calls, weakest precedence first.

    Operators of the highest precedence class are left as they are.
    """
    for precedence in Precedence:
        if precedence is Precedence.MAX:
            break
        for operation in OPERATION_TYPES:
            if operation.precedence == precedence:
                text = _rewrite_infix(text, operation)
    return text


def parse(text: str, tree: Tree) -> Node:
    """Build a detached expression subtree from prefix-call text.

    Variables are registered in ``tree``. Raises ValueError on text that
    does not describe an expression.
    """
    if not text:
        raise ValueError("empty expression")
    if text.endswith(")"):
        start = text.find("(")
        if start < 0:
            raise ValueError(f"unbalanced brackets in {text!r}")
        if start == 0:
            return parse(text[1:-1], tree)
        prefix = text[:start]
        inner = start + 1
        function = search_function_type(prefix, FUNCTION_TYPES)
        if function is not None:
            return Node(Category.FUNCTION, function, left=parse(text[inner:-1], tree))
        operation = search_operation_type(prefix, OPERATION_TYPES)
        if operation is None:
            raise ValueError(f"unknown function or operation {prefix!r}")
        middle = left_bracket_index(text, len(text) - 1)
        if middle < inner or text[middle] != ",":
            raise ValueError(f"operation {prefix!r} needs two arguments")
        return Node(
            Category.OPERATION,
            operation,
            left=parse(text[inner:middle], tree),
            right=parse(text[middle + 1 : -1], tree),
        )
    if is_number(text):
        return Node(Category.OBJECT, REAL, value=text)
    node = Node(Category.OBJECT, VARIABLE)
    tree.register(node, text)
    return node