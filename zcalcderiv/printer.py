"""Rendering expression trees as text."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from zcalcderiv.nodes import Category, Node

RESET = "\033[0m"
BOLD = "\033[1m"
CLEAR_SCREEN = "\033[2J\033[H"

_ROOT_NAME = "Root"
_VARIABLE_NAME = "Variable"


def _is_functioned(node: Node) -> bool:
    parent = node.parent
    return (
        isinstance(parent, Node)
        and parent.category is Category.FUNCTION
        and parent.type.name != _ROOT_NAME
    )


def _needs_brackets(node: Node) -> bool:
    if _is_functioned(node):
        return True
    parent = node.parent
    return (
        isinstance(parent, Node)
        and parent.category is Category.OPERATION
        and node.type.precedence <= parent.type.precedence
    )


def render(node: Optional[Node], bold: bool = True) -> str:
    """Return the text of a subtree; variables are set in bold when ``bold``."""
    if node is None:
        return "[EMPTY]"
    if node.category is Category.OBJECT:
        if node.type.name == _VARIABLE_NAME:
            symbol = node.value.symbol
            return f"{BOLD}{symbol}{RESET}" if bold else symbol
        return "" if node.value is None else str(node.value)
    if node.category is Category.FUNCTION:
        if node.type.name == _ROOT_NAME:
            return "\n-> " + render(node.left, bold) + "\n"
        text = node.type.prefix + render(node.left, bold)
        return f"({text})" if _is_functioned(node) else text
    text = render(node.left, bold) + node.type.infix + render(node.right, bold)
    return f"({text})" if _needs_brackets(node) else text


def print_subtree(node: Optional[Node], file: Optional[TextIO] = None) -> None:
    """Write the text of a subtree, variables in bold, to ``file`` or stdout."""
    out = file if file is not None else sys.stdout
    out.write(render(node, bold=True))