"""Working out derivative nodes of an expression tree.

A derivative node is an operation node of type ``DERIVATIVE`` whose left
child is the expression and whose right child is the variable it is taken
with respect to. Derivatives are rewritten in place with the derivative
rules of :mod:`zcalcderiv.catalog`.
"""

from __future__ import annotations

from typing import Callable, Optional

from zcalcderiv.catalog import DERIVATIVE, DERIVATIVE_RULES, simplify
from zcalcderiv.nodes import Category, Node
from zcalcderiv.trans import Rule, Trans, trans_invoke, trans_single


def _is_derivative(node: Optional[Node]) -> bool:
    return (
        node is not None
        and node.category is Category.OPERATION
        and node.type is DERIVATIVE
    )


def derivative_single(node: Node) -> Trans:
    """Work out one derivative node in place.

    The expression under the derivative is simplified first, then the first
    matching derivative rule rewrites the node, and the derivatives the rule
    leaves behind are worked out in turn. A derivative of a derivative is
    left as it is. Nodes that are not derivatives are left untouched. The
    node must hang in a tree or a parent node. Always returns SUCCEED.
    """
    if not _is_derivative(node) or node.left is None:
        return Trans.SUCCEED
    if _is_derivative(node.left):
        return Trans.SUCCEED
    simplify(node.left)
    trans_single(node, _DERIVATIVE_STEPS)
    return Trans.SUCCEED


def _derivative_step(rule: Rule, paths: tuple[str, ...]) -> Callable[[Node], Trans]:
    follow_ups = tuple((path, derivative_single) for path in paths)

    def step(node: Node) -> Trans:
        return trans_invoke(node, rule, follow_ups)

    return step


_DERIVATIVE_STEPS: tuple[Callable[[Node], Trans], ...] = tuple(
    _derivative_step(rule, paths) for rule, paths in DERIVATIVE_RULES
)


def derivative_calculator(node: Optional[Node]) -> None:
    """Work out every derivative node found in the subtree below ``node``."""
    if node is None or node.category is Category.OBJECT:
        return
    if node.category is Category.FUNCTION:
        derivative_calculator(node.left)
        return
    if node.type is DERIVATIVE:
        derivative_single(node)
    # A rewritten node has been detached and emptied, so these are then None.
    derivative_calculator(node.left)
    derivative_calculator(node.right)