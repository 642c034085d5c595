"""Tree transformations: building subtrees from templates and rewriting nodes in place.

A template describes a subtree to build, relative to a *base* node:

* ``(Category.OBJECT, <type named "Primer">, path)`` copies the subtree found
  at ``path`` below the base node;
* ``(Category.OBJECT, <type named "Variable">, payload)`` makes a variable
  node. ``payload`` is a path below the base node, a :class:`Node`, a
  :class:`Variable`, or a pair ``(path_or_node, index)`` whose index picks a
  variable of the owning tree when the located node is not an object;
* ``(Category.OBJECT, <any other type>, value)`` makes a literal leaf;
* ``(Category.FUNCTION, <function type>, child_template)``;
* ``(Category.OPERATION, <operation type>, left_template, right_template)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple, Union

from zcalcderiv.nodes import Category, Node, Tree, Variable

PRIMER_NAME = "Primer"
VARIABLE_NAME = "Variable"

Template = Tuple[Any, ...]


class Trans(IntEnum):
    """Outcome of a transformation."""

    SUCCEED = 0
    PASS = 1
    FAIL = 2


@dataclass(frozen=True)
class Rule:
    """A rewrite: when ``matches(node)`` holds, the node becomes ``template``."""

    matches: Callable[[Node], bool]
    template: Template
    name: str = ""


Step = Union[Rule, Callable[[Node], Trans]]


def _combine(first: Trans, second: Trans) -> Trans:
    """Combine outcomes: any success wins, otherwise any failure, otherwise a pass."""
    if first is Trans.SUCCEED or second is Trans.SUCCEED:
        return Trans.SUCCEED
    if first is Trans.FAIL or second is Trans.FAIL:
        return Trans.FAIL
    return Trans.PASS


def _apply(step: Step, node: Node) -> Trans:
    if isinstance(step, Rule):
        return trans_format_p(node, step)
    return Trans(step(node))


class _Slot:
    """The place a node hangs in, so the current occupant can be found after rewrites."""

    def __init__(self, node: Node) -> None:
        self.parent = node.parent
        self.is_right = isinstance(self.parent, Node) and self.parent.right is node
        self.original = node

    def get(self) -> Node:
        parent = self.parent
        if isinstance(parent, Tree):
            current = parent.root
        elif isinstance(parent, Node):
            current = parent.right if self.is_right else parent.left
        else:
            current = self.original
        if current is None:
            raise ValueError("the node's place in the tree is empty")
        return current


def _locate(base: Optional[Node], locator: Union[str, Node]) -> Node:
    if isinstance(locator, Node):
        return locator
    if base is None:
        raise ValueError(f"template path {locator!r} needs a base node")
    return base.position(locator)


def _variable_from(payload: Any, base: Optional[Node]) -> Variable:
    if isinstance(payload, Variable):
        return payload
    index: Optional[int] = None
    if isinstance(payload, tuple):
        if len(payload) != 2:
            raise ValueError(f"malformed variable payload {payload!r}")
        payload, index = payload
    source = _locate(base, payload)
    if source.category is Category.OBJECT:
        if not isinstance(source.value, Variable):
            raise ValueError("located object does not hold a variable")
        return source.value
    if index is None or not isinstance(source.parent, Tree):
        raise ValueError("located node does not hold a variable")
    return source.parent.variables[index]


def format_subtree(template: Template, base: Optional[Node] = None) -> Node:
    """Build a new, detached subtree from ``template`` relative to ``base``."""
    if not isinstance(template, tuple) or len(template) < 3:
        raise ValueError(f"malformed template {template!r}")
    category, node_type, *rest = template
    category = Category(category)
    if category is Category.OBJECT:
        if len(rest) != 1:
            raise ValueError(f"object template takes one payload: {template!r}")
        (payload,) = rest
        if node_type.name == PRIMER_NAME:
            return duplicate_subtree(_locate(base, payload))
        if node_type.name == VARIABLE_NAME:
            return Node(Category.OBJECT, node_type, value=_variable_from(payload, base))
        return Node(Category.OBJECT, node_type, value=str(payload))
    if category is Category.FUNCTION:
        if len(rest) != 1:
            raise ValueError(f"function template takes one child: {template!r}")
        return Node(Category.FUNCTION, node_type, left=format_subtree(rest[0], base))
    if len(rest) != 2:
        raise ValueError(f"operation template takes two children: {template!r}")
    return Node(
        Category.OPERATION,
        node_type,
        left=format_subtree(rest[0], base),
        right=format_subtree(rest[1], base),
    )


def duplicate_subtree(node: Node) -> Node:
    """Return a detached deep copy of ``node``; variables stay shared."""
    if node.category is Category.OBJECT:
        return Node(Category.OBJECT, node.type, value=node.value)
    left = duplicate_subtree(node.left) if node.left is not None else None
    if node.category is Category.FUNCTION:
        return Node(Category.FUNCTION, node.type, left=left)
    right = duplicate_subtree(node.right) if node.right is not None else None
    return Node(Category.OPERATION, node.type, left=left, right=right)


def remove_subtree(node: Optional[Node]) -> None:
    """Take ``node`` out of its parent and unlink all of its descendants."""
    if node is None:
        return
    if node.category is not Category.OBJECT:
        remove_subtree(node.left)
        if node.category is Category.OPERATION:
            remove_subtree(node.right)
    parent = node.parent
    if isinstance(parent, Tree):
        if parent.root is node:
            parent.root = None
    elif isinstance(parent, Node):
        if parent.left is node:
            parent.left = None
        elif parent.right is node:
            parent.right = None
    node.parent = None


def trans_format(node: Node, template: Template) -> Trans:
    """Replace ``node`` in its parent with a subtree built from ``template``."""
    new = format_subtree(template, node)
    node.replace_with(new)
    remove_subtree(node)
    return Trans.SUCCEED


def trans_format_p(node: Node, rule: Rule) -> Trans:
    """Apply ``rule`` to ``node`` if it matches; PASS otherwise."""
    if rule.matches(node):
        return trans_format(node, rule.template)
    return Trans.PASS


def trans_invoke(
    node: Node,
    rule: Step,
    follow_ups: Iterable[Tuple[str, Step]] = (),
) -> Trans:
    """Apply ``rule``; on success run every follow-up at its path below the new node.

    Returns the rule's outcome if it did not succeed, FAIL if any follow-up
    did not succeed, and SUCCEED otherwise. Every follow-up is run.
    """
    slot = _Slot(node)
    outcome = _apply(rule, node)
    if outcome is not Trans.SUCCEED:
        return outcome
    all_succeeded = True
    for path, step in follow_ups:
        target = slot.get().position(path)
        if _apply(step, target) is not Trans.SUCCEED:
            all_succeeded = False
    return Trans.SUCCEED if all_succeeded else Trans.FAIL


def trans_single(node: Node, steps: Iterable[Step]) -> Trans:
    """Try the steps in order until one succeeds; return the combined outcome."""
    outcome = Trans.PASS
    for step in steps:
        outcome = _combine(outcome, _apply(step, node))
        if outcome is Trans.SUCCEED:
            break
    return outcome


def trans_utmost(node: Node, rules: Sequence[Step]) -> Trans:
    """Rewrite the subtree with every rule, repeating each rule while it still applies."""
    rules = list(rules)
    if not rules:
        return Trans.PASS
    slot = _Slot(node)
    index = 0
    while True:
        current = slot.get()
        outcome = Trans.PASS
        if current.category is not Category.OBJECT:
            if current.left is not None:
                outcome = _combine(outcome, trans_utmost(current.left, rules))
            if current.category is Category.OPERATION and current.right is not None:
                outcome = _combine(outcome, trans_utmost(current.right, rules))
        outcome = _combine(outcome, _apply(rules[index], slot.get()))
        if outcome is Trans.SUCCEED:
            continue
        index += 1
        if index == len(rules):
            return outcome