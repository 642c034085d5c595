"""Expression tree building blocks: node categories, node types, variables and trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable, Optional, Union


class Category(Enum):
    """What kind of node an expression tree node is."""

    OBJECT = 0
    FUNCTION = 1
    OPERATION = 2


class Precedence(IntEnum):
    """Binding strength of binary operations, weakest first."""

    MIN = 0
    ADD = 1
    MUL = 2
    POW = 3
    MAX = 4


@dataclass(frozen=True)
class ObjectType:
    """Type of a leaf node, such as a real number or a variable."""

    name: str


@dataclass(frozen=True)
class FunctionType:
    """Type of a unary function node, written as ``prefix`` before its argument."""

    name: str
    prefix: Optional[str]


@dataclass(frozen=True)
class OperationType:
    """Type of a binary operation node."""

    name: str
    prefix: str
    infix: str
    precedence: Precedence


NodeType = Union[ObjectType, FunctionType, OperationType]


@dataclass(eq=False)
class Variable:
    """A named variable; identity, not the symbol, tells variables apart."""

    symbol: str


@dataclass(eq=False)
class Node:
    """A node of an expression tree.

    Object nodes carry their payload in ``value``: a string for literal
    values, a :class:`Variable` for variables. Function nodes use ``left``
    only; operation nodes use both children.
    """

    category: Category
    type: NodeType
    left: Optional[Node] = None
    right: Optional[Node] = None
    value: Union[str, Variable, None] = None
    parent: Union[Node, Tree, None] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in (self.left, self.right):
            if child is not None:
                child.parent = self

    def _is_right_child(self) -> bool:
        return isinstance(self.parent, Node) and self.parent.right is self

    def replace_with(self, new: Node) -> Node:
        """Put ``new`` where this node hangs in its parent and detach this node."""
        parent = self.parent
        if parent is None:
            raise ValueError("node has no parent to be replaced in")
        if isinstance(parent, Tree):
            parent.root = new
        elif self._is_right_child():
            parent.right = new
        elif parent.left is self:
            parent.left = new
        else:
            raise ValueError("node is not a child of its parent")
        new.parent = parent
        self.parent = None
        return new

    def position(self, path: str) -> Node:
        """Follow ``path`` ('l' for left child, 'r' for right child) from this node.

        Other characters in the path are skipped.
        """
        current: Node = self
        for step in path:
            if step == "l":
                nxt = current.left
            elif step == "r":
                nxt = current.right
            else:
                continue
            if nxt is None:
                raise ValueError(f"path {path!r} leaves the tree")
            current = nxt
        return current


@dataclass(eq=False)
class Tree:
    """An expression tree with the variables registered while building it."""

    root: Optional[Node] = None
    variables: list[Variable] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.root is not None:
            self.root.parent = self

    def reset_variables(self) -> None:
        """Forget every registered variable."""
        self.variables = []

    def register(self, node: Node, symbol: str) -> Variable:
        """Bind ``node`` to the variable named ``symbol``, registering it if new."""
        for variable in self.variables:
            if variable.symbol == symbol:
                break
        else:
            variable = Variable(symbol)
            self.variables.append(variable)
        node.value = variable
        return variable


def node_position(node: Node, path: str) -> Node:
    """Return the node reached from ``node`` by following ``path``."""
    return node.position(path)


def search_function_type(
    prefix: str, types: Iterable[FunctionType]
) -> Optional[FunctionType]:
    """Return the first function type with this prefix, or None."""
    return next((t for t in types if t.prefix == prefix), None)


def search_operation_type(
    prefix: str, types: Iterable[OperationType]
) -> Optional[OperationType]:
    """Return the first operation type with this prefix, or None."""
    return next((t for t in types if t.prefix == prefix), None)