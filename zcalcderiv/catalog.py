"""The node types of the calculator and its rewrite rules.

Two rule sets are defined here: the simplification rules, which tidy up an
expression (identities, zeros, merging of subtractions and divisions), and
the derivative rules, one per operation or function, which rewrite a
derivative node into an expression holding derivatives of smaller parts.
Each derivative rule comes with the paths, relative to the rewritten node,
of the derivative nodes that still need to be worked out.
"""

from __future__ import annotations

from typing import Callable, Optional

from zcalcderiv.nodes import (
    Category,
    FunctionType,
    Node,
    NodeType,
    ObjectType,
    OperationType,
    Precedence,
    Tree,
)
from zcalcderiv.trans import Rule, Template, trans_utmost

# Object types

PRIMER = ObjectType("Primer")
VARIABLE = ObjectType("Variable")
REAL = ObjectType("Real")
PARSER_PRIMER = ObjectType("Parser's Primer")

# Function types

ROOT = FunctionType("Root", None)
SQUARE_ROOT = FunctionType("Square Root", "sqrt")
CUBE_ROOT = FunctionType("Cube Root", "cbrt")
NATURAL_EXPONENT = FunctionType("Natural Exponent", "e^")
DECIMAL_EXPONENT = FunctionType("Decimal Exponent", "10^")
NATURAL_LOGARITHM = FunctionType("Natural Logarithm", "ln")
DECIMAL_LOGARITHM = FunctionType("Decimal Logarithm", "lg")
SINE = FunctionType("Sine", "sin")
COSINE = FunctionType("Cosine", "cos")
TANGENT = FunctionType("Tangent", "tan")
COTANGENT = FunctionType("Cotangent", "cot")
SECANT = FunctionType("Secant", "sec")
COSECANT = FunctionType("Cosecant", "csc")
INVERSE_SINE = FunctionType("Inverse Sine", "arcsin")
INVERSE_COSINE = FunctionType("Inverse Cosine", "arccos")
INVERSE_TANGENT = FunctionType("Inverse Tangent", "arctan")
INVERSE_COTANGENT = FunctionType("Inverse Cotangent", "arccot")
INVERSE_SECANT = FunctionType("Inverse Secant", "arcsec")
INVERSE_COSECANT = FunctionType("Inverse Cosecant", "arccsc")

# Operation types

ADDITION = OperationType("Addition", "sum", "+", Precedence.ADD)
SUBTRACTION = OperationType("Subtraction", "difference", "-", Precedence.ADD)
MULTIPLICATION = OperationType("Multiplication", "product", "*", Precedence.MUL)
DIVISION = OperationType("Division", "quotient", "/", Precedence.MUL)
POWER = OperationType("Power", "power", "^", Precedence.POW)
DERIVATIVE = OperationType("Derivative", "D", "@", Precedence.MAX)

FUNCTION_TYPES: tuple[FunctionType, ...] = (
    SQUARE_ROOT,
    CUBE_ROOT,
    NATURAL_EXPONENT,
    DECIMAL_EXPONENT,
    NATURAL_LOGARITHM,
    DECIMAL_LOGARITHM,
    SINE,
    COSINE,
    TANGENT,
    COTANGENT,
    SECANT,
    COSECANT,
    INVERSE_SINE,
    INVERSE_COSINE,
    INVERSE_TANGENT,
    INVERSE_COTANGENT,
    INVERSE_SECANT,
    INVERSE_COSECANT,
)

OPERATION_TYPES: tuple[OperationType, ...] = (
    ADDITION,
    SUBTRACTION,
    MULTIPLICATION,
    DIVISION,
    POWER,
    DERIVATIVE,
)


# Template builders


def _op(op_type: OperationType, left: Template, right: Template) -> Template:
    return (Category.OPERATION, op_type, left, right)


def _fn(fn_type: FunctionType, child: Template) -> Template:
    return (Category.FUNCTION, fn_type, child)


def _at(path: str) -> Template:
    return (Category.OBJECT, PRIMER, path)


def _real(value: str) -> Template:
    return (Category.OBJECT, REAL, value)


_WITH_RESPECT_TO = (Category.OBJECT, VARIABLE, "r")


def _d(inner: Template) -> Template:
    return _op(DERIVATIVE, inner, _WITH_RESPECT_TO)


# Matchers


def _is_op(node: Optional[Node], op_type: NodeType) -> bool:
    return (
        node is not None
        and node.category is Category.OPERATION
        and node.type is op_type
    )


def _is_real(node: Optional[Node], value: str) -> bool:
    return (
        node is not None
        and node.category is Category.OBJECT
        and node.type is REAL
        and node.value == value
    )


def _is_variable(node: Optional[Node]) -> bool:
    return (
        node is not None
        and node.category is Category.OBJECT
        and node.type is VARIABLE
    )


def _left_real(op_type: OperationType, value: str) -> Callable[[Node], bool]:
    return lambda node: _is_op(node, op_type) and _is_real(node.left, value)


def _right_real(op_type: OperationType, value: str) -> Callable[[Node], bool]:
    return lambda node: _is_op(node, op_type) and _is_real(node.right, value)


def _left_op(outer: OperationType, inner: OperationType) -> Callable[[Node], bool]:
    return lambda node: _is_op(node, outer) and _is_op(node.left, inner)


def _right_op(outer: OperationType, inner: OperationType) -> Callable[[Node], bool]:
    return lambda node: _is_op(node, outer) and _is_op(node.right, inner)


def _derivative_of(category: Category, node_type: NodeType) -> Callable[[Node], bool]:
    def matches(node: Node) -> bool:
        return (
            _is_op(node, DERIVATIVE)
            and node.left is not None
            and node.left.category is category
            and node.left.type is node_type
            and _is_variable(node.right)
        )

    return matches


def _element_zero(node: Node) -> bool:
    if not _is_op(node, DERIVATIVE) or node.left is None:
        return False
    left, right = node.left, node.right
    if left.category is not Category.OBJECT or not _is_variable(right):
        return False
    assert right is not None
    return (left.type is VARIABLE and left.value is not right.value) or left.type is REAL


def _element_one(node: Node) -> bool:
    return (
        _is_op(node, DERIVATIVE)
        and _is_variable(node.left)
        and _is_variable(node.right)
        and node.left.value is node.right.value  # type: ignore[union-attr]
    )


# Simplification rules, tried in this order

SIMPLIFY_RULES: tuple[Rule, ...] = (
    Rule(_left_real(ADDITION, "0"), _at("r"), "Left Identity Addition"),
    Rule(_left_real(MULTIPLICATION, "1"), _at("r"), "Left Identity Multiplication"),
    Rule(_right_real(ADDITION, "0"), _at("l"), "Right Identity Addition"),
    Rule(_right_real(SUBTRACTION, "0"), _at("l"), "Right Identity Subtraction"),
    Rule(_right_real(MULTIPLICATION, "1"), _at("l"), "Right Identity Multiplication"),
    Rule(_right_real(DIVISION, "1"), _at("l"), "Right Identity Division"),
    Rule(_right_real(POWER, "1"), _at("l"), "Right Identity Power"),
    Rule(_left_real(MULTIPLICATION, "0"), _real("0"), "Left Zero Multiplication"),
    Rule(_left_real(DIVISION, "0"), _real("0"), "Left Zero Division"),
    Rule(_left_real(POWER, "1"), _real("1"), "Left Zero Power"),
    Rule(_right_real(MULTIPLICATION, "0"), _real("0"), "Right Zero Multiplication"),
    Rule(
        _left_op(ADDITION, SUBTRACTION),
        _op(SUBTRACTION, _op(ADDITION, _at("ll"), _at("r")), _at("lr")),
        "Subtraction Merger 1",
    ),
    Rule(
        _right_op(ADDITION, SUBTRACTION),
        _op(SUBTRACTION, _op(ADDITION, _at("l"), _at("rl")), _at("rr")),
        "Subtraction Merger 2",
    ),
    Rule(
        _left_op(MULTIPLICATION, DIVISION),
        _op(DIVISION, _op(MULTIPLICATION, _at("ll"), _at("r")), _at("lr")),
        "Division Merger 1",
    ),
    Rule(
        _right_op(MULTIPLICATION, DIVISION),
        _op(DIVISION, _op(MULTIPLICATION, _at("l"), _at("rl")), _at("rr")),
        "Division Merger 2",
    ),
    Rule(
        _left_op(SUBTRACTION, SUBTRACTION),
        _op(SUBTRACTION, _at("ll"), _op(ADDITION, _at("lr"), _at("r"))),
        "Subtraction Absorption 1",
    ),
    Rule(
        _right_op(SUBTRACTION, SUBTRACTION),
        _op(SUBTRACTION, _op(ADDITION, _at("l"), _at("rr")), _at("rl")),
        "Subtraction Absorption 2",
    ),
    Rule(
        _left_op(DIVISION, DIVISION),
        _op(DIVISION, _at("ll"), _op(MULTIPLICATION, _at("lr"), _at("r"))),
        "Division Absorption 1",
    ),
    Rule(
        _right_op(DIVISION, DIVISION),
        _op(DIVISION, _op(MULTIPLICATION, _at("l"), _at("rr")), _at("rl")),
        "Division Absorption 2",
    ),
    Rule(
        _left_op(POWER, POWER),
        _op(POWER, _at("ll"), _op(MULTIPLICATION, _at("lr"), _at("r"))),
        "Power Absorption",
    ),
)


def _fn_rule(fn_type: FunctionType, template: Template) -> Rule:
    return Rule(_derivative_of(Category.FUNCTION, fn_type), template, fn_type.name)


def _op_rule(op_type: OperationType, template: Template) -> Rule:
    return Rule(_derivative_of(Category.OPERATION, op_type), template, op_type.name)


_X = _at("ll")
_X_SQUARED = _op(POWER, _X, _real("2"))

# Derivative rules with the paths of the derivatives they leave behind

DERIVATIVE_RULES: tuple[tuple[Rule, tuple[str, ...]], ...] = (
    (Rule(_element_zero, _real("0"), "Element Zero"), ()),
    (Rule(_element_one, _real("1"), "Element One"), ()),
    (
        _op_rule(ADDITION, _op(ADDITION, _d(_at("ll")), _d(_at("lr")))),
        ("l", "r"),
    ),
    (
        _op_rule(SUBTRACTION, _op(SUBTRACTION, _d(_at("ll")), _d(_at("lr")))),
        ("l", "r"),
    ),
    (
        _op_rule(
            MULTIPLICATION,
            _op(
                ADDITION,
                _op(MULTIPLICATION, _d(_at("ll")), _at("lr")),
                _op(MULTIPLICATION, _at("ll"), _d(_at("lr"))),
            ),
        ),
        ("ll", "rr"),
    ),
    (
        _op_rule(
            DIVISION,
            _op(
                DIVISION,
                _op(
                    SUBTRACTION,
                    _op(MULTIPLICATION, _d(_at("ll")), _at("lr")),
                    _op(MULTIPLICATION, _at("ll"), _d(_at("lr"))),
                ),
                _op(POWER, _at("lr"), _real("2")),
            ),
        ),
        ("lll", "lrr"),
    ),
    (
        _op_rule(
            POWER,
            _op(
                MULTIPLICATION,
                _op(POWER, _at("ll"), _at("lr")),
                _d(_op(MULTIPLICATION, _fn(NATURAL_LOGARITHM, _at("ll")), _at("lr"))),
            ),
        ),
        ("r",),
    ),
    (
        _fn_rule(
            SQUARE_ROOT,
            _op(DIVISION, _d(_X), _op(MULTIPLICATION, _real("2"), _fn(SQUARE_ROOT, _X))),
        ),
        ("l",),
    ),
    (
        _fn_rule(
            CUBE_ROOT,
            _op(
                DIVISION,
                _op(MULTIPLICATION, _fn(CUBE_ROOT, _X), _d(_X)),
                _op(MULTIPLICATION, _real("3"), _X),
            ),
        ),
        ("lr",),
    ),
    (
        _fn_rule(NATURAL_EXPONENT, _op(MULTIPLICATION, _fn(NATURAL_EXPONENT, _X), _d(_X))),
        ("r",),
    ),
    (
        _fn_rule(
            DECIMAL_EXPONENT,
            _op(
                MULTIPLICATION,
                _op(
                    MULTIPLICATION,
                    _fn(NATURAL_LOGARITHM, _real("10")),
                    _fn(DECIMAL_EXPONENT, _X),
                ),
                _d(_X),
            ),
        ),
        ("r",),
    ),
    (
        _fn_rule(NATURAL_LOGARITHM, _op(DIVISION, _d(_X), _X)),
        ("l",),
    ),
    (
        _fn_rule(
            DECIMAL_LOGARITHM,
            _op(
                DIVISION,
                _d(_X),
                _op(MULTIPLICATION, _fn(NATURAL_LOGARITHM, _real("10")), _X),
            ),
        ),
        ("l",),
    ),
    (
        _fn_rule(SINE, _op(MULTIPLICATION, _fn(COSINE, _X), _d(_X))),
        ("r",),
    ),
    (
        _fn_rule(
            COSINE,
            _op(
                MULTIPLICATION,
                _op(MULTIPLICATION, _real("-1"), _fn(SINE, _X)),
                _d(_X),
            ),
        ),
        ("r",),
    ),
    (
        _fn_rule(
            TANGENT,
            _op(MULTIPLICATION, _op(POWER, _fn(SECANT, _X), _real("2")), _d(_X)),
        ),
        ("r",),
    ),
    (
        _fn_rule(
            COTANGENT,
            _op(
                MULTIPLICATION,
                _op(
                    MULTIPLICATION,
                    _real("-1"),
                    _op(POWER, _fn(COSECANT, _X), _real("2")),
                ),
                _d(_X),
            ),
        ),
        ("r",),
    ),
    (
        _fn_rule(
            SECANT,
            _op(
                MULTIPLICATION,
                _op(MULTIPLICATION, _fn(SECANT, _X), _fn(TANGENT, _X)),
                _d(_X),
            ),
        ),
        ("r",),
    ),
    (
        _fn_rule(
            COSECANT,
            _op(
                MULTIPLICATION,
                _op(
                    MULTIPLICATION,
                    _real("-1"),
                    _op(MULTIPLICATION, _fn(COSECANT, _X), _fn(COTANGENT, _X)),
                ),
                _d(_X),
            ),
        ),
        ("r",),
    ),
    (
        _fn_rule(
            INVERSE_SINE,
            _op(
                DIVISION,
                _d(_X),
                _fn(SQUARE_ROOT, _op(SUBTRACTION, _real("1"), _X_SQUARED)),
            ),
        ),
        ("l",),
    ),
    (
        _fn_rule(
            INVERSE_COSINE,
            _op(
                MULTIPLICATION,
                _real("-1"),
                _op(
                    DIVISION,
                    _d(_X),
                    _fn(SQUARE_ROOT, _op(SUBTRACTION, _real("1"), _X_SQUARED)),
                ),
            ),
        ),
        ("rl",),
    ),
    (
        _fn_rule(
            INVERSE_TANGENT,
            _op(DIVISION, _d(_X), _op(ADDITION, _real("1"), _X_SQUARED)),
        ),
        ("l",),
    ),
    (
        _fn_rule(
            INVERSE_COTANGENT,
            _op(
                MULTIPLICATION,
                _real("-1"),
                _op(DIVISION, _d(_X), _op(ADDITION, _real("1"), _X_SQUARED)),
            ),
        ),
        ("rl",),
    ),
    (
        _fn_rule(
            INVERSE_SECANT,
            _op(
                DIVISION,
                _d(_X),
                _fn(
                    SQUARE_ROOT,
                    _op(SUBTRACTION, _op(POWER, _X, _real("4")), _X_SQUARED),
                ),
            ),
        ),
        ("l",),
    ),
    (
        _fn_rule(
            INVERSE_COSECANT,
            _op(
                MULTIPLICATION,
                _real("-1"),
                _op(
                    DIVISION,
                    _d(_X),
                    _fn(
                        SQUARE_ROOT,
                        _op(SUBTRACTION, _op(POWER, _X, _real("4")), _X_SQUARED),
                    ),
                ),
            ),
        ),
        ("rl",),
    ),
)


def simplify(node: Node) -> Node:
    """Apply the simplification rules to the subtree until none applies.

    The subtree is rewritten in place; the node now standing where ``node``
    stood is returned. A detached node is simplified on its own and the
    result comes back detached as well.
    """
    parent = node.parent
    if parent is None:
        holder = Tree(root=node)
        trans_utmost(node, SIMPLIFY_RULES)
        result = holder.root
        if result is None:
            raise ValueError("simplification left the expression empty")
        result.parent = None
        return result
    is_right = isinstance(parent, Node) and parent.right is node
    trans_utmost(node, SIMPLIFY_RULES)
    if isinstance(parent, Tree):
        result = parent.root
    else:
        result = parent.right if is_right else parent.left
    if result is None:
        raise ValueError("simplification left the expression empty")
    return result