import pytest

from zcalcderiv.nodes import (
    Category,
    FunctionType,
    Node,
    ObjectType,
    OperationType,
    Precedence,
    Tree,
    Variable,
)
from zcalcderiv.trans import (
    Rule,
    Trans,
    duplicate_subtree,
    format_subtree,
    remove_subtree,
    trans_format,
    trans_format_p,
    trans_invoke,
    trans_single,
    trans_utmost,
)

OBJ = Category.OBJECT
FUN = Category.FUNCTION
OP = Category.OPERATION

REAL = ObjectType("Real")
PRIMER = ObjectType("Primer")
VAR = ObjectType("Variable")
ADD = OperationType("Addition", "sum", "+", Precedence.ADD)
MUL = OperationType("Multiplication", "product", "*", Precedence.MUL)
SIN = FunctionType("Sine", "sin")


def real(value):
    return Node(OBJ, REAL, value=value)


def var(variable):
    return Node(OBJ, VAR, value=variable)


def op(kind, left, right):
    return Node(OP, kind, left=left, right=right)


def show(node):
    if node.category is OBJ:
        return node.value.symbol if isinstance(node.value, Variable) else node.value
    if node.category is FUN:
        return f"{node.type.prefix}({show(node.left)})"
    return f"({show(node.left)}{node.type.infix}{show(node.right)})"


def _is_real(node, value):
    return node.category is OBJ and node.type == REAL and node.value == value


RIGHT_ADD_ZERO = Rule(
    lambda n: n.category is OP and n.type == ADD and _is_real(n.right, "0"),
    (OBJ, PRIMER, "l"),
)
LEFT_ADD_ZERO = Rule(
    lambda n: n.category is OP and n.type == ADD and _is_real(n.left, "0"),
    (OBJ, PRIMER, "r"),
)
RIGHT_MUL_ONE = Rule(
    lambda n: n.category is OP and n.type == MUL and _is_real(n.right, "1"),
    (OBJ, PRIMER, "l"),
)


def test_trans_values_are_fixed():
    assert Trans(0) is Trans.SUCCEED
    assert Trans(1) is Trans.PASS
    assert Trans(2) is Trans.FAIL
    tree = Tree(op(ADD, real("2"), real("3")))
    assert trans_format_p(tree.root, RIGHT_ADD_ZERO).value == 1
    assert trans_format(tree.root, (OBJ, REAL, "5")).value == 0


def test_format_literal():
    node = format_subtree((OBJ, REAL, "2"))
    assert node.category is OBJ
    assert node.value == "2"
    assert node.parent is None


def test_format_primer_copies_from_base():
    x = Variable("x")
    base = op(ADD, var(x), real("2"))
    new = format_subtree((OP, MUL, (OBJ, PRIMER, "r"), (OBJ, PRIMER, "l")), base)
    assert show(new) == "(2*x)"
    assert new.left is not base.right
    assert new.right.value is x
    assert new.left.parent is new


def test_format_variable_from_path_and_direct():
    x = Variable("x")
    base = op(ADD, var(x), real("2"))
    by_path = format_subtree((OBJ, VAR, "l"), base)
    direct = format_subtree((OBJ, VAR, x))
    by_node = format_subtree((OBJ, VAR, base.left))
    assert by_path.value is x
    assert direct.value is x
    assert by_node.value is x


def test_format_variable_by_tree_index():
    y = Variable("y")
    root = Node(FUN, SIN, left=real("1"))
    tree = Tree(root, [Variable("x"), y])
    node = format_subtree((OBJ, VAR, (root, 1)))
    assert tree.root is root
    assert node.value is y


def test_format_primer_without_base_raises():
    with pytest.raises(ValueError):
        format_subtree((OBJ, PRIMER, "l"))


def test_format_malformed_template_raises():
    with pytest.raises(ValueError):
        format_subtree((OP, ADD, (OBJ, REAL, "1")))


def test_duplicate_is_independent_but_shares_variables():
    x = Variable("x")
    original = op(ADD, Node(FUN, SIN, left=var(x)), real("3"))
    copy = duplicate_subtree(original)
    assert show(copy) == show(original)
    assert copy.left is not original.left
    assert copy.left.left.value is x
    copy.right.value = "4"
    assert original.right.value == "3"


def test_remove_subtree_detaches():
    child = real("1")
    parent = op(ADD, child, real("2"))
    remove_subtree(child)
    assert parent.left is None
    assert child.parent is None
    root = op(ADD, real("1"), real("2"))
    tree = Tree(root)
    remove_subtree(root)
    assert tree.root is None
    assert root.left is None and root.right is None


def test_trans_format_replaces_in_tree():
    x = Variable("x")
    root = op(ADD, var(x), real("0"))
    tree = Tree(root)
    result = trans_format(root, (OP, MUL, (OBJ, PRIMER, "l"), (OBJ, REAL, "5")))
    assert result is Trans.SUCCEED
    assert show(tree.root) == "(x*5)"
    assert tree.root.parent is tree


def test_trans_format_p_passes_when_not_matching():
    root = op(ADD, real("2"), real("3"))
    tree = Tree(root)
    assert trans_format_p(root, RIGHT_ADD_ZERO) is Trans.PASS
    assert tree.root is root


def test_trans_format_p_applies_rule():
    x = Variable("x")
    tree = Tree(op(ADD, var(x), real("0")))
    assert trans_format_p(tree.root, RIGHT_ADD_ZERO) is Trans.SUCCEED
    assert tree.root.value is x


def test_trans_invoke_passes_when_rule_does_not_match():
    root = op(ADD, real("2"), real("3"))
    Tree(root)
    calls = []
    result = trans_invoke(root, RIGHT_ADD_ZERO, [("", lambda n: calls.append(n) or Trans.SUCCEED)])
    assert result is Trans.PASS
    assert calls == []


def test_trans_invoke_runs_follow_ups_on_new_node():
    x = Variable("x")
    tree = Tree(op(ADD, op(ADD, var(x), real("0")), real("7")))
    swap = Rule(lambda n: True, (OP, MUL, (OBJ, PRIMER, "l"), (OBJ, PRIMER, "r")))
    seen = []
    result = trans_invoke(
        tree.root,
        swap,
        [("l", RIGHT_ADD_ZERO), ("r", lambda n: seen.append(n.value) or Trans.SUCCEED)],
    )
    assert result is Trans.SUCCEED
    assert show(tree.root) == "(x*7)"
    assert seen == ["7"]


def test_trans_invoke_fails_when_a_follow_up_does_not_succeed():
    tree = Tree(op(ADD, real("2"), real("3")))
    swap = Rule(lambda n: True, (OP, MUL, (OBJ, PRIMER, "l"), (OBJ, PRIMER, "r")))
    calls = []
    result = trans_invoke(
        tree.root,
        swap,
        [("l", lambda n: Trans.PASS), ("r", lambda n: calls.append(n) or Trans.SUCCEED)],
    )
    assert result is Trans.FAIL
    assert len(calls) == 1


def test_trans_single_stops_at_first_success():
    x = Variable("x")
    tree = Tree(op(ADD, var(x), real("0")))
    calls = []

    def never(node):
        calls.append("never")
        return Trans.PASS

    def after(node):
        calls.append("after")
        return Trans.PASS

    result = trans_single(tree.root, [never, RIGHT_ADD_ZERO, after])
    assert result is Trans.SUCCEED
    assert calls == ["never"]
    assert tree.root.value is x


def test_trans_single_combines_failures_and_passes():
    node = real("1")
    assert trans_single(node, [lambda n: Trans.PASS, lambda n: Trans.PASS]) is Trans.PASS
    assert trans_single(node, [lambda n: Trans.FAIL, lambda n: Trans.PASS]) is Trans.FAIL
    assert trans_single(node, [lambda n: Trans.FAIL, lambda n: Trans.FAIL]) is Trans.FAIL
    assert trans_single(node, []) is Trans.PASS


def test_trans_utmost_simplifies_nested_identities():
    x = Variable("x")
    tree = Tree(op(MUL, op(ADD, var(x), real("0")), real("1")))
    result = trans_utmost(tree.root, [RIGHT_ADD_ZERO, RIGHT_MUL_ONE])
    assert result is Trans.PASS
    assert tree.root.value is x
    assert tree.root.parent is tree


def test_trans_utmost_repeats_a_rule_until_it_no_longer_applies():
    x = Variable("x")
    tree = Tree(op(ADD, real("0"), op(ADD, real("0"), op(ADD, real("0"), var(x)))))
    trans_utmost(tree.root, [LEFT_ADD_ZERO])
    assert tree.root.category is OBJ
    assert tree.root.value is x


def test_trans_utmost_inside_function_and_leaves_others():
    x = Variable("x")
    tree = Tree(op(ADD, Node(FUN, SIN, left=op(ADD, var(x), real("0"))), real("2")))
    trans_utmost(tree.root, [RIGHT_ADD_ZERO, RIGHT_MUL_ONE])
    assert show(tree.root) == "(sin(x)+2)"