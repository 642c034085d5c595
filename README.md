# zcalcderiv

A small symbolic differentiation engine. An expression is parsed into a tree,
every derivative node in it is expanded by a fixed catalogue of
differentiation rules, and the result is simplified by applying algebraic
rewriting rules until none of them changes the tree any more.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Expression syntax

Expressions are written without spaces.

- Numbers: made only of digits and dots, such as `2` or `3.5`.
- Variables: any other name, such as `x` or `t`.
- Infix operators, from loosest to tightest binding:
  - `+` and `-`
  - `*` and `/`
  - `^` (power)
- Functions, applied to a parenthesised argument:
  `sqrt`, `cbrt`, `ln`, `lg`, `sin`, `cos`, `tan`, `cot`, `sec`, `csc`,
  `arcsin`, `arccos`, `arctan`, `arccot`, `arcsec`, `arccsc`.
- Operations may also be written as two-argument calls:
  `sum(a,b)`, `difference(a,b)`, `product(a,b)`, `quotient(a,b)`,
  `power(a,b)`.
- A derivative is written `D(f,x)`: the derivative of `f` with respect to
  the variable `x`, for example `D(sin(x),x)` or `D(x^2,x)`.

Use parentheses to group subexpressions.

Because infix operators are rewritten before the text is read, a `-`, `^`
or other operator character anywhere in the input is taken as an operator.
Negative numbers therefore cannot be typed directly, and the functions
`e^` and `10^` (which appear in results) cannot be typed as functions. The
derivative operator has no usable infix form on input; use `D(f,x)`. A
derivative of a derivative is left unexpanded.

## Command line

```
zcd "D(sin(x),x)" "D(x^2,x)"
```

evaluates each expression given as an argument. Without arguments,

```
zcd
```

clears the screen and starts an interactive prompt: type an expression
after `>>`, one whitespace-separated expression at a time, until end of
input. For each expression the program prints the simplified result after
`->`, with variables in bold, followed by the processor time the
calculation took. Malformed input is reported as `[ERROR] ...` on standard
error; with arguments, the exit status is 1 if any expression failed.

## Library use

```python
from zcalcderiv.console import evaluate
from zcalcderiv.printer import render

result = evaluate("D(sin(x),x)")
print(render(result, bold=False))
```

`evaluate` parses the expression, expands its derivatives, simplifies the
result and returns it as a `Node` hanging under a root node of a fresh
`Tree`. It raises `ValueError` on malformed input.

The building blocks are available on their own as well:

- `zcalcderiv.nodes`: `Category`, `Precedence`, the node types
  `ObjectType`, `FunctionType` and `OperationType`, `Variable`, `Node`
  (with `replace_with` and `position`) and `Tree` (with `register` and
  `reset_variables`), plus `node_position`, `search_function_type` and
  `search_operation_type`.
- `zcalcderiv.trans`: the rewriting machinery. `Trans` is the outcome of a
  transformation (`SUCCEED`, `PASS`, `FAIL`), `Rule` pairs a matcher with a
  template, `format_subtree` builds a subtree from a template,
  `duplicate_subtree` and `remove_subtree` copy and detach subtrees, and
  `trans_format`, `trans_format_p`, `trans_invoke`, `trans_single` and
  `trans_utmost` apply rewrites in place.
- `zcalcderiv.catalog`: the node types of the calculator
  (`FUNCTION_TYPES`, `OPERATION_TYPES` and constants such as `SINE` or
  `DERIVATIVE`), the rule sets `SIMPLIFY_RULES` and `DERIVATIVE_RULES`, and
  `simplify`, which applies the simplification rules to a subtree until
  none applies and returns the node now standing in its place.
- `zcalcderiv.derivative`: `derivative_single` expands one derivative node
  in place, `derivative_calculator` expands every derivative node in a
  subtree.
- `zcalcderiv.parser`: `parse_operators` rewrites infix operators into
  prefix calls, and `parse` turns that text into a detached `Node`,
  registering its variables in a `Tree`. `left_bracket_index`,
  `right_bracket_index` and `is_number` are the helpers it uses.
- `zcalcderiv.printer`: `render` returns the text of a subtree (variables
  in bold unless `bold=False`), and `print_subtree` writes it, in bold, to a
  file or standard output.

## What it does not do

The package only rewrites expressions symbolically. It does not evaluate
expressions numerically, substitute values for variables, or fold constant
arithmetic such as `2*3` beyond the identity and zero rules of its
simplification catalogue.