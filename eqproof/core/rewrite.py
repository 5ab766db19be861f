"""
Single-step rewrite validation.

A proof step from -> to is justified by a law lhs = rhs when exactly one
subexpression of `from` was rewritten by one application of the law,
read either left-to-right or right-to-left, and every other part of the
tree is untouched.

The search walks both trees in lockstep. At each node it first asks
"does the law fire right here?". If not, the two nodes must agree on
their root and arity and differ in exactly one child, and the walk
descends into that child. Anything else means the step is not a single
application of this law.

Verdicts are the messages shown to the user, so callers can pass them
through unchanged.
"""

from typing import Optional

from .ast import Node, equals
from .matching import match_pattern, instantiate_pattern


SUCCESS = "Success"
NO_RULE_APPLIED = "No rule has been applied"
TOO_MANY_CHANGES = "Too many changes have been made. Please only apply the rule in one place"
RULE_DOES_NOT_APPLY = "The chosen rule does not apply"

VERDICTS = (SUCCESS, NO_RULE_APPLIED, TOO_MANY_CHANGES, RULE_DOES_NOT_APPLY)

FORWARD = "forward"
REVERSE = "reverse"


def fires_at(from_ast: Node, to_ast: Node, lhs: Node, rhs: Node) -> bool:
    """Does lhs match from_ast so that the instantiated rhs is exactly to_ast?"""
    bindings = {}
    if not match_pattern(lhs, from_ast, bindings):
        return False
    return equals(instantiate_pattern(rhs, bindings), to_ast)


def differing_children(from_ast: Node, to_ast: Node) -> list:
    """Indices of children that are not structurally equal."""
    return [
        i for i, (a, b) in enumerate(zip(from_ast.children, to_ast.children))
        if not equals(a, b)
    ]


def try_apply_in_direction(from_ast: Node, to_ast: Node, lhs: Node, rhs: Node) -> str:
    """Check the step with the law read as lhs -> rhs only."""
    if fires_at(from_ast, to_ast, lhs, rhs):
        return SUCCESS

    if from_ast.root != to_ast.root or len(from_ast.children) != len(to_ast.children):
        return RULE_DOES_NOT_APPLY

    diff = differing_children(from_ast, to_ast)
    if not diff:
        return NO_RULE_APPLIED
    if len(diff) > 1:
        return RULE_DOES_NOT_APPLY

    i = diff[0]
    return try_apply_in_direction(from_ast.children[i], to_ast.children[i], lhs, rhs)


def count_differences(ast1: Node, ast2: Node) -> int:
    """
    How many separate places the two trees differ.

    A mismatched root or arity counts as one difference for the whole
    subtree; otherwise the children's counts are summed.
    """
    if equals(ast1, ast2):
        return 0
    if ast1.root != ast2.root or len(ast1.children) != len(ast2.children):
        return 1
    return sum(count_differences(a, b) for a, b in zip(ast1.children, ast2.children))


def apply_pattern_rule(from_ast: Node, to_ast: Node, lhs: Node, rhs: Node) -> str:
    """
    Verdict for the step from_ast -> to_ast under the law lhs = rhs.

    Returns one of SUCCESS, NO_RULE_APPLIED, TOO_MANY_CHANGES or
    RULE_DOES_NOT_APPLY.
    """
    if equals(from_ast, to_ast):
        return NO_RULE_APPLIED

    if try_apply_in_direction(from_ast, to_ast, lhs, rhs) == SUCCESS:
        return SUCCESS
    if try_apply_in_direction(from_ast, to_ast, rhs, lhs) == SUCCESS:
        return SUCCESS

    diff_count = count_differences(from_ast, to_ast)
    if diff_count == 0:
        return NO_RULE_APPLIED
    if diff_count > 1:
        return TOO_MANY_CHANGES
    return RULE_DOES_NOT_APPLY


def _locate(from_ast: Node, to_ast: Node, lhs: Node, rhs: Node, path: tuple) -> Optional[tuple]:
    if fires_at(from_ast, to_ast, lhs, rhs):
        return path
    if from_ast.root != to_ast.root or len(from_ast.children) != len(to_ast.children):
        return None
    diff = differing_children(from_ast, to_ast)
    if len(diff) != 1:
        return None
    i = diff[0]
    return _locate(from_ast.children[i], to_ast.children[i], lhs, rhs, path + (i,))


def find_rewrite_site(from_ast: Node, to_ast: Node, lhs: Node, rhs: Node) -> Optional[tuple]:
    """
    Where and which way the law fired.

    Returns (path, direction) where path is the tuple of child indices
    from the root down to the rewritten subexpression and direction is
    FORWARD or REVERSE; None when the step is not a valid application.
    """
    if equals(from_ast, to_ast):
        return None
    path = _locate(from_ast, to_ast, lhs, rhs, ())
    if path is not None:
        return path, FORWARD
    path = _locate(from_ast, to_ast, rhs, lhs, ())
    if path is not None:
        return path, REVERSE
    return None
