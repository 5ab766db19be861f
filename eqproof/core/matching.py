"""
One-way pattern matching against expression trees.

A rule pattern is an ordinary tree in which single lowercase letters
are wildcards:

    x ∪ (x ∩ y)   ->   Node("|", (x, Node("&", (x, y))))

Matching binds each wildcard to the subtree it lands on. A wildcard that
occurs twice must land on equal subtrees both times. Only the pattern
side has wildcards, so unlike unification there is no occurs check and
no chasing of substitution chains.

Matching is positional. x ∨ y against B ∨ A gives {x: B, y: A} and never
tries the swapped pairing; symmetric laws are handled by the validator
reading the rule backwards.

Bindings are plain dicts: {"x": Node("A"), "y": Node("|", ...)}
"""

import re
from typing import Optional

from .ast import Node, equals, clone


PATTERN_VARIABLE_RE = re.compile(r"^[a-z]$")


def is_pattern_variable(node: Node) -> bool:
    """Pattern variables are leaves labelled with one lowercase letter."""
    return not node.children and bool(PATTERN_VARIABLE_RE.match(node.root))


def match_pattern(pattern: Optional[Node], concrete: Optional[Node], bindings: dict) -> bool:
    """
    Match pattern against concrete, extending bindings in place.

    Returns True on success. On failure bindings may hold partial
    results and should be discarded by the caller.
    """
    if pattern is None or concrete is None:
        return False

    if is_pattern_variable(pattern):
        bound = bindings.get(pattern.root)
        if bound is not None:
            return equals(bound, concrete)
        bindings[pattern.root] = clone(concrete)
        return True

    if pattern.root != concrete.root:
        return False
    if len(pattern.children) != len(concrete.children):
        return False

    return all(
        match_pattern(p, c, bindings)
        for p, c in zip(pattern.children, concrete.children)
    )


def match(pattern: Node, concrete: Node) -> Optional[dict]:
    """Bindings for a match from scratch, or None if the pattern does not fit."""
    bindings = {}
    if match_pattern(pattern, concrete, bindings):
        return bindings
    return None


def instantiate_pattern(pattern: Optional[Node], bindings: dict) -> Optional[Node]:
    """Rebuild pattern with every bound wildcard replaced by its binding."""
    if pattern is None:
        return None
    if is_pattern_variable(pattern):
        bound = bindings.get(pattern.root)
        return clone(bound) if bound is not None else pattern
    return Node(pattern.root, tuple(instantiate_pattern(child, bindings)
                                    for child in pattern.children))


def pattern_variables(pattern: Node) -> set:
    """Wildcards occurring anywhere in pattern."""
    if is_pattern_variable(pattern):
        return {pattern.root}
    result = set()
    for child in pattern.children:
        result |= pattern_variables(child)
    return result
