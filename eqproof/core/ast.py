"""
Expression trees.

A Node is a root label plus an ordered tuple of children:

    Leaf:    Node("A")                       variable A
             Node("0")                       constant with id "0"
    Unary:   Node("!", (Node("A"),))         Aᶜ / ¬A
    Binary:  Node("|", (Node("A"), Node("B")))   A ∪ B

Roots are internal symbol ids (single characters), never surface glyphs.
Nodes are frozen: every transformation here builds a new tree.
Equality is structural and order-sensitive, so A ∪ B != B ∪ A.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional


VARIABLE_RE = re.compile(r"^[A-Za-z]$")


@dataclass(frozen=True)
class Node:
    root: str
    children: tuple = ()

    def __post_init__(self):
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def __repr__(self):
        return f"Node({to_string(self)})"


def leaf(symbol: str) -> Node:
    return Node(symbol)


def unary(op: str, operand: Node) -> Node:
    return Node(op, (operand,))


def binary(op: str, left: Node, right: Node) -> Node:
    return Node(op, (left, right))


# ── Structure ────────────────────────────────────────────────────────────────

def equals(t1: Optional[Node], t2: Optional[Node]) -> bool:
    """Structural equality: same root, same arity, children equal in order."""
    if t1 is None or t2 is None:
        return False
    if t1.root != t2.root:
        return False
    if len(t1.children) != len(t2.children):
        return False
    return all(equals(c1, c2) for c1, c2 in zip(t1.children, t2.children))


def clone(node: Optional[Node]) -> Optional[Node]:
    """Deep copy with fresh node objects at every level."""
    if node is None:
        return None
    return Node(node.root, tuple(clone(child) for child in node.children))


def is_leaf(node: Node) -> bool:
    return len(node.children) == 0


def is_unary(node: Node) -> bool:
    return len(node.children) == 1


def is_binary(node: Node) -> bool:
    return len(node.children) == 2


def is_variable(node: Node) -> bool:
    """A leaf labelled with a single letter, upper or lower case."""
    return is_leaf(node) and bool(VARIABLE_RE.match(node.root))


def is_valid_node(node) -> bool:
    """Recursively check the root/children shape. Used on untrusted input."""
    if not isinstance(node, Node):
        return False
    if not isinstance(node.root, str):
        return False
    if not isinstance(node.children, tuple):
        return False
    return all(is_valid_node(child) for child in node.children)


# ── Analysis ─────────────────────────────────────────────────────────────────

def height(node: Node) -> int:
    if is_leaf(node):
        return 0
    return 1 + max(height(child) for child in node.children)


def node_count(node: Node) -> int:
    return 1 + sum(node_count(child) for child in node.children)


def leaves(node: Node) -> list:
    if is_leaf(node):
        return [node]
    result = []
    for child in node.children:
        result.extend(leaves(child))
    return result


def get_variables(node: Node) -> set:
    """Names of all variable leaves, deduplicated."""
    return {n.root for n in leaves(node) if VARIABLE_RE.match(n.root)}


def traverse(node: Node, fn: Callable):
    """Call fn on every node, children before parents (post-order)."""
    for child in node.children:
        traverse(child, fn)
    fn(node)


def collect(node: Node, fn: Callable) -> list:
    """fn applied to every node in pre-order."""
    results = [fn(node)]
    for child in node.children:
        results.extend(collect(child, fn))
    return results


def find_nodes(node: Node, predicate: Callable) -> list:
    """All subtrees (pre-order) for which predicate holds."""
    return [n for n in collect(node, lambda n: n) if predicate(n)]


def subtree_at(node: Node, path: tuple) -> Node:
    """Follow a path of child indices down from node."""
    for i in path:
        node = node.children[i]
    return node


def replace(node: Node, target: Node, replacement: Node) -> Node:
    """
    Replace every occurrence of target with replacement.

    Matching occurrences are not searched inside: a replaced subtree is
    taken whole from replacement.
    """
    if equals(node, target):
        return clone(replacement)
    return Node(node.root, tuple(replace(child, target, replacement)
                                 for child in node.children))


# ── Debug representations ────────────────────────────────────────────────────

def to_string(node: Node) -> str:
    """Fully parenthesized infix using internal ids: (A | (B & C))."""
    if is_leaf(node):
        return node.root
    if is_unary(node):
        return f"{node.root}({to_string(node.children[0])})"
    if is_binary(node):
        left, right = node.children
        return f"({to_string(left)} {node.root} {to_string(right)})"
    args = ", ".join(to_string(child) for child in node.children)
    return f"{node.root}({args})"


def to_prefix(node: Node) -> str:
    """Polish notation: | A & B C"""
    if is_leaf(node):
        return node.root
    return " ".join([node.root] + [to_prefix(child) for child in node.children])


def to_postfix(node: Node) -> str:
    """Reverse Polish notation: A B C & |"""
    if is_leaf(node):
        return node.root
    return " ".join([to_postfix(child) for child in node.children] + [node.root])


# ── Serialization ────────────────────────────────────────────────────────────

def to_dict(node: Node) -> dict:
    return {"root": node.root, "children": [to_dict(c) for c in node.children]}


def from_dict(d) -> Node:
    """Inverse of to_dict. Raises ValueError on a malformed tree."""
    if not isinstance(d, dict) or not isinstance(d.get("root"), str):
        raise ValueError(f"Not an expression tree: {d!r}")
    children = d.get("children", [])
    if not isinstance(children, (list, tuple)):
        raise ValueError(f"Children must be a list: {children!r}")
    return Node(d["root"], tuple(from_dict(c) for c in children))
