"""
Recursive-descent expression parser.

Input goes through four stages before any tree is built:

    1. strip whitespace and wrap in one outer pair of parentheses
    2. lexical check: anything that is not a symbol token, a letter or a
       parenthesis is rejected
    3. translate surface tokens (∪, ¬, ᶜ, ...) to single-character ids
    4. parenthesis balance check

Precedence comes from structure, not binding power. Unary operators bind
tighter than any binary operator. Two binary operators at the same
nesting depth are refused outright: "A ∩ B ∪ C" has to be written
"(A ∩ B) ∪ C". Rule patterns and problem data are fully parenthesized,
and the refusal keeps every accepted string unambiguous.

parse() never raises. Every failure comes back as (None, message).
"""

import re
from typing import Optional

from .ast import Node
from .symbols import SymbolTable


ERR_NOT_STRING = "Input must be a string"
ERR_UNPARSEABLE = "Unable to parse expression"

BINARY_RANK = 2


class ExpressionParser:
    """A parser bound to one theory's symbol table."""

    def __init__(self, table: SymbolTable):
        self.table = table
        tokens = "|".join(re.escape(t) for t in table.texts)
        self._token_re = re.compile(tokens) if tokens else None
        self._accepted_re = re.compile(
            (tokens + "|" if tokens else "") + r"[A-Za-z()]"
        )

    # ── Preprocessing ────────────────────────────────────────────────────────

    @staticmethod
    def sanitize(s: str) -> str:
        return "(" + re.sub(r"\s", "", s) + ")"

    def check_chars(self, s: str) -> str:
        """Characters of s that are neither symbol tokens, letters nor parens."""
        return self._accepted_re.sub("", self.sanitize(s))

    def to_internal(self, s: str) -> str:
        """Sanitized s with every surface token replaced by its symbol id."""
        s = self.sanitize(s)
        if self._token_re is None:
            return s
        return self._token_re.sub(lambda m: self.table.by_text(m.group(0)).id, s)

    @staticmethod
    def check_parens(s: str) -> int:
        """
        Running balance of parentheses.

        Stops as soon as the count goes negative, so a negative result means
        a ')' closed nothing and a positive one means a '(' was never closed.
        """
        count = 0
        for ch in s:
            if ch == "(":
                count += 1
            elif ch == ")":
                count -= 1
                if count < 0:
                    break
        return count

    # ── Parsing ──────────────────────────────────────────────────────────────

    def parse(self, s) -> tuple:
        """Parse s into a tree. Returns (Node, "") or (None, error message)."""
        if not isinstance(s, str):
            return None, ERR_NOT_STRING

        invalid = self.check_chars(s)
        if invalid:
            return None, "Unexpected characters: " + ",".join(invalid)

        internal = self.to_internal(s)

        balance = self.check_parens(internal)
        if balance != 0:
            return None, "Unmatched '" + ("(" if balance > 0 else ")") + "'"

        tree = self._parse_expression(internal, 0, len(internal))
        if tree is None:
            return None, ERR_UNPARSEABLE
        return tree, ""

    def _is_leaf_char(self, ch: str) -> bool:
        return (ch.isascii() and ch.isalpha()) or self.table.is_constant(ch)

    def _parse_expression(self, s: str, i: int, j: int) -> Optional[Node]:
        """Leaf, unary application, or a parenthesized expression over s[i:j]."""
        if i >= j:
            return None

        if j - i == 1:
            return Node(s[i]) if self._is_leaf_char(s[i]) else None

        for op in self.table.unary_ops:
            if op.is_prefix and s[i] == op.id:
                child = self._parse_expression(s, i + 1, j)
                if child is not None:
                    return Node(op.id, (child,))
            elif op.is_postfix and s[j - 1] == op.id:
                child = self._parse_expression(s, i, j - 1)
                if child is not None:
                    return Node(op.id, (child,))

        if s[i] == "(" and self._closing_paren(s, i) == j - 1:
            return self._parse_expression_or_binary(s, i + 1, j - 1)

        return None

    def _parse_expression_or_binary(self, s: str, i: int, j: int) -> Optional[Node]:
        expr = self._parse_expression(s, i, j)
        if expr is not None:
            return expr

        operators = self._top_level_operators(s, i, j)
        if len(operators) != 1:
            # None at all, or ambiguous without parentheses.
            return None

        k = operators[0]
        left = self._parse_expression(s, i, k)
        right = self._parse_expression(s, k + 1, j)
        if left is None or right is None:
            return None
        return Node(s[k], (left, right))

    def _top_level_operators(self, s: str, i: int, j: int) -> list:
        """Positions of binary operator ids at nesting depth 0 within s[i:j]."""
        positions = []
        depth = 0
        for k in range(i, j):
            ch = s[k]
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
            elif depth == 0 and self.table.binary_op(ch):
                positions.append(k)
        return positions

    @staticmethod
    def _closing_paren(s: str, i: int) -> int:
        """Index of the ')' matching the '(' at s[i], or -1."""
        depth = 0
        for k in range(i, len(s)):
            if s[k] == "(":
                depth += 1
            elif s[k] == ")":
                depth -= 1
                if depth == 0:
                    return k
        return -1

    # ── Unparsing ────────────────────────────────────────────────────────────

    def unparse(self, tree: Optional[Node], target: str = "text") -> tuple:
        """
        Render a tree in a surface syntax. Returns (string, rank).

        rank is 0 for leaves, 1 for unary and 2 for binary results. An
        operand is wrapped in parentheses exactly when its rank is 2, so
        nested binary operations are always explicit.
        """
        if tree is None:
            return "", 0

        if not tree.children:
            return self.table.form(tree.root, target), 0

        if len(tree.children) == 1:
            text, rank = self.unparse(tree.children[0], target)
            if rank == BINARY_RANK:
                text = f"({text})"
            op = self.table.form(tree.root, target)
            if (self.table.arity(tree.root) or 0) < 0:
                return text + op, 1
            if target == "latex" and op.startswith("\\") and op[-1].isalpha():
                op += " "
            return op + text, 1

        if len(tree.children) == 2:
            left, lrank = self.unparse(tree.children[0], target)
            if lrank == BINARY_RANK:
                left = f"({left})"
            right, rrank = self.unparse(tree.children[1], target)
            if rrank == BINARY_RANK:
                right = f"({right})"
            op = self.table.form(tree.root, target)
            return f"{left} {op} {right}", BINARY_RANK

        raise ValueError(f"Cannot render a node with {len(tree.children)} children")

    def format(self, tree: Optional[Node], target: str = "text") -> str:
        return self.unparse(tree, target)[0]

    # ── Symbol lookups ───────────────────────────────────────────────────────

    def symbol_text(self, symbol_id: str) -> str:
        return self.table.form(symbol_id, "text")

    def symbol_arity(self, symbol_id: str) -> Optional[int]:
        return self.table.arity(symbol_id)

    @property
    def equality(self) -> dict:
        return self.table.equality
