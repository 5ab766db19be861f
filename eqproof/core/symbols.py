"""
Symbol tables: the signature of a theory.

A symbol has a single-character internal id (what the parser works on),
a surface ``text`` token (what the user types, possibly a multi-character
Unicode glyph), display forms for each output target, and an arity:

    arity  0  -> constant        ∅, ⊤, 1
    arity  1  -> prefix unary    ¬p
    arity -1  -> postfix unary   Aᶜ, x'
    arity  2  -> infix binary    A ∪ B

Letters [A-Za-z] are reserved for variables, so no surface token may
contain one.
"""

import re
from dataclasses import dataclass, field
from typing import Optional


FORMS = ("text", "display", "markdown", "latex")

DEFAULT_EQUALITY = {"display": "=", "markdown": "=", "latex": "="}


@dataclass(frozen=True)
class Symbol:
    """One operator or constant of a theory."""
    id: str
    name: str
    text: str
    arity: int
    display: str = ""
    markdown: str = ""
    latex: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> "Symbol":
        return cls(
            id=d["id"],
            name=d.get("name", d["id"]),
            text=d["text"],
            arity=int(d["arity"]),
            display=d.get("display", ""),
            markdown=d.get("markdown", ""),
            latex=d.get("latex", ""),
        )

    def form(self, target: str = "text") -> str:
        """Surface form for an output target, falling back to ``text``."""
        if target not in FORMS:
            raise ValueError(f"Unknown target form: {target!r}. Choose from: {list(FORMS)}")
        return getattr(self, target) or self.text

    @property
    def is_constant(self):
        return self.arity == 0

    @property
    def is_unary(self):
        return abs(self.arity) == 1

    @property
    def is_prefix(self):
        return self.arity == 1

    @property
    def is_postfix(self):
        return self.arity == -1

    @property
    def is_binary(self):
        return self.arity == 2


@dataclass
class SymbolTable:
    """
    A theory's symbols plus the indexes the parser needs.

    The table copies the symbols and equality forms it is given, so later
    changes to the caller's dict do not reach it. Every parser holds its
    own table, so two theories cannot disturb each other.
    """
    symbols: tuple = ()
    equality: dict = field(default_factory=lambda: dict(DEFAULT_EQUALITY))

    def __post_init__(self):
        self.symbols = tuple(
            s if isinstance(s, Symbol) else Symbol.from_dict(s)
            for s in self.symbols
        )
        self.equality = dict(self.equality)
        self._validate()
        self._by_id = {s.id: s for s in self.symbols}
        self._by_text = {s.text: s for s in self.symbols}
        self.constants = tuple(s for s in self.symbols if s.is_constant)
        # Tried last-declared first.
        self.unary_ops = tuple(reversed([s for s in self.symbols if s.is_unary]))
        self.binary_ops = tuple(s for s in self.symbols if s.is_binary)

    def _validate(self):
        seen_ids, seen_texts = set(), set()
        for s in self.symbols:
            if len(s.id) != 1:
                raise ValueError(f"Symbol id must be a single character: {s.id!r}")
            if s.id.isascii() and s.id.isalpha():
                raise ValueError(f"Symbol id clashes with variable letters: {s.id!r}")
            if s.id in "()":
                raise ValueError(f"Symbol id clashes with parentheses: {s.id!r}")
            if not s.text:
                raise ValueError(f"Symbol {s.id!r} has an empty text form")
            if re.search(r"[A-Za-z]", s.text):
                raise ValueError(f"Symbol text contains a variable letter: {s.text!r}")
            if s.arity not in (0, 1, -1, 2):
                raise ValueError(f"Unsupported arity {s.arity} for symbol {s.id!r}")
            if s.id in seen_ids:
                raise ValueError(f"Duplicate symbol id: {s.id!r}")
            if s.text in seen_texts:
                raise ValueError(f"Duplicate symbol text: {s.text!r}")
            seen_ids.add(s.id)
            seen_texts.add(s.text)

    def by_id(self, symbol_id: str) -> Optional[Symbol]:
        return self._by_id.get(symbol_id)

    def by_text(self, text: str) -> Optional[Symbol]:
        return self._by_text.get(text)

    def form(self, symbol_id: str, target: str = "text") -> str:
        """Display form of an id; unknown ids render as themselves."""
        s = self._by_id.get(symbol_id)
        return s.form(target) if s else symbol_id

    def arity(self, symbol_id: str) -> Optional[int]:
        s = self._by_id.get(symbol_id)
        return s.arity if s else None

    def is_constant(self, symbol_id: str) -> bool:
        s = self._by_id.get(symbol_id)
        return bool(s and s.is_constant)

    def binary_op(self, symbol_id: str) -> Optional[Symbol]:
        s = self._by_id.get(symbol_id)
        return s if s and s.is_binary else None

    def equality_form(self, target: str = "display") -> str:
        return self.equality.get(target) or self.equality.get("display") or "="

    @property
    def texts(self) -> list:
        """Surface tokens, longest first so a regex alternation prefers them."""
        return sorted((s.text for s in self.symbols), key=len, reverse=True)

    def __len__(self):
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)
