"""
Theory: Set Theory.

Sets over a universe 𝓤 with union, intersection, complement (postfix ᶜ),
difference and symmetric difference. Laws come in three levels:

    0  the basic algebra-of-sets axioms
    1  definitions of \\ and ⊕ in terms of the basic operations
    2  laws derivable from the axioms, offered as shortcuts
"""

from ..core.symbols import Symbol
from .theory import Theory, RuleDefinition


SET_THEORY_SYMBOLS = [
    Symbol("0", "Empty set", "∅", 0, display="∅", markdown="∅", latex="\\emptyset"),
    Symbol("1", "Universal set", "𝓤", 0, display="𝓤", markdown="𝓤", latex="\\mathcal{U}"),
    Symbol("!", "Complement", "ᶜ", -1, display="∁", markdown="ᶜ", latex="^{c}"),
    Symbol("|", "Union", "∪", 2, display="∪", markdown="∪", latex="\\cup"),
    Symbol("&", "Intersection", "∩", 2, display="∩", markdown="∩", latex="\\cap"),
    Symbol("-", "Set difference", "\\", 2, display="\\", markdown="\\", latex="\\setminus"),
    Symbol("+", "Symmetric difference", "⊕", 2, display="⊕", markdown="⊕", latex="\\oplus"),
]

SET_THEORY_RULES = [
    # Level 0: basic laws
    RuleDefinition("assoc1", "Associativity of Union", "(x ∪ y) ∪ z", "x ∪ (y ∪ z)", 0),
    RuleDefinition("assoc2", "Associativity of Intersection", "(x ∩ y) ∩ z", "x ∩ (y ∩ z)", 0),
    RuleDefinition("comm1", "Commutativity of Union", "x ∪ y", "y ∪ x", 0),
    RuleDefinition("comm2", "Commutativity of Intersection", "x ∩ y", "y ∩ x", 0),
    RuleDefinition("dist1", "Distributivity of Intersection over Union",
                   "x ∩ (y ∪ z)", "(x ∩ y) ∪ (x ∩ z)", 0),
    RuleDefinition("dist2", "Distributivity of Union over Intersection",
                   "x ∪ (y ∩ z)", "(x ∪ y) ∩ (x ∪ z)", 0),
    RuleDefinition("id1", "Identity of Union", "x ∪ ∅", "x", 0),
    RuleDefinition("id2", "Identity of Intersection", "x ∩ 𝓤", "x", 0),
    RuleDefinition("comp1", "Complement with Union", "x ∪ xᶜ", "𝓤", 0),
    RuleDefinition("comp2", "Complement with Intersection", "x ∩ xᶜ", "∅", 0),

    # Level 1: definitions
    RuleDefinition("defdiff", "Definition of Set Difference", "x \\ y", "x ∩ yᶜ", 1),
    RuleDefinition("defsd", "Definition of Symmetric Difference",
                   "x ⊕ y", "(x \\ y) ∪ (y \\ x)", 1),

    # Level 2: derived laws
    RuleDefinition("idem1", "Idempotence of Union", "x ∪ x", "x", 2),
    RuleDefinition("idem2", "Idempotence of Intersection", "x ∩ x", "x", 2),
    RuleDefinition("dblc", "Double complement", "xᶜᶜ", "x", 2),
    RuleDefinition("dem1", "De Morgan's, ᶜ over ∪", "(x ∪ y)ᶜ", "xᶜ ∩ yᶜ", 2),
    RuleDefinition("dem2", "De Morgan's, ᶜ over ∩", "(x ∩ y)ᶜ", "xᶜ ∪ yᶜ", 2),
    RuleDefinition("ann1", "Annihilation of ∪", "x ∪ 𝓤", "𝓤", 2),
    RuleDefinition("ann2", "Annihilation of ∩", "x ∩ ∅", "∅", 2),
    RuleDefinition("abs1", "Absorption law 1", "x ∪ (x ∩ y)", "x", 2),
    RuleDefinition("abs2", "Absorption law 2", "x ∩ (x ∪ y)", "x", 2),
    RuleDefinition("cemp", "Complement of ∅", "∅ᶜ", "𝓤", 2),
    RuleDefinition("cuni", "Complement of 𝓤", "𝓤ᶜ", "∅", 2),
]


def make_set_theory(verbose=False) -> Theory:
    return Theory(
        name="set_theory",
        display_name="Set Theory",
        description=("Set theory is the mathematical study of collections of "
                     "objects, called sets, and the relationships between them"),
        symbols=SET_THEORY_SYMBOLS,
        equality={"display": "=", "markdown": "=", "latex": "="},
        rules=SET_THEORY_RULES,
        verbose=verbose,
    )
