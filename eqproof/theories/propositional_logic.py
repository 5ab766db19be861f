"""
Theory: Propositional Logic.

Truth constants ⊥ and ⊤, prefix negation ¬, and the connectives ∨, ∧,
→ and ↔. Implication and the biconditional are defined (level 1) in terms
of the others. Equivalence is written ≡ rather than =.
"""

from ..core.symbols import Symbol
from .theory import Theory, RuleDefinition


PROPOSITIONAL_LOGIC_SYMBOLS = [
    Symbol("0", "False", "⊥", 0, display="⊥", markdown="⊥", latex="\\bot"),
    Symbol("1", "True", "⊤", 0, display="⊤", markdown="⊤", latex="\\top"),
    Symbol("!", "Negation", "¬", 1, display="¬", markdown="¬", latex="\\neg"),
    Symbol("|", "Disjunction", "∨", 2, display="∨", markdown="∨", latex="\\lor"),
    Symbol("&", "Conjunction", "∧", 2, display="∧", markdown="∧", latex="\\land"),
    Symbol(">", "Implication", "→", 2, display="→", markdown="→", latex="\\rightarrow"),
    Symbol("~", "Biconditional", "↔", 2, display="↔", markdown="↔", latex="\\leftrightarrow"),
]

PROPOSITIONAL_LOGIC_RULES = [
    # Level 0: basic laws
    RuleDefinition("assoc_or", "Associativity of OR", "(p ∨ q) ∨ r", "p ∨ (q ∨ r)", 0),
    RuleDefinition("assoc_and", "Associativity of AND", "(p ∧ q) ∧ r", "p ∧ (q ∧ r)", 0),
    RuleDefinition("comm_or", "Commutativity of OR", "p ∨ q", "q ∨ p", 0),
    RuleDefinition("comm_and", "Commutativity of AND", "p ∧ q", "q ∧ p", 0),
    RuleDefinition("dist_and_or", "Distributivity of AND over OR",
                   "p ∧ (q ∨ r)", "(p ∧ q) ∨ (p ∧ r)", 0),
    RuleDefinition("dist_or_and", "Distributivity of OR over AND",
                   "p ∨ (q ∧ r)", "(p ∨ q) ∧ (p ∨ r)", 0),
    RuleDefinition("id_or", "Identity of OR", "p ∨ ⊥", "p", 0),
    RuleDefinition("id_and", "Identity of AND", "p ∧ ⊤", "p", 0),
    RuleDefinition("comp_or", "Complement with OR", "p ∨ ¬p", "⊤", 0),
    RuleDefinition("comp_and", "Complement with AND", "p ∧ ¬p", "⊥", 0),

    # Level 1: definitions
    RuleDefinition("impl_def", "Definition of Implication", "p → q", "¬p ∨ q", 1),
    RuleDefinition("bicond_def", "Definition of Bi-implication",
                   "p ↔ q", "(p → q) ∧ (q → p)", 1),

    # Level 2: derived laws
    RuleDefinition("idem_or", "Idempotence of OR", "p ∨ p", "p", 2),
    RuleDefinition("idem_and", "Idempotence of AND", "p ∧ p", "p", 2),
    RuleDefinition("dbl_neg", "Double negation", "¬¬p", "p", 2),
    RuleDefinition("ann_or", "Annihilation of OR", "p ∨ ⊤", "⊤", 2),
    RuleDefinition("ann_and", "Annihilation of AND", "p ∧ ⊥", "⊥", 2),
    RuleDefinition("dem_or", "De Morgan's, ¬ over OR", "¬(p ∨ q)", "¬p ∧ ¬q", 2),
    RuleDefinition("dem_and", "De Morgan's, ¬ over AND", "¬(p ∧ q)", "¬p ∨ ¬q", 2),
    RuleDefinition("comp_false", "Complement of ⊥", "¬⊥", "⊤", 2),
    RuleDefinition("comp_true", "Complement of ⊤", "¬⊤", "⊥", 2),
    RuleDefinition("abs_and_or", "Absorption of AND over OR", "p ∧ (p ∨ q)", "p", 2),
    RuleDefinition("abs_or_and", "Absorption of OR over AND", "p ∨ (p ∧ q)", "p", 2),
]


def make_propositional_logic(verbose=False) -> Theory:
    return Theory(
        name="prop_logic",
        display_name="Propositional Logic",
        description=("Propositional logic studies how truth values of whole "
                     "statements combine using connectives like AND, OR and NOT"),
        symbols=PROPOSITIONAL_LOGIC_SYMBOLS,
        equality={"display": "≡", "markdown": "≡", "latex": "\\equiv"},
        rules=PROPOSITIONAL_LOGIC_RULES,
        verbose=verbose,
    )
