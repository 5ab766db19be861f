"""
Theory: Boolean Algebra.

Constants 0 and 1, OR (∨), AND (∧) and postfix complement ('). There are
no definitional laws here; every operator is primitive.
"""

from ..core.symbols import Symbol
from .theory import Theory, RuleDefinition


BOOLEAN_ALGEBRA_SYMBOLS = [
    Symbol("0", "Zero", "0", 0, display="0", latex="0"),
    Symbol("1", "One", "1", 0, display="1", latex="1"),
    Symbol("!", "Complement", "'", -1, display="'", latex="'"),
    Symbol("|", "Boolean OR", "∨", 2, display="∨", latex="\\lor"),
    Symbol("&", "Boolean AND", "∧", 2, display="∧", latex="\\land"),
]

BOOLEAN_ALGEBRA_RULES = [
    # Level 0: basic laws
    RuleDefinition("assoc_or", "Associativity of OR", "(x ∨ y) ∨ z", "x ∨ (y ∨ z)", 0),
    RuleDefinition("assoc_and", "Associativity of AND", "(x ∧ y) ∧ z", "x ∧ (y ∧ z)", 0),
    RuleDefinition("comm_or", "Commutativity of OR", "x ∨ y", "y ∨ x", 0),
    RuleDefinition("comm_and", "Commutativity of AND", "x ∧ y", "y ∧ x", 0),
    RuleDefinition("dist_and_or", "Distributivity of AND over OR",
                   "x ∧ (y ∨ z)", "(x ∧ y) ∨ (x ∧ z)", 0),
    RuleDefinition("dist_or_and", "Distributivity of OR over AND",
                   "x ∨ (y ∧ z)", "(x ∨ y) ∧ (x ∨ z)", 0),
    RuleDefinition("id_or", "Identity of OR", "x ∨ 0", "x", 0),
    RuleDefinition("id_and", "Identity of AND", "x ∧ 1", "x", 0),
    RuleDefinition("comp_or", "Complement with OR", "x ∨ x'", "1", 0),
    RuleDefinition("comp_and", "Complement with AND", "x ∧ x'", "0", 0),

    # Level 2: derived laws
    RuleDefinition("idem_or", "Idempotence of OR", "x ∨ x", "x", 2),
    RuleDefinition("idem_and", "Idempotence of AND", "x ∧ x", "x", 2),
    RuleDefinition("dbl_comp", "Double complement", "x''", "x", 2),
    RuleDefinition("ann_or", "Annihilation of OR", "x ∨ 1", "1", 2),
    RuleDefinition("ann_and", "Annihilation of AND", "x ∧ 0", "0", 2),
    RuleDefinition("dem_or", "De Morgan's, ' over OR", "(x ∨ y)'", "x' ∧ y'", 2),
    RuleDefinition("dem_and", "De Morgan's, ' over AND", "(x ∧ y)'", "x' ∨ y'", 2),
    RuleDefinition("comp_zero", "Complement of 0", "0'", "1", 2),
    RuleDefinition("comp_one", "Complement of 1", "1'", "0", 2),
]


def make_boolean_algebra(verbose=False) -> Theory:
    return Theory(
        name="bool_alg",
        display_name="Boolean Algebra",
        description="Boolean algebra with ∨, ∧, ' operators and constants 0, 1",
        symbols=BOOLEAN_ALGEBRA_SYMBOLS,
        equality={"display": "=", "markdown": "=", "latex": "="},
        rules=BOOLEAN_ALGEBRA_RULES,
        verbose=verbose,
    )
