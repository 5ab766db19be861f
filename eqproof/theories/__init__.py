"""
Theory registry.

Each entry describes how to build one theory:
    make_theory:  (verbose=False) -> Theory
    display_name: str
    description:  str

make_theory() always returns a fresh, independent instance. get_theory()
hands out one shared instance per key for callers that want a single
long-lived theory (the CLI, a proof session).
"""

from .theory import (
    Theory, RuleDefinition, CompiledRule, RuleCache, StepResult,
    UNCOMPILED, compile_rules, load_problem, clear_problem, custom_rule_name,
    LEVEL_BASIC, LEVEL_DEFINITION, LEVEL_DERIVED, LEVEL_CUSTOM,
)
from .set_theory import make_set_theory, SET_THEORY_RULES, SET_THEORY_SYMBOLS
from .boolean_algebra import make_boolean_algebra, BOOLEAN_ALGEBRA_RULES, BOOLEAN_ALGEBRA_SYMBOLS
from .propositional_logic import (
    make_propositional_logic, PROPOSITIONAL_LOGIC_RULES, PROPOSITIONAL_LOGIC_SYMBOLS,
)


THEORIES = {
    "set_theory": {
        "make_theory":  make_set_theory,
        "display_name": "Set Theory",
        "description":  "Set operations and properties",
    },
    "bool_alg": {
        "make_theory":  make_boolean_algebra,
        "display_name": "Boolean Algebra",
        "description":  "Boolean operations and logical algebra",
    },
    "prop_logic": {
        "make_theory":  make_propositional_logic,
        "display_name": "Propositional Logic",
        "description":  "Propositional calculus and logical reasoning",
    },
}

_instances = {}


def make_theory(key: str, verbose=False) -> Theory:
    if key not in THEORIES:
        raise ValueError(
            f"Unknown theory: {key!r}. "
            f"Choose from: {list(THEORIES.keys())}"
        )
    return THEORIES[key]["make_theory"](verbose=verbose)


def get_theory(key: str) -> Theory:
    if key not in _instances:
        _instances[key] = make_theory(key)
    return _instances[key]


__all__ = [
    "THEORIES", "make_theory", "get_theory",
    "Theory", "RuleDefinition", "CompiledRule", "RuleCache", "StepResult",
    "UNCOMPILED", "compile_rules", "load_problem", "clear_problem", "custom_rule_name",
    "LEVEL_BASIC", "LEVEL_DEFINITION", "LEVEL_DERIVED", "LEVEL_CUSTOM",
    "make_set_theory", "make_boolean_algebra", "make_propositional_logic",
    "SET_THEORY_RULES", "SET_THEORY_SYMBOLS",
    "BOOLEAN_ALGEBRA_RULES", "BOOLEAN_ALGEBRA_SYMBOLS",
    "PROPOSITIONAL_LOGIC_RULES", "PROPOSITIONAL_LOGIC_SYMBOLS",
]
