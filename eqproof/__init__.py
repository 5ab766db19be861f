"""
eqproof: step-checked equational proofs in small algebraic theories.

A proof rewrites one side of an equation into the other, one step at a
time. Each step names a law of the theory, and is accepted only if it
applies that law (in either direction) at exactly one place.

Usage:
    from eqproof import get_theory

    theory = get_theory("set_theory")
    a, _ = theory.parse_expression("A ∪ A")
    b, _ = theory.parse_expression("A")
    theory.validate_step(a, b, "idem1").success     # True

    python -m eqproof rules --theory prop_logic
    python -m eqproof check --theory set_theory "A ∪ A" "A" idem1
"""

from .core.symbols import Symbol, SymbolTable
from .core.ast import Node, equals, clone, get_variables, replace, is_valid_node
from .core.parser import ExpressionParser
from .core.matching import match_pattern, instantiate_pattern, is_pattern_variable
from .core.rewrite import (
    SUCCESS, NO_RULE_APPLIED, TOO_MANY_CHANGES, RULE_DOES_NOT_APPLY,
    apply_pattern_rule, count_differences, find_rewrite_site,
)
from .theories import (
    THEORIES, make_theory, get_theory,
    Theory, RuleDefinition, CompiledRule, RuleCache, StepResult,
)
from .session import Problem, ProofStep, ProofSession, load_problems
from .export import format_expression, format_proof, format_session, print_proof

__all__ = [
    "Symbol", "SymbolTable",
    "Node", "equals", "clone", "get_variables", "replace", "is_valid_node",
    "ExpressionParser",
    "match_pattern", "instantiate_pattern", "is_pattern_variable",
    "SUCCESS", "NO_RULE_APPLIED", "TOO_MANY_CHANGES", "RULE_DOES_NOT_APPLY",
    "apply_pattern_rule", "count_differences", "find_rewrite_site",
    "THEORIES", "make_theory", "get_theory",
    "Theory", "RuleDefinition", "CompiledRule", "RuleCache", "StepResult",
    "Problem", "ProofStep", "ProofSession", "load_problems",
    "format_expression", "format_proof", "format_session", "print_proof",
]
