from .symbols import Symbol, SymbolTable
from .ast import (
    Node, leaf, unary, binary,
    equals, clone, is_leaf, is_unary, is_binary, is_variable, is_valid_node,
    get_variables, replace, to_string, to_prefix, to_postfix,
)
from .parser import ExpressionParser
from .matching import is_pattern_variable, match_pattern, match, instantiate_pattern
from .rewrite import (
    SUCCESS, NO_RULE_APPLIED, TOO_MANY_CHANGES, RULE_DOES_NOT_APPLY,
    apply_pattern_rule, try_apply_in_direction, count_differences,
    find_rewrite_site,
)

__all__ = [
    "Symbol", "SymbolTable",
    "Node", "leaf", "unary", "binary",
    "equals", "clone", "is_leaf", "is_unary", "is_binary", "is_variable", "is_valid_node",
    "get_variables", "replace", "to_string", "to_prefix", "to_postfix",
    "ExpressionParser",
    "is_pattern_variable", "match_pattern", "match", "instantiate_pattern",
    "SUCCESS", "NO_RULE_APPLIED", "TOO_MANY_CHANGES", "RULE_DOES_NOT_APPLY",
    "apply_pattern_rule", "try_apply_in_direction", "count_differences",
    "find_rewrite_site",
]
