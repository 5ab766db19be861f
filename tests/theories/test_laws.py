"""
Integration tests for the built-in law tables.

Every law of every theory must compile, and must justify the step from
its left side to its right side and back again.
"""

import pytest

from eqproof.theories import (
    make_theory,
    SET_THEORY_RULES, BOOLEAN_ALGEBRA_RULES, PROPOSITIONAL_LOGIC_RULES,
)


ALL_LAWS = (
    [("set_theory", r) for r in SET_THEORY_RULES]
    + [("bool_alg", r) for r in BOOLEAN_ALGEBRA_RULES]
    + [("prop_logic", r) for r in PROPOSITIONAL_LOGIC_RULES]
)

_theories = {}


def theory_for(key):
    if key not in _theories:
        _theories[key] = make_theory(key)
    return _theories[key]


def law_id(entry):
    key, rule = entry
    return f"{key}:{rule.name}"


class TestLawTables:

    @pytest.mark.parametrize("key", ["set_theory", "bool_alg", "prop_logic"])
    def test_every_law_compiles(self, key):
        theory = theory_for(key)
        assert theory.compile_errors == {}
        assert len(theory.get_rule_names()) == len(theory.rules)

    @pytest.mark.parametrize("key", ["set_theory", "bool_alg", "prop_logic"])
    def test_names_are_unique(self, key):
        names = [r.name for r in theory_for(key).rules]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("key", ["set_theory", "bool_alg", "prop_logic"])
    def test_every_level_is_known(self, key):
        assert {r.level for r in theory_for(key).rules} <= {0, 1, 2}


class TestBidirectionality:

    @pytest.mark.parametrize("entry", ALL_LAWS, ids=law_id)
    def test_left_to_right(self, entry):
        key, rule = entry
        result = theory_for(key).validate_expressions(rule.lhs, rule.rhs, rule.name)
        assert result.success, result.error

    @pytest.mark.parametrize("entry", ALL_LAWS, ids=law_id)
    def test_right_to_left(self, entry):
        key, rule = entry
        result = theory_for(key).validate_expressions(rule.rhs, rule.lhs, rule.name)
        assert result.success, result.error

    @pytest.mark.parametrize("entry", ALL_LAWS, ids=law_id)
    def test_no_op(self, entry):
        key, rule = entry
        result = theory_for(key).validate_expressions(rule.lhs, rule.lhs, rule.name)
        assert result.error == "No rule has been applied"
